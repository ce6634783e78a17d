from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import httpx

from .config import BambooHRConfig
from .errors import BambooHRApiError, MissingConfigError
from .observability import log_event

DEFAULT_BASE_URL = "https://api.bamboohr.com/api/gateway.php"

# BambooHR ignores the password half of basic auth; the token is the username.
API_PASSWORD = "x"


class BambooHRClient:
    """
    Thin HTTP client for the BambooHR gateway API.
    - One request per call: no retries, no caching
    - JSON responses come back parsed, anything else (XML) as text
    - No business logic; tools own endpoint and identifier decisions
    """

    def __init__(
        self,
        config: BambooHRConfig,
        *,
        base_url: str = DEFAULT_BASE_URL,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self.base_url = base_url.rstrip("/")
        self.log = logger or logging.getLogger("bamboohr_mcp.observability")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "BambooHRClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def company_path(self, path: str) -> str:
        """Endpoint for a company-scoped v1 resource, e.g. 'employees/directory'."""
        domain = self.config.company_domain
        if not domain:
            raise MissingConfigError(
                "companyDomain is required; pass company_domain or set "
                "BAMBOOHR_COMPANY_DOMAIN."
            )
        return f"{domain}/v1/{path.lstrip('/')}"

    def _auth(self) -> httpx.BasicAuth:
        token = self.config.token
        if not token:
            raise MissingConfigError(
                "API token is required; pass token or set BAMBOOHR_TOKEN."
            )
        return httpx.BasicAuth(token, API_PASSWORD)

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        body: Optional[Dict[str, Any]] = None,
        *,
        params: Optional[Dict[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> Any:
        """
        Core request method.
        - Raises BambooHRApiError(status=<code>) on non-2xx responses
        - Raises BambooHRApiError(status=0) on network errors or unreadable JSON
        - Returns parsed JSON for application/json, raw text otherwise,
          None for an empty body
        """
        method = method.upper()
        auth = self._auth()
        url = f"/{endpoint.lstrip('/')}"
        start = time.perf_counter()

        try:
            resp = await self.http.request(
                method, url, params=params, json=body, auth=auth
            )
        except httpx.HTTPError as exc:
            log_event(
                "bamboohr_call",
                self.log,
                level=logging.WARNING,
                tool=tool,
                method=method,
                endpoint=endpoint,
                status="exception",
                error_type=type(exc).__name__,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            raise BambooHRApiError(
                f"Failed to fetch {endpoint}: {exc}", status=0, endpoint=endpoint
            ) from exc

        log_event(
            "bamboohr_call",
            self.log,
            tool=tool,
            method=method,
            endpoint=endpoint,
            status=resp.status_code,
            duration_ms=int((time.perf_counter() - start) * 1000),
        )

        if resp.status_code < 200 or resp.status_code >= 300:
            raise BambooHRApiError(
                f"API request failed with status {resp.status_code}",
                status=resp.status_code,
                endpoint=endpoint,
            )

        return self._read_body(resp, endpoint)

    @staticmethod
    def _read_body(resp: httpx.Response, endpoint: str) -> Any:
        # Handle empty responses (204 No Content, bare 201, etc.)
        if not resp.content:
            return None

        content_type = resp.headers.get("Content-Type", "")
        if "application/json" not in content_type:
            return resp.text

        try:
            return resp.json()
        except ValueError as exc:
            raise BambooHRApiError(
                f"Failed to fetch {endpoint}: invalid JSON body: {exc}",
                status=0,
                endpoint=endpoint,
            ) from exc

    async def get(
        self,
        endpoint: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> Any:
        return await self.request(endpoint, "GET", params=params, tool=tool)

    async def post(
        self, endpoint: str, *, json: Dict[str, Any], tool: Optional[str] = None
    ) -> Any:
        return await self.request(endpoint, "POST", json, tool=tool)


__all__ = ["BambooHRClient", "DEFAULT_BASE_URL", "API_PASSWORD"]
