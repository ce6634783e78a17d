"""
Shared helpers for resolving call arguments against configured defaults.
"""

from datetime import datetime, timezone
from typing import Optional

from bamboohr_mcp.core.client import BambooHRClient
from bamboohr_mcp.core.errors import MissingConfigError


def today_iso() -> str:
    """Current UTC date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


def resolve_employee_id(client: BambooHRClient, employee_id: Optional[int]) -> int:
    """Explicit argument wins, then the configured default; neither is an error."""
    resolved = employee_id if employee_id is not None else client.config.employee_id
    if resolved is None:
        raise MissingConfigError(
            "employeeId is required; pass employee_id or set BAMBOOHR_EMPLOYEE_ID."
        )
    return resolved
