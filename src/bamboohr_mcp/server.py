from __future__ import annotations

import asyncio
import logging

from mcp.server.fastmcp import FastMCP

from bamboohr_mcp.core.config import ConfigStore
from bamboohr_mcp.core.logging import setup_logging
from bamboohr_mcp.core.observability import log_event
from bamboohr_mcp.core.registry import register_discovered_tools

log = logging.getLogger("bamboohr_mcp.server")


def build_app(store: ConfigStore) -> FastMCP:
    app = FastMCP("bamboohr-mcp")
    register_discovered_tools(app, store)
    return app


# --- Entry point ----------------------------------------------------------- #


async def main() -> None:
    setup_logging()
    # Seed defaults from env (stdio bootstrap); tools may override per call
    store = ConfigStore.from_env(use_dotenv=True)
    log_event("startup", log, company_domain=store.get().company_domain)

    app = build_app(store)
    await app.run_stdio_async()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
