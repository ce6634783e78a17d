"""bamboohr_mcp package exports."""

from .core import (
    BambooHRApiError,
    BambooHRClient,
    BambooHRConfig,
    BambooHRError,
    BambooHRParseError,
    ConfigStore,
    EmployeeNotFoundError,
    MissingConfigError,
    discover_tool_modules,
    register_discovered_tools,
)
from .server import main as run_server

__all__ = [
    # Client
    "BambooHRClient",
    "BambooHRConfig",
    "ConfigStore",
    # Exceptions
    "BambooHRError",
    "BambooHRApiError",
    "BambooHRParseError",
    "EmployeeNotFoundError",
    "MissingConfigError",
    # Server utilities
    "run_server",
    "discover_tool_modules",
    "register_discovered_tools",
]
