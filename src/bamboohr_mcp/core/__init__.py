"""Core domain surface for bamboohr-mcp (transport-agnostic)."""

from .client import BambooHRClient
from .config import BambooHRConfig, ConfigStore, load_env_config
from .errors import (
    BambooHRApiError,
    BambooHRError,
    BambooHRParseError,
    EmployeeNotFoundError,
    MissingConfigError,
)
from .models import (
    DirectoryEmployee,
    Employee,
    Project,
    Task,
    TimeEntry,
    TimeOffRequest,
    WorkHoursEntry,
)
from .normalizer import parse_directory, parse_employee, parse_time_off, parse_xml
from .registry import (
    TOOL_NAMES,
    discover_tool_modules,
    iter_tool_functions,
    register_discovered_tools,
)

__all__ = [
    # Client
    "BambooHRClient",
    # Config
    "BambooHRConfig",
    "ConfigStore",
    "load_env_config",
    # Exceptions
    "BambooHRError",
    "BambooHRApiError",
    "BambooHRParseError",
    "EmployeeNotFoundError",
    "MissingConfigError",
    # Models
    "Project",
    "Task",
    "TimeEntry",
    "TimeOffRequest",
    "DirectoryEmployee",
    "Employee",
    "WorkHoursEntry",
    # XML normalization
    "parse_xml",
    "parse_time_off",
    "parse_directory",
    "parse_employee",
    # Registry helpers
    "TOOL_NAMES",
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
