"""
BambooHR tool functions. Each public coroutine taking 'client' first is
discovered and exposed by bamboohr_mcp.core.registry.
"""

from .employees import get_employee, get_employee_directory
from .time_off import list_absences
from .time_tracking import list_projects, list_time_entries, submit_work_hours

__all__ = [
    "list_absences",
    "list_projects",
    "list_time_entries",
    "get_employee",
    "get_employee_directory",
    "submit_work_hours",
]
