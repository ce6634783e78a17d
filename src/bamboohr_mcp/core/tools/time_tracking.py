from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from bamboohr_mcp.core.client import BambooHRClient
from bamboohr_mcp.core.errors import (
    BambooHRApiError,
    BambooHRParseError,
    MissingConfigError,
)
from bamboohr_mcp.core.models import Project, TimeEntry, WorkHoursEntry
from bamboohr_mcp.core.tools._resolve import resolve_employee_id, today_iso

log = logging.getLogger("bamboohr_mcp.tools.time_tracking")

DEFAULT_HOURS = 8


def _expect_list(payload: Any, what: str) -> List[Dict[str, Any]]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise BambooHRParseError(
            f"Expected a JSON list of {what}, got {type(payload).__name__}."
        )
    return [p for p in payload if isinstance(p, dict)]


async def list_projects(
    client: BambooHRClient, employee_id: Optional[int] = None
) -> List[Project]:
    """
    List time-tracking projects (and their tasks) available to an employee.

    Args:
        employee_id: BambooHR employee id; defaults to the configured employee.
    """
    resolved = resolve_employee_id(client, employee_id)
    payload = await client.get(
        client.company_path(f"time_tracking/employees/{resolved}/projects"),
        tool="time_tracking",
    )
    return [Project.model_validate(p) for p in _expect_list(payload, "projects")]


async def list_time_entries(
    client: BambooHRClient, employee_id: Optional[int] = None
) -> List[TimeEntry]:
    """
    List today's timesheet entries for an employee.

    Only the current (UTC) day is queried.
    """
    resolved = resolve_employee_id(client, employee_id)
    today = today_iso()
    payload = await client.get(
        client.company_path("time_tracking/timesheet_entries"),
        params={"employeeIds": resolved, "start": today, "end": today},
        tool="time_tracking",
    )
    return [TimeEntry.model_validate(e) for e in _expect_list(payload, "time entries")]


async def submit_work_hours(
    client: BambooHRClient,
    employee_id: Optional[int] = None,
    project_id: Optional[int] = None,
    task_id: Optional[int] = None,
    date: Optional[str] = None,
    hours: Optional[Union[int, float]] = None,
    note: Optional[str] = None,
) -> bool:
    """
    Log worked hours against a project task.

    Args:
        employee_id: Defaults to the configured employee.
        project_id: Defaults to the configured project.
        task_id: Defaults to the configured task.
        date: YYYY-MM-DD; defaults to today.
        hours: Defaults to 8.
        note: Optional note.

    Returns:
        True when BambooHR accepted the entry, False when the request failed.
    """
    config = client.config
    resolved_employee = employee_id if employee_id is not None else config.employee_id
    resolved_project = project_id if project_id is not None else config.project_id
    resolved_task = task_id if task_id is not None else config.task_id

    if resolved_employee is None or resolved_project is None or resolved_task is None:
        raise MissingConfigError(
            "employeeId, projectId, and taskId are required for submitting work "
            "hours. Please set them in config or pass as arguments."
        )

    entry = WorkHoursEntry(
        employee_id=resolved_employee,
        project_id=resolved_project,
        task_id=resolved_task,
        date=date or today_iso(),
        hours=hours if hours is not None else DEFAULT_HOURS,
        note=note or None,
    )

    try:
        await client.post(
            client.company_path("time_tracking/hour_entries/store"),
            json={"hours": [entry.to_payload()]},
            tool="time_tracking",
        )
    except BambooHRApiError as exc:
        log.error(
            "Failed to submit work hours: %s",
            exc,
            extra={"status": exc.status, "endpoint": exc.endpoint},
        )
        return False
    return True
