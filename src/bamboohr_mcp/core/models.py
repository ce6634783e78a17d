from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BambooModel(BaseModel):
    """Base for records returned by tools; serialized with upstream (camelCase) keys."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# --- Time tracking (JSON endpoints) ---


class Task(BambooModel):
    id: Union[int, str]
    name: str

    model_config = ConfigDict(extra="allow")


class Project(BambooModel):
    id: Union[int, str]
    name: str
    tasks: List[Task] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")

    @field_validator("tasks", mode="before")
    @classmethod
    def _tasks_default(cls, value: Any) -> Any:
        return [] if value is None else value


class TimeEntry(BambooModel):
    """
    Timesheet entry as sent by BambooHR. Fields are untyped and unknown keys
    are kept: the payload is the upstream record, values unchanged.
    """

    id: Any = None
    employee_id: Any = Field(default=None, alias="employeeId")
    type: Any = None
    date: Any = None
    start: Any = None
    end: Any = None
    timezone: Any = None
    hours: Any = None
    note: Any = None
    approved_at: Any = Field(default=None, alias="approvedAt")
    approved: Any = None
    project_info: Any = Field(default=None, alias="projectInfo")

    model_config = ConfigDict(extra="allow")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class WorkHoursEntry(BambooModel):
    """Outbound body item for time_tracking/hour_entries/store."""

    employee_id: int = Field(alias="employeeId")
    date: str
    hours: Union[int, float]
    project_id: int = Field(alias="projectId")
    task_id: int = Field(alias="taskId")
    note: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# --- XML-backed records ---


class TimeOffRequest(BambooModel):
    request_id: str = Field(alias="requestId")
    employee_id: str = Field(alias="employeeId")
    employee_name: str = Field(alias="employeeName")
    start_date: str = Field(alias="startDate")
    end_date: str = Field(alias="endDate")
    type: str


class DirectoryEmployee(BambooModel):
    """Directory row: numeric id plus whatever fields the company exposes."""

    id: int
    fields: Dict[str, str] = Field(default_factory=dict)


class Employee(BambooModel):
    id: int
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    job_title: str = Field(default="", alias="jobTitle")
    department: str = ""
    location: str = ""
    # Every field upstream returned, keyed by BambooHR field id.
    fields: Dict[str, str] = Field(default_factory=dict)


__all__ = [
    "BambooModel",
    "Task",
    "Project",
    "TimeEntry",
    "WorkHoursEntry",
    "TimeOffRequest",
    "DirectoryEmployee",
    "Employee",
]
