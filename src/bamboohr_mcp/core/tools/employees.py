from __future__ import annotations

from typing import List, Optional

from bamboohr_mcp.core.client import BambooHRClient
from bamboohr_mcp.core.models import DirectoryEmployee, Employee
from bamboohr_mcp.core.normalizer import parse_directory, parse_employee
from bamboohr_mcp.core.tools._resolve import resolve_employee_id

EMPLOYEE_FIELDS = ("firstName", "lastName", "jobTitle", "department", "location")


async def get_employee(
    client: BambooHRClient, employee_id: Optional[int] = None
) -> Employee:
    """
    Fetch one employee's profile (name, job title, department, location).

    Args:
        employee_id: BambooHR employee id; defaults to the configured employee.
    """
    resolved = resolve_employee_id(client, employee_id)
    xml_text = await client.get(
        client.company_path(f"employees/{resolved}"),
        params={"fields": ",".join(EMPLOYEE_FIELDS)},
        tool="employees",
    )
    return parse_employee(xml_text)


async def get_employee_directory(client: BambooHRClient) -> List[DirectoryEmployee]:
    """List every employee in the company directory with their visible fields."""
    xml_text = await client.get(
        client.company_path("employees/directory"), tool="employees"
    )
    return parse_directory(xml_text)
