from __future__ import annotations

from typing import List

from bamboohr_mcp.core.client import BambooHRClient
from bamboohr_mcp.core.models import TimeOffRequest
from bamboohr_mcp.core.normalizer import parse_time_off


async def list_absences(client: BambooHRClient) -> List[TimeOffRequest]:
    """
    List who is out of office (BambooHR "who's out" calendar).

    Returns one record per calendar entry with requestId, employeeId,
    employeeName, startDate, endDate and type.
    """
    xml_text = await client.get(
        client.company_path("time_off/whos_out"), tool="time_off"
    )
    return parse_time_off(xml_text)
