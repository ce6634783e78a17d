from pathlib import Path

import pytest
import respx
from bamboohr_mcp.core.errors import BambooHRApiError, BambooHRParseError
from bamboohr_mcp.core.tools.time_off import list_absences
from httpx import Response

API = "https://api.bamboohr.com/api/gateway.php/acme/v1"
XML_HEADERS = {"Content-Type": "application/xml"}


def load_fixture(name: str) -> str:
    return (Path(__file__).parent / "fixtures" / name).read_text(encoding="utf-8")


@pytest.mark.asyncio
@respx.mock
async def test_list_absences_parses_calendar(client):
    route = respx.get(f"{API}/time_off/whos_out").mock(
        return_value=Response(
            200, text=load_fixture("whos_out.xml"), headers=XML_HEADERS
        )
    )

    async with client:
        records = await list_absences(client)

    assert route.called
    names = [r.employee_name for r in records]
    assert names == ["Charlotte Abbott", "Jennifer Caldwell"]
    assert records[0].to_payload()["startDate"] == "2024-01-15"


@pytest.mark.asyncio
@respx.mock
async def test_list_absences_empty_calendar_is_parse_error(client):
    respx.get(f"{API}/time_off/whos_out").mock(
        return_value=Response(200, text="<calendar></calendar>", headers=XML_HEADERS)
    )

    async with client:
        with pytest.raises(BambooHRParseError):
            await list_absences(client)


@pytest.mark.asyncio
@respx.mock
async def test_list_absences_http_error_propagates(client):
    respx.get(f"{API}/time_off/whos_out").mock(return_value=Response(403))

    async with client:
        with pytest.raises(BambooHRApiError) as exc:
            await list_absences(client)

    assert exc.value.status == 403
