import json
import logging

import httpx
import pytest
import respx
from bamboohr_mcp.core.client import BambooHRClient
from bamboohr_mcp.core.config import BambooHRConfig
from bamboohr_mcp.core.errors import BambooHRParseError, MissingConfigError
from bamboohr_mcp.core.tools import time_tracking
from bamboohr_mcp.core.tools.time_tracking import (
    list_projects,
    list_time_entries,
    submit_work_hours,
)
from httpx import Response

API = "https://api.bamboohr.com/api/gateway.php/acme/v1"
STORE = f"{API}/time_tracking/hour_entries/store"


@pytest.fixture
def fixed_today(monkeypatch):
    monkeypatch.setattr(time_tracking, "today_iso", lambda: "2024-05-01")
    return "2024-05-01"


# --- list_projects ---


@pytest.mark.asyncio
@respx.mock
async def test_list_projects_always_has_tasks(client):
    route = respx.get(f"{API}/time_tracking/employees/10/projects").mock(
        return_value=Response(
            200,
            json=[
                {"id": 1, "name": "Build", "tasks": [{"id": 11, "name": "Code"}]},
                {"id": 2, "name": "Ops", "tasks": None},
                {"id": 3, "name": "Sales"},
            ],
        )
    )

    async with client:
        projects = await list_projects(client)

    assert route.called
    assert [len(p.tasks) for p in projects] == [1, 0, 0]
    assert projects[0].tasks[0].name == "Code"
    assert all(p.to_payload()["tasks"] is not None for p in projects)
    assert projects[2].to_payload() == {"id": 3, "name": "Sales", "tasks": []}


@pytest.mark.asyncio
@respx.mock
async def test_list_projects_explicit_employee(client):
    route = respx.get(f"{API}/time_tracking/employees/77/projects").mock(
        return_value=Response(200, json=[])
    )

    async with client:
        assert await list_projects(client, employee_id=77) == []

    assert route.called


@pytest.mark.asyncio
@respx.mock
async def test_list_projects_rejects_non_list_payload(client):
    respx.get(f"{API}/time_tracking/employees/10/projects").mock(
        return_value=Response(200, json={"error": "odd"})
    )

    async with client:
        with pytest.raises(BambooHRParseError):
            await list_projects(client)


# --- list_time_entries ---


@pytest.mark.asyncio
@respx.mock
async def test_list_time_entries_queries_today_only(client, fixed_today):
    upstream = {
        "id": 5,
        "employeeId": 10,
        "type": "hour",
        "date": "2024-05-01",
        "start": None,
        "end": None,
        "timezone": "Europe/Berlin",
        "hours": 1.5,
        "note": "",
        "approvedAt": None,
        "approved": False,
        "projectInfo": {
            "project": {"id": 3, "name": "Build"},
            "task": {"id": 4, "name": "Code"},
        },
        "customThing": "kept",
    }
    route = respx.get(f"{API}/time_tracking/timesheet_entries").mock(
        return_value=Response(200, json=[upstream])
    )

    async with client:
        entries = await list_time_entries(client)

    params = route.calls[0].request.url.params
    assert params["employeeIds"] == "10"
    assert params["start"] == fixed_today
    assert params["end"] == fixed_today

    assert entries[0].to_payload() == upstream


@pytest.mark.asyncio
@respx.mock
async def test_list_time_entries_payload_keeps_only_sent_keys(client, fixed_today):
    upstream = {"id": 1, "hours": 2}
    respx.get(f"{API}/time_tracking/timesheet_entries").mock(
        return_value=Response(200, json=[upstream])
    )

    async with client:
        entries = await list_time_entries(client, employee_id=99)

    assert json.dumps(entries[0].to_payload(), sort_keys=True) == json.dumps(
        upstream, sort_keys=True
    )


@pytest.mark.asyncio
@respx.mock
async def test_list_time_entries_passes_values_through_unchanged(client, fixed_today):
    upstream = {"id": "te-1", "hours": "1.50", "approved": "yes"}
    respx.get(f"{API}/time_tracking/timesheet_entries").mock(
        return_value=Response(200, json=[upstream])
    )

    async with client:
        entries = await list_time_entries(client)

    assert json.dumps(entries[0].to_payload(), sort_keys=True) == json.dumps(
        upstream, sort_keys=True
    )


# --- submit_work_hours ---


@pytest.mark.asyncio
@respx.mock
async def test_submit_resolves_defaults(fixed_today):
    client = BambooHRClient(
        BambooHRConfig(token="t", company_domain="acme", employee_id=10)
    )
    route = respx.post(STORE).mock(return_value=Response(201, json={"ok": True}))

    async with client:
        ok = await submit_work_hours(client, None, 3, 4, "2024-05-01", 6)

    assert ok is True
    body = json.loads(route.calls[0].request.content)
    assert isinstance(body["hours"][0]["hours"], int)
    assert body == {
        "hours": [
            {
                "employeeId": 10,
                "projectId": 3,
                "taskId": 4,
                "date": "2024-05-01",
                "hours": 6,
            }
        ]
    }


@pytest.mark.asyncio
@respx.mock
async def test_submit_defaults_date_hours_and_keeps_note(client, fixed_today):
    route = respx.post(STORE).mock(return_value=Response(200))

    async with client:
        ok = await submit_work_hours(client, note="standup")

    assert ok is True
    [entry] = json.loads(route.calls[0].request.content)["hours"]
    assert entry["date"] == fixed_today
    assert entry["hours"] == 8
    assert entry["note"] == "standup"
    assert (entry["employeeId"], entry["projectId"], entry["taskId"]) == (10, 3, 4)


@pytest.mark.asyncio
@respx.mock
async def test_submit_returns_false_on_http_error(client, caplog):
    respx.post(STORE).mock(return_value=Response(400))

    with caplog.at_level(logging.ERROR, logger="bamboohr_mcp.tools.time_tracking"):
        async with client:
            ok = await submit_work_hours(client)

    assert ok is False
    assert any("Failed to submit work hours" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
@respx.mock
async def test_submit_returns_false_on_network_error(client):
    respx.post(STORE).mock(side_effect=httpx.ConnectError("down"))

    async with client:
        assert await submit_work_hours(client) is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "config",
    [
        BambooHRConfig(token="t", company_domain="acme", project_id=3, task_id=4),
        BambooHRConfig(token="t", company_domain="acme", employee_id=1, task_id=4),
        BambooHRConfig(token="t", company_domain="acme", employee_id=1, project_id=3),
    ],
)
async def test_submit_missing_identifier_fails_before_request(config):
    async with respx.mock(assert_all_called=False):
        route = respx.post(STORE).mock(return_value=Response(200))
        client = BambooHRClient(config)
        async with client:
            with pytest.raises(MissingConfigError):
                await submit_work_hours(client)

        assert not route.called
