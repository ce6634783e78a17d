import pytest
from bamboohr_mcp.core.client import BambooHRClient
from bamboohr_mcp.core.config import BambooHRConfig


@pytest.fixture
def config():
    return BambooHRConfig(
        token="mock-token",
        company_domain="acme",
        employee_id=10,
        project_id=3,
        task_id=4,
    )


@pytest.fixture
def client(config):
    return BambooHRClient(config)
