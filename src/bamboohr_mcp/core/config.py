"""Runtime settings: credentials, company domain and default identifiers."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Optional

from dotenv import load_dotenv

TOKEN_ENV = "BAMBOOHR_TOKEN"
COMPANY_DOMAIN_ENV = "BAMBOOHR_COMPANY_DOMAIN"
EMPLOYEE_ID_ENV = "BAMBOOHR_EMPLOYEE_ID"
PROJECT_ID_ENV = "BAMBOOHR_PROJECT_ID"
TASK_ID_ENV = "BAMBOOHR_TASK_ID"
LOG_LEVEL_ENV = "BAMBOOHR_LOG_LEVEL"


@dataclass(frozen=True)
class BambooHRConfig:
    token: Optional[str] = None
    company_domain: Optional[str] = None
    employee_id: Optional[int] = None
    project_id: Optional[int] = None
    task_id: Optional[int] = None

    def with_overrides(self, **overrides: Any) -> "BambooHRConfig":
        """Return a copy with every override applied; None and "" are ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None and v != ""}
        if not changes:
            return self
        return replace(self, **changes)


def _env_str(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def _env_int(name: str) -> Optional[int]:
    value = _env_str(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


def load_env_config(*, use_dotenv: bool = True) -> BambooHRConfig:
    """Load BambooHR settings from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    return BambooHRConfig(
        token=_env_str(TOKEN_ENV),
        company_domain=_env_str(COMPANY_DOMAIN_ENV),
        employee_id=_env_int(EMPLOYEE_ID_ENV),
        project_id=_env_int(PROJECT_ID_ENV),
        task_id=_env_int(TASK_ID_ENV),
    )


class ConfigStore:
    """
    Holder for the server's default settings.

    Not locked: the stdio host serves one call at a time. Per-call
    overrides never touch the store; they are applied to a copy with
    BambooHRConfig.with_overrides.
    """

    def __init__(self, config: Optional[BambooHRConfig] = None):
        self._config = config or BambooHRConfig()

    @classmethod
    def from_env(cls, *, use_dotenv: bool = True) -> "ConfigStore":
        return cls(load_env_config(use_dotenv=use_dotenv))

    def get(self) -> BambooHRConfig:
        return self._config

    def set(self, **partial: Any) -> None:
        """Merge the given keys into the stored settings; other keys are kept."""
        self._config = replace(self._config, **partial)


__all__ = [
    "BambooHRConfig",
    "ConfigStore",
    "load_env_config",
    "TOKEN_ENV",
    "COMPANY_DOMAIN_ENV",
    "EMPLOYEE_ID_ENV",
    "PROJECT_ID_ENV",
    "TASK_ID_ENV",
    "LOG_LEVEL_ENV",
]
