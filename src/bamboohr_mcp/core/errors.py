from __future__ import annotations


class BambooHRError(Exception):
    """Base error for BambooHR failures."""


class BambooHRApiError(BambooHRError):
    """
    Upstream call failed.
    status is the HTTP status code, or 0 when no response was received
    (network error, unreadable body).
    """

    def __init__(self, message: str, *, status: int, endpoint: str):
        super().__init__(message)
        self.status = status
        self.endpoint = endpoint

    @property
    def is_transport_error(self) -> bool:
        return self.status == 0


class BambooHRParseError(BambooHRError):
    pass


class EmployeeNotFoundError(BambooHRParseError):
    """Raised when an employee response has no <employee> node."""


class MissingConfigError(ValueError):
    """Raised when a required setting is neither passed nor configured."""


__all__ = [
    "BambooHRError",
    "BambooHRApiError",
    "BambooHRParseError",
    "EmployeeNotFoundError",
    "MissingConfigError",
]
