# src/workast_mcp/api/errors.py

from __future__ import annotations


class WorkastError(Exception):
    """Base class for everything the Workast client raises."""


class WorkastConfigError(WorkastError):
    """Client cannot be used: missing API token or base URL."""


class WorkastAPIError(WorkastError):
    """Upstream answered with a non-success status. Body is kept verbatim."""

    def __init__(self, method: str, path: str, status_code: int, body: str) -> None:
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body
        super().__init__(f"Workast API {method} {path} returned {status_code}: {body}")


class WorkastTransportError(WorkastError):
    """Network/timeout failure, or a response body that is not JSON."""
