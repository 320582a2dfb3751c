# src/reclaim_tasks/core/errors.py

"""
Error taxonomy raised by the API client.

Each failure kind is its own class so callers (the CLI, library users) can
present "not found" or "validation" problems specifically and fall back to
ReclaimError for everything else.
"""

from __future__ import annotations


class ReclaimError(Exception):
    """Base class for all reclaim_tasks errors."""


class AuthenticationError(ReclaimError):
    """Missing API token or a 401 response."""


class NotFoundError(ReclaimError):
    """404 response for a task (or any other resource)."""


class InvalidRecordError(ReclaimError):
    """422 response or a local validation failure."""


class ApiError(ReclaimError):
    """Any other non-2xx response, malformed JSON, or a network failure."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
