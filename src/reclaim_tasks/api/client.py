# src/reclaim_tasks/api/client.py

"""
HTTP client for the Reclaim.ai task API.

This is the only module that talks to the network. It converts hour-based
domain arguments into the API's chunk-based payloads, maps HTTP failures onto
the error taxonomy in core.errors, and resolves time scheme names to ids.

One request at a time, no retries. Time schemes are fetched at most once per
client and cached for its lifetime; construct a new ReclaimClient to refresh.
"""

from __future__ import annotations

import contextlib
import json
import logging
from collections.abc import Iterator
from enum import StrEnum
from typing import Any

import httpx

from ..config import DEFAULT_BASE_URL, Settings, get_settings
from ..core.errors import ApiError, AuthenticationError, InvalidRecordError, NotFoundError, ReclaimError
from ..core.fields import UNSPECIFIED, Clear, SetTo, Unspecified, as_field_update
from ..core.utils import format_datetime_for_api, validate_duration, validate_priority
from ..tasks.task_models import Priority, Task, TaskStatus, hours_to_chunks
from .time_schemes import TimeScheme, TimeSchemeResolver, is_uuid

logger = logging.getLogger(__name__)

# Splitting defaults, in chunks.
DEFAULT_MIN_CHUNK = 1  # 15 minutes
DEFAULT_MAX_CHUNK = 12  # 3 hours

DEFAULT_EVENT_CATEGORY = "WORK"
DEFAULT_EVENT_SUB_TYPE = "FOCUS"


class TaskFilter(StrEnum):
    ACTIVE = "active"
    COMPLETED = "completed"
    OVERDUE = "overdue"


def _as_mapping(data: Any) -> dict[str, Any]:
    return data if isinstance(data, dict) else {}


def _validation_message(body: str) -> str:
    msg = "Validation error"
    if not body:
        return msg
    try:
        data = json.loads(body)
    except ValueError:
        return msg
    if isinstance(data, dict):
        return str(data.get("message") or data.get("error") or msg)
    return msg


def _put_date(payload: dict[str, Any], key: str, value: Any) -> None:
    """Apply a clearable date to an update payload (absent / null / UTC string)."""
    update = as_field_update(value)
    if isinstance(update, Unspecified):
        return
    if isinstance(update, Clear):
        payload[key] = None
    elif isinstance(update, SetTo):
        payload[key] = format_datetime_for_api(update.value)


@contextlib.contextmanager
def _task_scope(task_id: str) -> Iterator[None]:
    """Turn a bare 404 into a NotFoundError naming the task."""
    try:
        yield
    except NotFoundError as exc:
        raise NotFoundError(f"Task {task_id} not found") from exc


class ReclaimClient:
    """Synchronous Reclaim API client. Not meant to be shared between threads."""

    def __init__(
        self,
        token: str | None = None,
        *,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
        resolver: TimeSchemeResolver | None = None,
    ) -> None:
        if settings is None:
            settings = get_settings()
        self._settings = settings

        self._token = token or getattr(settings, "api_key", None)
        if not self._token:
            raise AuthenticationError("RECLAIM_API_KEY environment variable not set")

        timeout = httpx.Timeout(
            float(getattr(settings, "read_timeout", 30.0)),
            connect=float(getattr(settings, "connect_timeout", 5.0)),
        )
        self._http = httpx.Client(
            base_url=str(getattr(settings, "base_url", DEFAULT_BASE_URL)),
            headers={
                "Authorization": f"Bearer {self._token}",
                "Content-Type": "application/json",
                "User-Agent": str(getattr(settings, "user_agent", "reclaim-tasks")),
            },
            timeout=timeout,
            transport=transport,
        )

        self._resolver = resolver or TimeSchemeResolver()
        self._time_schemes_cache: list[TimeScheme] | None = None

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> ReclaimClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ---- tasks ----

    def create_task(
        self,
        title: str,
        *,
        due_date: Any = None,
        priority: Priority | str | None = Priority.P3,
        duration: float = 1.0,
        min_chunk_size: float | None = None,
        max_chunk_size: float | None = None,
        min_work_duration: float | None = None,
        max_work_duration: float | None = None,
        snooze_until: Any = None,
        start: Any = None,
        time_scheme: str | None = None,
        always_private: bool | None = None,
        event_category: str | None = None,
        event_color: str | None = None,
        notes: str | None = None,
        allow_splitting: bool = False,
        split_chunk_size: float | None = None,
    ) -> Task:
        if not title or not str(title).strip():
            raise InvalidRecordError("Task title is required")

        time_scheme_id = None
        if time_scheme:
            time_scheme_id = self.resolve_time_scheme_id(time_scheme)
            if not time_scheme_id:
                raise InvalidRecordError(
                    f"Time scheme '{time_scheme}' not found. "
                    "Use list_time_schemes to see available options."
                )

        duration_chunks = hours_to_chunks(validate_duration(duration))
        if allow_splitting:
            if split_chunk_size is not None:
                min_chunk = hours_to_chunks(split_chunk_size)
            elif min_chunk_size is not None:
                min_chunk = hours_to_chunks(min_chunk_size)
            else:
                min_chunk = DEFAULT_MIN_CHUNK
            max_chunk = hours_to_chunks(max_chunk_size) if max_chunk_size is not None else DEFAULT_MAX_CHUNK
        else:
            # One contiguous block.
            min_chunk = duration_chunks
            max_chunk = duration_chunks

        payload: dict[str, Any] = {
            "title": title,
            "priority": validate_priority(priority).wire,
            "timeChunksRequired": duration_chunks,
            "eventCategory": DEFAULT_EVENT_CATEGORY if event_category is None else event_category,
            "eventSubType": DEFAULT_EVENT_SUB_TYPE,
            "minChunkSize": min_chunk,
            "maxChunkSize": max_chunk,
        }

        if due_date:
            payload["due"] = format_datetime_for_api(due_date)
        if notes is not None:
            payload["notes"] = notes
        if min_work_duration is not None:
            payload["minWorkDuration"] = hours_to_chunks(min_work_duration)
        if max_work_duration is not None:
            payload["maxWorkDuration"] = hours_to_chunks(max_work_duration)
        if snooze_until:
            payload["snoozeUntil"] = format_datetime_for_api(snooze_until)
        if start:
            payload["start"] = format_datetime_for_api(start)
        if time_scheme_id:
            payload["timeSchemeId"] = time_scheme_id
        if always_private:
            payload["alwaysPrivate"] = always_private
        if event_color is not None:
            payload["eventColor"] = event_color

        response = self._request("POST", "/tasks", payload)
        task = Task.from_dict(_as_mapping(response))
        logger.info("Created task id=%s title=%r", task.id, task.title)
        return task

    def list_tasks(self, task_filter: TaskFilter | str | None = None) -> list[Task]:
        """All tasks in server order, optionally filtered client-side (active/completed/overdue)."""
        response = self._request("GET", "/tasks")
        if not isinstance(response, list):
            raise ApiError("Unexpected response for /tasks: expected a list")
        tasks = [Task.from_dict(_as_mapping(item)) for item in response]

        if task_filter == TaskFilter.ACTIVE:
            return [t for t in tasks if t.is_active]
        if task_filter == TaskFilter.COMPLETED:
            return [t for t in tasks if t.is_completed]
        if task_filter == TaskFilter.OVERDUE:
            return [t for t in tasks if t.is_overdue]
        return tasks

    def get_task(self, task_id: str) -> Task:
        with _task_scope(task_id):
            response = self._request("GET", f"/tasks/{task_id}")
        return Task.from_dict(_as_mapping(response))

    def update_task(
        self,
        task_id: str,
        *,
        title: str | None = None,
        notes: str | None = None,
        priority: Priority | str | None = None,
        due_date: Any = UNSPECIFIED,
        duration: float | None = None,
        min_chunk_size: float | None = None,
        max_chunk_size: float | None = None,
        min_work_duration: float | None = None,
        max_work_duration: float | None = None,
        snooze_until: Any = UNSPECIFIED,
        start: Any = UNSPECIFIED,
        time_scheme: str | None = None,
        always_private: bool | None = None,
        event_category: str | None = None,
        event_color: str | None = None,
    ) -> Task:
        """
        Patch only the fields that were passed.

        Date fields are tri-state: leave them out to keep the server value,
        pass None (or Clear()) to clear, pass a value to set. Other fields are
        sent whenever they are not None, so notes="" clears the notes and
        duration=0 sends zero chunks. always_private is sent only when truthy,
        so always_private=False is not sent.
        """
        payload: dict[str, Any] = {}

        if title is not None:
            payload["title"] = title
        if notes is not None:
            payload["notes"] = notes
        if priority is not None:
            payload["priority"] = validate_priority(priority).wire

        _put_date(payload, "due", due_date)

        if duration is not None:
            payload["timeChunksRequired"] = hours_to_chunks(duration)
        if min_chunk_size is not None:
            payload["minChunkSize"] = hours_to_chunks(min_chunk_size)
        if max_chunk_size is not None:
            payload["maxChunkSize"] = hours_to_chunks(max_chunk_size)
        if min_work_duration is not None:
            payload["minWorkDuration"] = hours_to_chunks(min_work_duration)
        if max_work_duration is not None:
            payload["maxWorkDuration"] = hours_to_chunks(max_work_duration)

        _put_date(payload, "snoozeUntil", snooze_until)
        _put_date(payload, "start", start)

        if always_private:
            payload["alwaysPrivate"] = always_private
        if event_category is not None:
            payload["eventCategory"] = event_category
        if event_color is not None:
            payload["eventColor"] = event_color

        if time_scheme:
            time_scheme_id = self.resolve_time_scheme_id(time_scheme)
            if not time_scheme_id:
                raise InvalidRecordError(f"Time scheme '{time_scheme}' not found")
            payload["timeSchemeId"] = time_scheme_id

        if not payload:
            raise InvalidRecordError("No update fields provided")

        with _task_scope(task_id):
            response = self._request("PATCH", f"/tasks/{task_id}", payload)
        logger.info("Updated task id=%s fields=%s", task_id, sorted(payload))
        return Task.from_dict(_as_mapping(response))

    def complete_task(self, task_id: str) -> Task:
        # ARCHIVED is what the Reclaim app uses for "done".
        with _task_scope(task_id):
            response = self._request("PATCH", f"/tasks/{task_id}", {"status": TaskStatus.ARCHIVED.value})
        logger.info("Completed task id=%s", task_id)
        return Task.from_dict(_as_mapping(response))

    def delete_task(self, task_id: str) -> bool:
        with _task_scope(task_id):
            self._request("DELETE", f"/tasks/{task_id}")
        logger.info("Deleted task id=%s", task_id)
        return True

    # ---- time schemes ----

    def list_time_schemes(self) -> list[TimeScheme]:
        return self._get_time_schemes()

    def format_time_schemes(self) -> str:
        schemes = self.list_time_schemes()
        if not schemes:
            return "No time schemes found."

        lines = ["", "Available Time Schemes:", "-" * 50]
        for scheme in schemes:
            lines.append(f"• {scheme.get('title') or 'Untitled'}")
            lines.append(f"  ID: {scheme.get('id') or 'N/A'}")
            lines.append(f"  Type: {scheme.get('policyType') or 'N/A'}")
            lines.append("")
        lines.append('Usage: --time-scheme "Work Hours" or --time-scheme work')
        return "\n".join(lines) + "\n"

    def resolve_time_scheme_id(self, name_or_id: str | None) -> str | None:
        """Scheme id for a name, alias or UUID; None when nothing matches."""
        if not name_or_id:
            return None
        if is_uuid(str(name_or_id)):
            return str(name_or_id)
        return self._resolver.resolve(name_or_id, self._get_time_schemes())

    def _get_time_schemes(self) -> list[TimeScheme]:
        if self._time_schemes_cache is not None:
            return self._time_schemes_cache

        try:
            response = self._request("GET", "/timeschemes")
        except ReclaimError as exc:
            # Degrade to "no schemes" so callers report "scheme not found" instead.
            logger.warning("Error fetching time schemes: %s", exc)
            return []

        schemes = [s for s in response if isinstance(s, dict)] if isinstance(response, list) else []
        self._time_schemes_cache = schemes
        logger.debug("Cached %d time schemes", len(schemes))
        return schemes

    # ---- transport ----

    def _request(self, method: str, endpoint: str, data: dict[str, Any] | None = None) -> Any:
        logger.debug("%s %s", method, endpoint)
        send_body = data is not None and method in ("POST", "PATCH", "PUT")
        try:
            response = self._http.request(method, endpoint, json=data if send_body else None)
        except httpx.HTTPError as exc:
            raise ApiError(f"Network error: {exc}") from exc
        return self._handle_response(response)

    @staticmethod
    def _handle_response(response: httpx.Response) -> Any:
        code = response.status_code
        body = response.text

        if 200 <= code < 300:
            if not body.strip():
                return True
            try:
                return response.json()
            except ValueError as exc:
                raise ApiError(f"Invalid JSON response: {exc}", code, body) from exc

        if code == 401:
            raise AuthenticationError("Invalid or expired API token")
        if code == 404:
            raise NotFoundError("Resource not found")
        if code == 422:
            raise InvalidRecordError(_validation_message(body))

        raise ApiError(f"HTTP {code}: {response.reason_phrase}", code, body)
