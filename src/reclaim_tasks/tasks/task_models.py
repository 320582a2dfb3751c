# src/reclaim_tasks/tasks/task_models.py

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from ..core.utils import parse_datetime, validate_duration

# The API counts time in 15-minute chunks.
CHUNKS_PER_HOUR = 4

EVENT_COLORS = (
    "BLUE",
    "GREEN",
    "YELLOW",
    "ORANGE",
    "RED",
    "PURPLE",
    "PINK",
    "BROWN",
    "GRAY",
)


def hours_to_chunks(hours: float) -> int:
    """Hours -> whole chunks. Truncates (0.1h -> 0), it does not round."""
    return int(hours * CHUNKS_PER_HOUR)


def chunks_to_hours(chunks: float | None) -> float | None:
    if chunks is None:
        return None
    return chunks / float(CHUNKS_PER_HOUR)


def _optional_chunks_to_hours(chunks: float | None) -> float | None:
    # 0 / missing chunk bounds mean "not set" on the server side.
    if not chunks:
        return None
    return chunks_to_hours(chunks)


class Priority(StrEnum):
    """Task priority symbol. The wire code is the upper-cased value ("P1".."P4")."""

    P1 = "p1"
    P2 = "p2"
    P3 = "p3"
    P4 = "p4"

    @property
    def wire(self) -> str:
        return self.value.upper()

    @classmethod
    def from_value(cls, raw: Any) -> Priority:
        """Total conversion: anything unrecognized (or None) becomes P3."""
        if raw is None:
            return cls.P3
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return cls.P3


class TaskStatus(StrEnum):
    """
    Task lifecycle status as reported by the API.

    NEW -> SCHEDULED / IN_PROGRESS -> COMPLETE / ARCHIVED, or CANCELLED.
    COMPLETE tasks are still active in Reclaim; ARCHIVED is "really done".
    """

    NEW = "NEW"
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"
    ARCHIVED = "ARCHIVED"
    CANCELLED = "CANCELLED"


_INACTIVE_STATUSES = frozenset({TaskStatus.ARCHIVED.value, TaskStatus.CANCELLED.value})
_COMPLETED_STATUSES = frozenset({TaskStatus.COMPLETE.value, TaskStatus.ARCHIVED.value})

# wire key -> (domain field, converter)
_WIRE_FIELDS: dict[str, tuple[str, Callable[[Any], Any] | None]] = {
    "timeChunksRequired": ("duration", chunks_to_hours),
    "minChunkSize": ("min_chunk_size", _optional_chunks_to_hours),
    "maxChunkSize": ("max_chunk_size", _optional_chunks_to_hours),
    "minWorkDuration": ("min_work_duration", _optional_chunks_to_hours),
    "maxWorkDuration": ("max_work_duration", _optional_chunks_to_hours),
    "timeSchemeId": ("time_scheme_id", None),
    "alwaysPrivate": ("always_private", None),
    "eventCategory": ("event_category", None),
    "eventColor": ("event_color", None),
    "snoozeUntil": ("snooze_until", None),
    "due": ("due_date", None),
    "created": ("created_at", None),
    "updated": ("updated_at", None),
}


@dataclass(slots=True)
class Task:
    """
    A Reclaim task in hour-based units.

    Build it directly with domain field names, or with Task.from_dict() from an
    API payload (camelCase keys, chunk units).
    """

    id: str | None = None
    title: str | None = None
    notes: str | None = None
    due_date: str | None = None
    priority: Priority | str | None = None
    duration: float | None = None
    min_chunk_size: float | None = None
    max_chunk_size: float | None = None
    min_work_duration: float | None = None
    max_work_duration: float | None = None
    snooze_until: str | None = None
    start: str | None = None
    time_scheme_id: str | None = None
    always_private: bool | None = None
    event_category: str | None = None
    event_color: str | None = None
    status: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    deleted: bool | None = None

    def __post_init__(self) -> None:
        self.priority = Priority.from_value(self.priority)
        self.duration = validate_duration(self.duration)
        # Defaults only fill unset fields; an explicit False stays False.
        if self.always_private is None:
            self.always_private = False
        if self.deleted is None:
            self.deleted = False
        if not self.status:
            self.status = TaskStatus.NEW

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Task:
        """Build a Task from an API payload or a dict of domain fields. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in (data or {}).items():
            key = str(key)
            mapped = _WIRE_FIELDS.get(key)
            if mapped is not None:
                name, convert = mapped
                kwargs[name] = convert(value) if convert is not None else value
            elif key in known:
                kwargs[key] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """All set fields (None dropped, False/0 kept); priority as its wire code."""
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name == "priority":
                value = self.priority_symbol.wire
            out[f.name] = value
        return out

    @property
    def priority_symbol(self) -> Priority:
        return Priority.from_value(self.priority)

    @property
    def is_active(self) -> bool:
        return not self.deleted and self.status not in _INACTIVE_STATUSES

    @property
    def is_completed(self) -> bool:
        return self.status in _COMPLETED_STATUSES

    @property
    def is_overdue(self) -> bool:
        if not self.due_date or not self.is_active:
            return False
        due = parse_datetime(self.due_date)
        if due is None:
            return False
        return due < datetime.now(timezone.utc)

    @property
    def due_date_formatted(self) -> str | None:
        """Due date as local 'YYYY-MM-DD HH:MM', or None."""
        if not self.due_date:
            return None
        due = parse_datetime(self.due_date)
        if due is None:
            return None
        return due.astimezone().strftime("%Y-%m-%d %H:%M")
