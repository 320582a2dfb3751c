# src/reclaim_tasks/core/utils.py

"""
Stateless conversion helpers shared by the task model and the API client,
plus the console renderers used by the CLI.

Date helpers never raise on bad input: unparseable values are handed back
(as strings) so the API can report what it did not understand.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, time, timezone
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..tasks.task_models import Priority, Task


def parse_datetime(value: Any) -> datetime | None:
    """
    Best-effort parse into an aware datetime.

    Accepts datetime, date and ISO-8601 strings ("Z" suffix allowed).
    Naive values are interpreted in the local timezone.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time())
    else:
        s = str(value).strip()
        if not s:
            return None
        try:
            dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
        except ValueError:
            return None

    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt


def parse_date(value: Any) -> str | None:
    """ISO-8601 string (seconds precision) in the value's own offset."""
    if value is None:
        return None
    if not isinstance(value, (datetime, date, str)):
        return str(value)

    dt = parse_datetime(value)
    if dt is None:
        return str(value)
    return dt.isoformat(timespec="seconds")


def format_datetime_for_api(value: Any) -> str | None:
    """UTC ISO-8601 with a 'Z' suffix, e.g. 2025-08-15T21:00:00Z."""
    if value is None:
        return None

    dt = parse_datetime(value)
    if dt is None:
        return str(value)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def validate_priority(value: Any) -> Priority:
    """Normalize any input (case-insensitive) to a Priority; unknown -> P3."""
    from ..tasks.task_models import Priority

    return Priority.from_value(value)


def validate_duration(value: Any) -> float:
    """Duration in hours as float; missing, non-numeric or non-positive -> 1.0."""
    if value is None or isinstance(value, bool):
        return 1.0
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return 1.0
    return hours if hours > 0 else 1.0


# ---- console rendering ----


def format_task(task: Task) -> str:
    status_icon = "✓" if task.is_completed else "○"
    due_str = f" (due: {task.due_date_formatted})" if task.due_date else ""
    return (
        f"{status_icon} {task.title}{due_str}\n"
        f"   ID: {task.id} | Priority: {task.priority_symbol.wire} | Status: {task.status}"
    )


def format_task_list(tasks: Sequence[Task], title: str = "Tasks") -> str:
    if not tasks:
        return "No tasks found."

    lines = ["", f"{title}:", "-" * 50]
    lines.extend(format_task(t) for t in tasks)
    lines.append("")
    lines.append(f"Total: {len(tasks)} tasks")
    return "\n".join(lines) + "\n"
