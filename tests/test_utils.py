# tests/test_utils.py

from __future__ import annotations

from datetime import date, datetime, time, timezone

import pytest

from reclaim_tasks.core.fields import UNSPECIFIED, Clear, SetTo, as_field_update
from reclaim_tasks.core.utils import (
    format_datetime_for_api,
    format_task,
    format_task_list,
    parse_date,
    validate_duration,
    validate_priority,
)
from reclaim_tasks.tasks.task_models import Priority, Task

# ---- priority / duration ----


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("P1", Priority.P1),
        ("p2", Priority.P2),
        (" P4 ", Priority.P4),
        (Priority.P1, Priority.P1),
        (None, Priority.P3),
        ("urgent", Priority.P3),
        (5, Priority.P3),
        ("", Priority.P3),
    ],
)
def test_validate_priority_is_total(raw, expected) -> None:
    result = validate_priority(raw)
    assert result is expected
    # idempotent
    assert validate_priority(result) is result


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, 1.0), (0, 1.0), (-2, 1.0), ("1.5", 1.5), ("abc", 1.0), (2, 2.0), (0.25, 0.25)],
)
def test_validate_duration(raw, expected) -> None:
    result = validate_duration(raw)
    assert result == expected
    assert isinstance(result, float)


# ---- dates ----


def test_format_datetime_for_api_normalizes_to_utc() -> None:
    assert format_datetime_for_api("2025-08-15T17:00:00-04:00") == "2025-08-15T21:00:00Z"
    assert format_datetime_for_api("2025-08-15T21:00:00Z") == "2025-08-15T21:00:00Z"
    aware = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert format_datetime_for_api(aware) == "2025-01-02T03:04:05Z"


def test_format_datetime_for_api_date_only_is_local_midnight() -> None:
    expected = (
        datetime.combine(date(2025, 8, 15), time())
        .astimezone()
        .astimezone(timezone.utc)
        .strftime("%Y-%m-%dT%H:%M:%SZ")
    )
    assert format_datetime_for_api(date(2025, 8, 15)) == expected
    assert format_datetime_for_api("2025-08-15") == expected


def test_format_datetime_for_api_passes_through_garbage() -> None:
    assert format_datetime_for_api("next tuesday") == "next tuesday"
    assert format_datetime_for_api(None) is None


def test_parse_date_keeps_original_offset() -> None:
    assert parse_date("2025-08-15T17:00:00-04:00") == "2025-08-15T17:00:00-04:00"
    aware = datetime(2025, 8, 15, 9, 30, tzinfo=timezone.utc)
    assert parse_date(aware) == "2025-08-15T09:30:00+00:00"


def test_parse_date_never_raises() -> None:
    assert parse_date("not a date") == "not a date"
    assert parse_date(None) is None
    assert parse_date(42) == "42"


# ---- tri-state fields ----


def test_as_field_update() -> None:
    assert as_field_update(UNSPECIFIED) is UNSPECIFIED
    assert as_field_update(None) == Clear()
    assert as_field_update("2025-08-15") == SetTo("2025-08-15")
    assert as_field_update(Clear()) == Clear()
    assert as_field_update(SetTo(None)) == SetTo(None)


# ---- console rendering ----


def test_format_task() -> None:
    task = Task(id="abc", title="Write report", priority="P1", status="SCHEDULED")
    out = format_task(task)
    assert out.startswith("○ Write report")
    assert "ID: abc | Priority: P1 | Status: SCHEDULED" in out

    done = Task(id="d", title="Done", status="ARCHIVED", due_date="2025-08-15T17:00:00-04:00")
    out = format_task(done)
    assert out.startswith("✓ Done (due: ")


def test_format_task_list() -> None:
    assert format_task_list([]) == "No tasks found."

    out = format_task_list([Task(id="1", title="A"), Task(id="2", title="B")], title="Mine")
    assert "Mine:" in out
    assert "Total: 2 tasks" in out
