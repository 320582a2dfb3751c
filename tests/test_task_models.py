# tests/test_task_models.py

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

import pytest

from reclaim_tasks.tasks.task_models import (
    Priority,
    Task,
    TaskStatus,
    chunks_to_hours,
    hours_to_chunks,
)


def _iso(dt: datetime) -> str:
    return dt.isoformat(timespec="seconds")


def test_task_defaults() -> None:
    task = Task()

    assert task.priority is Priority.P3
    assert task.duration == 1.0
    assert task.always_private is False
    assert task.deleted is False
    assert task.status == TaskStatus.NEW


def test_task_from_domain_fields() -> None:
    task = Task.from_dict(
        {
            "title": "Test Task",
            "due_date": "2025-08-15T17:00:00-04:00",
            "priority": "p2",
            "duration": 1.5,
            "notes": "Test notes",
        }
    )

    assert task.title == "Test Task"
    assert task.due_date == "2025-08-15T17:00:00-04:00"
    assert task.priority is Priority.P2
    assert task.duration == 1.5
    assert task.notes == "Test notes"


def test_task_from_wire_payload_converts_keys_and_chunks() -> None:
    task = Task.from_dict(
        {
            "id": "t1",
            "title": "Wire",
            "priority": "P1",
            "timeChunksRequired": 8,
            "minChunkSize": 2,
            "maxChunkSize": 12,
            "minWorkDuration": 4,
            "timeSchemeId": "scheme-1",
            "alwaysPrivate": True,
            "eventCategory": "PERSONAL",
            "eventColor": "BLUE",
            "due": "2025-08-15T21:00:00Z",
            "snoozeUntil": "2025-08-14T09:00:00Z",
            "status": "SCHEDULED",
            "someServerOnlyField": {"ignored": True},
        }
    )

    assert task.id == "t1"
    assert task.duration == 2.0
    assert task.min_chunk_size == 0.5
    assert task.max_chunk_size == 3.0
    assert task.min_work_duration == 1.0
    assert task.time_scheme_id == "scheme-1"
    assert task.always_private is True
    assert task.event_category == "PERSONAL"
    assert task.event_color == "BLUE"
    assert task.due_date == "2025-08-15T21:00:00Z"
    assert task.snooze_until == "2025-08-14T09:00:00Z"
    assert task.priority is Priority.P1
    assert not hasattr(task, "someServerOnlyField")


def test_zero_chunk_bounds_stay_unset() -> None:
    task = Task.from_dict({"minChunkSize": 0, "maxChunkSize": None})
    assert task.min_chunk_size is None
    assert task.max_chunk_size is None


@pytest.mark.parametrize("raw", [0, -1.5, None, "abc"])
def test_non_positive_or_missing_duration_defaults_to_one_hour(raw) -> None:
    assert Task(duration=raw).duration == 1.0


def test_explicit_values_are_not_overwritten_by_defaults() -> None:
    task = Task(always_private=False, deleted=True, status="ARCHIVED")
    assert task.always_private is False
    assert task.deleted is True
    assert task.status == "ARCHIVED"


def test_priority_symbol_conversion() -> None:
    assert Task(priority="P1").priority_symbol is Priority.P1
    assert Task(priority="P4").priority_symbol is Priority.P4
    assert Task(priority="INVALID").priority_symbol is Priority.P3
    assert Task(priority=Priority.P2).priority_symbol is Priority.P2


def test_task_active_status() -> None:
    task = Task()
    assert task.is_active

    task.deleted = True
    assert not task.is_active

    task.deleted = False
    task.status = "ARCHIVED"
    assert not task.is_active

    task.status = TaskStatus.CANCELLED
    assert not task.is_active

    task.status = "COMPLETE"
    assert task.is_active


def test_task_completed_status() -> None:
    task = Task()
    assert not task.is_completed

    task.status = "COMPLETE"
    assert task.is_completed

    task.status = TaskStatus.ARCHIVED
    assert task.is_completed


def test_task_overdue_status() -> None:
    now = datetime.now(timezone.utc)
    task = Task()
    assert not task.is_overdue  # no due date

    task.due_date = _iso(now + timedelta(hours=1))
    assert not task.is_overdue

    task.due_date = _iso(now - timedelta(hours=1))
    assert task.is_overdue

    task.status = "ARCHIVED"
    assert not task.is_overdue


def test_unparseable_due_date_is_not_overdue() -> None:
    task = Task(due_date="sometime next week")
    assert not task.is_overdue
    assert task.due_date_formatted is None


def test_due_date_formatted_uses_local_time() -> None:
    task = Task()
    assert task.due_date_formatted is None

    task.due_date = "2025-08-15T17:00:00-04:00"
    expected = datetime(2025, 8, 15, 21, 0, tzinfo=timezone.utc).astimezone().strftime("%Y-%m-%d %H:%M")
    assert task.due_date_formatted == expected
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}", task.due_date_formatted)


def test_to_dict() -> None:
    task = Task.from_dict(
        {
            "title": "Test Task",
            "due_date": "2025-08-15T17:00:00-04:00",
            "priority": Priority.P2,
            "duration": 1.5,
            "notes": "Test notes",
        }
    )
    data = task.to_dict()

    assert data["title"] == "Test Task"
    assert data["priority"] == "P2"
    assert data["duration"] == 1.5
    assert data["notes"] == "Test notes"
    assert "id" not in data
    # False values are kept, only None is dropped.
    assert data["always_private"] is False
    assert data["deleted"] is False


def test_wire_round_trip_duration() -> None:
    assert Task.from_dict({"timeChunksRequired": 8}).duration == 2.0
    data = Task(duration=2.0, priority="p1").to_dict()
    assert data["priority"] == "P1"
    assert data["duration"] == 2.0
    assert "id" not in data


def test_chunk_conversion_truncates() -> None:
    assert hours_to_chunks(2.0) == 8
    assert hours_to_chunks(0.25) == 1
    assert hours_to_chunks(0.3) == 1
    assert hours_to_chunks(0.1) == 0
    assert chunks_to_hours(6) == 1.5
    assert chunks_to_hours(None) is None
