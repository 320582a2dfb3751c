# src/reclaim_tasks/core/fields.py

"""
Tri-state values for clearable fields in partial updates.

- Unspecified: the caller did not mention the field; it is left out of the payload.
- Clear: the caller wants the field removed; an explicit null is sent.
- SetTo(value): the caller wants the field set to value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Unspecified:
    def __repr__(self) -> str:
        return "UNSPECIFIED"


@dataclass(frozen=True, slots=True)
class Clear:
    pass


@dataclass(frozen=True, slots=True)
class SetTo:
    value: Any


FieldUpdate = Unspecified | Clear | SetTo

UNSPECIFIED = Unspecified()


def as_field_update(value: Any) -> FieldUpdate:
    """Map a raw keyword argument to a tri-state: None clears, anything else sets."""
    if isinstance(value, (Unspecified, Clear, SetTo)):
        return value
    if value is None:
        return Clear()
    return SetTo(value)
