# src/reclaim_tasks/api/time_schemes.py

"""
Time scheme name -> id resolution.

Rules run in a fixed order and the first hit wins:
1. alias table (e.g. "business hours" -> first scheme whose title contains "work"),
2. exact title match (case-insensitive),
3. partial title match (case-insensitive substring).

UUID-shaped input is taken as an id as-is. New aliases are data: add an
AliasRule to the table instead of another branch.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

TimeScheme = Mapping[str, Any]
# {"id": "...", "title": "...", "policyType": "..."} as returned by GET /timeschemes.


@dataclass(frozen=True, slots=True)
class AliasRule:
    keyword: str
    aliases: frozenset[str]


DEFAULT_ALIASES: tuple[AliasRule, ...] = (
    AliasRule("work", frozenset({"work", "work hours", "working hours", "business hours"})),
    AliasRule(
        "personal",
        frozenset({"personal", "personal hours", "off hours", "off-hours", "private"}),
    ),
)

ALIAS_HELP = (
    "• work, working hours, business hours → Finds schemes containing 'work'",
    "• personal, off hours, off-hours, private → Finds schemes containing 'personal'",
    "• You can also use partial matches (e.g., 'Work' matches 'Work Hours')",
)


def is_uuid(value: str) -> bool:
    return bool(UUID_RE.match(value))


def _title(scheme: TimeScheme) -> str:
    return str(scheme.get("title") or "").lower()


def _first(schemes: Iterable[TimeScheme], pred: Callable[[str], bool]) -> TimeScheme | None:
    for scheme in schemes:
        if pred(_title(scheme)):
            return scheme
    return None


class TimeSchemeResolver:
    """Ordered rule engine over a list of time schemes."""

    def __init__(self, aliases: Sequence[AliasRule] = DEFAULT_ALIASES) -> None:
        self._aliases = tuple(aliases)
        self._rules: tuple[tuple[str, Callable[[str, Sequence[TimeScheme]], TimeScheme | None]], ...] = (
            ("alias", self._match_alias),
            ("exact", self._match_exact),
            ("partial", self._match_partial),
        )

    def _match_alias(self, query: str, schemes: Sequence[TimeScheme]) -> TimeScheme | None:
        for rule in self._aliases:
            if query not in rule.aliases:
                continue
            keyword = rule.keyword
            hit = _first(schemes, lambda title: keyword in title)
            if hit is not None:
                return hit
        return None

    @staticmethod
    def _match_exact(query: str, schemes: Sequence[TimeScheme]) -> TimeScheme | None:
        return _first(schemes, lambda title: title == query)

    @staticmethod
    def _match_partial(query: str, schemes: Sequence[TimeScheme]) -> TimeScheme | None:
        return _first(schemes, lambda title: query in title)

    def resolve(self, name_or_id: str | None, schemes: Sequence[TimeScheme]) -> str | None:
        """Return the scheme id for name_or_id, or None when nothing matches."""
        if not name_or_id:
            return None

        raw = str(name_or_id)
        if is_uuid(raw):
            return raw

        if not schemes:
            return None

        query = raw.lower()
        for rule_name, match in self._rules:
            scheme = match(query, schemes)
            if scheme is not None:
                logger.debug("Time scheme %r matched by %s rule: %s", raw, rule_name, scheme.get("title"))
                return scheme.get("id")

        return None
