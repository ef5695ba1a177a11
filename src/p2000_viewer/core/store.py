"""Ordered message store and query helpers."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator
from datetime import datetime

from .models import ParsedMessage, Priority, SkipReason

_RANKS: dict[Priority, int] = {
    Priority.P1: 0,
    Priority.A0: 0,
    Priority.P2: 1,
    Priority.A1: 2,
    Priority.P3: 3,
    Priority.A2: 3,
    Priority.B: 3,
    Priority.UNKNOWN: 4,
}

MOST_URGENT = 0
LEAST_URGENT = 4


def priority_rank(priority: Priority) -> int:
    """Display urgency of a priority, 0 being the most urgent."""
    return _RANKS[priority]


class MessageStore:
    """Append-only, ordered collection of parsed messages.

    Filled once by the ingestion pass and only read afterwards. Queries are
    recomputed on every call and never mutate the store.
    """

    def __init__(self) -> None:
        self._messages: list[ParsedMessage] = []
        self._skips: Counter[SkipReason] = Counter()

    def append(self, message: ParsedMessage) -> None:
        self._messages.append(message)

    def record_skip(self, reason: SkipReason) -> None:
        self._skips[reason] += 1

    @property
    def skipped(self) -> int:
        """Number of input lines that were not messages."""
        return sum(self._skips.values())

    @property
    def skip_counts(self) -> dict[SkipReason, int]:
        return dict(self._skips)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ParsedMessage]:
        return iter(self._messages)

    def all(self) -> list[ParsedMessage]:
        """All messages in input order (a copy; the store is never handed out)."""
        return list(self._messages)

    def search(self, text: str = "", priority: Priority | None = None) -> list[ParsedMessage]:
        """Messages containing ``text`` (case-insensitive) and matching ``priority``.

        Text is matched against location, incident code, detail and raw
        payload. An empty text and no priority returns everything.
        """
        needle = text.lower()
        out: list[ParsedMessage] = []
        for msg in self._messages:
            if priority is not None and msg.priority != priority:
                continue
            if needle and not any(needle in f.lower() for f in msg.search_fields()):
                continue
            out.append(msg)
        return out

    def within(self, since: datetime | None, until: datetime | None) -> list[ParsedMessage]:
        """Messages timestamped in ``[since, until)``; undated messages are left out."""
        out: list[ParsedMessage] = []
        for msg in self._messages:
            if msg.timestamp is None:
                continue
            if since is not None and msg.timestamp < since:
                continue
            if until is not None and msg.timestamp >= until:
                continue
            out.append(msg)
        return out

    def priority_counts(self) -> dict[Priority, int]:
        counts = Counter(msg.priority for msg in self._messages)
        return {p: counts.get(p, 0) for p in Priority}
