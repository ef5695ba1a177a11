"""Core data models for P2000 message parsing."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Priority(str, Enum):
    """Closed set of dispatch priorities found in P2000 payloads."""

    P1 = "P1"
    P2 = "P2"
    P3 = "P3"
    A0 = "A0"
    A1 = "A1"
    A2 = "A2"
    B = "B"
    UNKNOWN = "Unknown"


class SkipReason(str, Enum):
    """Why a line was not accepted as a message record."""

    BLANK = "blank"
    COMMENT = "comment"
    FIELD_COUNT = "field_count"
    NO_PROTOCOL = "no_protocol"
    NO_CAPCODES = "no_capcodes"


@dataclass(frozen=True, slots=True)
class RawLine:
    """One input line with its 1-based line number."""

    line_no: int
    text: str


@dataclass(frozen=True, slots=True)
class Skip:
    """Classifier verdict for a line that is not a message."""

    line_no: int
    reason: SkipReason


@dataclass(frozen=True, slots=True)
class Tokenized:
    """Fixed preamble fields plus the free-text payload of a record."""

    line_no: int
    timestamp: datetime | None
    protocol: str
    address: str
    frequency: str
    capcodes: tuple[str, ...]
    message_type: str | None
    payload: str


@dataclass(frozen=True, slots=True)
class IncidentFields:
    """Fields extracted from the free-text payload."""

    priority: Priority
    incident_code: str | None
    location: str | None
    detail: str


@dataclass(frozen=True, slots=True)
class ParsedMessage:
    """Structured P2000 message. Immutable once created."""

    line_no: int
    timestamp: datetime | None  # None when the decoder timestamp is unparseable
    protocol: str
    address: str
    frequency: str
    capcodes: tuple[str, ...]
    message_type: str | None
    priority: Priority
    incident_code: str | None
    location: str | None
    detail: str
    raw_payload: str

    def search_fields(self) -> tuple[str, ...]:
        """Text fields matched by free-text search."""
        return (
            self.location or "",
            self.incident_code or "",
            self.detail,
            self.raw_payload,
        )
