"""Line classifier and tokenizer for pipe-separated FLEX records."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime

from ..models import RawLine, Skip, SkipReason, Tokenized

FIELD_SEP = "|"
MIN_FIELDS = 7

DEFAULT_TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%d-%m-%Y %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
)


@dataclass(frozen=True, slots=True)
class LineTokenizer:
    """Split 'PROTO|TS|ADDR|FREQ|CAPCODES|TYPE|payload' lines into fields.

    The decoder writes the protocol first; lines with the timestamp first
    are recognised as well.
    """

    timestamp_formats: Sequence[str] = DEFAULT_TIMESTAMP_FORMATS

    _protocol_re = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")
    _capcode_sep_re = re.compile(r"[\s,/]+")

    def parse_timestamp(self, ts_str: str) -> datetime | None:
        """Parse a decoder timestamp (UTC) using the configured formats."""
        ts_str = ts_str.strip()
        if not ts_str:
            return None
        for fmt in self.timestamp_formats:
            try:
                return datetime.strptime(ts_str, fmt).replace(tzinfo=UTC)
            except ValueError:
                continue
        return None

    def split_capcodes(self, field: str) -> tuple[str, ...]:
        """Return capcodes in source order, duplicates kept."""
        return tuple(tok for tok in self._capcode_sep_re.split(field.strip()) if tok)

    def tokenize(self, raw: RawLine) -> Tokenized | Skip:
        """Classify a raw line and split it into preamble and payload."""
        line = raw.text.rstrip("\r\n")
        stripped = line.strip()
        if not stripped:
            return Skip(raw.line_no, SkipReason.BLANK)
        if stripped.startswith("#"):
            return Skip(raw.line_no, SkipReason.COMMENT)

        parts = line.split(FIELD_SEP)
        if len(parts) < MIN_FIELDS:
            return Skip(raw.line_no, SkipReason.FIELD_COUNT)

        first, second = parts[0].strip(), parts[1].strip()
        if self._protocol_re.match(first):
            protocol, ts_str = first, second
        elif self._protocol_re.match(second):
            ts_str, protocol = first, second
        else:
            return Skip(raw.line_no, SkipReason.NO_PROTOCOL)

        capcodes = self.split_capcodes(parts[4])
        if not capcodes:
            return Skip(raw.line_no, SkipReason.NO_CAPCODES)

        return Tokenized(
            line_no=raw.line_no,
            timestamp=self.parse_timestamp(ts_str),
            protocol=protocol,
            address=parts[2].strip(),
            frequency=parts[3].strip(),
            capcodes=capcodes,
            message_type=parts[5].strip() or None,
            payload=FIELD_SEP.join(parts[6:]).strip(),
        )


def tokenize(raw: RawLine) -> Tokenized | Skip:
    """Tokenize with the default timestamp formats."""
    return LineTokenizer().tokenize(raw)
