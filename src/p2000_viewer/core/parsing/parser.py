"""Line-to-message parsing pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from ..models import ParsedMessage, RawLine, Skip, Tokenized
from .extractor import extract_fields
from .tokenizer import LineTokenizer


class MessageParser(Protocol):
    """Parser interface: return a ParsedMessage, or Skip for non-records."""

    def parse(self, raw: RawLine) -> ParsedMessage | Skip:
        """Parse a raw line. Must not raise."""
        ...


@dataclass(frozen=True, slots=True)
class P2000Parser:
    """Classify, tokenize and extract incident fields from FLEX records."""

    tokenizer: LineTokenizer = field(default_factory=LineTokenizer)

    @staticmethod
    def build(tok: Tokenized) -> ParsedMessage:
        fields = extract_fields(tok.payload)
        return ParsedMessage(
            line_no=tok.line_no,
            timestamp=tok.timestamp,
            protocol=tok.protocol,
            address=tok.address,
            frequency=tok.frequency,
            capcodes=tok.capcodes,
            message_type=tok.message_type,
            priority=fields.priority,
            incident_code=fields.incident_code,
            location=fields.location,
            detail=fields.detail,
            raw_payload=tok.payload,
        )

    def parse(self, raw: RawLine) -> ParsedMessage | Skip:
        out = self.tokenizer.tokenize(raw)
        if isinstance(out, Skip):
            return out
        return self.build(out)

    def parse_line(self, line_no: int, line: str) -> ParsedMessage | Skip:
        """Convenience wrapper taking a line number and text."""
        return self.parse(RawLine(line_no, line))


def default_parser() -> MessageParser:
    """Parser used when none is supplied."""
    return P2000Parser()
