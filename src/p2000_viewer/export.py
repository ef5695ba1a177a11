"""JSON export of parsed messages."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel, Field

from p2000_viewer.core.models import ParsedMessage, Priority
from p2000_viewer.core.store import priority_rank


class MessageOut(BaseModel):
    line_no: int = Field(description="1-based line number in the source.")
    timestamp: datetime | None = Field(description="Decoder timestamp (UTC), if parseable.")
    protocol: str
    address: str
    frequency: str
    capcodes: list[str] = Field(min_length=1)
    message_type: str | None = None
    priority: Priority
    urgency: int = Field(ge=0, description="0 is most urgent.")
    incident_code: str | None = None
    location: str | None = None
    detail: str
    raw_payload: str

    @classmethod
    def from_message(cls, msg: ParsedMessage) -> MessageOut:
        return cls(
            line_no=msg.line_no,
            timestamp=msg.timestamp,
            protocol=msg.protocol,
            address=msg.address,
            frequency=msg.frequency,
            capcodes=list(msg.capcodes),
            message_type=msg.message_type,
            priority=msg.priority,
            urgency=priority_rank(msg.priority),
            incident_code=msg.incident_code,
            location=msg.location,
            detail=msg.detail,
            raw_payload=msg.raw_payload,
        )


class ExportOut(BaseModel):
    count: int
    messages: list[MessageOut] = Field(default_factory=list)


def export_messages(messages: Iterable[ParsedMessage], *, indent: int | None = 2) -> str:
    """Render messages as a JSON document ``{"count": n, "messages": [...]}``."""
    out = [MessageOut.from_message(m) for m in messages]
    return ExportOut(count=len(out), messages=out).model_dump_json(indent=indent)
