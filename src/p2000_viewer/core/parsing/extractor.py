"""Incident field extraction from the free-text payload.

Rules are applied in order and each takes the first match in the payload:

1. priority: a whole token from the closed set (``P 1`` is read as ``P1``)
2. incident code: 2-4 capitals, a hyphen, 1-3 digits (``BDH-07``)
3. location: the segment right after the incident code (or the priority when
   there is no code), up to a comma or the first word of descriptive text;
   a run of bare numbers, or a leading word that opens a parenthesised
   remark (``Ongeval (los object)``), is description and leaves location
   absent
4. detail: whatever is left, trimmed of separator noise

Extraction never fails: a payload without any recognisable field comes back
as ``Priority.UNKNOWN`` with the whole payload as detail.
"""

from __future__ import annotations

import re

from ..models import IncidentFields, Priority

_PRIORITY_RE = re.compile(
    r"(?<![\w-])(?:(?P<p>P) ?(?P<pn>[123])|(?P<tok>A[012]|B))(?![\w-])"
)
_INCIDENT_CODE_RE = re.compile(r"(?<![\w-])[A-Z]{2,4}-\d{1,3}(?![\w-])")
_HOUSE_NUMBER_RE = re.compile(r"\d{1,4}[A-Za-z]?[.;:]?")
_TOKEN_RE = re.compile(r"\S+")

_NOISE = " \t,;:-|"

Span = tuple[int, int]


def find_priority(payload: str) -> tuple[Priority, Span | None]:
    """Return the first priority token and its span, or UNKNOWN."""
    m = _PRIORITY_RE.search(payload)
    if not m:
        return Priority.UNKNOWN, None
    if m.group("p"):
        value = f"P{m.group('pn')}"
    else:
        value = m.group("tok")
    return Priority(value), m.span()


def find_incident_code(payload: str) -> tuple[str | None, Span | None]:
    """Return the first incident code and its span."""
    m = _INCIDENT_CODE_RE.search(payload)
    if not m:
        return None, None
    return m.group(0), m.span()


def _is_location_token(tok: str) -> bool:
    # 's-Hertogenbosch, 't Zandt
    if tok.startswith(("'s", "'t")):
        return True
    if tok[:1].isupper():
        return True
    return _HOUSE_NUMBER_RE.fullmatch(tok) is not None


def _blank(text: str, spans: list[Span]) -> str:
    """Replace spans with spaces, keeping offsets intact."""
    chars = list(text)
    for start, end in spans:
        chars[start:end] = " " * (end - start)
    return "".join(chars)


def find_location(payload: str, anchor: int, consumed: list[Span]) -> tuple[str | None, Span | None]:
    """Isolate the location segment that starts after ``anchor``.

    ``consumed`` spans (priority, incident code) are ignored while scanning.
    """
    text = _blank(payload, consumed)
    while anchor < len(text) and text[anchor] in _NOISE:
        anchor += 1
    comma = text.find(",", anchor)
    limit = comma if comma != -1 else len(text)

    start: int | None = None
    end: int | None = None
    named = False
    for m in _TOKEN_RE.finditer(text, anchor, limit):
        tok = m.group(0)
        if not _is_location_token(tok):
            break
        if start is None and text[m.end():limit].lstrip().startswith("("):
            break
        if start is None:
            start = m.start()
        end = m.end()
        named = named or _HOUSE_NUMBER_RE.fullmatch(tok) is None

    if start is None or end is None or not named:
        return None, None

    segment = text[start:end].rstrip(" .;:-")
    if not segment:
        return None, None
    return " ".join(segment.split()), (start, start + len(segment))


def _remainder(payload: str, spans: list[Span]) -> str:
    pieces: list[str] = []
    pos = 0
    for start, end in sorted(spans):
        if start > pos:
            pieces.append(payload[pos:start])
        pos = max(pos, end)
    pieces.append(payload[pos:])
    return " ".join(p.strip(_NOISE) for p in pieces if p.strip(_NOISE))


def extract_fields(payload: str) -> IncidentFields:
    """Extract priority, incident code, location and detail from a payload."""
    priority, priority_span = find_priority(payload)
    incident_code, code_span = find_incident_code(payload)

    consumed = [s for s in (priority_span, code_span) if s is not None]
    if not consumed:
        return IncidentFields(
            priority=priority,
            incident_code=None,
            location=None,
            detail=payload,
        )

    anchor_span = code_span or priority_span
    location, location_span = find_location(payload, anchor_span[1], consumed)

    spans = consumed + ([location_span] if location_span is not None else [])
    return IncidentFields(
        priority=priority,
        incident_code=incident_code,
        location=location,
        detail=_remainder(payload, spans),
    )
