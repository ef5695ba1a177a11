"""Parsing of P2000 log lines.

Splits a FLEX record into its fixed preamble and extracts incident fields
from the free-text payload.
"""

from __future__ import annotations

from .extractor import extract_fields, find_incident_code, find_location, find_priority
from .parser import MessageParser, P2000Parser, default_parser
from .tokenizer import DEFAULT_TIMESTAMP_FORMATS, LineTokenizer, tokenize

__all__ = [
    "DEFAULT_TIMESTAMP_FORMATS",
    "LineTokenizer",
    "MessageParser",
    "P2000Parser",
    "default_parser",
    "extract_fields",
    "find_incident_code",
    "find_location",
    "find_priority",
    "tokenize",
]
