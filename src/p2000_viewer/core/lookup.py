"""Reference data for the detail view: abbreviations and place names.

Both tables are optional and only annotate what is shown; they never change
a parsed message.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

MIN_PLACE_LEN = 3


@dataclass(frozen=True, slots=True)
class Glossary:
    """Dispatch abbreviations (``BDH`` -> ``Brandweer Den Haag``)."""

    entries: dict[str, str] = field(default_factory=dict)

    def expand(self, token: str) -> str | None:
        hit = self.entries.get(token)
        if hit is not None:
            return hit
        key = token.replace(" ", "")
        if not key:
            return None
        for abbr, value in self.entries.items():
            if abbr.replace(" ", "") == key:
                return value
        return None

    def expand_all(self, text: str) -> list[tuple[str, str]]:
        """Known abbreviations in ``text``, in order of first appearance."""
        seen: set[str] = set()
        out: list[tuple[str, str]] = []
        for token in text.replace(",", " ").split():
            token = token.strip("().:;")
            if not token or token in seen:
                continue
            seen.add(token)
            value = self.expand(token)
            if value is not None:
                out.append((token, value))
        return out


def load_glossary(path: str | Path) -> Glossary:
    """Read ``ABBR: expansion`` lines; blank and malformed lines are ignored."""
    entries: dict[str, str] = {}
    with Path(path).open(encoding="utf-8") as f:
        for line in f:
            abbr, sep, rest = line.partition(":")
            if not sep:
                continue
            key, value = abbr.strip(), rest.strip()
            if key and value:
                entries[key] = value
    logger.debug("Loaded %d abbreviations from %s", len(entries), path)
    return Glossary(entries)


@dataclass(frozen=True, slots=True)
class Place:
    name: str
    municipality: str = ""
    province: str = ""
    region: str = ""
    latitude: float | None = None
    longitude: float | None = None

    def describe(self) -> str:
        parts = [self.name]
        if self.municipality and self.municipality != self.name:
            parts[0] = f"{self.name} ({self.municipality})"
        parts.extend(p for p in (self.province, self.region) if p)
        if self.latitude is not None and self.longitude is not None:
            parts.append(f"[{self.latitude}, {self.longitude}]")
        return " | ".join(parts)


@dataclass(frozen=True, slots=True)
class Gazetteer:
    """Known place names, matched longest first."""

    places: tuple[Place, ...] = ()

    def find_in(self, text: str) -> Place | None:
        haystack = text.lower()
        for place in self.places:
            if place.name.lower() in haystack:
                return place
        return None


def _float_or_none(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None


def load_gazetteer(path: str | Path) -> Gazetteer:
    """Read ``place;municipality;province;region[;lat;lon]`` rows (``#`` comments)."""
    seen: set[str] = set()
    places: list[Place] = []
    with Path(path).open(encoding="utf-8", newline="") as f:
        for row in csv.reader(f, delimiter=";"):
            if not row or row[0].lstrip().startswith("#"):
                continue
            name = row[0].strip().strip('"').strip()
            if len(name) < MIN_PLACE_LEN or name in seen:
                continue
            cells = [c.strip() for c in row[1:]] + [""] * 5
            seen.add(name)
            places.append(
                Place(
                    name=name,
                    municipality=cells[0],
                    province=cells[1],
                    region=cells[2],
                    latitude=_float_or_none(cells[3]),
                    longitude=_float_or_none(cells[4]),
                )
            )
    places.sort(key=lambda p: len(p.name), reverse=True)
    logger.debug("Loaded %d places from %s", len(places), path)
    return Gazetteer(tuple(places))
