from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from p2000_viewer.core.config import ViewerConfig, resolve_config
from p2000_viewer.core.errors import SourceReadFailure
from p2000_viewer.core.ingest import ingest_source
from p2000_viewer.core.lookup import Gazetteer, Glossary, load_gazetteer, load_glossary
from p2000_viewer.core.models import ParsedMessage, Priority
from p2000_viewer.core.store import MessageStore
from p2000_viewer.core.time_window import resolve_time_window
from p2000_viewer.export import export_messages

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 2


def _configure_logging(cfg: ViewerConfig) -> None:
    """Log to stderr, or to a file so the TUI screen stays clean."""
    level = getattr(logging, cfg.log_level, logging.WARNING)
    kwargs: dict = {}
    if cfg.log_file is not None:
        kwargs["filename"] = str(cfg.log_file)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        **kwargs,
    )


def _parse_priority(s: str) -> Priority:
    name = s.strip()
    for p in Priority:
        if p.value.lower() == name.lower():
            return p
    allowed = ", ".join(p.value for p in Priority)
    raise argparse.ArgumentTypeError(f"Invalid priority. Allowed: {allowed}")


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="p2000-viewer",
        description="Browse P2000 paging messages from a decoder log.",
    )
    p.add_argument("path", nargs="?", default=None, help="Log file (plain or .gz). Default: stdin")
    mode = p.add_mutually_exclusive_group()
    mode.add_argument("--list", action="store_true", help="Print one line per message instead of the TUI")
    mode.add_argument("--json", action="store_true", help="Print messages as JSON instead of the TUI")
    p.add_argument("--search", default="", help="Case-insensitive text filter")
    p.add_argument("--priority", type=_parse_priority, default=None, help="Only this priority (e.g., A1)")

    p.add_argument("--since", default=None, help="ISO8601 start time (assumes UTC if tz missing)")
    p.add_argument("--until", default=None, help="ISO8601 end time (assumes UTC if tz missing)")
    p.add_argument("--date", default=None, help="YYYY-MM-DD (UTC day)")
    p.add_argument("--hour", default=None, help="YYYY-MM-DDTHH (UTC hour)")

    p.add_argument("--glossary", type=Path, default=None, help="Abbreviation file (ABBR: expansion)")
    p.add_argument("--gazetteer", type=Path, default=None, help="Place list (place;municipality;province;region)")
    p.add_argument("--encoding", default=None, help="Input encoding (default: utf-8)")
    return p


def _select(store: MessageStore, args: argparse.Namespace) -> list[ParsedMessage]:
    """Apply the search, priority and time-window options in store order."""
    since, until = resolve_time_window(
        since=args.since,
        until=args.until,
        date_=args.date,
        hour=args.hour,
    )
    selected = store.search(args.search, args.priority)
    if since is None and until is None:
        return selected
    in_window = {id(m) for m in store.within(since, until)}
    return [m for m in selected if id(m) in in_window]


def _print_list(messages: Sequence[ParsedMessage]) -> None:
    for m in messages:
        ts = m.timestamp.isoformat() if m.timestamp else "-"
        code = m.incident_code or "-"
        loc = m.location or "-"
        print(f"{m.line_no} {ts} [{m.priority.value}] {code} {loc}: {m.detail}")
    print(f"\nFound {len(messages)} matching messages.")


def _load_lookups(cfg: ViewerConfig) -> tuple[Glossary | None, Gazetteer | None]:
    glossary = load_glossary(cfg.glossary_path) if cfg.glossary_path else None
    gazetteer = load_gazetteer(cfg.gazetteer_path) if cfg.gazetteer_path else None
    return glossary, gazetteer


def main(argv: Sequence[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        cfg = resolve_config()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    overrides = {
        k: v
        for k, v in (
            ("glossary_path", args.glossary),
            ("gazetteer_path", args.gazetteer),
            ("encoding", args.encoding),
        )
        if v is not None
    }
    if overrides:
        cfg = replace(cfg, **overrides)
    _configure_logging(cfg)

    if args.path is None and sys.stdin.isatty() and not (args.list or args.json):
        print("Reading from stdin... (or provide a file path as argument)", file=sys.stderr)

    try:
        result = asyncio.run(ingest_source(args.path, config=cfg))
        messages = _select(result.store, args)
        glossary, gazetteer = _load_lookups(cfg)
    except SourceReadFailure as e:
        print(str(e), file=sys.stderr)
        return EXIT_FAILURE
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.json:
        print(export_messages(messages))
        return EXIT_OK
    if args.list:
        _print_list(messages)
        return EXIT_OK

    if not messages:
        print("No messages to display", file=sys.stderr)
        return EXIT_OK

    LOGGER.info("Loaded %d messages", len(messages))
    from p2000_viewer.tui import run_tui

    store = result.store
    if len(messages) != len(store):
        store = MessageStore()
        for m in messages:
            store.append(m)
    run_tui(store, page_size=cfg.page_size, glossary=glossary, gazetteer=gazetteer)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
