"""Message ingestion from a file or stdin.

This module is the integration point that reads raw lines and fills a
MessageStore in one front-to-back pass.
"""

from __future__ import annotations

import gzip
import io
import logging
import sys
import zlib
from collections.abc import Iterable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

from .config import ViewerConfig
from .errors import SourceReadFailure
from .models import RawLine, Skip
from .parsing import MessageParser, default_parser
from .store import MessageStore

logger = logging.getLogger(__name__)

STDIN_SOURCE = "<stdin>"


@dataclass(frozen=True, slots=True)
class IngestResult:
    source: str
    store: MessageStore
    lines_read: int


def _consume(store: MessageStore, parser: MessageParser, raw: RawLine) -> None:
    out = parser.parse(raw)
    if isinstance(out, Skip):
        logger.debug("Skipping line %d (%s)", out.line_no, out.reason.value)
        store.record_skip(out.reason)
        return
    store.append(out)


def ingest(
    lines: Iterable[str],
    *,
    store: MessageStore | None = None,
    parser: MessageParser | None = None,
) -> MessageStore:
    """Parse lines (numbered from 1) into a store."""
    store = store if store is not None else MessageStore()
    parser = parser or default_parser()
    for line_no, line in enumerate(lines, start=1):
        _consume(store, parser, RawLine(line_no, line))
    return store


@asynccontextmanager
async def _open_text(path: Path | None, *, encoding: str, decode_errors: str):
    """Open a source for async text reading (plain file, gzip, or stdin)."""
    if path is None:
        stream = io.TextIOWrapper(sys.stdin.buffer, encoding=encoding, errors=decode_errors)
        try:
            yield wrap(stream)
        finally:
            # leave sys.stdin.buffer open
            stream.detach()
    elif path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors)
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors) as f:
            yield f


async def ingest_source(
    path: str | Path | None,
    *,
    config: ViewerConfig | None = None,
    parser: MessageParser | None = None,
) -> IngestResult:
    """Read every line of ``path`` (stdin when None) into a new store.

    Raises SourceReadFailure when the source cannot be opened or a read
    fails; the partially filled store travels with the exception.
    """
    config = config or ViewerConfig()
    parser = parser or default_parser()
    src_path = Path(path) if path is not None else None
    source = str(src_path) if src_path is not None else STDIN_SOURCE

    store = MessageStore()
    line_no = 0
    try:
        async with _open_text(
            src_path, encoding=config.encoding, decode_errors=config.decode_errors
        ) as f:
            async for line in f:
                line_no += 1
                _consume(store, parser, RawLine(line_no, line))
    except (OSError, EOFError, UnicodeDecodeError, zlib.error) as exc:
        logger.error("Reading %s stopped after %d lines: %s", source, line_no, exc)
        raise SourceReadFailure(source, exc, store) from exc

    logger.info(
        "Loaded %d messages from %s (%d lines, %d skipped)",
        len(store),
        source,
        line_no,
        store.skipped,
    )
    return IngestResult(source=source, store=store, lines_read=line_no)
