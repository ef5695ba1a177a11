"""Errors raised at the ingestion boundary."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .store import MessageStore


class SourceReadFailure(Exception):
    """The line source could not be opened or read.

    ``store`` holds every message parsed before the failure; ingestion is not
    rolled back.
    """

    def __init__(self, source: str, cause: BaseException, store: MessageStore) -> None:
        super().__init__(f"Failed to read {source}: {cause}")
        self.source = source
        self.cause = cause
        self.store = store
