"""Terminal user interface for browsing parsed messages."""

from __future__ import annotations

from .app import App, format_detail, format_row, handle_key, run_tui
from .state import AppState

__all__ = ["App", "AppState", "format_detail", "format_row", "handle_key", "run_tui"]
