"""Curses front end: message list, detail pane and help/search bar."""

from __future__ import annotations

import curses
import logging
import os
import sys

from p2000_viewer.core.lookup import Gazetteer, Glossary
from p2000_viewer.core.models import ParsedMessage
from p2000_viewer.core.store import MessageStore, priority_rank

from .state import AppState

logger = logging.getLogger(__name__)

DETAIL_HEIGHT = 9
HELP_HEIGHT = 3
ESC = 27

HELP_TEXT = "↑/↓: Navigate | PgUp/PgDn: Jump | s: Search | p: Priority | c: Clear | q: Quit"

# urgency rank -> curses color
_RANK_COLORS = {
    0: curses.COLOR_RED,
    1: curses.COLOR_YELLOW,
    2: curses.COLOR_MAGENTA,
    3: curses.COLOR_GREEN,
}


def format_time(msg: ParsedMessage, fmt: str = "%H:%M:%S", missing: str = "--:--:--") -> str:
    """Local-time rendering of the UTC timestamp."""
    if msg.timestamp is None:
        return missing
    return msg.timestamp.astimezone().strftime(fmt)


def format_row(msg: ParsedMessage) -> str:
    return f"{msg.priority.value:>7} | {format_time(msg)} | {msg.raw_payload}"


def format_detail(
    msg: ParsedMessage,
    *,
    glossary: Glossary | None = None,
    gazetteer: Gazetteer | None = None,
) -> list[str]:
    """Lines shown in the detail pane for one message."""
    lines = [
        f"Priority: {msg.priority.value} | Code: {msg.incident_code or '-'} | "
        f"Location: {msg.location or '-'}",
        f"Timestamp: {format_time(msg, '%Y-%m-%d %H:%M:%S', '-')} | "
        f"Type: {msg.message_type or '-'} | Freq: {msg.frequency}",
        f"Radio Addr: {msg.address} | Capcodes: {', '.join(msg.capcodes)}",
        f"Detail: {msg.detail}",
        f"Content: {msg.raw_payload}",
    ]
    if gazetteer is not None:
        place = gazetteer.find_in(msg.raw_payload)
        if place is not None:
            lines.append(f"Place: {place.describe()}")
    if glossary is not None:
        expanded = glossary.expand_all(msg.raw_payload)
        if expanded:
            lines.append("Abbr: " + "; ".join(f"{k} = {v}" for k, v in expanded))
    return lines


def handle_key(state: AppState, key: int | str) -> bool:
    """Apply one key press. Returns True when the user quits."""
    if state.search_mode:
        if key in ("\n", "\r", curses.KEY_ENTER):
            state.finish_search()
        elif key in ("\x1b", ESC):
            state.toggle_search()
        elif key in ("\x7f", "\b", curses.KEY_BACKSPACE):
            state.remove_search_char()
        elif isinstance(key, str) and key.isprintable():
            state.add_search_char(key)
        elif key == curses.KEY_UP:
            state.move_up()
        elif key == curses.KEY_DOWN:
            state.move_down()
        return False

    if key in ("q", "\x1b", ESC):
        return True
    if key == "s":
        state.toggle_search()
    elif key == "p":
        state.cycle_priority_filter()
    elif key == "c":
        state.clear_search()
    elif key == curses.KEY_UP:
        state.move_up()
    elif key == curses.KEY_DOWN:
        state.move_down()
    elif key == curses.KEY_PPAGE:
        state.page_up()
    elif key == curses.KEY_NPAGE:
        state.page_down()
    return False


class App:
    def __init__(
        self,
        state: AppState,
        *,
        glossary: Glossary | None = None,
        gazetteer: Gazetteer | None = None,
    ) -> None:
        self.state = state
        self.glossary = glossary
        self.gazetteer = gazetteer
        self._pairs: dict[int, int] = {}

    def _init_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        curses.use_default_colors()
        for i, (rank, color) in enumerate(sorted(_RANK_COLORS.items()), start=1):
            curses.init_pair(i, color, -1)
            self._pairs[rank] = i

    def _attr_for(self, msg: ParsedMessage) -> int:
        pair = self._pairs.get(priority_rank(msg.priority))
        return curses.color_pair(pair) if pair else curses.A_NORMAL

    @staticmethod
    def _box(win, y: int, x: int, h: int, w: int, title: str):
        sub = win.derwin(h, w, y, x)
        sub.box()
        sub.addnstr(0, 2, f" {title} ", max(0, w - 4))
        return sub

    def draw(self, scr) -> None:
        scr.erase()
        height, width = scr.getmaxyx()
        list_h = max(3, height - DETAIL_HEIGHT - HELP_HEIGHT)
        self.state.set_list_height(list_h)
        inner = max(1, width - 2)

        title = f"P2000 Messages ({len(self.state.visible)}/{len(self.state.store)})"
        if self.state.priority_filter is not None:
            title += f" [{self.state.priority_filter.value}]"
        box = self._box(scr, 0, 0, list_h, width, title)
        for row, (idx, msg) in enumerate(self.state.window(), start=1):
            attr = self._attr_for(msg)
            if idx == self.state.selected_index:
                attr |= curses.A_REVERSE
            box.addnstr(row, 1, format_row(msg).ljust(inner), inner, attr)

        detail_h = min(DETAIL_HEIGHT, max(3, height - list_h - HELP_HEIGHT))
        box = self._box(scr, list_h, 0, detail_h, width, "Details")
        msg = self.state.selected_message()
        if msg is not None:
            lines = format_detail(msg, glossary=self.glossary, gazetteer=self.gazetteer)
            for row, line in enumerate(lines[: detail_h - 2], start=1):
                box.addnstr(row, 1, line, inner)

        if height >= list_h + detail_h + HELP_HEIGHT:
            box = self._box(scr, list_h + detail_h, 0, HELP_HEIGHT, width, "Help")
            if self.state.search_mode:
                text = f"SEARCH: {self.state.search_query} (Enter to keep, Esc to cancel)"
            else:
                text = HELP_TEXT
            box.addnstr(1, 1, text, inner)
        scr.refresh()

    def run(self, scr) -> None:
        curses.curs_set(0)
        self._init_colors()
        scr.keypad(True)
        while True:
            try:
                self.draw(scr)
            except curses.error:
                logger.debug("Terminal too small to draw")
            try:
                key = scr.get_wch()
            except curses.error:
                continue
            if key == curses.KEY_RESIZE:
                continue
            if handle_key(self.state, key):
                return


def _attach_terminal() -> None:
    """Point fd 0 at the controlling terminal when stdin was a pipe."""
    if sys.stdin.isatty():
        return
    fd = os.open("/dev/tty", os.O_RDONLY)
    os.dup2(fd, 0)
    os.close(fd)


def run_tui(
    store: MessageStore,
    *,
    page_size: int = 10,
    glossary: Glossary | None = None,
    gazetteer: Gazetteer | None = None,
) -> None:
    """Run the interactive browser until the user quits."""
    _attach_terminal()
    app = App(AppState(store, page_size=page_size), glossary=glossary, gazetteer=gazetteer)
    logger.debug("Starting TUI with %d messages", len(store))
    curses.wrapper(app.run)
