"""Presentation state for the message browser.

Holds selection, scrolling and search input. The visible list is recomputed
from the store on every search change.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from p2000_viewer.core.models import ParsedMessage, Priority
from p2000_viewer.core.store import MessageStore

# None first: no filter
PRIORITY_CYCLE: tuple[Priority | None, ...] = (None, *Priority)


@dataclass
class AppState:
    store: MessageStore
    page_size: int = 10
    list_height: int = 10
    selected_index: int = 0
    scroll_offset: int = 0
    search_query: str = ""
    search_mode: bool = False
    priority_filter: Priority | None = None
    visible: list[ParsedMessage] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.visible = self.store.all()

    def set_list_height(self, height: int) -> None:
        """Rows available for the list, minus the border."""
        self.list_height = max(1, height - 2)
        self._ensure_selected_visible()

    def _ensure_selected_visible(self) -> None:
        if self.selected_index < self.scroll_offset:
            self.scroll_offset = self.selected_index
        elif self.selected_index >= self.scroll_offset + self.list_height:
            self.scroll_offset = self.selected_index - self.list_height + 1

    def selected_message(self) -> ParsedMessage | None:
        if 0 <= self.selected_index < len(self.visible):
            return self.visible[self.selected_index]
        return None

    def move_down(self, steps: int = 1) -> None:
        last = max(0, len(self.visible) - 1)
        self.selected_index = min(last, self.selected_index + steps)
        self._ensure_selected_visible()

    def move_up(self, steps: int = 1) -> None:
        self.selected_index = max(0, self.selected_index - steps)
        self._ensure_selected_visible()

    def page_down(self) -> None:
        self.move_down(self.page_size)

    def page_up(self) -> None:
        self.move_up(self.page_size)

    def refilter(self) -> None:
        self.visible = self.store.search(self.search_query, self.priority_filter)
        self.selected_index = 0
        self.scroll_offset = 0

    def toggle_search(self) -> None:
        """Enter search mode, or leave it discarding the query."""
        self.search_mode = not self.search_mode
        if not self.search_mode and self.search_query:
            self.search_query = ""
            self.refilter()

    def finish_search(self) -> None:
        """Leave search mode keeping the current query."""
        self.search_mode = False

    def add_search_char(self, ch: str) -> None:
        self.search_query += ch
        self.refilter()

    def remove_search_char(self) -> None:
        if self.search_query:
            self.search_query = self.search_query[:-1]
            self.refilter()

    def clear_search(self) -> None:
        self.search_query = ""
        self.priority_filter = None
        self.refilter()

    def cycle_priority_filter(self) -> None:
        idx = PRIORITY_CYCLE.index(self.priority_filter)
        self.priority_filter = PRIORITY_CYCLE[(idx + 1) % len(PRIORITY_CYCLE)]
        self.refilter()

    def window(self) -> list[tuple[int, ParsedMessage]]:
        """(index, message) pairs currently scrolled into view."""
        end = self.scroll_offset + self.list_height
        return list(enumerate(self.visible[self.scroll_offset:end], start=self.scroll_offset))
