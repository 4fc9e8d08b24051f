"""Keyboard decoding and page-by-page navigation through a list."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum, IntEnum
from typing import Generic, TypeVar

T = TypeVar("T")

_PREFIX_CODES = (0, 224)
_EXTENDED_KEYS = {72: "UP", 80: "DOWN", 75: "LEFT", 77: "RIGHT"}
_PLAIN_KEYS = {13: "ENTER", 27: "ESC", 8: "BACKSPACE"}

DEFAULT_PER_PAGE = 7


class Key(Enum):
    """Keys the console screens react to."""

    NONE = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4
    ENTER = 5
    BACKSPACE = 6
    ESC = 7
    OTHER = 8


def decode_key(code: int, extended: int | None = None) -> Key:
    """Map a console key code to a Key.

    Arrow keys arrive as a prefix code (0 or 224) followed by ``extended``.
    """
    if code in _PREFIX_CODES:
        name = _EXTENDED_KEYS.get(extended) if extended is not None else None
    else:
        name = _PLAIN_KEYS.get(code)
    return Key[name] if name else Key.OTHER


class NavResult(IntEnum):
    """What a navigation key did to the pager."""

    NONE = 0
    MOVED = 1
    PAGE_CHANGED = 2


class Pager(Generic[T]):
    """Tracks the page and selected row of a list shown a page at a time."""

    def __init__(self, items: Iterable[T] = (), per_page: int = DEFAULT_PER_PAGE) -> None:
        if per_page <= 0:
            raise ValueError("per_page must be positive")
        self.per_page = per_page
        self.items: list[T] = list(items)
        self.current_page = 1
        self.total_pages = 1
        self.selected_index = 0
        self.recalculate()

    def set_items(self, items: Iterable[T]) -> None:
        """Replace the list and bring page and selection back into range."""
        self.items = list(items)
        self.recalculate()

    def _page_of(self, index: int) -> int:
        return index // self.per_page + 1

    def recalculate(self) -> None:
        """Recompute the page count and keep page and selection consistent."""
        if not self.items:
            self.total_pages = 1
            self.current_page = 1
            self.selected_index = -1
            return
        self.total_pages = (len(self.items) + self.per_page - 1) // self.per_page
        self.current_page = min(max(self.current_page, 1), self.total_pages)
        if self.selected_index >= 0:
            self.selected_index = min(self.selected_index, len(self.items) - 1)
            self.current_page = self._page_of(self.selected_index)
        else:
            self.selected_index = 0

    def visible(self) -> list[tuple[int, T]]:
        """Index and item for each row of the current page."""
        start = (self.current_page - 1) * self.per_page
        return list(enumerate(self.items[start:start + self.per_page], start))

    def _step(self, delta: int) -> NavResult:
        self.selected_index += delta
        if self._page_of(self.selected_index) != self.current_page:
            self.recalculate()
            return NavResult.PAGE_CHANGED
        return NavResult.MOVED

    def _turn(self, delta: int) -> NavResult:
        self.current_page += delta
        self.selected_index = (self.current_page - 1) * self.per_page
        return NavResult.PAGE_CHANGED

    def handle_key(self, key: Key) -> NavResult:
        """Move the selection or turn the page for an arrow key."""
        if not self.items:
            return NavResult.NONE
        if key is Key.DOWN and self.selected_index + 1 < len(self.items):
            return self._step(1)
        if key is Key.UP and self.selected_index > 0:
            return self._step(-1)
        if key is Key.LEFT and self.current_page > 1:
            return self._turn(-1)
        if key is Key.RIGHT and self.current_page < self.total_pages:
            return self._turn(1)
        return NavResult.NONE