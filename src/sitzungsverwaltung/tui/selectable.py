"""Single-selection list with circular cursor movement."""

from __future__ import annotations

from typing import Generic, Iterator, Optional, Sequence, TypeVar


T = TypeVar("T")


class SelectableList(Generic[T]):
    """Ordered items plus an optional selected index.

    unselect() remembers the index it cleared; the next cursor move
    resumes from there instead of jumping back to the top.
    Cursor moves on an empty list do nothing.
    """

    def __init__(self) -> None:
        self.items: list[T] = []
        self.selected_index: Optional[int] = None
        self.remembered_index: Optional[int] = None

    @classmethod
    def with_items(cls, items: Sequence[T]) -> "SelectableList[T]":
        lst: SelectableList[T] = cls()
        lst.items = list(items)
        lst.selected_index = 0 if lst.items else None
        return lst

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    @property
    def selected(self) -> Optional[T]:
        if self.selected_index is None or not self.items:
            return None
        return self.items[self.selected_index]

    def next(self) -> None:
        if not self.items:
            return
        i = self.selected_index
        if i is None:
            self.selected_index = self._resume_index()
        elif i >= len(self.items) - 1:
            self.selected_index = 0
        else:
            self.selected_index = i + 1

    def previous(self) -> None:
        if not self.items:
            return
        i = self.selected_index
        if i is None:
            self.selected_index = self._resume_index()
        elif i == 0:
            self.selected_index = len(self.items) - 1
        else:
            self.selected_index = i - 1

    def unselect(self) -> None:
        self.remembered_index = self.selected_index
        self.selected_index = None

    def select(self, index: Optional[int]) -> None:
        if index is not None and not 0 <= index < len(self.items):
            raise IndexError(f"index {index} out of range for {len(self.items)} items")
        self.selected_index = index

    def replace_items(self, items: Sequence[T]) -> None:
        """Swap in fresh items, keeping the cursor where it was (clamped).

        A list that was empty gets a cursor as soon as it has items.
        """
        was_empty = not self.items
        self.items = list(items)
        if not self.items:
            self.selected_index = None
            self.remembered_index = None
        elif self.selected_index is not None:
            self.selected_index = min(self.selected_index, len(self.items) - 1)
        elif was_empty:
            self.selected_index = 0
        if self.remembered_index is not None and self.remembered_index >= len(self.items):
            self.remembered_index = len(self.items) - 1

    def _resume_index(self) -> int:
        remembered = self.remembered_index
        if remembered is not None and remembered < len(self.items):
            return remembered
        return 0
