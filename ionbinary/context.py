"""Reader and writer container context tracking."""

from __future__ import annotations

import enum


class Context(enum.IntEnum):
    """Where a reader or writer currently is."""

    AT_TOP_LEVEL = 0
    IN_STRUCT = 1
    IN_LIST = 2
    IN_SEXP = 3


class ContextStack:
    """A stack of contexts; an empty stack means the top level."""

    def __init__(self) -> None:
        self._items: list[Context] = []

    def __len__(self) -> int:
        return len(self._items)

    def peek(self) -> Context:
        """Return the current context."""
        return self._items[-1] if self._items else Context.AT_TOP_LEVEL

    def push(self, ctx: Context) -> None:
        """Enter a new context."""
        self._items.append(ctx)

    def pop(self) -> Context:
        """Leave the current context, returning it."""
        if not self._items:
            raise IndexError("pop called at top level")
        return self._items.pop()