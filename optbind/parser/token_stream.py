# Optbind CLI Parsing — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Cursor types over the raw argument vector and over grouped short options.

Both readers share the `TokenStream` contract:

- `advance()` moves to the next item and returns False once the input is exhausted.
- `current()` returns the item under the cursor.
- `next_lookahead()` peeks at the following item without moving.
- `is_last()` reports whether the cursor sits on the final item.
- `retreat()` rewinds one position.
- `position` / `restore()` save and restore the cursor.

The cursor starts *before* the first item, so `advance()` must be called
before `current()`. Misuse raises `InvalidStateError`.

Example:
    stream = ArgumentStream(["-i", "-4096"])
    while stream.advance():
        print(stream.current(), stream.next_lookahead())

    cluster = CharacterStream("xVALUE")
    cluster.advance()                     # 'x'
    cluster.remaining_suffix_from_next()  # 'VALUE'
"""
from __future__ import annotations

from typing import Generic, Sequence, TypeVar

from optbind.exceptions import InvalidStateError

T = TypeVar("T")


class TokenStream(Generic[T]):
    """A bidirectional cursor over a finite sequence."""

    def __init__(self, items: Sequence[T]) -> None:
        self._items: Sequence[T] = items
        self._index: int = -1

    def current(self) -> T:
        if self._index < 0:
            raise InvalidStateError("current() called before advance()")
        if self._index >= len(self._items):
            raise InvalidStateError("current() called after the end of input")
        return self._items[self._index]

    def next_lookahead(self) -> T | None:
        """Return the item after the cursor, or None at the end."""
        following = self._index + 1
        if following < len(self._items):
            return self._items[following]
        return None

    def is_last(self) -> bool:
        return self._index == len(self._items) - 1

    def advance(self) -> bool:
        if self._index < len(self._items):
            self._index += 1
        return self._index < len(self._items)

    def retreat(self) -> bool:
        if self._index <= 0:
            raise InvalidStateError("retreat() called at the start of input")
        self._index -= 1
        return True

    @property
    def position(self) -> int:
        return self._index

    def restore(self, position: int) -> None:
        if position < -1 or position > len(self._items):
            raise InvalidStateError(f"Cannot restore to position {position}")
        self._index = position

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._items)

    def remaining(self) -> list[T]:
        """Return the items after the cursor."""
        return list(self._items[self._index + 1 :])

    def __len__(self) -> int:
        return len(self._items)


class ArgumentStream(TokenStream[str]):
    """Cursor over whole argument strings."""

    def __repr__(self) -> str:
        return f"ArgumentStream(position={self._index}, items={list(self._items)!r})"


class CharacterStream(TokenStream[str]):
    """Cursor over the characters of one grouped short option such as `-abc`."""

    def __init__(self, cluster: str) -> None:
        super().__init__(cluster)
        self.cluster: str = cluster

    def remaining_suffix_from_next(self) -> str:
        """Return the characters after the cursor, e.g. the adjacent value of `-xVALUE`."""
        if self._index < 0:
            raise InvalidStateError("remaining_suffix_from_next() called before advance()")
        return self.cluster[self._index + 1 :]

    def __repr__(self) -> str:
        return f"CharacterStream(position={self._index}, cluster={self.cluster!r})"
