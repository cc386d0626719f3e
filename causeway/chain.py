"""Iteration over an error and the errors that caused it."""

from __future__ import annotations

from collections import deque
from typing import Any, Iterator


def source_of(error: Any) -> Any | None:
    """Return the error that caused ``error``, or None.

    An object with a ``source()`` method answers for itself; exceptions
    otherwise follow ``__cause__`` and then unsuppressed ``__context__``.
    """
    source = getattr(error, "source", None)
    if callable(source):
        return source()
    cause = getattr(error, "__cause__", None)
    if cause is not None:
        return cause
    if getattr(error, "__suppress_context__", False):
        return None
    return getattr(error, "__context__", None)


class Chain:
    """Iterator over an error and its sources, usable from both ends."""

    def __init__(self, head: Any | None = None) -> None:
        self._next = head
        self._rest: deque | None = None if head is not None else deque()

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        if self._rest is not None:
            if not self._rest:
                raise StopIteration
            return self._rest.popleft()
        error = self._next
        if error is None:
            raise StopIteration
        self._next = source_of(error)
        return error

    def __len__(self) -> int:
        if self._rest is not None:
            return len(self._rest)
        count = 0
        error = self._next
        while error is not None:
            error = source_of(error)
            count += 1
        return count

    def __length_hint__(self) -> int:
        return len(self)

    def next_back(self) -> Any | None:
        """Take the deepest remaining error, or None when exhausted."""
        if self._rest is None:
            rest = deque()
            error = self._next
            while error is not None:
                rest.append(error)
                error = source_of(error)
            self._rest = rest
            self._next = None
        return self._rest.pop() if self._rest else None

    def __reversed__(self) -> Iterator[Any]:
        while (error := self.next_back()) is not None:
            yield error

    def copy(self) -> Chain:
        """Return an independent iterator at the same position."""
        clone = Chain()
        clone._next = self._next
        clone._rest = None if self._rest is None else deque(self._rest)
        return clone

    __copy__ = copy