from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class TapeEntry[T]:
    """Backward update paired with the forward value it was recorded for."""

    update: Callable[[T], None]
    value: T


class Tape:
    """Append-only record of backward updates, replayed in reverse order.

    Examples
    --------
    >>> tape = Tape()
    >>> log = []
    >>> tape.record(1, log.append)
    1
    >>> tape.record(2, log.append)
    2
    >>> tape.run_backward()
    2
    >>> log
    [2, 1]
    """

    __slots__ = ("_entries",)
    _entries: list[TapeEntry[Any]]

    def __init__(self):
        self._entries = []

    def record[R](self, value: R, update: Callable[[R], None]) -> R:
        """Append `update` to the tape and return `value` unchanged."""
        self._entries.append(TapeEntry(update, value))
        return value

    def run_backward(self) -> int:
        """Pop every entry, latest first, and apply its update to its value.

        Returns
        -------
        int
            Number of replayed entries.
        """
        count = 0

        while self._entries:
            entry = self._entries.pop()
            entry.update(entry.value)
            count += 1

        return count

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(len={len(self._entries)})"
