# MIT License (see LICENSE)
"""
Capped sample history.

Every lab logs samples for plots and analysis summaries. Histories are ring
buffers so a session left running for hours holds a bounded amount of data.
"""
from __future__ import annotations
from collections import deque
from typing import Generic, Iterator, TypeVar

from .constants import DEFAULT_HISTORY_LENGTH

T = TypeVar("T")


class SampleHistory(Generic[T]):
    """
    Append-only ring buffer of samples.

    Example:
        history = SampleHistory[DataPoint](maxlen=300)
        history.append(DataPoint(t, theta, omega))
        latest = history.last()
    """

    def __init__(self, maxlen: int = DEFAULT_HISTORY_LENGTH) -> None:
        if maxlen <= 0:
            raise ValueError(f"History length must be positive, got {maxlen}")
        self._items: deque[T] = deque(maxlen=maxlen)

    @property
    def maxlen(self) -> int:
        return self._items.maxlen

    def append(self, item: T) -> None:
        self._items.append(item)

    def clear(self) -> None:
        self._items.clear()

    def last(self) -> T | None:
        return self._items[-1] if self._items else None

    def to_list(self) -> list[T]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)
