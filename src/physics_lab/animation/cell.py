# MIT License (see LICENSE)
"""
Mutable reference cell for physics state.

The animation loop reads and writes the current state through one cell
every frame, so a frame callback never holds a stale copy and never has to
be re-registered when the state changes. Render state is a separate,
throttled projection of it (see AnimationDriver).
"""
from __future__ import annotations
from typing import Generic, TypeVar

T = TypeVar("T")


class StateCell(Generic[T]):
    """
    Single-slot owner of a value.

    ``version`` increases on every write, so observers can tell whether the
    value changed since they last looked without comparing states.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self.version = 0

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        self.version += 1

    def __repr__(self) -> str:
        return f"StateCell(version={self.version}, value={self._value!r})"
