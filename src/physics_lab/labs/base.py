# MIT License (see LICENSE)
"""
Common interface of every lab.

A lab is a parameter set plus one piece of evolving state. The physics
kernel is a pure function ``step(state, dt) -> state``; the lab keeps the
current state in a StateCell so the animation driver can advance it without
copying or re-registering anything.

Structure:
    - Subclass Lab and implement initial_state(), step(), snapshot(),
      parameters() and summary().
    - Optionally override record() to log samples after each step and
      finished to stop the animation programmatically.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..animation.cell import StateCell
from ..types import Frame

S = TypeVar("S")


class Lab(ABC, Generic[S]):
    """
    Base class for a single simulation lab.

    Subclasses must set their parameters before calling
    ``super().__init__()``, since the initial state is built from them.

    Attributes:
        name: Experiment name shown to the user and sent to analysis.
        time: Simulation time in seconds since the last reset.
        cell: Owner of the current physics state.
    """
    name: str = "Lab"

    def __init__(self) -> None:
        self.time = 0.0
        self.cell: StateCell[S] = StateCell(self.initial_state())

    @property
    def state(self) -> S:
        return self.cell.value

    @abstractmethod
    def initial_state(self) -> S:
        ...

    @abstractmethod
    def step(self, state: S, dt: float) -> S:
        """Pure physics kernel: return the state ``dt`` seconds later."""
        ...

    @abstractmethod
    def snapshot(self) -> Frame:
        ...

    @abstractmethod
    def parameters(self) -> dict[str, object]:
        """Setup parameters, as sent alongside the analysis summary."""
        ...

    @abstractmethod
    def summary(self) -> str:
        """One-paragraph description of what was observed in this run."""
        ...

    @property
    def finished(self) -> bool:
        """True once the run has nothing left to show."""
        return False

    def record(self) -> None:
        """Log samples of the current state. Called after every step."""

    def on_reset(self) -> None:
        """Clear derived data (histories). Called by reset()."""

    def advance(self, dt: float) -> bool:
        """
        Step the physics by ``dt`` and log samples.

        Returns:
            False when the lab has finished and the animation should stop.
        """
        self.cell.set(self.step(self.cell.value, dt))
        self.time += dt
        self.record()
        return not self.finished

    def reset(self) -> None:
        self.time = 0.0
        self.cell.set(self.initial_state())
        self.on_reset()
