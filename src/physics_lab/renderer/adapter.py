# MIT License (see LICENSE)
"""
Render sinks for lab snapshots.

The labs have no drawing dependency. The animation driver hands a Frame
(time, drawable points, named readouts) to whatever sink is attached. A
sink for a real backend (canvas, matplotlib, a web socket) subclasses
RenderSink; the sinks here cover debugging, benchmarking and recording.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from collections import deque
import sys
from typing import TextIO

import numpy as np

from ..types import Frame


class RenderSink(ABC):
    """
    Abstract base class for render sinks.

    Usage:
        sink = MySink()
        sink.begin_frame(frame.time)
        sink.draw_positions(frame.positions)
        sink.draw_scalars(frame.scalars)
        sink.end_frame()

    Or use the convenience method:
        sink.render(frame)
    """

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        """
        Begin a new frame.

        Args:
            time: Simulation time in seconds.
        """
        ...

    @abstractmethod
    def draw_positions(self, positions: np.ndarray) -> None:
        """
        Draw the frame's points.

        Args:
            positions: [N, 2] array (bobs, links, particles, black holes).
        """
        ...

    def draw_scalars(self, scalars: dict[str, float]) -> None:
        """Show named readouts. Ignored unless overridden."""

    @abstractmethod
    def end_frame(self) -> None:
        ...

    def render(self, frame: Frame) -> None:
        self.begin_frame(frame.time)
        self.draw_positions(frame.positions)
        self.draw_scalars(frame.scalars)
        self.end_frame()


class DebugRenderer(RenderSink):
    """
    Text renderer for development and testing.

    Example output:
        === Frame t=0.5000 ===
        2 points, first (0.00, 0.00) last (0.75, -1.30)
        omega=-0.8123 theta=0.5236
    """

    def __init__(self, output: TextIO | None = None, max_points: int = 0) -> None:
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            max_points: Number of points listed individually; 0 prints
                        only the count and the first/last point.
        """
        self.output = output or sys.stdout
        self.max_points = max_points

    def begin_frame(self, time: float) -> None:
        self.output.write(f"=== Frame t={time:.4f} ===\n")

    def draw_positions(self, positions: np.ndarray) -> None:
        n = len(positions)
        if n == 0:
            self.output.write("0 points\n")
            return
        first, last = positions[0], positions[-1]
        self.output.write(
            f"{n} points, first ({first[0]:.2f}, {first[1]:.2f}) last ({last[0]:.2f}, {last[1]:.2f})\n"
        )
        for i, (x, y) in enumerate(positions[: self.max_points]):
            self.output.write(f"  [{i}] ({x:.2f}, {y:.2f})\n")

    def draw_scalars(self, scalars: dict[str, float]) -> None:
        if scalars:
            self.output.write(" ".join(f"{k}={v:.4g}" for k, v in sorted(scalars.items())) + "\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RenderSink):
    """No-op sink; counts frames so benchmarks can check the loop ran."""

    def __init__(self) -> None:
        self.frame_count = 0

    def begin_frame(self, time: float) -> None:
        pass

    def draw_positions(self, positions: np.ndarray) -> None:
        pass

    def end_frame(self) -> None:
        self.frame_count += 1


class BufferedRenderer(RenderSink):
    """
    Keeps the most recent frames as plain dicts for playback or export.

    Example:
        sink = BufferedRenderer(maxlen=600)
        driver = AnimationDriver(lab, scheduler, render_sink=sink)
        ...
        for frame in sink.frames:
            print(frame["time"], frame["scalars"])
    """

    def __init__(self, maxlen: int | None = None) -> None:
        self.frames: deque[dict] = deque(maxlen=maxlen)
        self._current: dict | None = None

    def begin_frame(self, time: float) -> None:
        self._current = {"time": time, "positions": [], "scalars": {}}

    def draw_positions(self, positions: np.ndarray) -> None:
        if self._current is not None:
            self._current["positions"] = np.asarray(positions).tolist()

    def draw_scalars(self, scalars: dict[str, float]) -> None:
        if self._current is not None:
            self._current["scalars"] = {k: float(v) for k, v in scalars.items()}

    def end_frame(self) -> None:
        if self._current is not None:
            self.frames.append(self._current)
            self._current = None

    def clear(self) -> None:
        self.frames.clear()
