# MIT License (see LICENSE)
"""
Frame profiling for the animation loop.

Each lab has to finish its physics step well inside one display frame
(16 ms at 60 Hz). The profiler times named sections of a frame and keeps
a bounded window of recent samples per section.

Example:
    profiler = Profiler()
    with profiler.section("physics"):
        lab.advance(dt)
    print(profiler.stats.summary())
"""
from __future__ import annotations
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

FRAME_BUDGET_MS: float = 16.0


@dataclass
class ProfileStats:
    """
    Recent timing samples (seconds) per section.

    Only the latest ``window`` samples of each section are kept.
    """
    window: int = 600
    samples: dict[str, deque[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        """Record a timing sample (in seconds) for a named section."""
        if name not in self.samples:
            self.samples[name] = deque(maxlen=self.window)
        self.samples[name].append(dt)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Summary statistics per section.

        Returns:
            Dict mapping section name to {'n', 'mean_ms', 'max_ms'}.
        """
        out = {}
        for name, times in self.samples.items():
            if not times:
                continue
            out[name] = {
                "n": len(times),
                "mean_ms": 1e3 * (sum(times) / len(times)),
                "max_ms": 1e3 * max(times),
            }
        return out


class Profiler:
    """Context-manager based section timer."""

    def __init__(self, window: int = 600) -> None:
        self.stats = ProfileStats(window=window)

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)

    def over_budget(self, name: str, budget_ms: float = FRAME_BUDGET_MS) -> bool:
        """True if the mean time of ``name`` exceeds ``budget_ms``."""
        stats = self.stats.summary().get(name)
        return stats is not None and stats["mean_ms"] > budget_ms
