# MIT License (see LICENSE)
"""
Frame timing: turns wall-clock timestamps into a safe physics dt.

    dt = min(max(timestamp - last_timestamp, 0), max_dt) · time_scale

The ceiling keeps a tab-switch stall (seconds between frames) from being
integrated in one step; ``time_scale`` < 1 gives slow motion.
"""
from __future__ import annotations
import math
from dataclasses import dataclass

from ..constants import MAX_FRAME_DT
from ..logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class FrameClock:
    """
    Attributes:
        max_dt: Ceiling on the raw frame delta in seconds.
        time_scale: Multiplier applied after clamping (e.g. 0.2 slow motion).
        last_timestamp: Timestamp of the previous tick, None before the first.
    """
    max_dt: float = MAX_FRAME_DT
    time_scale: float = 1.0
    last_timestamp: float | None = None

    def __post_init__(self) -> None:
        if self.max_dt <= 0:
            raise ValueError(f"max_dt must be positive, got {self.max_dt}")
        if self.time_scale < 0:
            raise ValueError(f"time_scale must be non-negative, got {self.time_scale}")

    def tick(self, timestamp: float) -> float:
        """
        Advance the clock to ``timestamp`` (seconds) and return the physics dt.

        The first tick after construction or reset() only records the
        timestamp and returns 0. Backwards or non-finite deltas also give 0.
        """
        last = self.last_timestamp
        self.last_timestamp = timestamp
        if last is None:
            return 0.0

        raw = timestamp - last
        if not math.isfinite(raw) or raw < 0:
            logger.warning("Discarding frame delta %r (timestamps %r -> %r)", raw, last, timestamp)
            return 0.0
        if raw > self.max_dt:
            logger.debug("Clamping frame delta %.4fs to %.4fs", raw, self.max_dt)
            raw = self.max_dt
        return raw * self.time_scale

    def reset(self) -> None:
        self.last_timestamp = None
