# MIT License (see LICENSE)
"""
Frame-driven animation.

This subpackage provides:
    - FrameClock: frame timestamps to clamped, optionally slowed dt.
    - StateCell: mutable owner of a lab's physics state.
    - FrameScheduler / ManualScheduler: requestAnimationFrame-style
      frame sources.
    - AnimationDriver: the play/pause/reset loop around one lab.
"""
from .cell import StateCell
from .clock import FrameClock
from .scheduler import FrameCallback, FrameScheduler, ManualScheduler
from .driver import AnimationDriver, AudioSink, DriverSettings, DriverState

__all__ = [
    "StateCell",
    "FrameClock",
    "FrameCallback",
    "FrameScheduler",
    "ManualScheduler",
    "AnimationDriver",
    "AudioSink",
    "DriverSettings",
    "DriverState",
]
