# MIT License (see LICENSE)
"""
Render sinks for lab snapshots.

This subpackage provides the abstract sink and three concrete ones:
    - RenderSink: Abstract base class defining the drawing interface.
    - DebugRenderer: Text output for debugging.
    - NullRenderer: No-op sink for benchmarks.
    - BufferedRenderer: Records recent frames for playback or export.

The labs have no rendering dependency; sinks are optional.

Typical usage:
    from physics_lab.renderer import DebugRenderer

    DebugRenderer().render(lab.snapshot())
"""
from .adapter import (
    RenderSink,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
)

__all__ = [
    "RenderSink",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
]
