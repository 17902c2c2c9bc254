# MIT License (see LICENSE)
"""
Per-lab animation loop.

The driver owns the play/pause/reset state machine of one lab:

    IDLE --play--> RUNNING --pause--> PAUSED --play--> RUNNING ...
      ^                                  |
      +------------- reset --------------+   (reset works from any state)

Each frame it:
    1. turns the frame timestamp into a clamped, optionally slowed dt,
    2. advances the lab's physics (which lives in the lab's StateCell),
    3. every ``sync_every`` frames, projects a Frame snapshot into
       ``render_state``, the render sink and the audio sink,
    4. requests the next frame, but only while still RUNNING.

A lab returning False from advance() stops itself (merger finished,
projectile landed): the driver pauses and does not request another frame.

Pausing or closing never interrupts a frame. It cancels the pending frame
request, and that is the whole stop mechanism.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Protocol

from ..constants import MAX_FRAME_DT, SLOW_MOTION_FACTOR
from ..logging_utils import get_logger
from ..profiler import Profiler
from ..types import Frame
from .clock import FrameClock
from .scheduler import FrameScheduler

if TYPE_CHECKING:
    from ..analysis.service import AnalysisService
    from ..labs.base import Lab
    from ..renderer.adapter import RenderSink

logger = get_logger(__name__)


class DriverState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class AudioSink(Protocol):
    """Optional sound output fed from render snapshots (e.g. a whoosh tied to bob speed)."""

    def update(self, frame: Frame) -> None:
        ...

    def stop(self) -> None:
        ...


@dataclass
class DriverSettings:
    """
    Attributes:
        max_dt: Ceiling on a frame's dt in seconds.
        time_scale: Base dt multiplier; slow motion multiplies it by
                    SLOW_MOTION_FACTOR.
        sync_every: Physics frames per render-state projection.
    """
    max_dt: float = MAX_FRAME_DT
    time_scale: float = 1.0
    sync_every: int = 2

    def __post_init__(self) -> None:
        if self.sync_every < 1:
            raise ValueError(f"sync_every must be at least 1, got {self.sync_every}")


class AnimationDriver:
    """
    Scheduling wrapper around one lab.

    Args:
        lab: The lab whose physics is stepped.
        scheduler: Frame source (browser-style requestAnimationFrame).
        render_sink: Optional sink receiving every projected Frame.
        settings: Timing settings; defaults to DriverSettings().
        audio_factory: Creates the audio sink. Called once, on first play.
        profiler: Optional profiler timing the "physics" and "render" sections.
    """

    def __init__(
        self,
        lab: Lab,
        scheduler: FrameScheduler,
        render_sink: RenderSink | None = None,
        settings: DriverSettings | None = None,
        audio_factory: Callable[[], AudioSink] | None = None,
        profiler: Profiler | None = None,
    ) -> None:
        settings = settings or DriverSettings()
        self.lab = lab
        self.scheduler = scheduler
        self.render_sink = render_sink
        self.clock = FrameClock(max_dt=settings.max_dt, time_scale=settings.time_scale)
        self.base_time_scale = settings.time_scale
        self.slow_motion = False
        self.sync_every = settings.sync_every
        self.profiler = profiler

        self.state = DriverState.IDLE
        self.frame_count = 0
        self.render_state: Frame = lab.snapshot()
        self.analysis: str | None = None
        self.closed = False

        self._handle: int | None = None
        self._audio_factory = audio_factory
        self._audio: AudioSink | None = None

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self.state is DriverState.RUNNING

    @property
    def audio(self) -> AudioSink | None:
        return self._audio

    def set_slow_motion(self, enabled: bool) -> None:
        self.slow_motion = enabled
        self.clock.time_scale = self.base_time_scale * (SLOW_MOTION_FACTOR if enabled else 1.0)

    def play(self) -> None:
        """
        Start or resume the loop. A no-op while already running.

        Raises:
            RuntimeError: If the driver has been closed.
        """
        if self.closed:
            raise RuntimeError(f"Cannot play closed driver for {self.lab.name}")
        if self.running:
            return
        # The first frame after (re)starting only re-arms the clock, so the
        # time spent paused is never integrated.
        self.clock.reset()
        if self._audio is None and self._audio_factory is not None:
            self._audio = self._audio_factory()
        logger.debug("%s: %s -> running", self.lab.name, self.state.value)
        self.state = DriverState.RUNNING
        self._request()

    def pause(self) -> None:
        if not self.running:
            return
        self._cancel()
        self.state = DriverState.PAUSED
        self._stop_audio()
        self._sync()
        logger.debug("%s: paused at t=%.3f", self.lab.name, self.lab.time)

    def toggle(self) -> None:
        if self.running:
            self.pause()
        else:
            self.play()

    def reset(self) -> None:
        """Stop, restore the lab's initial state and return to IDLE."""
        self._cancel()
        self._stop_audio()
        self.lab.reset()
        self.clock.reset()
        self.frame_count = 0
        self.analysis = None
        self.state = DriverState.IDLE
        self._sync()
        logger.debug("%s: reset", self.lab.name)

    def close(self) -> None:
        """Tear down (unmount). Late analysis results are dropped afterwards."""
        self._cancel()
        self._stop_audio()
        self.state = DriverState.IDLE
        self.closed = True

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def on_frame(self, timestamp: float) -> None:
        """Frame callback; ``timestamp`` is a monotonic time in seconds."""
        self._handle = None
        if not self.running:
            return

        dt = self.clock.tick(timestamp)
        keep_running = True
        if dt > 0.0:
            if self.profiler is not None:
                with self.profiler.section("physics"):
                    keep_running = self.lab.advance(dt)
            else:
                keep_running = self.lab.advance(dt)
            self.frame_count += 1
            if self.frame_count % self.sync_every == 0:
                self._sync()

        if not keep_running:
            logger.info("%s: finished at t=%.3f", self.lab.name, self.lab.time)
            self.pause()
        else:
            self._request()

    def _request(self) -> None:
        if self._handle is None:
            self._handle = self.scheduler.request(self.on_frame)

    def _cancel(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None

    def _sync(self) -> None:
        """Project the physics state into render state and the sinks."""
        if self.profiler is not None:
            with self.profiler.section("render"):
                self._publish()
        else:
            self._publish()

    def _publish(self) -> None:
        frame = self.lab.snapshot()
        self.render_state = frame
        if self.render_sink is not None:
            self.render_sink.render(frame)
        if self._audio is not None and self.running:
            self._audio.update(frame)

    def _stop_audio(self) -> None:
        if self._audio is not None:
            self._audio.stop()

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    async def analyze(self, service: AnalysisService, language: str = "en") -> str | None:
        """
        Ask the analysis service about the current run.

        The request runs independently of the frame loop. If the driver is
        closed before the reply arrives, the reply is dropped.

        Returns:
            The analysis text, or None if it arrived after close().
        """
        from ..analysis.service import analyze_experiment

        text = await analyze_experiment(service, self.lab, language)
        if self.closed:
            logger.debug("%s: dropping analysis that arrived after close", self.lab.name)
            return None
        self.analysis = text
        return text
