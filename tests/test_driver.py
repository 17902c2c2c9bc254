import asyncio

import pytest

from physics_lab.animation import (
    AnimationDriver,
    DriverSettings,
    DriverState,
    FrameClock,
    ManualScheduler,
    StateCell,
)
from physics_lab.labs import BlackHoleLab, PendulumLab
from physics_lab.profiler import Profiler
from physics_lab.renderer import BufferedRenderer

FPS = 60


def _timestamps(n, start=0.0, fps=FPS):
    return [start + i / fps for i in range(n)]


class RecordingAudio:
    def __init__(self):
        self.updates = 0
        self.stops = 0

    def update(self, frame):
        self.updates += 1

    def stop(self):
        self.stops += 1


class StaticService:
    def __init__(self, reply):
        self.reply = reply

    async def analyze(self, experiment_name, parameters, summary, language):
        return self.reply


def test_play_keeps_exactly_one_frame_pending():
    scheduler = ManualScheduler()
    driver = AnimationDriver(PendulumLab(), scheduler)
    assert scheduler.pending == 0

    driver.play()
    driver.play()
    assert scheduler.pending == 1
    assert driver.state is DriverState.RUNNING

    scheduler.run(_timestamps(10))
    assert scheduler.pending == 1


def test_first_frame_only_arms_the_clock():
    scheduler = ManualScheduler()
    lab = PendulumLab()
    driver = AnimationDriver(lab, scheduler)
    driver.play()
    scheduler.fire(5.0)
    assert lab.time == 0.0
    assert driver.frame_count == 0

    scheduler.fire(5.0 + 1 / FPS)
    assert lab.time == pytest.approx(1 / FPS)
    assert driver.frame_count == 1


def test_long_stall_is_clamped():
    scheduler = ManualScheduler()
    lab = PendulumLab()
    driver = AnimationDriver(lab, scheduler)
    driver.play()
    scheduler.fire(0.0)
    scheduler.fire(3.0)
    assert lab.time == pytest.approx(0.1)


def test_slow_motion_scales_dt():
    scheduler = ManualScheduler()
    lab = PendulumLab()
    driver = AnimationDriver(lab, scheduler)
    driver.set_slow_motion(True)
    driver.play()
    scheduler.run(_timestamps(61))
    assert lab.time == pytest.approx(0.2, rel=1e-9)

    driver.set_slow_motion(False)
    assert driver.clock.time_scale == 1.0


def test_slow_motion_keeps_configured_time_scale():
    driver = AnimationDriver(PendulumLab(), ManualScheduler(), settings=DriverSettings(time_scale=0.5))
    assert driver.clock.time_scale == 0.5

    driver.set_slow_motion(True)
    assert driver.slow_motion
    assert driver.clock.time_scale == pytest.approx(0.1)

    driver.set_slow_motion(False)
    assert not driver.slow_motion
    assert driver.clock.time_scale == 0.5


def test_pause_cancels_pending_frame_and_resume_skips_paused_time():
    scheduler = ManualScheduler()
    lab = PendulumLab()
    driver = AnimationDriver(lab, scheduler)
    driver.play()
    scheduler.run(_timestamps(31))
    t_paused = lab.time

    driver.pause()
    assert driver.state is DriverState.PAUSED
    assert scheduler.pending == 0
    assert scheduler.fire(10.0) == 0
    assert lab.time == t_paused
    # Paused state is published even between sync frames.
    assert driver.render_state.time == pytest.approx(t_paused)

    driver.play()
    scheduler.fire(100.0)
    scheduler.fire(100.0 + 1 / FPS)
    assert lab.time == pytest.approx(t_paused + 1 / FPS)


def test_toggle():
    scheduler = ManualScheduler()
    driver = AnimationDriver(PendulumLab(), scheduler)
    driver.toggle()
    assert driver.running
    driver.toggle()
    assert driver.state is DriverState.PAUSED
    assert scheduler.pending == 0


def test_render_state_is_synced_every_other_frame():
    scheduler = ManualScheduler()
    sink = BufferedRenderer()
    lab = PendulumLab()
    driver = AnimationDriver(lab, scheduler, render_sink=sink)
    driver.play()
    # 1 arming frame + 10 physics frames -> 5 syncs.
    scheduler.run(_timestamps(11))
    assert driver.frame_count == 10
    assert len(sink.frames) == 5
    assert sink.frames[-1]["time"] == pytest.approx(lab.time)

    scheduler.fire(11 / FPS)
    assert len(sink.frames) == 5
    assert driver.render_state.time < lab.time


def test_sync_every_setting():
    scheduler = ManualScheduler()
    sink = BufferedRenderer()
    driver = AnimationDriver(PendulumLab(), scheduler, render_sink=sink, settings=DriverSettings(sync_every=1))
    driver.play()
    scheduler.run(_timestamps(7))
    assert len(sink.frames) == 6

    with pytest.raises(ValueError):
        DriverSettings(sync_every=0)


def test_reset_returns_to_idle():
    scheduler = ManualScheduler()
    lab = PendulumLab()
    driver = AnimationDriver(lab, scheduler)
    driver.play()
    scheduler.run(_timestamps(20))
    driver.analysis = "old text"

    driver.reset()
    assert driver.state is DriverState.IDLE
    assert scheduler.pending == 0
    assert lab.time == 0.0
    assert driver.frame_count == 0
    assert driver.analysis is None
    assert driver.render_state.time == 0.0


def test_lab_can_stop_itself():
    scheduler = ManualScheduler()
    lab = BlackHoleLab(merger_time=0.5)
    driver = AnimationDriver(lab, scheduler)
    driver.play()

    t = 0.0
    while scheduler.pending:
        scheduler.fire(t)
        t += 0.1
        assert t < 100.0

    assert driver.state is DriverState.PAUSED
    assert lab.finished
    assert lab.time > lab.t_merge + 2.0
    assert "remnant_mass" in driver.render_state.scalars


def test_closed_driver_refuses_to_play():
    scheduler = ManualScheduler()
    driver = AnimationDriver(PendulumLab(), scheduler)
    driver.play()
    driver.close()
    assert scheduler.pending == 0
    assert driver.closed
    with pytest.raises(RuntimeError):
        driver.play()


def test_audio_created_once_and_stopped_on_pause():
    made = []

    def factory():
        made.append(RecordingAudio())
        return made[-1]

    scheduler = ManualScheduler()
    driver = AnimationDriver(PendulumLab(), scheduler, audio_factory=factory)
    assert driver.audio is None

    driver.play()
    scheduler.run(_timestamps(5))
    driver.pause()
    driver.play()
    scheduler.run(_timestamps(5, start=1.0))
    driver.pause()

    assert len(made) == 1
    audio = made[0]
    assert driver.audio is audio
    assert audio.stops == 2
    # Syncs on frames 2 and 4 of each run; the pause sync is not sent to audio.
    assert audio.updates == 4


def test_profiler_times_physics_and_render():
    profiler = Profiler()
    scheduler = ManualScheduler()
    driver = AnimationDriver(PendulumLab(), scheduler, profiler=profiler)
    driver.play()
    scheduler.run(_timestamps(9))

    summary = profiler.stats.summary()
    assert summary["physics"]["n"] == 8
    assert summary["render"]["n"] == 4
    assert not profiler.over_budget("missing")


def test_analysis_result_kept_until_close():
    driver = AnimationDriver(PendulumLab(), ManualScheduler())
    text = asyncio.run(driver.analyze(StaticService("Looks like a pendulum.")))
    assert text == "Looks like a pendulum."
    assert driver.analysis == text

    driver.close()
    assert asyncio.run(driver.analyze(StaticService("late"))) is None
    assert driver.analysis == "Looks like a pendulum."


def test_frame_clock():
    clock = FrameClock()
    assert clock.tick(1.0) == 0.0
    assert clock.tick(1.05) == pytest.approx(0.05)
    assert clock.tick(0.5) == 0.0
    assert clock.tick(10.0) == pytest.approx(0.1)
    assert clock.tick(float("nan")) == 0.0

    clock.reset()
    assert clock.tick(20.0) == 0.0

    with pytest.raises(ValueError):
        FrameClock(max_dt=0.0)
    with pytest.raises(ValueError):
        FrameClock(time_scale=-1.0)


def test_state_cell_versions():
    cell = StateCell(1)
    assert cell.value == 1 and cell.version == 0
    cell.set(2)
    assert cell.value == 2 and cell.version == 1
