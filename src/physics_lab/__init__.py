# MIT License (see LICENSE)
"""
physics_lab - Interactive physics labs driven frame by frame.

This package provides the numerical kernels and the animation loop behind a
set of physics demonstrations: a damped pendulum, the chain fountain, a
particle gas in a piston box and a black hole merger with its
gravitational-wave chirp.

Main entry points:
    - PendulumLab, ChainFountainLab, ThermodynamicsLab, BlackHoleLab.
    - AnimationDriver: play/pause/reset loop around a lab.
    - ManualScheduler: explicit frame source for headless runs.

Submodules:
    - core: Integrators and diagnostics.
    - collision, constraints: Contact handling and chain relaxation.
    - models: Closed-form formulas and the chirp model.
    - labs: The labs themselves.
    - animation: Frame clock, scheduler and driver.
    - analysis: Hand-off to an external text generator.
    - io: JSON presets.
    - renderer: Optional render sinks.

Example:
    from physics_lab import AnimationDriver, ManualScheduler, PendulumLab

    scheduler = ManualScheduler()
    driver = AnimationDriver(PendulumLab(), scheduler)
    driver.play()
    scheduler.run(i / 60 for i in range(600))
"""
from .animation import AnimationDriver, DriverSettings, DriverState, ManualScheduler
from .labs import BlackHoleLab, ChainFountainLab, Lab, PendulumLab, ThermodynamicsLab
from .types import BlackHole, ChainLink, DataPoint, Frame, GasParticle, GravitationalWaveSample, PendulumState

__all__ = [
    # Labs
    "Lab",
    "PendulumLab",
    "ChainFountainLab",
    "ThermodynamicsLab",
    "BlackHoleLab",
    # Animation
    "AnimationDriver",
    "DriverSettings",
    "DriverState",
    "ManualScheduler",
    # Types
    "BlackHole",
    "ChainLink",
    "DataPoint",
    "Frame",
    "GasParticle",
    "GravitationalWaveSample",
    "PendulumState",
]
