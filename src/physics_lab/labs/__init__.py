# MIT License (see LICENSE)
"""
Interactive labs.

Each lab owns one piece of evolving physics state and exposes:
    - initial_state() / step(state, dt): the pure physics kernel.
    - advance(dt): step the state held in the lab's StateCell.
    - snapshot(): the Frame handed to a render sink.
    - parameters() / summary(): the input to the analysis service.

Typical usage:
    from physics_lab.labs import PendulumLab

    lab = PendulumLab()
    lab.advance(1 / 60)
"""
from .base import Lab
from .pendulum import PendulumLab, PendulumParams, step_pendulum
from .chain_fountain import (
    ChainFountainLab,
    ChainParams,
    create_chain,
    link_positions,
    fountain_height,
    step_chain_fountain,
)
from .thermodynamics import (
    GasMode,
    GasParams,
    GasState,
    ThermodynamicsLab,
    inject_heat,
    seed_gas,
    speed_bands,
    speed_color,
    step_gas,
    volume_liters,
)
from .black_hole import BlackHoleLab

__all__ = [
    "Lab",
    # Pendulum
    "PendulumLab",
    "PendulumParams",
    "step_pendulum",
    # Chain fountain
    "ChainFountainLab",
    "ChainParams",
    "create_chain",
    "link_positions",
    "fountain_height",
    "step_chain_fountain",
    # Gas
    "GasMode",
    "GasParams",
    "GasState",
    "ThermodynamicsLab",
    "inject_heat",
    "seed_gas",
    "speed_bands",
    "speed_color",
    "step_gas",
    "volume_liters",
    # Merger
    "BlackHoleLab",
]
