# MIT License (see LICENSE)
"""
Physical and timing constants shared by the labs.

Lengths in the chain and gas labs are canvas pixels (y grows downward);
the pendulum and closed-form models use SI units.
"""
from __future__ import annotations

# Standard gravity, m/s².
G_EARTH: float = 9.81

# Frame timing
# Ceiling on a single frame's dt. A tab switch can stall the browser clock
# for seconds; integrating that in one step would blow up every lab.
MAX_FRAME_DT: float = 0.1
# Reference frame period the per-frame gas rates were tuned at (60 Hz).
REFERENCE_FRAME_DT: float = 1 / 60
SLOW_MOTION_FACTOR: float = 0.2

# Capacity of logged sample histories (ring buffers).
DEFAULT_HISTORY_LENGTH: int = 300
TRACE_HISTORY_LENGTH: int = 100

# Chain fountain (pixels, seconds)
CHAIN_GRAVITY: float = 981.0
CHAIN_LINK_DIST: float = 10.0
CHAIN_RELAX_ITERATIONS: int = 5
CHAIN_FLOOR_RESTITUTION: float = 0.1
CHAIN_FLOOR_FRICTION: float = 0.5
CHAIN_KICK_SCALE: float = 10.0
# Largest single chain step. One 60 Hz frame plus scheduling jitter runs as
# a single step; longer frames are split into substeps of at most this length.
CHAIN_MAX_SUBSTEP: float = 0.02

# Gas
GAS_TARGET_SPEED_SCALE: float = 0.3
GAS_SEED_SPEED_SCALE: float = 0.2
GAS_THERMOSTAT_RATE: float = 0.05
GAS_PRESSURE_SMOOTHING: float = 0.95
GAS_INTERACTION_RANGE_SQ: float = 1600.0
GAS_BOND_REST_LENGTH: float = 20.0

# Gravitational waves
# Floor on time-to-merger before it is raised to a negative power.
MIN_TIME_LEFT: float = 0.05
CHIRP_BASE_FREQUENCY: float = 1.0
STRAIN_BASE_AMPLITUDE: float = 1e-3
REFERENCE_TOTAL_MASS: float = 60.0
RINGDOWN_DECAY: float = 4.0
RINGDOWN_DURATION: float = 2.0
MERGER_MASS_LOSS: float = 0.05
RECOIL_KICK_KM_S: float = 500.0
