# MIT License (see LICENSE)
"""
Diagnostics for checking simulation health.

Used by tests and by the labs' readouts. An undamped pendulum should keep
its mechanical energy, a relaxed chain should keep its link spacing, and a
thermostatted gas should settle at its target kinetic energy.
"""
from __future__ import annotations
import math

import numpy as np

from ..constants import G_EARTH
from ..util import row_norms


def pendulum_energy(
    theta: float,
    omega: float,
    length: float,
    mass: float = 1.0,
    gravity: float = G_EARTH,
) -> float:
    """
    Total mechanical energy of a pendulum bob.

    E = m·g·L·(1 - cos θ) + ½·m·(L·ω)²
    """
    return mass * gravity * length * (1.0 - math.cos(theta)) + 0.5 * mass * (length * omega) ** 2


def link_distances(positions: np.ndarray) -> np.ndarray:
    """Distances between consecutive rows of an [N, 2] chain, shape (N-1,)."""
    if len(positions) < 2:
        return np.zeros(0, dtype=np.float64)
    return row_norms(np.diff(positions, axis=0))


def gas_kinetic_energy(velocities: np.ndarray, mass: float = 1.0) -> float:
    """
    Total kinetic energy of a particle set with equal masses.

    T = Σ ½·m·|v|²
    """
    return 0.5 * mass * float(np.sum(velocities * velocities))


def mean_speed(velocities: np.ndarray) -> float:
    if len(velocities) == 0:
        return 0.0
    return float(np.mean(row_norms(velocities)))
