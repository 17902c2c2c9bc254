# MIT License (see LICENSE)
"""
Qualitative gravitational-wave model of a compact-binary merger.

The waveform has two regimes:

- Inspiral (t < t_merge): frequency and amplitude rise as negative powers
  of the time left to merger, the leading post-Newtonian chirp scaling

      f(τ) ∝ τ^(-3/8),   A(τ) ∝ τ^(-1/4),   τ = t_merge - t

  The phase is the integral of 2π·f, so the oscillation speeds up smoothly
  instead of jumping when f changes.

- Ringdown (t ≥ t_merge): an exponentially damped sinusoid continuing
  from the amplitude, phase and frequency reached at merger. Faster
  spinning remnants ring down faster.

τ is floored at MIN_TIME_LEFT before being raised to a negative power, so
the transition produces no singularity. Spin boosts amplitude and
frequency, and aligned spin delays the merger.

This is a teaching model chosen to look like a LIGO chirp, not a solution
of the Einstein field equations. The merger itself (mass loss, recoil) is
scripted with step functions.

Reference:
    https://en.wikipedia.org/wiki/Chirp#Gravitational-wave_chirp
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..constants import (
    CHIRP_BASE_FREQUENCY,
    MERGER_MASS_LOSS,
    MIN_TIME_LEFT,
    RECOIL_KICK_KM_S,
    REFERENCE_TOTAL_MASS,
    RINGDOWN_DECAY,
    STRAIN_BASE_AMPLITUDE,
)
from ..types import BlackHole

MAX_BODIES: int = 3


@dataclass(frozen=True)
class MergerRemnant:
    """Final black hole: mass in solar masses and recoil speed in km/s."""
    mass: float
    kick_velocity_km_s: float


def validate_bodies(bodies: Sequence[BlackHole]) -> None:
    """
    Raises:
        ValueError: Unless there are 1 to 3 bodies.
    """
    if not 1 <= len(bodies) <= MAX_BODIES:
        raise ValueError(f"Merger lab supports 1 to {MAX_BODIES} bodies, got {len(bodies)}")


def spin_alignment(bodies: Sequence[BlackHole]) -> float:
    """Mean cos(tilt) of the spin axes: 1 fully aligned, 0 in the orbital plane."""
    return float(np.mean([math.cos(math.radians(b.spin_tilt_deg)) for b in bodies]))


def _mean_spin(bodies: Sequence[BlackHole]) -> float:
    return float(np.mean([b.spin for b in bodies]))


def _spin_boost(bodies: Sequence[BlackHole], alignment: float) -> float:
    return 1.0 + 0.3 * _mean_spin(bodies) * alignment


def effective_merger_time(merger_time: float, bodies: Sequence[BlackHole], alignment: float) -> float:
    """Aligned spins hang up the orbit and delay the merger by up to ~10%."""
    return merger_time * (1.0 + 0.1 * _mean_spin(bodies) * alignment)


def _time_left(time: float, t_merge: float) -> float:
    return max(t_merge - time, MIN_TIME_LEFT)


def chirp_frequency(
    time: float,
    bodies: Sequence[BlackHole],
    merger_time: float,
    alignment: float,
) -> float:
    """
    Instantaneous inspiral frequency in Hz. Non-decreasing in time and
    constant from MIN_TIME_LEFT before merger onward.
    """
    t_merge = effective_merger_time(merger_time, bodies, alignment)
    tau = _time_left(time, t_merge)
    return CHIRP_BASE_FREQUENCY * _spin_boost(bodies, alignment) * tau ** (-3.0 / 8.0)


def _chirp_phase(tau: float, tau0: float, f0: float) -> float:
    # ∫ 2π·f0·τ^(-3/8) dt with dτ = -dt, taken from τ0 (t = 0) down to τ.
    return 2.0 * math.pi * f0 * 1.6 * (tau0 ** 0.625 - tau ** 0.625)


def calculate_gravitational_wave_strain(
    time: float,
    bodies: Sequence[BlackHole],
    merger_time: float,
    spin_alignment: float,
) -> float:
    """
    Strain h(t) seen by the detector.

    Args:
        time: Simulation time in seconds since the run started.
        bodies: The 1-3 black holes. A single body radiates nothing.
        merger_time: Merger time for non-spinning bodies, seconds.
        spin_alignment: Mean cos(tilt) of the spins, see spin_alignment().

    Returns:
        Dimensionless strain, finite for every time.
    """
    if len(bodies) < 2:
        return 0.0

    t_merge = effective_merger_time(merger_time, bodies, spin_alignment)
    boost = _spin_boost(bodies, spin_alignment)
    f0 = CHIRP_BASE_FREQUENCY * boost
    a0 = STRAIN_BASE_AMPLITUDE * (sum(b.mass for b in bodies) / REFERENCE_TOTAL_MASS) * boost
    tau0 = _time_left(0.0, t_merge)

    if time < t_merge:
        tau = _time_left(time, t_merge)
        return a0 * tau ** -0.25 * math.sin(_chirp_phase(tau, tau0, f0))

    # Ringdown continues from the values reached at the clamped merger point.
    peak = a0 * MIN_TIME_LEFT ** -0.25
    phase_merge = _chirp_phase(MIN_TIME_LEFT, tau0, f0)
    f_merge = f0 * MIN_TIME_LEFT ** (-3.0 / 8.0)
    decay = RINGDOWN_DECAY * (1.0 + _mean_spin(bodies))
    t_ring = time - t_merge
    return peak * math.exp(-decay * t_ring) * math.sin(phase_merge + 2.0 * math.pi * f_merge * t_ring)


def orbital_positions(
    time: float,
    bodies: Sequence[BlackHole],
    merger_time: float,
    alignment: float,
    separation: float = 200.0,
) -> np.ndarray:
    """
    Scripted placement of the bodies for drawing, centered on the origin.

    The separation shrinks linearly to zero at merger while the orbital
    rate 20/(τ + 1) climbs. Two bodies sit on opposite sides of their
    center of mass; three sit on a triangle. After merger (or for a single
    body) one point at the origin is returned.

    Returns:
        [N, 2] array of positions.
    """
    t_merge = effective_merger_time(merger_time, bodies, alignment)
    time_left = max(t_merge - time, 0.0)
    if len(bodies) < 2 or time_left <= 0.0:
        return np.zeros((1, 2), dtype=np.float64)

    current_sep = (time_left / t_merge) * separation
    angle = time * (20.0 / (time_left + 1.0))

    if len(bodies) == 2:
        m1, m2 = bodies[0].mass, bodies[1].mass
        total = m1 + m2
        phi = angle + bodies[0].initial_angle
        axis = np.array([math.cos(phi), math.sin(phi)])
        return np.array([axis * current_sep * (m2 / total), -axis * current_sep * (m1 / total)])

    radius = current_sep * 0.5
    return np.array([
        [
            radius * math.cos(angle + b.initial_angle + 2.0 * math.pi * k / len(bodies)),
            radius * math.sin(angle + b.initial_angle + 2.0 * math.pi * k / len(bodies)),
        ]
        for k, b in enumerate(bodies)
    ])


def merger_remnant(bodies: Sequence[BlackHole]) -> MergerRemnant:
    """
    Remnant of the merger.

    A fixed 5% of the total mass is radiated away. Any tilted spin gives
    the remnant a 500 km/s recoil, otherwise none. Both are deliberate
    step functions of the inputs.
    """
    total = sum(b.mass for b in bodies)
    kick = RECOIL_KICK_KM_S if any(b.spin_tilt_deg > 0 for b in bodies) else 0.0
    return MergerRemnant(mass=total * (1.0 - MERGER_MASS_LOSS), kick_velocity_km_s=kick)
