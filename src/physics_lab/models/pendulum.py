# MIT License (see LICENSE)
"""
Closed-form pendulum quantities shown next to the stepped trajectory.

These are reference values only; the lab's motion always comes from
core.integrators.step_pendulum_rk4.
"""
from __future__ import annotations
import math
from dataclasses import dataclass

from ..constants import G_EARTH


@dataclass(frozen=True)
class PendulumEnergy:
    potential: float
    kinetic: float
    total: float


@dataclass(frozen=True)
class PendulumForces:
    """
    Forces on the bob in newtons.

    Attributes:
        weight: m·g.
        tangential: Restoring component of gravity along the path, -m·g·sin θ.
        radial: Component of gravity along the string, m·g·cos θ.
        centripetal: m·L·ω², net inward force needed for the circular path.
        tension: String tension, radial + centripetal.
    """
    weight: float
    tangential: float
    radial: float
    centripetal: float
    tension: float


def calculate_ideal_period(length: float, gravity: float = G_EARTH) -> float:
    """Small-angle period T₀ = 2π·√(L/g)."""
    return 2.0 * math.pi * math.sqrt(length / gravity)


def calculate_large_angle_period(length: float, gravity: float, max_angle_rad: float) -> float:
    """
    Finite-amplitude period from the first two correction terms of the
    complete elliptic integral series:

        T = T₀·(1 + ¼·sin²(θ₀/2) + 9/64·sin⁴(θ₀/2))

    Strictly increasing in θ₀ on (0, π/2]. Accurate to well under 0.1% up
    to about 60°.

    Reference:
        https://en.wikipedia.org/wiki/Pendulum_(mechanics)#Arbitrary-amplitude_period
    """
    t0 = calculate_ideal_period(length, gravity)
    s2 = math.sin(max_angle_rad / 2.0) ** 2
    return t0 * (1.0 + 0.25 * s2 + (9.0 / 64.0) * s2 * s2)


def calculate_energy(
    mass: float,
    length: float,
    theta: float,
    omega: float,
    gravity: float = G_EARTH,
) -> PendulumEnergy:
    """Potential energy relative to the lowest point, kinetic energy of the bob."""
    pe = mass * gravity * length * (1.0 - math.cos(theta))
    ke = 0.5 * mass * (length * omega) ** 2
    return PendulumEnergy(potential=pe, kinetic=ke, total=pe + ke)


def calculate_pendulum_forces(
    mass: float,
    length: float,
    theta: float,
    omega: float,
    gravity: float = G_EARTH,
) -> PendulumForces:
    weight = mass * gravity
    radial = weight * math.cos(theta)
    centripetal = mass * length * omega * omega
    return PendulumForces(
        weight=weight,
        tangential=-weight * math.sin(theta),
        radial=radial,
        centripetal=centripetal,
        tension=radial + centripetal,
    )
