# MIT License (see LICENSE)
"""
Numerical integrators used by the labs.

- step_pendulum_rk4: classical 4th-order Runge-Kutta for the damped,
  nonlinear pendulum θ'' = -(g/L)·sin θ - c·θ'.
- semi_implicit_euler_step: velocity first, then position with the new
  velocity. First order, but stable enough for the chain links whose
  geometry is restored by the constraint solver every frame anyway.

None of the integrators adapt their step size. Callers clamp dt before
stepping (see animation.clock.FrameClock); a NaN or negative dt is a
precondition violation and is not checked here.

Reference:
    Runge-Kutta methods: https://en.wikipedia.org/wiki/Runge-Kutta_methods
    Semi-implicit Euler: https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations
import math

import numpy as np

from ..constants import G_EARTH
from ..types import PendulumState


def pendulum_acceleration(
    theta: float,
    omega: float,
    length: float,
    damping: float,
    gravity: float = G_EARTH,
) -> float:
    """
    Angular acceleration of a damped pendulum.

    The damping coefficient lumps air resistance and pivot friction
    together; both act linearly on ω.
    """
    return -(gravity / length) * math.sin(theta) - damping * omega


def step_pendulum_rk4(
    theta: float,
    omega: float,
    dt: float,
    length: float,
    damping: float,
    gravity: float = G_EARTH,
) -> PendulumState:
    """
    Advance the pendulum by dt using classical RK4.

    Stages k1..k4 evaluate (θ', ω') at the start, twice at the midpoint and
    at the end of the step, and are combined with weights (1, 2, 2, 1)/6 for
    O(dt⁵) local error. With damping = 0 the energy is not exactly
    conserved, but the drift stays small over long runs at frame-rate steps.

    Args:
        theta: Angle in radians (unbounded).
        omega: Angular velocity in rad/s.
        dt: Timestep in seconds, already clamped by the caller.
        length: Pendulum length in meters.
        damping: Linear damping coefficient in 1/s.
        gravity: Gravitational acceleration in m/s².

    Returns:
        The new PendulumState.
    """
    def accel(th: float, w: float) -> float:
        return pendulum_acceleration(th, w, length, damping, gravity)

    k1x = omega
    k1v = accel(theta, omega)

    k2x = omega + 0.5 * dt * k1v
    k2v = accel(theta + 0.5 * dt * k1x, k2x)

    k3x = omega + 0.5 * dt * k2v
    k3v = accel(theta + 0.5 * dt * k2x, k3x)

    k4x = omega + dt * k3v
    k4v = accel(theta + dt * k3x, k4x)

    return PendulumState(
        theta=theta + (dt / 6.0) * (k1x + 2 * k2x + 2 * k3x + k4x),
        omega=omega + (dt / 6.0) * (k1v + 2 * k2v + 2 * k3v + k4v),
    )


def semi_implicit_euler_step(
    position: np.ndarray,
    velocity: np.ndarray,
    acceleration: np.ndarray,
    dt: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    One semi-implicit (symplectic) Euler step.

        v(t+dt) = v(t) + a·dt
        x(t+dt) = x(t) + v(t+dt)·dt

    Returns new arrays; the inputs are not modified.
    """
    new_velocity = velocity + acceleration * dt
    return position + new_velocity * dt, new_velocity
