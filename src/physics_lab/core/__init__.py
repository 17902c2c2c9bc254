# MIT License (see LICENSE)
"""
Core numerical components.

This subpackage provides:
    - Integrators: RK4 for the pendulum, semi-implicit Euler for the chain.
    - Invariants: energy, link spacing and kinetic-energy diagnostics.

Typical usage:
    from physics_lab.core import step_pendulum_rk4

    state = step_pendulum_rk4(theta, omega, dt=1/60, length=1.5, damping=0.02)
"""
from .integrators import pendulum_acceleration, semi_implicit_euler_step, step_pendulum_rk4
from .invariants import gas_kinetic_energy, link_distances, mean_speed, pendulum_energy

__all__ = [
    # Integrators
    "pendulum_acceleration",
    "step_pendulum_rk4",
    "semi_implicit_euler_step",
    # Invariants
    "pendulum_energy",
    "link_distances",
    "gas_kinetic_energy",
    "mean_speed",
]
