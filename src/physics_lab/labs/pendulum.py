# MIT License (see LICENSE)
"""
Simple pendulum lab.

A bob on a massless rod of length L swings under gravity with linear
damping. The bob material adds pivot friction on top of the air-resistance
damping slider:

    c_eff = damping + material.friction · FRICTION_TO_DAMPING

The motion is integrated with RK4 (core.integrators.step_pendulum_rk4); the
small- and large-angle periods are shown next to it for comparison.

Coordinates: SI units, pivot at the origin, +y up. The bob sits at
(L·sin θ, -L·cos θ).
"""
from __future__ import annotations
import math
from dataclasses import asdict, dataclass, replace

import numpy as np

from ..constants import DEFAULT_HISTORY_LENGTH, G_EARTH, TRACE_HISTORY_LENGTH
from ..core.integrators import step_pendulum_rk4
from ..history import SampleHistory
from ..logging_utils import get_logger
from ..materials import FRICTION_TO_DAMPING, Material, get_material
from ..models.pendulum import (
    PendulumEnergy,
    PendulumForces,
    calculate_energy,
    calculate_ideal_period,
    calculate_large_angle_period,
    calculate_pendulum_forces,
)
from ..types import DataPoint, Frame, PendulumState
from .base import Lab

logger = get_logger(__name__)


@dataclass(frozen=True)
class PendulumParams:
    """
    Pendulum setup. Defaults match the lab's initial slider positions.

    Attributes:
        length: Rod length in meters (> 0).
        mass: Bob mass in kg (> 0).
        initial_angle_deg: Release angle in degrees.
        damping: Air-resistance coefficient in 1/s.
        material: Bob material id, see materials.MATERIALS.
        gravity: Gravitational acceleration in m/s².
    """
    length: float = 1.5
    mass: float = 1.0
    initial_angle_deg: float = 30.0
    damping: float = 0.02
    material: str = "steel"
    gravity: float = G_EARTH

    def __post_init__(self) -> None:
        if not self.length > 0:
            raise ValueError(f"Pendulum length must be positive, got {self.length}")
        if not self.mass > 0:
            raise ValueError(f"Bob mass must be positive, got {self.mass}")
        get_material(self.material)

    @property
    def bob_material(self) -> Material:
        return get_material(self.material)

    @property
    def effective_damping(self) -> float:
        return self.damping + self.bob_material.friction * FRICTION_TO_DAMPING


def step_pendulum(state: PendulumState, dt: float, params: PendulumParams) -> PendulumState:
    """Pendulum kernel: one RK4 step with the material-adjusted damping."""
    return step_pendulum_rk4(
        state.theta,
        state.omega,
        dt,
        params.length,
        params.effective_damping,
        params.gravity,
    )


class PendulumLab(Lab[PendulumState]):
    """
    Pendulum with angle/velocity log and a short trace of bob positions.

    Any parameter change resets the swing to the release angle at rest.

    Example:
        lab = PendulumLab(PendulumParams(length=2.0, initial_angle_deg=45))
        for _ in range(600):
            lab.advance(1 / 60)
        print(lab.summary())
    """
    name = "Simple Pendulum"

    def __init__(self, params: PendulumParams | None = None) -> None:
        self.params = params or PendulumParams()
        # (time, angle in degrees, angular velocity in rad/s)
        self.data: SampleHistory[DataPoint] = SampleHistory(DEFAULT_HISTORY_LENGTH)
        self.trace: SampleHistory[np.ndarray] = SampleHistory(TRACE_HISTORY_LENGTH)
        super().__init__()

    def initial_state(self) -> PendulumState:
        return PendulumState(theta=math.radians(self.params.initial_angle_deg), omega=0.0)

    def set_params(self, **changes) -> None:
        """Replace some parameters and restart the swing."""
        self.params = replace(self.params, **changes)
        logger.debug("Pendulum parameters changed: %s", changes)
        self.reset()

    def step(self, state: PendulumState, dt: float) -> PendulumState:
        return step_pendulum(state, dt, self.params)

    def record(self) -> None:
        s = self.state
        self.data.append(DataPoint(self.time, math.degrees(s.theta), s.omega))
        self.trace.append(self.bob_position())

    def on_reset(self) -> None:
        self.data.clear()
        self.trace.clear()

    # ------------------------------------------------------------------
    # Readouts
    # ------------------------------------------------------------------

    def bob_position(self) -> np.ndarray:
        theta = self.state.theta
        return np.array([self.params.length * math.sin(theta), -self.params.length * math.cos(theta)])

    def bob_radius(self) -> float:
        return self.params.bob_material.bob_radius(self.params.mass)

    def ideal_period(self) -> float:
        return calculate_ideal_period(self.params.length, self.params.gravity)

    def large_angle_period(self) -> float:
        return calculate_large_angle_period(
            self.params.length,
            self.params.gravity,
            abs(math.radians(self.params.initial_angle_deg)),
        )

    def energy(self) -> PendulumEnergy:
        s = self.state
        return calculate_energy(self.params.mass, self.params.length, s.theta, s.omega, self.params.gravity)

    def forces(self) -> PendulumForces:
        s = self.state
        return calculate_pendulum_forces(self.params.mass, self.params.length, s.theta, s.omega, self.params.gravity)

    def max_observed_speed(self) -> float:
        """Largest |ω| in the logged data, rad/s."""
        return max((abs(p.secondary_value or 0.0) for p in self.data), default=0.0)

    def snapshot(self) -> Frame:
        s = self.state
        e = self.energy()
        return Frame(
            time=self.time,
            positions=np.array([[0.0, 0.0], self.bob_position()]),
            scalars={
                "theta": s.theta,
                "omega": s.omega,
                "kinetic": e.kinetic,
                "potential": e.potential,
                "total": e.total,
                "tension": self.forces().tension,
            },
        )

    def parameters(self) -> dict[str, object]:
        return asdict(self.params)

    def summary(self) -> str:
        p = self.params
        return (
            f"Length: {p.length} m. Mass: {p.mass} kg. "
            f"Theoretical Period (Small Angle): {self.ideal_period():.3f}s. "
            f"Theoretical Period (Large Angle): {self.large_angle_period():.3f}s. "
            f"Observation: Amplitude decaying due to damping ({p.damping}). "
            f"Max Velocity observed: {self.max_observed_speed():.3f} rad/s."
        )
