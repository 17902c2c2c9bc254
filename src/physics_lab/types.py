# MIT License (see LICENSE)
"""
Core type definitions for the physics labs.

Defines the state carried between animation frames:
- PendulumState: angle and angular velocity of the pendulum lab.
- ChainLink: one bead of the chain fountain.
- GasParticle: render view of one particle of the gas lab.
- BlackHole: a body of the merger lab (user-editable before a run).
- GravitationalWaveSample / DataPoint: logged, append-only samples.
- Frame: the snapshot handed to a render sink.

Screen-space labs (chain, gas) use canvas pixels with +y pointing down.
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .util import f64


# =============================================================================
# Pendulum
# =============================================================================

@dataclass(frozen=True)
class PendulumState:
    """
    Pendulum phase-space point.

    Attributes:
        theta: Angle from the downward vertical in radians. Not wrapped, so a
               pendulum that loops over the top keeps accumulating angle.
        omega: Angular velocity in rad/s.
    """
    theta: float
    omega: float = 0.0


# =============================================================================
# Chain fountain
# =============================================================================

@dataclass
class ChainLink:
    """
    A point mass of the bead chain.

    Adjacent links are held at a fixed rest distance by the constraint
    solver. Fixed links are anchors and are never moved by integration,
    collision or relaxation.

    Attributes:
        position: [x, y] in pixels (y down).
        velocity: [vx, vy] in pixels/s.
        is_fixed: Anchor flag.
    """
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    is_fixed: bool = False

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def vx(self) -> float:
        return float(self.velocity[0])

    @property
    def vy(self) -> float:
        return float(self.velocity[1])

    def copy(self) -> ChainLink:
        return ChainLink(self.position, self.velocity, self.is_fixed)


# =============================================================================
# Gas
# =============================================================================

@dataclass(frozen=True)
class GasParticle:
    """
    Render view of one gas particle.

    The gas lab keeps its state in flat numpy arrays; these views are built
    on demand. ``color`` is derived from the instantaneous speed and carries
    no state of its own.
    """
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    color: str

    @property
    def speed(self) -> float:
        return float(np.hypot(self.vx, self.vy))


# =============================================================================
# Black hole merger
# =============================================================================

@dataclass(frozen=True)
class BlackHole:
    """
    A black hole of the merger lab.

    Attributes:
        mass: Mass in solar masses (> 0).
        spin: Dimensionless spin, 0 ≤ spin ≤ 0.99.
        spin_tilt_deg: Tilt of the spin axis against the orbital axis,
                       0° (aligned) to 90°.
        initial_angle: Starting orbital phase in radians.

    Raises:
        ValueError: If any attribute is outside its range.
    """
    mass: float = 30.0
    spin: float = 0.0
    spin_tilt_deg: float = 0.0
    initial_angle: float = 0.0

    def __post_init__(self) -> None:
        if not self.mass > 0:
            raise ValueError(f"Black hole mass must be positive, got {self.mass}")
        if not 0.0 <= self.spin <= 0.99:
            raise ValueError(f"Spin must lie in [0, 0.99], got {self.spin}")
        if not 0.0 <= self.spin_tilt_deg <= 90.0:
            raise ValueError(f"Spin tilt must lie in [0, 90] degrees, got {self.spin_tilt_deg}")


@dataclass(frozen=True)
class GravitationalWaveSample:
    """Strain value at a simulation time. Derived, never edited."""
    time: float
    strain: float


# =============================================================================
# Logging / rendering
# =============================================================================

@dataclass(frozen=True)
class DataPoint:
    """Generic logged sample (angle, voltage, ...) with an optional second channel."""
    time: float
    value: float
    secondary_value: float | None = None


@dataclass
class Frame:
    """
    Snapshot consumed by a render sink.

    Attributes:
        time: Simulation time in seconds.
        positions: [N, 2] array of drawable points.
        scalars: Named readouts (energy, pressure, strain, ...).
    """
    time: float
    positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 2), dtype=np.float64))
    scalars: dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.positions = f64(self.positions).reshape(-1, 2)
