# MIT License (see LICENSE)
"""
Particle gas lab: ideal gas, states of matter, friction heating.

N disks bounce inside a box whose right wall is a piston. Per frame:

    1. Thermostat: every particle's speed is nudged toward √T·0.3
       (skipped in friction-heat mode, where energy only enters through
       inject_heat).
    2. Translation: x += v·s, with s = dt / (1/60).
    3. Walls: reflect and clamp; the summed |v⊥| of the hits is the raw
       pressure sample.
    4. States-of-matter mode only: short-range pair bonds whose strength
       falls with temperature, so the gas condenses when cold and boils
       when hot.
    5. Pressure readout: exponential smoothing of the raw sample, both
       taken per reference frame.

Velocities are in pixels per reference frame (1/60 s), the unit the rates
were tuned in. ``s`` scales them to the actual frame time so the gas runs
at the same speed at any frame rate.

All state is held in [N, 2] numpy arrays; GasParticle views with colors
are only built for rendering.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum

import numpy as np

from ..collision.boundaries import apply_pair_bonds, reflect_walls
from ..constants import (
    DEFAULT_HISTORY_LENGTH,
    GAS_PRESSURE_SMOOTHING,
    GAS_SEED_SPEED_SCALE,
    GAS_TARGET_SPEED_SCALE,
    GAS_THERMOSTAT_RATE,
    REFERENCE_FRAME_DT,
)
from ..core.invariants import gas_kinetic_energy, mean_speed
from ..history import SampleHistory
from ..logging_utils import get_logger
from ..types import DataPoint, Frame, GasParticle
from ..util import row_norms
from .base import Lab

logger = get_logger(__name__)

# Speed band upper limits and their colors: cold, medium, hot, very hot.
SPEED_BAND_LIMITS: tuple[float, ...] = (1.0, 3.0, 5.0)
SPEED_COLORS: tuple[str, ...] = ("#3b82f6", "#10b981", "#f59e0b", "#ef4444")

# Container volume shown in liters at 100 % piston position.
FULL_VOLUME_LITERS: float = 5.0


class GasMode(str, Enum):
    GAS = "gas"
    STATES = "states"
    FRICTION_HEAT = "friction_heat"


@dataclass(frozen=True)
class GasParams:
    """
    Gas lab setup.

    Attributes:
        mode: Simulation mode; a plain string is converted with GasMode().
        temperature: Thermostat temperature in K (≥ 0).
        volume: Piston position as a percentage of the width, (0, 100].
        particle_count: Number of particles; defaults to 100 in gas mode
                        and 200 otherwise.
        width: Container width in pixels.
        height: Container height in pixels.
        seed: Seed for particle placement; None for a random layout.

    Raises:
        ValueError: For an unknown mode or out-of-range values.
    """
    mode: GasMode = GasMode.GAS
    temperature: float = 300.0
    volume: float = 50.0
    particle_count: int | None = None
    width: float = 800.0
    height: float = 500.0
    seed: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", GasMode(self.mode))
        if self.particle_count is None:
            object.__setattr__(self, "particle_count", 100 if self.mode is GasMode.GAS else 200)
        if self.temperature < 0:
            raise ValueError(f"Temperature must be non-negative, got {self.temperature}")
        if not 0 < self.volume <= 100:
            raise ValueError(f"Volume must lie in (0, 100], got {self.volume}")
        if self.particle_count < 0:
            raise ValueError(f"Particle count must be non-negative, got {self.particle_count}")

    @property
    def radius(self) -> float:
        """Particle radius: larger molecules in states-of-matter mode."""
        return 4.0 if self.mode is GasMode.STATES else 2.0

    @property
    def target_speed(self) -> float:
        return float(np.sqrt(self.temperature)) * GAS_TARGET_SPEED_SCALE

    def piston_x(self) -> float:
        """x of the piston, never closer to the left wall than one particle diameter."""
        return max(self.volume / 100.0 * self.width, 2.0 * self.radius)


@dataclass
class GasState:
    """
    Attributes:
        positions: [N, 2] particle centers in pixels.
        velocities: [N, 2] velocities in pixels per reference frame.
        radius: Shared particle radius.
        pressure: Smoothed pressure readout.
    """
    positions: np.ndarray
    velocities: np.ndarray
    radius: float
    pressure: float = 0.0

    def __len__(self) -> int:
        return len(self.positions)

    def copy(self) -> GasState:
        return GasState(self.positions.copy(), self.velocities.copy(), self.radius, self.pressure)


def seed_gas(params: GasParams, rng: np.random.Generator | None = None) -> GasState:
    """
    Place particles uniformly inside the piston region with velocity
    components (U - 0.5)·√T·0.2.
    """
    rng = rng if rng is not None else np.random.default_rng()
    n = params.particle_count
    r = params.radius
    lo = np.array([r, r])
    hi = np.array([max(params.piston_x() - r, r), max(params.height - r, r)])
    positions = lo + rng.random((n, 2)) * (hi - lo)
    speed_base = float(np.sqrt(params.temperature)) * GAS_SEED_SPEED_SCALE
    velocities = (rng.random((n, 2)) - 0.5) * speed_base
    return GasState(positions=positions, velocities=velocities, radius=r)


def apply_thermostat(velocities: np.ndarray, target_speed: float, rate: float) -> np.ndarray:
    """
    Nudge every speed toward ``target_speed``, keeping directions.

        v += v/|v| · (target - |v|) · rate

    A particle at rest has no direction to scale along and is left as is.
    """
    out = velocities.copy()
    speeds = row_norms(out)
    moving = speeds > 0.0
    factor = 1.0 + (target_speed - speeds[moving]) / speeds[moving] * rate
    out[moving] *= factor[:, np.newaxis]
    return out


def step_gas(state: GasState, dt: float, params: GasParams) -> GasState:
    """
    Advance the gas by one frame of ``dt`` seconds. Returns a new state.
    """
    scale = dt / REFERENCE_FRAME_DT
    positions = state.positions.copy()
    velocities = state.velocities

    if params.mode is not GasMode.FRICTION_HEAT:
        rate = min(GAS_THERMOSTAT_RATE * scale, 1.0)
        velocities = apply_thermostat(velocities, params.target_speed, rate)
    else:
        velocities = velocities.copy()

    positions += velocities * scale
    impulse = reflect_walls(positions, velocities, state.radius, params.piston_x(), params.height)

    if params.mode is GasMode.STATES:
        apply_pair_bonds(positions, velocities, params.temperature, scale)

    pressure = state.pressure
    if scale > 0.0:
        # Per reference frame: the sample is normalised and the smoothing
        # compounded, so the readout does not depend on the frame rate.
        keep = GAS_PRESSURE_SMOOTHING ** scale
        pressure = pressure * keep + (impulse / scale) * (1.0 - keep)
    return GasState(positions=positions, velocities=velocities, radius=state.radius, pressure=pressure)


def inject_heat(state: GasState, factor: float) -> GasState:
    """
    Scale all velocities by ``factor`` (work done by friction).

    Raises:
        ValueError: If factor is negative.
    """
    if factor < 0:
        raise ValueError(f"Heat factor must be non-negative, got {factor}")
    out = state.copy()
    out.velocities *= factor
    return out


def volume_liters(volume: float) -> float:
    """Piston percentage to the displayed volume: volume/100 · 5 L."""
    return volume / 100.0 * FULL_VOLUME_LITERS


def speed_color(speed: float) -> str:
    for limit, color in zip(SPEED_BAND_LIMITS, SPEED_COLORS):
        if speed < limit:
            return color
    return SPEED_COLORS[-1]


def speed_bands(velocities: np.ndarray) -> np.ndarray:
    """Band index 0-3 (cold to very hot) of every particle."""
    return np.digitize(row_norms(velocities), SPEED_BAND_LIMITS)


def particle_views(state: GasState) -> list[GasParticle]:
    bands = speed_bands(state.velocities)
    return [
        GasParticle(x=p[0], y=p[1], vx=v[0], vy=v[1], radius=state.radius, color=SPEED_COLORS[b])
        for p, v, b in zip(state.positions.tolist(), state.velocities.tolist(), bands.tolist())
    ]


class ThermodynamicsLab(Lab[GasState]):
    """
    Gas in a piston box.

    Changing the mode or the particle count re-seeds the gas; temperature
    and volume changes act on the running gas.
    """
    name = "Thermodynamics Lab"

    def __init__(self, params: GasParams | None = None) -> None:
        self.params = params or GasParams()
        self.pressure_log: SampleHistory[DataPoint] = SampleHistory(DEFAULT_HISTORY_LENGTH)
        super().__init__()

    def initial_state(self) -> GasState:
        return seed_gas(self.params, np.random.default_rng(self.params.seed))

    def set_params(self, **changes) -> None:
        old = self.params
        if "mode" in changes and "particle_count" not in changes and GasMode(changes["mode"]) is not old.mode:
            # Let the new mode pick its default count.
            changes["particle_count"] = None
        self.params = replace(self.params, **changes)
        if self.params.mode is not old.mode or self.params.particle_count != old.particle_count:
            logger.debug("Re-seeding %d particles in %s mode", self.params.particle_count, self.params.mode.value)
            self.reset()

    def step(self, state: GasState, dt: float) -> GasState:
        return step_gas(state, dt, self.params)

    def heat(self, factor: float = 1.05) -> None:
        """Rub the container: scale every particle velocity by ``factor``."""
        self.cell.set(inject_heat(self.state, factor))

    def record(self) -> None:
        self.pressure_log.append(DataPoint(self.time, self.state.pressure, self.temperature_readout()))

    def on_reset(self) -> None:
        self.pressure_log.clear()

    def temperature_readout(self) -> float:
        """Temperature implied by the current mean speed (inverse of the thermostat target)."""
        v = mean_speed(self.state.velocities) / GAS_TARGET_SPEED_SCALE
        return v * v

    def particles(self) -> list[GasParticle]:
        return particle_views(self.state)

    def snapshot(self) -> Frame:
        s = self.state
        return Frame(
            time=self.time,
            positions=s.positions,
            scalars={
                "pressure": s.pressure,
                "kinetic_energy": gas_kinetic_energy(s.velocities),
                "mean_speed": mean_speed(s.velocities),
                "piston_x": self.params.piston_x(),
                "volume_liters": volume_liters(self.params.volume),
            },
        )

    def parameters(self) -> dict[str, object]:
        p = self.params
        return {"mode": p.mode.value, "temperature": p.temperature, "volume": p.volume}

    def summary(self) -> str:
        p = self.params
        return (
            f"Thermodynamics ({p.mode.value}): Temp={p.temperature:g}K, Volume={p.volume:g}%, "
            f"Particles={p.particle_count}, Pressure={self.state.pressure:.1f} units"
        )
