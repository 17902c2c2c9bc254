# MIT License (see LICENSE)
"""
Black hole merger lab.

Two or three black holes spiral together over a fixed merger time while a
detector records the gravitational-wave chirp. After the merger the remnant
rings down for RINGDOWN_DURATION seconds and the lab stops itself.
"""
from __future__ import annotations
from typing import Sequence

import numpy as np

from ..constants import DEFAULT_HISTORY_LENGTH, RINGDOWN_DURATION
from ..history import SampleHistory
from ..logging_utils import get_logger
from ..models.gravitational_waves import (
    MergerRemnant,
    calculate_gravitational_wave_strain,
    effective_merger_time,
    merger_remnant,
    orbital_positions,
    spin_alignment,
    validate_bodies,
)
from ..types import BlackHole, Frame, GravitationalWaveSample
from .base import Lab

logger = get_logger(__name__)

DEFAULT_MERGER_TIME: float = 10.0


def default_bodies() -> list[BlackHole]:
    return [BlackHole(mass=30.0), BlackHole(mass=30.0)]


class BlackHoleLab(Lab[GravitationalWaveSample]):
    """
    Merger of 1-3 black holes.

    The lab state is the latest detector sample; every step appends it to
    the strain history.

    Args:
        bodies: The black holes; two 30 M☉ non-spinning holes by default.
        merger_time: Merger time of non-spinning bodies in seconds.

    Raises:
        ValueError: Unless 1-3 bodies are given and merger_time > 0.
    """
    name = "Black Hole Merger"

    def __init__(
        self,
        bodies: Sequence[BlackHole] | None = None,
        merger_time: float = DEFAULT_MERGER_TIME,
    ) -> None:
        bodies = list(bodies) if bodies is not None else default_bodies()
        validate_bodies(bodies)
        if not merger_time > 0:
            raise ValueError(f"Merger time must be positive, got {merger_time}")
        self.bodies = bodies
        self.merger_time = merger_time
        self.strain: SampleHistory[GravitationalWaveSample] = SampleHistory(DEFAULT_HISTORY_LENGTH)
        super().__init__()

    @property
    def alignment(self) -> float:
        return spin_alignment(self.bodies)

    @property
    def t_merge(self) -> float:
        return effective_merger_time(self.merger_time, self.bodies, self.alignment)

    @property
    def merged(self) -> bool:
        return self.time >= self.t_merge

    @property
    def finished(self) -> bool:
        return self.time > self.t_merge + RINGDOWN_DURATION

    def set_bodies(self, bodies: Sequence[BlackHole]) -> None:
        bodies = list(bodies)
        validate_bodies(bodies)
        self.bodies = bodies
        logger.debug("Merger bodies changed: %d bodies, masses %s", len(bodies), [b.mass for b in bodies])
        self.reset()

    def strain_at(self, time: float) -> float:
        return calculate_gravitational_wave_strain(time, self.bodies, self.merger_time, self.alignment)

    def initial_state(self) -> GravitationalWaveSample:
        return GravitationalWaveSample(time=0.0, strain=self.strain_at(0.0))

    def step(self, state: GravitationalWaveSample, dt: float) -> GravitationalWaveSample:
        t = state.time + dt
        return GravitationalWaveSample(time=t, strain=self.strain_at(t))

    def record(self) -> None:
        self.strain.append(self.state)

    def on_reset(self) -> None:
        self.strain.clear()

    def remnant(self) -> MergerRemnant:
        return merger_remnant(self.bodies)

    def positions(self) -> np.ndarray:
        return orbital_positions(self.time, self.bodies, self.merger_time, self.alignment)

    def peak_strain(self) -> float:
        return max((abs(s.strain) for s in self.strain), default=0.0)

    def snapshot(self) -> Frame:
        scalars = {
            "strain": self.state.strain,
            "time_to_merger": max(self.t_merge - self.time, 0.0),
        }
        if self.merged:
            r = self.remnant()
            scalars["remnant_mass"] = r.mass
            scalars["kick_velocity"] = r.kick_velocity_km_s
        return Frame(time=self.time, positions=self.positions(), scalars=scalars)

    def parameters(self) -> dict[str, object]:
        return {
            "masses": [b.mass for b in self.bodies],
            "spins": [b.spin for b in self.bodies],
            "spin_tilts": [b.spin_tilt_deg for b in self.bodies],
            "merger_time": self.merger_time,
        }

    def summary(self) -> str:
        masses = ", ".join(f"{b.mass:g}" for b in self.bodies)
        text = (
            f"Black Hole Merger: Masses=[{masses}] solar masses, "
            f"Merger at t={self.t_merge:.2f}s, Peak strain={self.peak_strain():.3e}"
        )
        if self.merged and len(self.bodies) > 1:
            r = self.remnant()
            text += (
                f", Remnant mass={r.mass:.1f}, Recoil={r.kick_velocity_km_s:.0f} km/s, "
                "Energy radiated via Gravitational Waves."
            )
        else:
            text += ", Chirp Signal Observed."
        return text
