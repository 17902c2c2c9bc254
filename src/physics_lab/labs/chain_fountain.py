# MIT License (see LICENSE)
"""
Chain fountain (Mould effect) lab.

A bead chain piled in a beaker is pulled over the rim and falls to the
floor. Past a critical speed the chain rises in an arch above the beaker
instead of sliding over the edge.

Each step has two phases:
    1. Every free link falls under gravity (semi-implicit Euler) and is
       resolved against the floor, receiving the upward kick when it
       leaves the floor.
    2. Adjacent links are relaxed toward their rest distance.

Position corrections from phase 2 are fed back into the velocities
(v += Δx/dt), so a chain held up by its constraints does not keep
accumulating downward velocity. Links pulled back under the floor by
relaxation are clamped onto it again.

Coordinates: canvas pixels, +y down, the floor at y = container_height.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, replace

import numpy as np

from ..collision.boundaries import resolve_floor_contact
from ..constants import (
    CHAIN_GRAVITY,
    CHAIN_LINK_DIST,
    CHAIN_MAX_SUBSTEP,
    CHAIN_RELAX_ITERATIONS,
    DEFAULT_HISTORY_LENGTH,
)
from ..constraints.solver import mean_link_deviation, relax_distance_constraints
from ..core.integrators import semi_implicit_euler_step
from ..history import SampleHistory
from ..logging_utils import get_logger
from ..types import ChainLink, DataPoint, Frame
from .base import Lab

logger = get_logger(__name__)

# Beaker geometry (pixels). The rim is 150 px above the floor.
BEAKER_RIM_Y: float = 250.0
PILE_ORIGIN: tuple[float, float] = (100.0, 350.0)
# Links draped over the rim at the start to get the flow going.
DRAPED_LINKS: int = 10


def link_positions(links: list[ChainLink]) -> np.ndarray:
    """[N, 2] array of link positions."""
    if not links:
        return np.zeros((0, 2), dtype=np.float64)
    return np.array([link.position for link in links])


def step_chain_fountain(
    links: list[ChainLink],
    dt: float,
    kick_strength: float,
    container_height: float,
    link_dist: float = CHAIN_LINK_DIST,
    gravity: float = CHAIN_GRAVITY,
    iterations: int = CHAIN_RELAX_ITERATIONS,
) -> list[ChainLink]:
    """
    Advance the chain by one step.

    Args:
        links: Current chain, consecutive links connected. Not modified.
        dt: Timestep in seconds.
        kick_strength: Floor kick slider value (0-50).
        container_height: y of the floor in pixels.
        link_dist: Rest distance between neighbors in pixels.
        gravity: Downward acceleration in px/s².
        iterations: Relaxation passes per step.

    Returns:
        A new list of links. Fixed links are returned unchanged.
    """
    if not links:
        return []
    positions = link_positions(links)
    velocities = np.array([link.velocity for link in links])
    fixed = np.array([link.is_fixed for link in links])
    free = ~fixed

    positions[free], velocities[free] = semi_implicit_euler_step(
        positions[free], velocities[free], np.array([0.0, gravity]), dt
    )
    resolve_floor_contact(positions, velocities, container_height, dt, kick_strength, free=free)

    corrections = relax_distance_constraints(positions, link_dist, iterations, fixed=fixed)
    if dt > 0:
        velocities[free] += corrections[free] / dt
    # Relaxation can pull a link back under the floor; the floor wins.
    below = free & (positions[:, 1] > container_height)
    positions[below, 1] = container_height

    return [ChainLink(p, v, f) for p, v, f in zip(positions, velocities, fixed.tolist())]


def create_chain(count: int, rng: np.random.Generator | None = None) -> list[ChainLink]:
    """
    Build the starting chain: a loose pile in the beaker with its first
    links draped over the rim.

    Raises:
        ValueError: If count < 1.
    """
    if count < 1:
        raise ValueError(f"Chain needs at least one link, got {count}")
    rng = rng if rng is not None else np.random.default_rng()

    x0, y0 = PILE_ORIGIN
    xs = x0 + rng.random(count) * 20.0
    ys = y0 - (np.arange(count) % 10) * 5.0
    for i in range(min(DRAPED_LINKS, count)):
        xs[i] = 150.0 + i * 10.0
        ys[i] = 350.0 - i * 20.0
        if i > 5:
            ys[i] += (i - 5) * 30.0
    return [ChainLink((x, y)) for x, y in zip(xs, ys)]


def fountain_height(links: list[ChainLink], container_height: float) -> float:
    """Height of the highest link above the floor, in pixels (0 for no links)."""
    if not links:
        return 0.0
    top = float(link_positions(links)[:, 1].min())
    return max(container_height - top, 0.0)


@dataclass(frozen=True)
class ChainParams:
    """
    Attributes:
        kick_strength: Floor kick, 0-50 on the slider.
        chain_length: Number of links, 50-200 on the slider.
        container_height: Floor y in pixels.
        link_dist: Rest distance between links in pixels (> 0).
        gravity: px/s².
        iterations: Relaxation passes per step.
        seed: Seed of the pile layout; None for a fresh random pile.
    """
    kick_strength: float = 15.0
    chain_length: int = 100
    container_height: float = 400.0
    link_dist: float = CHAIN_LINK_DIST
    gravity: float = CHAIN_GRAVITY
    iterations: int = CHAIN_RELAX_ITERATIONS
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.chain_length < 1:
            raise ValueError(f"Chain length must be at least 1, got {self.chain_length}")
        if not self.link_dist > 0:
            raise ValueError(f"Link distance must be positive, got {self.link_dist}")


class ChainFountainLab(Lab[list[ChainLink]]):
    """
    Chain fountain with a log of the fountain height.

    Frames longer than CHAIN_MAX_SUBSTEP are split into equal substeps, so
    the chain behaves the same at any frame rate.
    """
    name = "Chain Fountain"

    def __init__(self, params: ChainParams | None = None) -> None:
        self.params = params or ChainParams()
        self.heights: SampleHistory[DataPoint] = SampleHistory(DEFAULT_HISTORY_LENGTH)
        self.peak_height = 0.0
        super().__init__()

    def initial_state(self) -> list[ChainLink]:
        return create_chain(self.params.chain_length, np.random.default_rng(self.params.seed))

    def set_params(self, **changes) -> None:
        """Replace some parameters. Changing the chain length rebuilds the pile."""
        self.params = replace(self.params, **changes)
        if "chain_length" in changes or "seed" in changes:
            logger.debug("Rebuilding chain with %d links", self.params.chain_length)
            self.reset()

    def step(self, state: list[ChainLink], dt: float) -> list[ChainLink]:
        p = self.params
        substeps = max(1, math.ceil(dt / CHAIN_MAX_SUBSTEP - 1e-9))
        h = dt / substeps
        links = state
        for _ in range(substeps):
            links = step_chain_fountain(
                links,
                h,
                p.kick_strength,
                p.container_height,
                link_dist=p.link_dist,
                gravity=p.gravity,
                iterations=p.iterations,
            )
        return links

    def record(self) -> None:
        height = self.fountain_height()
        self.peak_height = max(self.peak_height, height)
        self.heights.append(DataPoint(self.time, height))

    def on_reset(self) -> None:
        self.heights.clear()
        self.peak_height = 0.0

    def fountain_height(self) -> float:
        return fountain_height(self.state, self.params.container_height)

    def mean_deviation(self) -> float:
        return mean_link_deviation(link_positions(self.state), self.params.link_dist)

    def snapshot(self) -> Frame:
        return Frame(
            time=self.time,
            positions=link_positions(self.state),
            scalars={
                "fountain_height": self.fountain_height(),
                "mean_deviation": self.mean_deviation(),
            },
        )

    def parameters(self) -> dict[str, object]:
        return {"kick_strength": self.params.kick_strength, "chain_length": self.params.chain_length}

    def summary(self) -> str:
        rim_height = self.params.container_height - BEAKER_RIM_Y
        relation = "above" if self.peak_height > rim_height else "below"
        return (
            f"Mould Effect: Kick Strength={self.params.kick_strength}, "
            f"Chain Length={self.params.chain_length}, "
            f"Peak fountain height {self.peak_height:.0f}px, {relation} the container rim ({rim_height:.0f}px)."
        )
