# MIT License (see LICENSE)
"""
Boundary and contact impulses applied after an integration step.

- resolve_floor_contact: inelastic floor bounce of chain links plus the
  anomalous upward kick of the chain fountain (Mould effect).
- reflect_walls: specular reflection of gas particles at the container
  walls, one of which is a movable piston.
- apply_pair_bonds: short-range bond force between gas particle pairs,
  weakened by temperature (states-of-matter mode).

All routines modify their inputs in place. Screen coordinates, +y down.
"""
from __future__ import annotations

import numpy as np

from ..constants import (
    CHAIN_FLOOR_FRICTION,
    CHAIN_FLOOR_RESTITUTION,
    CHAIN_KICK_SCALE,
    GAS_BOND_REST_LENGTH,
    GAS_INTERACTION_RANGE_SQ,
)


def resolve_floor_contact(
    positions: np.ndarray,
    velocities: np.ndarray,
    floor_y: float,
    dt: float,
    kick_strength: float,
    free: np.ndarray | None = None,
    restitution: float = CHAIN_FLOOR_RESTITUTION,
    friction: float = CHAIN_FLOOR_FRICTION,
) -> np.ndarray:
    """
    Bounce chain links off the floor and apply the fountain kick.

    A link below the floor is clamped onto it, its vertical velocity is
    reflected and scaled by ``restitution`` and its horizontal velocity by
    ``friction``. If the link then moves upward (vy < 0), it receives an
    extra upward velocity of ``kick_strength · 10 · dt``. The kick stands in
    for the reaction force a rigid bead pair gets from the floor when it is
    picked up; it is injected directly rather than derived.

    Args:
        positions: [N, 2] link positions (modified in place).
        velocities: [N, 2] link velocities (modified in place).
        floor_y: y of the floor (+y down).
        dt: Timestep in seconds.
        kick_strength: Floor kick slider value.
        free: Optional [N] bool mask; links outside it are anchors and
              never touched.

    Returns:
        [N] bool mask of the links that touched the floor this step.
    """
    hit = positions[:, 1] > floor_y
    if free is not None:
        hit &= free
    if not np.any(hit):
        return hit

    positions[hit, 1] = floor_y
    velocities[hit, 1] *= -restitution
    velocities[hit, 0] *= friction
    kicked = hit & (velocities[:, 1] < 0)
    velocities[kicked, 1] -= kick_strength * CHAIN_KICK_SCALE * dt
    return hit


def reflect_walls(
    positions: np.ndarray,
    velocities: np.ndarray,
    radius: float,
    wall_x: float,
    height: float,
) -> float:
    """
    Keep particles inside [radius, wall_x - radius] × [radius, height - radius].

    Any particle past a wall is clamped back onto it and its velocity
    component normal to that wall is pointed inward. Using abs() rather
    than a sign flip keeps a particle that is already moving inward from
    being turned back out.

    Args:
        positions: [N, 2] particle centers (modified in place).
        velocities: [N, 2] particle velocities (modified in place).
        radius: Particle radius.
        wall_x: x position of the piston (right wall).
        height: Container height.

    Returns:
        Sum of |normal velocity| over all wall hits, the raw pressure sample.
    """
    impulse = 0.0
    bounds = ((radius, wall_x - radius), (radius, height - radius))
    for axis, (lo, hi) in enumerate(bounds):
        coord = positions[:, axis]
        vel = velocities[:, axis]

        low = coord < lo
        if np.any(low):
            coord[low] = lo
            vel[low] = np.abs(vel[low])
            impulse += float(np.sum(vel[low]))

        high = coord > hi
        if np.any(high):
            coord[high] = hi
            vel[high] = -np.abs(vel[high])
            impulse += float(np.sum(-vel[high]))
    return impulse


def bond_strength(temperature: float) -> float:
    """Intermolecular bond strength, weaker at higher temperature: 1000 / (T + 100)."""
    return 1000.0 / (temperature + 100.0)


def apply_pair_bonds(
    positions: np.ndarray,
    velocities: np.ndarray,
    temperature: float,
    scale: float = 1.0,
) -> None:
    """
    Apply the short-range bond force to every particle pair in range.

    For pairs with 0 < d² < 1600 the force along the pair axis is

        F = (d - 20) · 0.01 · bond_strength(T)

    attractive beyond the rest length of 20 and repulsive inside it. The
    force goes straight into both velocities with opposite signs (Newton's
    third law), so total momentum is unchanged.

    Cost is O(N²) for the distance test, done on separate N×N dx and dy
    matrices over the upper triangle; forces are formed only for the pairs
    in range.

    Args:
        positions: [N, 2] particle centers.
        velocities: [N, 2] velocities (modified in place).
        temperature: Temperature in K.
        scale: Multiplier for frame rates other than the reference one.
    """
    n = len(positions)
    if n < 2:
        return

    x, y = positions[:, 0], positions[:, 1]
    # dx[i, j] = x_i - x_j
    dx = np.subtract.outer(x, x)
    dy = np.subtract.outer(y, y)
    dist_sq = dx * dx + dy * dy
    in_range = np.triu((dist_sq > 0.0) & (dist_sq < GAS_INTERACTION_RANGE_SQ), k=1)
    i, j = np.nonzero(in_range)
    if i.size == 0:
        return

    pair_dx, pair_dy = dx[i, j], dy[i, j]
    dist = np.sqrt(dist_sq[i, j])
    k = (dist - GAS_BOND_REST_LENGTH) * 0.01 * bond_strength(temperature) * scale / dist
    # Force on i points along p_j - p_i, its opposite goes to j.
    forces = np.stack([pair_dx * k, pair_dy * k], axis=1)
    np.add.at(velocities, i, -forces)
    np.add.at(velocities, j, forces)
