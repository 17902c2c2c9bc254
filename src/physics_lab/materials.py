# MIT License (see LICENSE)
"""
Bob materials for the pendulum lab.

A material sets the bob density (and therefore its drawn size for a given
mass) and a friction coefficient that adds to the air-resistance damping.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Material:
    """
    Physical properties of a pendulum bob.

    Attributes:
        id: Lookup key.
        name: Display name.
        density: kg/m³.
        friction: Simplified pivot/material friction coefficient. It is
                  scaled by ``FRICTION_TO_DAMPING`` and added to the damping
                  coefficient of the equation of motion.
    """
    id: str
    name: str
    density: float
    friction: float

    def bob_radius(self, mass: float) -> float:
        """Radius in meters of a solid sphere of this material and ``mass``."""
        return float(np.cbrt(3.0 * mass / (4.0 * np.pi * self.density)))


FRICTION_TO_DAMPING: float = 5.0

MATERIALS: dict[str, Material] = {
    "steel": Material("steel", "Steel", density=7850.0, friction=0.002),
    "wood": Material("wood", "Wood", density=700.0, friction=0.01),
    "gold": Material("gold", "Gold", density=19300.0, friction=0.002),
}


def get_material(material_id: str) -> Material:
    """
    Look up a material by id.

    Raises:
        ValueError: If the id is unknown.
    """
    try:
        return MATERIALS[material_id]
    except KeyError:
        raise ValueError(
            f"Unknown material: {material_id!r} (expected one of {sorted(MATERIALS)})"
        ) from None
