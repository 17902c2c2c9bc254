# MIT License (see LICENSE)
"""
Contact and boundary handling.

    - resolve_floor_contact: chain link floor bounce and fountain kick.
    - reflect_walls: gas particles against the container and piston.
    - apply_pair_bonds: temperature-dependent bonds between gas particles.
"""
from .boundaries import apply_pair_bonds, bond_strength, reflect_walls, resolve_floor_contact

__all__ = [
    "resolve_floor_contact",
    "reflect_walls",
    "bond_strength",
    "apply_pair_bonds",
]
