# MIT License (see LICENSE)
"""
Constraint solvers.

Currently provides fixed-distance relaxation for chains of point masses.
"""
from .solver import max_link_deviation, mean_link_deviation, relax_distance_constraints

__all__ = [
    "relax_distance_constraints",
    "mean_link_deviation",
    "max_link_deviation",
]
