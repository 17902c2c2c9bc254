# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric operations.

All vector helpers operate on 2D vectors represented as numpy arrays of
shape (2,) or on stacks of them with shape (N, 2).
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """Convert any array-like to a float64 numpy array (always a copy)."""
    return np.array(x, dtype=np.float64)


def row_norms(v: np.ndarray) -> np.ndarray:
    """Magnitude of every row of an (N, 2) array."""
    return np.sqrt(np.einsum("ij,ij->i", v, v))

