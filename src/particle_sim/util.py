# MIT License (see LICENSE)
"""
Utility functions for 3D vector math.

All vectors are numpy arrays of shape (3,) and dtype float64.
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Lets callers pass tuples or lists for positions, velocities and forces.
    """
    return np.array(x, dtype=np.float64)


def vec3(x) -> np.ndarray:
    """Convert to a float64 vector and check that it has three components."""
    v = f64(x)
    if v.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {v.shape}")
    return v


def zero3() -> np.ndarray:
    return np.zeros(3, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude. Avoids the sqrt."""
    return float(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 3D vector."""
    return float(np.sqrt(norm2(v)))


def readonly(v: np.ndarray) -> np.ndarray:
    """Read-only view of an array; the owner keeps the writable original."""
    view = v.view()
    view.flags.writeable = False
    return view
