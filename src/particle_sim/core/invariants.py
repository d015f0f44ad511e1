# MIT License (see LICENSE)
"""
Conserved quantities of a particle set.

Pairwise fields conserve total momentum exactly; wall reflections and
static fields do not. Kinetic energy is unchanged by reflections but not
by the explicit Euler update, so both are diagnostics, not guarantees.
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from ..particle import Particle


def kinetic_energy(particles: Iterable[Particle]) -> float:
    """
    Total kinetic energy, T = Σ ½ m v², in per-tick velocity units.
    """
    return float(sum(p.kinetic_energy for p in particles))


def linear_momentum(particles: Iterable[Particle]) -> np.ndarray:
    """
    Total linear momentum, P = Σ m v.

    Returns:
        Momentum vector [Px, Py, Pz].
    """
    total = np.zeros(3, dtype=np.float64)
    for p in particles:
        total += p.momentum
    return total


def center_of_mass(particles: Iterable[Particle]) -> np.ndarray:
    """Mass-weighted mean position. Zero vector for an empty set."""
    m_total = 0.0
    weighted = np.zeros(3, dtype=np.float64)
    for p in particles:
        m_total += p.mass
        weighted += p.mass * p.get_pos()
    if m_total == 0.0:
        return weighted
    return weighted / m_total
