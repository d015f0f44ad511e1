# MIT License (see LICENSE)
"""
Exception types raised by the particle simulation.

ValidationError is raised at construction time and always reaches the
caller. DegenerateGeometryError is raised by force laws for coincident
particles and is absorbed by the field that evaluated it.
"""
from __future__ import annotations


class ParticleSimError(Exception):
    """Base class for all particle_sim errors."""


class ValidationError(ParticleSimError, ValueError):
    """Construction parameters violate a physical minimum (mass, radius, geometry)."""


class DegenerateGeometryError(ParticleSimError, ArithmeticError):
    """Two particles are too close for a pairwise force to have a direction."""

    def __init__(self, distance: float, message: str | None = None) -> None:
        self.distance = distance
        super().__init__(message or f"particles coincide (separation {distance:.3g})")
