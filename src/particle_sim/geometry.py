# MIT License (see LICENSE)
"""
Box environment geometry.

The environment manager owns the rendered box; the core only needs its
inner wall planes. The box sits on the table (its floor at y = t), is
centred on x, and extends from z = t backwards:

    x in [-L/2, L/2]
    y in [t, L + t]
    z in [t, L + t]

where L is the inner side length and t the wall thickness. A particle of
radius r is inside when its centre lies within `lower(r)` .. `upper(r)`.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .constants import BOX_LENGTH_SCALE, BOX_THICKNESS_SCALE, MIN_RADIUS
from .errors import ValidationError

# Slack for deciding that a wall lies within reach of a ray.
_CONTACT_TOL = 1e-9


@dataclass(frozen=True)
class BoxGeometry:
    """
    Inner dimensions of the simulation box.

    Attributes:
        box_length: Inner side length L in internal length units.
        wall_thickness: Wall thickness t in internal length units.
    """
    box_length: float
    wall_thickness: float

    def __post_init__(self) -> None:
        if not self.box_length > 0:
            raise ValidationError(f"box length must be positive, got {self.box_length}")
        if not self.wall_thickness >= 0:
            raise ValidationError(f"wall thickness must be non-negative, got {self.wall_thickness}")
        if not self.fits(MIN_RADIUS):
            raise ValidationError(
                f"box length {self.box_length:g} cannot hold a particle of radius {MIN_RADIUS:g}"
            )

    @classmethod
    def from_box_size(cls, size: float) -> BoxGeometry:
        """Build the geometry from the external box-size parameter."""
        length = float(size) * BOX_LENGTH_SCALE
        return cls(box_length=length, wall_thickness=length * BOX_THICKNESS_SCALE)

    @property
    def half_length(self) -> float:
        return self.box_length / 2

    def lower(self, radius: float = 0.0) -> np.ndarray:
        """Lowest allowed centre coordinate per axis for a particle of this radius."""
        t = self.wall_thickness
        return np.array([-self.half_length + radius, t + radius, t + radius], dtype=np.float64)

    def upper(self, radius: float = 0.0) -> np.ndarray:
        """Highest allowed centre coordinate per axis (fullLength on y and z)."""
        full = self.box_length + self.wall_thickness - radius
        return np.array([self.half_length - radius, full, full], dtype=np.float64)

    def fits(self, radius: float) -> bool:
        """True when the spawn region for this radius is non-empty on every axis."""
        return self.box_length >= 2 * radius + self.wall_thickness

    def contains(self, position: np.ndarray, radius: float = 0.0) -> bool:
        return bool(np.all(position >= self.lower(radius)) and np.all(position <= self.upper(radius)))

    def wall_contacts(self, position: np.ndarray, radius: float) -> tuple[np.ndarray, np.ndarray]:
        """
        Cast a ray of length `radius` from `position` along each of ±x, ±y, ±z.

        Returns:
            (hit_low, hit_high): boolean arrays of shape (3,). hit_low[i] is
            true when the ray along -axis i reaches a wall, hit_high[i] for
            the ray along +axis i.
        """
        walls_low = self.lower()
        walls_high = self.upper()
        hit_low = (position - walls_low) <= radius + _CONTACT_TOL
        hit_high = (walls_high - position) <= radius + _CONTACT_TOL
        return hit_low, hit_high

    def random_position(self, rng: np.random.Generator, radius: float = 1.0) -> np.ndarray:
        """
        Uniform spawn point for a particle of the given radius.

        y and z are drawn from [t + r, L - r], slightly short of the far walls.

        Raises:
            ValidationError: If the box is too small for the radius.
        """
        if not self.fits(radius):
            raise ValidationError(
                f"box length {self.box_length:g} cannot hold a particle of radius {radius:g}"
            )
        lo = self.lower(radius)
        hi = self.upper(radius)
        hi[1:] = self.box_length - radius
        return rng.uniform(lo, hi)
