# MIT License (see LICENSE)
"""
Point-like particle with position, velocity, mass, radius and charge.

Velocities are stored per tick: a particle advances by exactly its velocity
on each step. Forces arriving through add_force are already scaled by the
owning field for the current time unit, so add_force is a plain Δv = F/m.

Equations (explicit Euler, one tick):
    v ← v + F/m      (for every force accumulated this tick)
    x ← x + v
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from .constants import MIN_MASS, MIN_RADIUS
from .errors import ValidationError
from .util import f64, readonly, vec3

if TYPE_CHECKING:
    from .geometry import BoxGeometry
    from .scales import Scales


class Particle:
    """
    A spherical particle owned by a single Simulator.

    Attributes:
        mass: Mass, at least MIN_MASS. Fixed after construction.
        radius: Radius, at least MIN_RADIUS. Fixed after construction.
        charge: Integer charge in elementary units. Fixed after construction.
        scales: Non-owning reference to the Simulator's Scales (may be None
                for a free-standing particle).
        id: Identifier assigned by Simulator.add_particle (-1 until then).

    Position and velocity are exposed as read-only array views; they only
    change through add_force, step, adjust_velocity and the two boundary
    corrections.
    """

    def __init__(
        self,
        position=(0.0, 0.0, 0.0),
        velocity=(0.0, 0.0, 0.0),
        mass: float = 1.0,
        radius: float = 1.0,
        charge: int = 0,
        scales: Scales | None = None,
    ) -> None:
        mass = float(mass)
        radius = float(radius)
        if not mass >= MIN_MASS:
            raise ValidationError(f"mass must be >= {MIN_MASS}, got {mass}")
        if not radius >= MIN_RADIUS:
            raise ValidationError(f"radius must be >= {MIN_RADIUS}, got {radius}")
        try:
            integral = int(charge) == charge
        except (TypeError, ValueError, OverflowError) as exc:
            raise ValidationError(f"charge must be an integer, got {charge}") from exc
        if not integral:
            raise ValidationError(f"charge must be an integer, got {charge}")

        try:
            self._position = vec3(position)
            self._velocity = vec3(velocity)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        if not (np.all(np.isfinite(self._position)) and np.all(np.isfinite(self._velocity))):
            raise ValidationError("position and velocity must be finite")

        self.mass = mass
        self.radius = radius
        self.charge = int(charge)
        self.scales = scales
        self.id = -1

    def __repr__(self) -> str:
        p, v = self._position, self._velocity
        return (
            f"Particle(id={self.id}, pos=({p[0]:.3f}, {p[1]:.3f}, {p[2]:.3f}), "
            f"vel=({v[0]:.3f}, {v[1]:.3f}, {v[2]:.3f}), m={self.mass:g}, "
            f"r={self.radius:g}, q={self.charge})"
        )

    # ------------------------------------------------------------------
    # Read-only accessors for renderers and other external collaborators
    # ------------------------------------------------------------------

    @property
    def position(self) -> np.ndarray:
        return readonly(self._position)

    @property
    def velocity(self) -> np.ndarray:
        return readonly(self._velocity)

    def get_pos(self) -> np.ndarray:
        """Copy of the current position."""
        return self._position.copy()

    def get_vel(self) -> np.ndarray:
        """Copy of the current velocity."""
        return self._velocity.copy()

    @property
    def color(self) -> str:
        """Display colour by charge sign: red negative, blue positive, gray neutral."""
        if self.charge < 0:
            return "red"
        if self.charge > 0:
            return "blue"
        return "gray"

    @property
    def kinetic_energy(self) -> float:
        return 0.5 * self.mass * float(np.dot(self._velocity, self._velocity))

    @property
    def momentum(self) -> np.ndarray:
        return self.mass * self._velocity

    # ------------------------------------------------------------------
    # Dynamics
    # ------------------------------------------------------------------

    def add_force(self, force) -> None:
        """
        Accumulate a time-scaled force into the velocity: v += F / m.

        Raises:
            ZeroDivisionError: If mass is zero (unreachable for validated particles).
        """
        if self.mass == 0:
            raise ZeroDivisionError("cannot apply a force to a massless particle")
        self._velocity += f64(force) / self.mass

    def step(self) -> None:
        """Advance the position by one tick: x += v."""
        self._position += self._velocity

    def adjust_velocity(self, ratio: float) -> None:
        """Rescale the velocity after a time-unit change."""
        self._velocity *= ratio

    def check_box_collision(self, geometry: BoxGeometry) -> None:
        """
        Reflect the velocity off any wall within one radius of the centre.

        Each axis is handled on its own: when a wall on that axis is within
        reach and the velocity component points into it, the component is
        negated. At most one side per axis reflects, and the other axes are
        never touched.
        """
        hit_low, hit_high = geometry.wall_contacts(self._position, self.radius)
        v = self._velocity
        for axis in range(3):
            if hit_high[axis] and v[axis] > 0:
                v[axis] = -v[axis]
            elif hit_low[axis] and v[axis] < 0:
                v[axis] = -v[axis]

    def check_out_of_bounds(self, geometry: BoxGeometry) -> bool:
        """
        Clamp the particle back inside the box and reflect on each violated axis.

        Catches particles that tunnelled past a wall during a step. The
        clamped coordinate lands exactly on the bound, whatever the overshoot.

        Returns:
            True if any axis was corrected.
        """
        lo = geometry.lower(self.radius)
        hi = geometry.upper(self.radius)
        x, v = self._position, self._velocity
        corrected = False
        for axis in range(3):
            if x[axis] < lo[axis]:
                x[axis] = lo[axis]
                v[axis] = -v[axis]
                corrected = True
            elif x[axis] > hi[axis]:
                x[axis] = hi[axis]
                v[axis] = -v[axis]
                corrected = True
        return corrected

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self._position)) and np.all(np.isfinite(self._velocity)))

    def state(self, origin=(0.0, 0.0, 0.0)) -> ParticleState:
        """Render snapshot with the position offset by the simulator origin."""
        pos = self._position + f64(origin)
        return ParticleState(
            id=self.id,
            position=(float(pos[0]), float(pos[1]), float(pos[2])),
            velocity=(float(self._velocity[0]), float(self._velocity[1]), float(self._velocity[2])),
            radius=self.radius,
            charge=self.charge,
            color=self.color,
        )


@dataclass(frozen=True)
class ParticleState:
    """
    Immutable render snapshot of one particle.

    Attributes:
        id: Particle identifier within its simulator.
        position: Position in world coordinates (simulator origin applied).
        velocity: Velocity per tick.
        radius: Particle radius.
        charge: Integer charge.
        color: Display colour derived from the charge sign.
    """
    id: int
    position: tuple[float, float, float]
    velocity: tuple[float, float, float]
    radius: float
    charge: int
    color: str
