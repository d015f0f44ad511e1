# MIT License (see LICENSE)
"""
A single simulation box: its particles, fields and scales.

The Simulator owns everything inside one box and drives the per-tick
pipeline. The caller decides the cadence by calling tick():

    1. Force accumulation. For each particle a: every static field acts on
       a, then every dynamic field acts on each pair (a, b) with b > a, so
       each unordered pair sees each pairwise law exactly once.
    2. Integration. Only after every force of the tick is in: reflect off
       nearby walls, advance the position, then clamp-and-reflect anything
       that still ended up outside the box.

Forces update velocities as they are accumulated, but positions do not
move until step 2, so every force of a tick is evaluated against the same
positions.

Structure:
    sim = Simulator(BoxGeometry.from_box_size(1.0), seed=7)
    sim.add_field(LennardJones(sim.scales))
    sim.add_random_particles(10)
    while running:
        sim.tick()
        renderer.render_simulator(sim)
"""
from __future__ import annotations
import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from .constants import (
    MAX_RANDOM_MASS,
    MAX_RANDOM_RADIUS,
    MAX_TIME_EXPONENT,
    MIN_MASS,
    MIN_RADIUS,
    RANDOM_CHARGES,
)
from .core.fields import DynamicField, Field, StaticField
from .errors import ValidationError
from .geometry import BoxGeometry
from .particle import Particle, ParticleState
from .scales import Scale, Scales

if TYPE_CHECKING:
    from .manager import SimulationManager

logger = logging.getLogger(__name__)


class Simulator:
    """
    One box of interacting particles.

    Attributes:
        name: Display name, e.g. "System 1".
        geometry: Inner box dimensions used by both boundary checks.
        scales: Unit scales shared (read only) with particles and fields.
        paused: This simulator's own pause flag.
        manager: Owning manager, whose pause flag also stops this simulator.
        table_height: Height of the box floor in world coordinates; only
                      affects positions reported through snapshot().
        tick_count: Number of ticks that ran the physics pipeline.
    """

    def __init__(
        self,
        geometry: BoxGeometry | None = None,
        scales: Scales | None = None,
        name: str = "System",
        seed: int | None = None,
        manager: SimulationManager | None = None,
        table_height: float = 0.0,
    ) -> None:
        self.name = name
        self.geometry = geometry if geometry is not None else BoxGeometry.from_box_size(1.0)
        self.scales = scales if scales is not None else Scales()
        self.manager = manager
        self.table_height = float(table_height)
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.paused = False
        self.tick_count = 0

        self._particles: list[Particle] = []
        self.static_fields: list[StaticField] = []
        self.dynamic_fields: list[DynamicField] = []

        self._next_id = 1
        self._ticking = False
        self._pending_additions: list[Particle] = []
        self._pending_removals: list[Particle] = []
        # Last non-zero time scale while time is frozen at zero.
        self._frozen_time: Scale | None = None

    def __repr__(self) -> str:
        return (
            f"Simulator(name={self.name!r}, particles={len(self._particles)}, "
            f"fields={len(self.static_fields) + len(self.dynamic_fields)}, paused={self.is_paused})"
        )

    @property
    def particles(self) -> tuple[Particle, ...]:
        """Particles currently in the box, in insertion order."""
        return tuple(self._particles)

    @property
    def origin(self) -> np.ndarray:
        return np.array([0.0, self.table_height, 0.0], dtype=np.float64)

    @property
    def is_paused(self) -> bool:
        """True when this simulator, its manager, or a zero time scale stops physics."""
        if self.paused:
            return True
        if self.manager is not None and self.manager.paused:
            return True
        return self.scales.time.is_zero

    def toggle_pause(self) -> None:
        self.paused = not self.paused
        logger.info("%s %s", self.name, "paused" if self.paused else "resumed")

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def add_field(self, field: Field) -> Field:
        """
        Register a force law with this simulator.

        Raises:
            TypeError: If `field` is neither a StaticField nor a DynamicField.
        """
        if isinstance(field, DynamicField):
            self.dynamic_fields.append(field)
        elif isinstance(field, StaticField):
            self.static_fields.append(field)
        else:
            raise TypeError(f"Unknown field kind: {type(field).__name__}")
        if field.scales is not self.scales:
            logger.warning("%s added with foreign scales to %s", field.name, self.name)
        return field

    def remove_field(self, field: Field) -> None:
        if field in self.dynamic_fields:
            self.dynamic_fields.remove(field)
        elif field in self.static_fields:
            self.static_fields.remove(field)
        else:
            raise KeyError(f"{field!r} is not part of {self.name}")

    # ------------------------------------------------------------------
    # Particles
    # ------------------------------------------------------------------

    def add_particle(
        self,
        position=None,
        mass: float | None = None,
        radius: float | None = None,
        charge: int | None = None,
        velocity=None,
    ) -> Particle:
        """
        Create a particle and add it to the box.

        Omitted properties are randomised: mass and radius uniform in
        [1, 2), charge from {-1, 0, 1}, position uniform inside the spawn
        region for the chosen radius. Random radii are capped to what the
        box can hold.

        A particle added during a tick gets its id at once but joins the
        box only when the tick completes, so it is neither pushed nor moved
        by the tick in progress.

        Raises:
            ValidationError: If mass or radius is below 1, the radius does not
                             fit in the box, or a vector is malformed.
                             Nothing is added in that case.
        """
        if mass is None:
            mass = float(self.rng.uniform(MIN_MASS, MAX_RANDOM_MASS))
        if radius is None:
            largest = (self.geometry.box_length - self.geometry.wall_thickness) / 2
            radius = float(self.rng.uniform(MIN_RADIUS, min(MAX_RANDOM_RADIUS, largest)))
        elif not self.geometry.fits(float(radius)):
            raise ValidationError(f"radius {radius} does not fit in {self.name}")
        if charge is None:
            charge = int(self.rng.choice(RANDOM_CHARGES))
        if position is None:
            position = self.geometry.random_position(self.rng, float(radius))
        if velocity is None:
            velocity = (0.0, 0.0, 0.0)

        p = Particle(
            position=position,
            velocity=velocity,
            mass=mass,
            radius=radius,
            charge=charge,
            scales=self.scales,
        )
        p.id = self._next_id
        self._next_id += 1
        if self._ticking:
            self._pending_additions.append(p)
            return p
        self._particles.append(p)
        logger.debug("%s added %r", self.name, p)
        return p

    def add_random_particles(self, n: int) -> list[Particle]:
        return [self.add_particle() for _ in range(n)]

    def remove_particle(self, particle: Particle) -> None:
        """
        Remove a particle from the box.

        Between ticks the particle is dropped immediately. A request made
        during a tick is held until the tick completes.

        Raises:
            KeyError: If the particle is not owned by this simulator.
        """
        if particle in self._pending_additions:
            self._pending_additions.remove(particle)
            return
        if particle not in self._particles:
            raise KeyError(f"particle {particle.id} is not part of {self.name}")
        if self._ticking:
            if particle not in self._pending_removals:
                self._pending_removals.append(particle)
            return
        self._particles.remove(particle)
        logger.debug("%s removed particle %d", self.name, particle.id)

    def find_particle(self, particle_id: int) -> Particle | None:
        for p in self._particles:
            if p.id == particle_id:
                return p
        return None

    def _flush_pending(self) -> None:
        added, self._pending_additions = self._pending_additions, []
        for p in added:
            self._particles.append(p)
            logger.debug("%s added %r", self.name, p)
        pending, self._pending_removals = self._pending_removals, []
        for p in pending:
            if p in self._particles:
                self.remove_particle(p)

    # ------------------------------------------------------------------
    # Environment inputs
    # ------------------------------------------------------------------

    def update_box_size(self, size: float) -> None:
        """
        Rebuild the box geometry from the external box-size parameter.

        Raises:
            ValidationError: If the new box cannot hold the smallest particle
                             or one already in the box. The old box is kept.
        """
        geometry = BoxGeometry.from_box_size(size)
        too_big = [p.id for p in self._particles if not geometry.fits(p.radius)]
        if too_big:
            raise ValidationError(f"box size {size} is too small for particles {too_big}")
        self.geometry = geometry
        logger.info(
            "%s box length %.3g, wall thickness %.3g",
            self.name, self.geometry.box_length, self.geometry.wall_thickness,
        )

    def set_time_scale(self, coefficient: float, exponent: int = 0) -> None:
        """
        Change the time unit and rescale every velocity to match.

        Velocities are multiplied by new/old so the physical speed of every
        particle is unchanged. A zero coefficient freezes time: velocities
        are left untouched and the next non-zero scale is compared against
        the last non-zero one.

        Raises:
            ValidationError: If the coefficient is negative or not finite, or
                             the exponent lies outside ±MAX_TIME_EXPONENT.
                             Scales and velocities are unchanged then.
        """
        coefficient = float(coefficient)
        exponent = int(exponent)
        if not math.isfinite(coefficient) or coefficient < 0:
            raise ValidationError(f"time coefficient must be finite and >= 0, got {coefficient}")
        if abs(exponent) > MAX_TIME_EXPONENT:
            raise ValidationError(f"time exponent must be within ±{MAX_TIME_EXPONENT}, got {exponent}")

        old = self.scales.time
        new = Scale(coefficient, exponent)

        if new.is_zero:
            if not old.is_zero:
                self._frozen_time = old
            self.scales.set_time(coefficient, exponent)
            logger.info("%s time frozen", self.name)
            return

        reference = self._frozen_time if old.is_zero else old
        ratio = 1.0 if reference is None or reference.is_zero else Scale.ratio(reference, new).value()

        self.scales.set_time(coefficient, exponent)
        for p in self._particles:
            p.adjust_velocity(ratio)
        self._frozen_time = None
        logger.info("%s time scale %ge%d (velocity ratio %g)", self.name, coefficient, exponent, ratio)

    # ------------------------------------------------------------------
    # Tick pipeline
    # ------------------------------------------------------------------

    def _apply_forces(self) -> None:
        """Accumulate every field's contribution into particle velocities."""
        particles = self._particles
        n = len(particles)
        for a in range(n):
            pa = particles[a]
            for f in self.static_fields:
                f.apply_force(pa)
            for f in self.dynamic_fields:
                for b in range(a + 1, n):
                    f.apply_force(pa, particles[b])

    def _integrate(self) -> int:
        """
        Move every particle one tick and keep it inside the box.

        Returns:
            Number of particles the out-of-bounds correction had to catch.
        """
        corrections = 0
        for p in self._particles:
            p.check_box_collision(self.geometry)
            p.step()
            if p.check_out_of_bounds(self.geometry):
                corrections += 1
                logger.debug("%s clamped particle %d back into the box", self.name, p.id)
        return corrections

    def tick(self) -> int:
        """
        Advance the simulation by one tick.

        While paused, only pending additions and removals are serviced.

        Returns:
            Number of out-of-bounds corrections made (0 when paused).
        """
        if self.is_paused:
            self._flush_pending()
            return 0

        self._ticking = True
        try:
            self._apply_forces()
            corrections = self._integrate()
        finally:
            self._ticking = False
        self._flush_pending()

        self.tick_count += 1
        if corrections:
            logger.debug("%s tick %d: %d out-of-bounds corrections", self.name, self.tick_count, corrections)
        return corrections

    def run(self, ticks: int) -> int:
        """Run several ticks; returns the total number of out-of-bounds corrections."""
        return sum(self.tick() for _ in range(ticks))

    def snapshot(self) -> list[ParticleState]:
        """Render state of every particle, in world coordinates."""
        origin = self.origin
        return [p.state(origin) for p in self._particles]
