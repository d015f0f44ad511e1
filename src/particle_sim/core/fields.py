# MIT License (see LICENSE)
"""
Force fields acting on particles.

Two kinds of field exist:
- StaticField: a single-particle law, e.g. uniform gravity or drag.
- DynamicField: a pairwise law. The force computed for (A, B) is added to
  A and its negation to B, so momentum is conserved by construction.

A concrete law only implements `field_dynamics`, which must be a pure
function of the particles' current state. `apply_force` turns the raw
force into a per-tick velocity increment by multiplying with the square of
the time scale, then hands it to Particle.add_force.

Laws are registered by name so that simulators and configs can build them
without importing the classes:

    field = make_field("coulomb", sim.scales, k=0.1)
    sim.add_field(field)

Numerical safety: a law may raise DegenerateGeometryError for coincident
particles. apply_force absorbs it (no force this tick) and also drops any
non-finite force, so a single bad pair never poisons a trajectory or
interrupts the rest of the tick.
"""
from __future__ import annotations
import logging
from abc import ABC
from typing import Callable, TypeVar

import numpy as np

from ..constants import DEFAULT_EPS, GRAVITY, K_COULOMB, LJ_EPSILON, LJ_SIGMA
from ..errors import DegenerateGeometryError
from ..particle import Particle
from ..scales import Scales
from ..util import f64, norm, zero3

logger = logging.getLogger(__name__)


def separation(a: Particle, b: Particle, eps: float = DEFAULT_EPS) -> tuple[np.ndarray, float]:
    """
    Vector from B to A and its length.

    Raises:
        DegenerateGeometryError: If the particles are closer than eps.
    """
    r_vec = a.get_pos() - b.get_pos()
    r = norm(r_vec)
    if r < eps:
        raise DegenerateGeometryError(r)
    return r_vec, r


class Field(ABC):
    """
    Common base of all force fields.

    Attributes:
        scales: Non-owning reference to the owning Simulator's Scales. Read only.
    """
    name: str = "field"

    def __init__(self, scales: Scales) -> None:
        self.scales = scales

    def time_factor(self) -> float:
        """Square of the time-scale multiplier; converts raw force into Δv per tick."""
        t = self.scales.time.value()
        return t * t

    def _scaled(self, raw, context: str) -> np.ndarray | None:
        force = f64(raw) * self.time_factor()
        if not np.all(np.isfinite(force)):
            logger.warning("%s produced a non-finite force for %s; dropped", self.name, context)
            return None
        return force

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in vars(self).items() if k != "scales")
        return f"{type(self).__name__}({params})"


class StaticField(Field):
    """Single-particle force law. The default law exerts no force."""

    def field_dynamics(self, p: Particle) -> np.ndarray:
        return zero3()

    def apply_force(self, p: Particle) -> None:
        try:
            raw = self.field_dynamics(p)
        except DegenerateGeometryError as exc:
            logger.debug("%s skipped particle %d: %s", self.name, p.id, exc)
            return
        force = self._scaled(raw, f"particle {p.id}")
        if force is not None:
            p.add_force(force)


class DynamicField(Field):
    """
    Pairwise force law.

    field_dynamics(A, B) returns the force on A; B receives the negation.
    The caller applies each unordered pair once per tick and never pairs a
    particle with itself.
    """

    def field_dynamics(self, a: Particle, b: Particle) -> np.ndarray:
        return zero3()

    def apply_force(self, a: Particle, b: Particle) -> None:
        if a is b:
            raise ValueError(f"{self.name} cannot act on a particle paired with itself")
        try:
            raw = self.field_dynamics(a, b)
        except DegenerateGeometryError as exc:
            logger.debug("%s skipped pair (%d, %d): %s", self.name, a.id, b.id, exc)
            return
        force = self._scaled(raw, f"pair ({a.id}, {b.id})")
        if force is None:
            return
        a.add_force(force)
        b.add_force(-force)


# =============================================================================
# Registry
# =============================================================================

FIELDS: dict[str, type[Field]] = {}

F = TypeVar("F", bound=type[Field])


def register_field(name: str) -> Callable[[F], F]:
    """Class decorator adding a force law to FIELDS under `name`."""
    def decorator(cls: F) -> F:
        if name in FIELDS:
            raise ValueError(f"Field '{name}' is already registered")
        cls.name = name
        FIELDS[name] = cls
        return cls
    return decorator


def make_field(name: str, scales: Scales, **params) -> Field:
    """
    Build a registered force law.

    Raises:
        ValueError: If no law is registered under `name`.
    """
    try:
        cls = FIELDS[name]
    except KeyError:
        known = ", ".join(sorted(FIELDS))
        raise ValueError(f"Unknown field type: '{name}' (known: {known})") from None
    return cls(scales, **params)


# =============================================================================
# Concrete laws
# =============================================================================

@register_field("gravity")
class UniformGravity(StaticField):
    """
    Uniform gravitational field, F = m * g.

    Args:
        g: Acceleration vector. Defaults to GRAVITY pointing down (-y).
    """

    def __init__(self, scales: Scales, g=(0.0, -GRAVITY, 0.0)) -> None:
        super().__init__(scales)
        self.g = f64(g)

    def field_dynamics(self, p: Particle) -> np.ndarray:
        return p.mass * self.g


@register_field("drag")
class LinearDrag(StaticField):
    """Linear drag, F = -c * v. Has no effect when c == 0."""

    def __init__(self, scales: Scales, c: float = 0.0) -> None:
        super().__init__(scales)
        self.c = float(c)

    def field_dynamics(self, p: Particle) -> np.ndarray:
        if self.c == 0.0:
            return zero3()
        return -self.c * p.get_vel()


@register_field("lennard_jones")
class LennardJones(DynamicField):
    """
    Lennard-Jones interaction between neutral and charged particles alike.

        |F|(r) = 24 ε / r * (2 (σ/r)^12 - (σ/r)^6)

    Positive magnitudes repel. The r^-13 term dominates at short range, the
    r^-7 attraction at long range; the force vanishes at r = 2^(1/6) σ.

    Args:
        epsilon: Depth of the potential well.
        sigma: Distance at which the potential crosses zero.
        min_distance: Lower clamp on r, bounding the repulsion. Defaults to 0.8 σ.
    """

    def __init__(
        self,
        scales: Scales,
        epsilon: float = LJ_EPSILON,
        sigma: float = LJ_SIGMA,
        min_distance: float | None = None,
    ) -> None:
        super().__init__(scales)
        self.epsilon = float(epsilon)
        self.sigma = float(sigma)
        self.min_distance = 0.8 * self.sigma if min_distance is None else float(min_distance)

    def magnitude(self, r: float) -> float:
        r = max(r, self.min_distance)
        sr6 = (self.sigma / r) ** 6
        return 24.0 * self.epsilon / r * (2.0 * sr6 * sr6 - sr6)

    def field_dynamics(self, a: Particle, b: Particle) -> np.ndarray:
        r_vec, r = separation(a, b)
        return self.magnitude(r) * (r_vec / r)


@register_field("coulomb")
class Coulomb(DynamicField):
    """
    Electrostatic interaction, F_A = k qA qB r / (|r|² + ε²)^(3/2) with r = A - B.

    Like charges repel, opposite charges attract, and a neutral particle
    feels nothing. ε softens the singularity the same way for every pair,
    so the magnitude depends only on |qA qB| and the separation.

    Args:
        k: Electrostatic strength in internal units.
        eps: Softening length.
    """

    def __init__(self, scales: Scales, k: float = K_COULOMB, eps: float = DEFAULT_EPS) -> None:
        super().__init__(scales)
        self.k = float(k)
        self.eps = float(eps)

    def field_dynamics(self, a: Particle, b: Particle) -> np.ndarray:
        qq = a.charge * b.charge
        if qq == 0:
            return zero3()
        r_vec, r = separation(a, b)
        r2 = r * r + self.eps * self.eps
        inv_r3 = 1.0 / (r2 * np.sqrt(r2))
        return (self.k * qq * inv_r3) * r_vec
