# MIT License (see LICENSE)
"""
Core physics components.

This subpackage provides:
    - Fields: the StaticField / DynamicField force-law hierarchy, the
      concrete laws (gravity, drag, Lennard-Jones, Coulomb) and the
      name registry used to build them.
    - Invariants: kinetic energy, momentum and centre of mass.

Typical usage:
    from particle_sim.core import make_field, linear_momentum

    sim.add_field(make_field("lennard_jones", sim.scales))
    p = linear_momentum(sim.particles)
"""
from .fields import (
    Field,
    StaticField,
    DynamicField,
    UniformGravity,
    LinearDrag,
    LennardJones,
    Coulomb,
    FIELDS,
    register_field,
    make_field,
)
from .invariants import kinetic_energy, linear_momentum, center_of_mass

__all__ = [
    # Fields
    "Field",
    "StaticField",
    "DynamicField",
    "UniformGravity",
    "LinearDrag",
    "LennardJones",
    "Coulomb",
    "FIELDS",
    "register_field",
    "make_field",
    # Invariants
    "kinetic_energy",
    "linear_momentum",
    "center_of_mass",
]
