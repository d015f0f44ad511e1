# MIT License (see LICENSE)
"""
particle_sim - N interacting particles in a reflecting box.

This package integrates point-like particles under pairwise force laws
(Lennard-Jones, Coulomb) and single-particle laws (gravity, drag) inside an
axis-aligned box whose walls reflect particles elastically.

Main entry points:
    - Simulator: One box with its particles, fields and unit scales.
    - SimulationManager: Owns simulators and the global pause flag.
    - Particle: Position, velocity, mass, radius and charge.
    - Scale, Scales: Unit multipliers, including the live time scale.
    - BoxGeometry: Inner box dimensions.

Submodules:
    - core: Force fields, the field registry and conserved quantities.
    - renderer: Optional visualization adapters.
    - config: SimConfig and JSON config loading.

Example:
    from particle_sim import Simulator, Coulomb

    sim = Simulator(seed=1)
    sim.add_field(Coulomb(sim.scales))
    sim.add_particle((0.0, 5.0, 5.0), mass=1, radius=1, charge=1)
    sim.add_particle((2.5, 5.0, 5.0), mass=1, radius=1, charge=-1)
    sim.tick()
"""
from .scales import Scale, Scales
from .geometry import BoxGeometry
from .particle import Particle, ParticleState
from .core.fields import (
    StaticField,
    DynamicField,
    UniformGravity,
    LinearDrag,
    LennardJones,
    Coulomb,
    make_field,
    register_field,
)
from .simulator import Simulator
from .manager import SimulationManager
from .config import SimConfig, load_config
from .errors import ParticleSimError, ValidationError, DegenerateGeometryError
from .logging_config import setup_logging

__version__ = "0.1.0"

__all__ = [
    # Simulation
    "Simulator",
    "SimulationManager",
    "Particle",
    "ParticleState",
    # Units and geometry
    "Scale",
    "Scales",
    "BoxGeometry",
    # Fields
    "StaticField",
    "DynamicField",
    "UniformGravity",
    "LinearDrag",
    "LennardJones",
    "Coulomb",
    "make_field",
    "register_field",
    # Config
    "SimConfig",
    "load_config",
    "setup_logging",
    # Errors
    "ParticleSimError",
    "ValidationError",
    "DegenerateGeometryError",
]
