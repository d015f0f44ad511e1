# MIT License (see LICENSE)
"""
Fixed configuration constants for the particle box.

Lengths are in internal length units, forces in internal force units with
all scales at (1, 0). The box constants mirror the proportions of the box
model the environment renders: changing them does not resize the model.
"""
from __future__ import annotations

# Ratio of wall thickness to the inner side length of the box (1:40).
BOX_THICKNESS_SCALE: float = 0.025

# Ratio of the external "box size" parameter to internal length units (1:10).
BOX_LENGTH_SCALE: float = 10.0

# Minimum allowed mass and radius of a particle.
MIN_MASS: float = 1.0
MIN_RADIUS: float = 1.0

# Upper bounds (exclusive) used when mass/radius are randomised.
MAX_RANDOM_MASS: float = 2.0
MAX_RANDOM_RADIUS: float = 2.0

# Charges drawn for randomly spawned particles.
RANDOM_CHARGES: tuple[int, ...] = (-1, 0, 1)

# Per-simulator particle cap exposed by the manager.
MAX_PARTICLES: int = 20

# Downward acceleration for the optional gravity field.
GRAVITY: float = 9.81e-3

# Lennard-Jones well depth and zero-crossing distance.
LJ_EPSILON: float = 1e-3
LJ_SIGMA: float = 2.0

# Electrostatic strength in internal units (plays the role of k = 1/(4πε₀)).
K_COULOMB: float = 5e-2

# Separations below this are treated as coincident particles; the direction
# of a pairwise force is undefined there. Also used as Coulomb softening.
DEFAULT_EPS: float = 1e-3

# Time-scale exponents are kept within ±MAX_TIME_EXPONENT so that both the
# scale and the new/old velocity ratio stay representable as floats.
MAX_TIME_EXPONENT: int = 100
