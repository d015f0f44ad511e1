# MIT License (see LICENSE)
"""
Simulation configuration.

A SimConfig describes how a SimulationManager builds each simulator: box
size, particle count, the force laws to install and their parameters.
Configs can be read from JSON:

{
  "box_size": float,              # External box size, default 1.0
  "num_particles": int,           # 0..20, default 10
  "seed": int | null,             # RNG seed, default random
  "table_height": float,          # World height of the box floor
  "time_coefficient": float,      # Initial time scale, default 1
  "time_exponent": int,           #   (coefficient × 10^exponent)
  "fields": [str, ...],           # Registered field names
  "gravity": float,               # Used by "gravity"
  "drag": float,                  # Used by "drag"
  "lj_epsilon": float, "lj_sigma": float,     # Used by "lennard_jones"
  "coulomb_k": float, "coulomb_eps": float,   # Used by "coulomb"
  "log_level": str
}

Only configuration lives here; simulation state is never written out.
"""
from __future__ import annotations
import json
import math
from dataclasses import asdict, dataclass, field, fields as dataclass_fields
from typing import Any

from .constants import (
    DEFAULT_EPS,
    GRAVITY,
    K_COULOMB,
    LJ_EPSILON,
    LJ_SIGMA,
    MAX_PARTICLES,
    MAX_TIME_EXPONENT,
)
from .errors import ValidationError
from .geometry import BoxGeometry


@dataclass
class SimConfig:
    """Configuration for the simulators created by a SimulationManager."""

    # Environment
    box_size: float = 1.0
    table_height: float = 0.0

    # Particles
    num_particles: int = 10
    seed: int | None = None

    # Time scale
    time_coefficient: float = 1.0
    time_exponent: int = 0

    # Force laws
    fields: list[str] = field(default_factory=lambda: ["lennard_jones", "coulomb"])
    gravity: float = GRAVITY
    drag: float = 0.0
    lj_epsilon: float = LJ_EPSILON
    lj_sigma: float = LJ_SIGMA
    coulomb_k: float = K_COULOMB
    coulomb_eps: float = DEFAULT_EPS

    # Logging
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if not 0 <= self.num_particles <= MAX_PARTICLES:
            raise ValidationError(
                f"num_particles must be in [0, {MAX_PARTICLES}], got {self.num_particles}"
            )
        if not self.box_size > 0:
            raise ValidationError(f"box_size must be positive, got {self.box_size}")
        # Raises when the box cannot hold the smallest particle.
        BoxGeometry.from_box_size(self.box_size)
        if not math.isfinite(self.time_coefficient) or self.time_coefficient < 0:
            raise ValidationError(
                f"time_coefficient must be finite and >= 0, got {self.time_coefficient}"
            )
        if abs(self.time_exponent) > MAX_TIME_EXPONENT:
            raise ValidationError(
                f"time_exponent must be within ±{MAX_TIME_EXPONENT}, got {self.time_exponent}"
            )
        self.fields = list(self.fields)

    def field_params(self, name: str) -> dict[str, Any]:
        """Keyword arguments for make_field(name, ...)."""
        if name == "gravity":
            return {"g": (0.0, -self.gravity, 0.0)}
        if name == "drag":
            return {"c": self.drag}
        if name == "lennard_jones":
            return {"epsilon": self.lj_epsilon, "sigma": self.lj_sigma}
        if name == "coulomb":
            return {"k": self.coulomb_k, "eps": self.coulomb_eps}
        return {}

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimConfig:
        """
        Build a config from a plain dictionary.

        Raises:
            ValueError: If the dictionary has keys SimConfig does not know.
        """
        known = {f.name for f in dataclass_fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)


def load_config(path: str) -> SimConfig:
    """
    Read a SimConfig from a JSON file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the JSON has unknown keys or invalid values.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("Config file must contain a JSON object")
    return SimConfig.from_dict(data)

