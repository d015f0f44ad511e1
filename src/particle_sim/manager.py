# MIT License (see LICENSE)
"""
Manager for every simulator in the environment.

The manager owns the simulators, builds them from a SimConfig and holds
the global pause flag. A simulator stops when either its own flag or the
manager's flag is set; toggle_pause() also copies the global flag down to
each simulator so that resuming globally resumes them all.
"""
from __future__ import annotations
import logging

from .config import SimConfig
from .core.fields import make_field
from .geometry import BoxGeometry
from .logging_config import setup_logging
from .scales import Scales
from .simulator import Simulator

logger = logging.getLogger(__name__)


class SimulationManager:
    """
    Owner of zero or more independent simulators.

    Attributes:
        config: Template used to build every simulator.
        simulators: Live simulators, in creation order.
        paused: Global pause flag.
    """

    def __init__(self, config: SimConfig | None = None) -> None:
        self.config = config if config is not None else SimConfig()
        self.simulators: list[Simulator] = []
        self.paused = False
        self._newest = 1
        setup_logging(self.config.log_level)

    @property
    def num_particles(self) -> int:
        return self.config.num_particles

    def _build(self, name: str, seed: int | None) -> Simulator:
        cfg = self.config
        scales = Scales()
        scales.set_time(cfg.time_coefficient, cfg.time_exponent)
        sim = Simulator(
            geometry=BoxGeometry.from_box_size(cfg.box_size),
            scales=scales,
            name=name,
            seed=seed,
            manager=self,
            table_height=cfg.table_height,
        )
        sim.paused = self.paused
        for field_name in cfg.fields:
            sim.add_field(make_field(field_name, sim.scales, **cfg.field_params(field_name)))
        sim.add_random_particles(cfg.num_particles)
        return sim

    def create_simulator(self) -> Simulator:
        """Build, populate and register a new simulator named "System N"."""
        index = self._newest
        self._newest += 1
        seed = None if self.config.seed is None else self.config.seed + index - 1
        sim = self._build(f"System {index}", seed)
        self.simulators.append(sim)
        logger.info(
            "created %s with %d particles and %d fields",
            sim.name, len(sim.particles), len(sim.static_fields) + len(sim.dynamic_fields),
        )
        return sim

    def remove_simulator(self, sim: Simulator) -> None:
        """
        Raises:
            KeyError: If the simulator is not managed here.
        """
        if sim not in self.simulators:
            raise KeyError(f"{sim.name} is not managed here")
        self.simulators.remove(sim)
        sim.manager = None
        logger.info("removed %s", sim.name)

    def reset_systems(self) -> None:
        """Replace every simulator with a freshly built one of the same name."""
        fresh = []
        for sim in self.simulators:
            sim.manager = None
            fresh.append(self._build(sim.name, sim.seed))
        self.simulators = fresh
        logger.info("reset %d simulators", len(fresh))

    def toggle_pause(self) -> None:
        """Flip the global pause flag and propagate it to every simulator."""
        self.paused = not self.paused
        for sim in self.simulators:
            sim.paused = self.paused
        logger.info("all simulators %s", "paused" if self.paused else "resumed")

    def tick(self) -> None:
        """Advance every simulator by one tick (paused ones only service pending additions and removals)."""
        for sim in self.simulators:
            sim.tick()
