# MIT License (see LICENSE)
"""
Renderer adapters for particle simulators.

The physics core has no rendering dependency. A renderer receives the
read-only ParticleState of each particle once per frame and draws it with
whatever backend it wraps.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO
import sys

from ..particle import ParticleState

if TYPE_CHECKING:
    from ..simulator import Simulator


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Usage:
        renderer.begin_frame(sim.name, sim.tick_count)
        for state in sim.snapshot():
            renderer.draw_particle(state)
        renderer.end_frame()

    Or use the convenience method:
        renderer.render_simulator(sim)
    """

    @abstractmethod
    def begin_frame(self, name: str, tick: int) -> None:
        """
        Begin a new frame for one simulator.

        Args:
            name: Simulator name.
            tick: Number of physics ticks run so far.
        """
        ...

    @abstractmethod
    def draw_particle(self, state: ParticleState) -> None:
        """Draw a single particle."""
        ...

    @abstractmethod
    def end_frame(self) -> None:
        """Finalize the current frame."""
        ...

    def render_simulator(self, sim: "Simulator") -> None:
        """Render every particle of a simulator as one frame."""
        self.begin_frame(sim.name, sim.tick_count)
        for state in sim.snapshot():
            self.draw_particle(state)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Console/text renderer for development.

    Output:
        === System 1 tick 42 ===
        [1] blue r=1.20 @ (0.51, 3.02, 7.77) v=(0.01, -0.00, 0.02)
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, include velocities.
        """
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, name: str, tick: int) -> None:
        self.output.write(f"=== {name} tick {tick} ===\n")

    def draw_particle(self, state: ParticleState) -> None:
        x, y, z = state.position
        line = f"[{state.id}] {state.color} r={state.radius:.2f} @ ({x:.2f}, {y:.2f}, {z:.2f})"
        if self.verbose:
            vx, vy, vz = state.velocity
            line += f" v=({vx:.2f}, {vy:.2f}, {vz:.2f})"
        self.output.write(line + "\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer, for benchmarks and headless runs."""

    def begin_frame(self, name: str, tick: int) -> None:
        pass

    def draw_particle(self, state: ParticleState) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that records frames for later inspection.

    Example:
        renderer = BufferedRenderer()
        for _ in range(100):
            sim.tick()
            renderer.render_simulator(sim)
        last = renderer.frames[-1]["particles"]
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, name: str, tick: int) -> None:
        self._current_frame = {"name": name, "tick": tick, "particles": []}

    def draw_particle(self, state: ParticleState) -> None:
        if self._current_frame is None:
            return
        self._current_frame["particles"].append(state)

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        self.frames.clear()
