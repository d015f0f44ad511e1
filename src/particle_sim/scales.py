# MIT License (see LICENSE)
"""
Physical unit scales.

A Scale is a unit multiplier written as coefficient × 10^exponent. A
Simulator owns one Scales bundle (length, mass, charge, time) and shares it
by reference with its particles and fields; only the Simulator changes it.

Example:
    s = Scales()
    s.set_time(2.0, -1)
    s.time.value()   # 0.2
"""
from __future__ import annotations
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Scale:
    """
    Unit multiplier for one physical dimension.

    Attributes:
        coefficient: Mantissa of the multiplier. Zero only when time is frozen.
        exponent: Power of ten applied to the coefficient.
    """
    coefficient: float = 1.0
    exponent: int = 0

    def value(self) -> float:
        """Raw numeric multiplier, coefficient × 10^exponent."""
        return self.coefficient * 10.0 ** self.exponent

    @property
    def magnitude(self) -> float:
        return self.value()

    @property
    def is_zero(self) -> bool:
        return self.coefficient == 0

    def __mul__(self, other: Scale) -> Scale:
        return Scale(self.coefficient * other.coefficient, self.exponent + other.exponent)

    def __truediv__(self, other: Scale) -> Scale:
        if other.coefficient == 0:
            raise ZeroDivisionError("cannot divide by a zero scale")
        return Scale(self.coefficient / other.coefficient, self.exponent - other.exponent)

    @staticmethod
    def ratio(old: Scale, new: Scale) -> Scale:
        """Multiplier that converts a quantity expressed in `old` into `new`."""
        return new / old


@dataclass
class Scales:
    """
    The four independently adjustable scales of one simulation.

    Attributes:
        length: Length unit.
        mass: Mass unit.
        charge: Charge unit.
        time: Time unit. Changing it requires rescaling particle velocities,
              which is Simulator.set_time_scale's job, not this class's.
    """
    length: Scale = field(default_factory=Scale)
    mass: Scale = field(default_factory=Scale)
    charge: Scale = field(default_factory=Scale)
    time: Scale = field(default_factory=Scale)

    def set_time(self, coefficient: float, exponent: int) -> None:
        """Replace the time scale's components."""
        self.time = Scale(float(coefficient), int(exponent))
