from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction

from cellunits.core.dimensions import DIM_0, TEMPERATURE, Dimension
from cellunits.core.errors import DomainError
from cellunits.core.number import ONE, ZERO, Number, to_number

# largest |exponent| a unit or any of its base dimensions may carry
MAX_EXPONENT = 64


@dataclass(frozen=True, slots=True)
class Unit:
    """A resolved, possibly composite, unit.

    ``si = (value + to_si_offset) * to_si_factor``. The offset is nonzero only
    for a bare absolute-temperature scale; every combination of units drops it.
    """

    dimensions: Dimension
    to_si_factor: Number = ONE
    to_si_offset: Number = ZERO

    def __post_init__(self) -> None:
        object.__setattr__(self, "dimensions", Dimension(self.dimensions))
        object.__setattr__(self, "to_si_factor", to_number(self.to_si_factor))
        object.__setattr__(self, "to_si_offset", to_number(self.to_si_offset))
        if self.to_si_offset != 0 and self.dimensions != TEMPERATURE:
            raise ValueError("Only a pure temperature unit may carry an offset")

    @property
    def has_offset(self) -> bool:
        return self.to_si_offset != 0

    @property
    def is_dimensionless(self) -> bool:
        return self.dimensions.is_dimensionless

    def is_compatible(self, other: "Unit") -> bool:
        return self.dimensions == other.dimensions

    # --- value conversion ---
    def to_si(self, value: Number) -> Number:
        if self.has_offset:
            return (value + self.to_si_offset) * self.to_si_factor
        return value * self.to_si_factor

    def from_si(self, si_value: Number) -> Number:
        if self.to_si_factor == 0:
            raise DomainError("cannot convert into a unit with a zero SI factor")
        if self.has_offset:
            return si_value / self.to_si_factor - self.to_si_offset
        return si_value / self.to_si_factor

    # --- composition (offsets never survive) ---
    def multiply(self, other: "Unit") -> "Unit":
        return Unit(
            self.dimensions.add(other.dimensions),
            self.to_si_factor * other.to_si_factor,
        )

    def divide(self, other: "Unit") -> "Unit":
        # ZeroDivisionError on a zero-factor divisor is left to the caller
        return Unit(
            self.dimensions.sub(other.dimensions),
            self.to_si_factor / other.to_si_factor,
        )

    def power(self, n: int) -> "Unit":
        if n == 1:
            return self
        if abs(n) > MAX_EXPONENT or any(abs(e * n) > MAX_EXPONENT for e in self.dimensions):
            raise DomainError(f"unit exponent {n} is too large (limit {MAX_EXPONENT})")
        return Unit(self.dimensions.scale(n), self.to_si_factor ** n)

    def inverse(self) -> "Unit":
        return self.power(-1)

    def __mul__(self, other: "Unit") -> "Unit":
        if not isinstance(other, Unit):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: "Unit") -> "Unit":
        if not isinstance(other, Unit):
            return NotImplemented
        return self.divide(other)

    def __pow__(self, n: int) -> "Unit":
        if isinstance(n, bool) or not isinstance(n, int):
            if isinstance(n, Fraction) and n.denominator == 1:
                n = int(n)
            else:
                return NotImplemented
        return self.power(n)


DIMENSIONLESS = Unit(DIM_0, ONE, ZERO)

__all__ = ["Unit", "DIMENSIONLESS", "MAX_EXPONENT"]
