"""
cellunits.core.quantity
=======================

Defines the `Quantity` value type and the conversion engine.

A quantity is an exact number, the resolved `Unit` it is measured in, and the
unit text to show for it. The text is whatever the author wrote (``"km"``,
``"m/s^2"``) or what an operation composed from its operands; it is never
normalised behind the author's back. Use :class:`~cellunits.core.unit_simplifier.UnitSimplifier`
or the base-unit policy to rename a unit explicitly.

The system supports:
- Conversion between compatible units, including the affine temperature
  scales (Celsius, Fahrenheit).
- Addition and subtraction of compatible quantities (result in the left
  operand's unit).
- Multiplication, division and integer powers with dimension tracking.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import TYPE_CHECKING, Optional, Union

from cellunits.core.dimensions import TEMPERATURE, Dimension
from cellunits.core.errors import (
    DimensionMismatchError,
    NonIntegerExponentError,
    TemperatureScaleError,
)
from cellunits.core.number import Number, NumberLike, format_number, is_integral, is_number, to_number
from cellunits.core.unit import DIMENSIONLESS, Unit
from cellunits.core.utils import compose_power, compose_product, compose_quotient, format_dim

if TYPE_CHECKING:
    from cellunits.units.catalog import UnitCatalog

Exponent = Union[int, Fraction, "Quantity"]


# ---------------------------------------------------------------------------
# Conversion engine
# ---------------------------------------------------------------------------
def convert_value(value: Number, source: Unit, target: Unit) -> Number:
    """
    Re-express ``value`` (measured in ``source``) in ``target``.

    ``si = (value + src.offset) * src.factor`` then
    ``result = si / tgt.factor - tgt.offset``; offsets are zero for every
    unit except a bare temperature scale.

    Raises
    ------
    DimensionMismatchError
        If the two units measure different things.
    DomainError
        If the target factor is zero.
    """
    if source.dimensions != target.dimensions:
        raise DimensionMismatchError(str(source.dimensions), str(target.dimensions), "convert")
    if source == target:
        return value
    return target.from_si(source.to_si(value))


def _as_exponent(exp: object, unit_text: str) -> int:
    """Integer exponent from an int, an integral Fraction, or an integral dimensionless quantity."""
    if isinstance(exp, Quantity):
        if not exp.is_dimensionless:
            raise NonIntegerExponentError(f"{exp}", unit_text)
        exp = exp.si_value
    if isinstance(exp, bool) or not is_number(exp):
        raise TypeError(f"Exponent must be a number, got {type(exp).__name__}")
    n = to_number(exp)
    if not is_integral(n):
        raise NonIntegerExponentError(format_number(n), unit_text)
    return int(n)


# ---------------------------------------------------------------------------
# Quantity
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class Quantity:
    """
    A value with a unit.

    Attributes
    ----------
    value : Fraction
        The magnitude, expressed in ``unit``.
    unit : Unit
        Dimension and SI conversion of the unit.
    display_unit : str
        Text shown for the unit. Empty for a bare dimensionless quantity.
    """

    value: Number
    unit: Unit = DIMENSIONLESS
    display_unit: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", to_number(self.value))

    # --- construction ---
    @classmethod
    def new(cls, value: NumberLike, unit_text: str, catalog: Optional["UnitCatalog"] = None) -> "Quantity":
        """Parse ``unit_text`` and wrap ``value``; the text is kept verbatim for display."""
        from cellunits.units.parser import parse_unit

        return cls(to_number(value), parse_unit(unit_text, catalog), unit_text)

    @classmethod
    def from_unit(cls, value: NumberLike, unit: Unit, display_unit: str = "") -> "Quantity":
        return cls(to_number(value), unit, display_unit)

    # --- introspection ---
    @property
    def dimensions(self) -> Dimension:
        return self.unit.dimensions

    @property
    def is_dimensionless(self) -> bool:
        return self.unit.is_dimensionless

    @property
    def is_scalar(self) -> bool:
        """True for a pure number wrapped as a quantity (``x ^ 0``, ``x @ ""``)."""
        return (
            self.unit.is_dimensionless
            and self.unit.to_si_factor == 1
            and self.display_unit.strip() in ("", "1")
        )

    @property
    def si_value(self) -> Number:
        """Magnitude in the coherent SI unit for this dimension."""
        return self.unit.to_si(self.value)

    def is_compatible(self, other: "Quantity | Unit") -> bool:
        other_dim = other.dimensions
        return self.unit.dimensions == other_dim

    # --- conversion ---
    def convert(self, target: str, catalog: Optional["UnitCatalog"] = None) -> "Quantity":
        """
        Re-express this quantity in ``target`` (a unit expression).

        The target is parsed with this quantity's dimension as a namespace
        hint, so ``convert("C")`` on a charge means coulombs.
        """
        from cellunits.units.parser import parse_unit

        tgt = parse_unit(target, catalog, dimension=self.unit.dimensions)
        if tgt.dimensions != self.unit.dimensions:
            raise DimensionMismatchError(self.display_unit, target, "convert")
        return Quantity(convert_value(self.value, self.unit, tgt), tgt, target)

    def to_base(self) -> "Quantity":
        """Same quantity in the coherent SI unit, e.g. ``kg*m/s^2``, ``1/s``, ``K``."""
        dims = self.unit.dimensions
        return Quantity(self.si_value, Unit(dims), format_dim(dims))

    # --- arithmetic ---
    @staticmethod
    def _lift(other: "Quantity | NumberLike") -> "Quantity":
        if isinstance(other, Quantity):
            return other
        return Quantity(to_number(other), DIMENSIONLESS, "")

    def _aligned_value(self, other: "Quantity", action: str) -> Number:
        """``other``'s value in this quantity's unit, checking compatibility."""
        if other.unit.dimensions != self.unit.dimensions:
            raise DimensionMismatchError(self.display_unit, other.display_unit, action)
        if other.unit == self.unit:
            return other.value
        # a temperature adds only to the same unit, so even K + mK is rejected
        if self.unit.dimensions == TEMPERATURE:
            raise TemperatureScaleError(self.display_unit, other.display_unit)
        return convert_value(other.value, other.unit, self.unit)

    def add(self, other: "Quantity | NumberLike") -> "Quantity":
        o = self._lift(other)
        return Quantity(self.value + self._aligned_value(o, "add"), self.unit, self.display_unit)

    def sub(self, other: "Quantity | NumberLike") -> "Quantity":
        o = self._lift(other)
        return Quantity(self.value - self._aligned_value(o, "subtract"), self.unit, self.display_unit)

    def mul(self, other: "Quantity | NumberLike") -> "Quantity":
        if not isinstance(other, Quantity):
            # scalar: unit and display kept, raw value scaled
            return Quantity(self.value * to_number(other), self.unit, self.display_unit)
        if other.is_scalar:
            return Quantity(self.value * other.value, self.unit, self.display_unit)
        if self.is_scalar:
            return Quantity(self.value * other.value, other.unit, other.display_unit)
        return Quantity(
            self.value * other.value,
            self.unit.multiply(other.unit),
            compose_product(self.display_unit, other.display_unit),
        )

    def div(self, other: "Quantity | NumberLike") -> "Quantity":
        if not isinstance(other, Quantity):
            n = to_number(other)
            if n == 0:
                raise ZeroDivisionError("division by zero")
            return Quantity(self.value / n, self.unit, self.display_unit)
        if other.value == 0:
            raise ZeroDivisionError("division by zero")
        if other.is_scalar:
            return Quantity(self.value / other.value, self.unit, self.display_unit)
        if self.is_scalar:
            return other.rdiv(self.value)
        return Quantity(
            self.value / other.value,
            self.unit.divide(other.unit),
            compose_quotient(self.display_unit, other.display_unit),
        )

    def rdiv(self, other: NumberLike) -> "Quantity":
        """``number / self``: the unit is inverted (``1/s``)."""
        if self.value == 0:
            raise ZeroDivisionError("division by zero")
        return Quantity(
            to_number(other) / self.value,
            self.unit.inverse(),
            compose_quotient("", self.display_unit),
        )

    def pow(self, exp: Exponent) -> "Quantity":
        n = _as_exponent(exp, self.display_unit)
        # the unit is powered first so an oversized exponent fails before the value grows
        unit = self.unit.power(n)
        # Fraction ** negative int raises ZeroDivisionError on a zero base
        return Quantity(self.value ** n, unit, compose_power(self.display_unit, n))

    def neg(self) -> "Quantity":
        return Quantity(-self.value, self.unit, self.display_unit)

    # --- operator forms ---
    def __add__(self, other: object) -> "Quantity":
        if not isinstance(other, Quantity) and not is_number(other):
            return NotImplemented
        return self.add(other)  # type: ignore[arg-type]

    def __radd__(self, other: object) -> Number:
        if not is_number(other):
            return NotImplemented
        # number + quantity: the number leads, so the result is a plain number
        return to_number(other) + Quantity(to_number(other))._aligned_value(self, "add")  # type: ignore[arg-type]

    def __sub__(self, other: object) -> "Quantity":
        if not isinstance(other, Quantity) and not is_number(other):
            return NotImplemented
        return self.sub(other)  # type: ignore[arg-type]

    def __rsub__(self, other: object) -> Number:
        if not is_number(other):
            return NotImplemented
        return to_number(other) - Quantity(to_number(other))._aligned_value(self, "subtract")  # type: ignore[arg-type]

    def __mul__(self, other: object) -> "Quantity":
        if not isinstance(other, Quantity) and not is_number(other):
            return NotImplemented
        return self.mul(other)  # type: ignore[arg-type]

    def __rmul__(self, other: object) -> "Quantity":
        # allows 2 * (20 C) -> 40 C
        if not is_number(other):
            return NotImplemented
        return self.mul(other)  # type: ignore[arg-type]

    def __truediv__(self, other: object) -> "Quantity":
        if not isinstance(other, Quantity) and not is_number(other):
            return NotImplemented
        return self.div(other)  # type: ignore[arg-type]

    def __rtruediv__(self, other: object) -> "Quantity":
        if not is_number(other):
            return NotImplemented
        return self.rdiv(other)  # type: ignore[arg-type]

    def __pow__(self, exp: object) -> "Quantity":
        return self.pow(exp)  # type: ignore[arg-type]

    def __neg__(self) -> "Quantity":
        return self.neg()

    # --- display ---
    def format(self, precision: int = 15) -> str:
        number = format_number(self.value, precision)
        return f"{number} {self.display_unit}" if self.display_unit else number

    def __str__(self) -> str:
        return self.format()


__all__ = ["Quantity", "convert_value"]
