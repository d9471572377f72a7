"""
cellunits.context
=================

Evaluation settings for unit-aware formulas: which catalog to use, which
base-unit policy to display in, and how many significant digits to print.

A document section selects the policy with its ``units`` attribute::

    ## Physics @units:imperial

``UnitContext.from_attributes({"units": "imperial"})`` turns that into a
context. Everything else in the package takes the context as an optional
argument and falls back to the SI defaults.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional

from cellunits.core.dimensions import (
    AREA, ENERGY, FORCE, LENGTH, MASS, POWER, PRESSURE, TEMPERATURE, VELOCITY, VOLUME,
    Dimension,
)
from cellunits.core.errors import ErrorValue
from cellunits.core.number import DEFAULT_PRECISION, format_number, is_number
from cellunits.core.quantity import Quantity
from cellunits.core.unit import DIMENSIONLESS
from cellunits.core.unit_simplifier import UnitSimplifier
from cellunits.units.catalog import DEFAULT_CATALOG, UnitCatalog


class BaseUnitPolicy(enum.Enum):
    SI = "SI"
    IMPERIAL = "imperial"

    @classmethod
    def parse(cls, name: str) -> "BaseUnitPolicy":
        """Case-insensitive lookup; ``ValueError`` for anything unknown."""
        key = str(name).strip().casefold()
        for policy in cls:
            if policy.value.casefold() == key:
                return policy
        options = ", ".join(p.value for p in cls)
        raise ValueError(f"Unknown unit policy {name!r}; expected one of: {options}")


# Unit text shown per dimension under the imperial policy
_IMPERIAL_UNITS: Dict[Dimension, str] = {
    LENGTH: "ft",
    MASS: "lb",
    TEMPERATURE: "F",
    AREA: "ft^2",
    VOLUME: "gal",
    VELOCITY: "mph",
    FORCE: "lbf",
    ENERGY: "BTU",
    POWER: "hp",
    PRESSURE: "psi",
}


@lru_cache(maxsize=8)
def simplifier_for(catalog: UnitCatalog) -> UnitSimplifier:
    return UnitSimplifier(catalog)


def preferred_unit_text(
    dimension: Dimension,
    policy: BaseUnitPolicy = BaseUnitPolicy.SI,
    catalog: Optional[UnitCatalog] = None,
) -> str:
    """
    Unit text a dimension is displayed in under ``policy``.

    Imperial has its own choices for the common dimensions; everything else
    (and all of SI) uses the coherent SI unit, named where the catalog has a
    name for it.
    """
    dim = Dimension(dimension)
    if policy is BaseUnitPolicy.IMPERIAL and dim in _IMPERIAL_UNITS:
        return _IMPERIAL_UNITS[dim]
    return simplifier_for(DEFAULT_CATALOG if catalog is None else catalog).si_unit_text(dim)


@dataclass(frozen=True)
class UnitContext:
    catalog: UnitCatalog = field(default=DEFAULT_CATALOG)
    policy: BaseUnitPolicy = BaseUnitPolicy.SI
    precision: int = DEFAULT_PRECISION

    def __post_init__(self) -> None:
        if isinstance(self.policy, str):
            object.__setattr__(self, "policy", BaseUnitPolicy.parse(self.policy))
        if isinstance(self.precision, bool) or not isinstance(self.precision, int) or self.precision < 1:
            raise ValueError(f"precision must be a positive integer, got {self.precision!r}")

    @classmethod
    def from_attributes(cls, attributes: Mapping[str, Any], catalog: Optional[UnitCatalog] = None) -> "UnitContext":
        """Build a context from section attributes (``units``, ``precision``)."""
        kwargs: Dict[str, Any] = {}
        if catalog is not None:
            kwargs["catalog"] = catalog
        if "units" in attributes:
            kwargs["policy"] = BaseUnitPolicy.parse(attributes["units"])
        if "precision" in attributes:
            raw = attributes["precision"]
            try:
                kwargs["precision"] = int(str(raw).strip())
            except ValueError:
                raise ValueError(f"precision must be a positive integer, got {raw!r}") from None
        return cls(**kwargs)

    @property
    def simplifier(self) -> UnitSimplifier:
        return simplifier_for(self.catalog)


def normalize(quantity: Quantity, ctx: Optional[UnitContext] = None) -> Quantity:
    """Convert ``quantity`` to the unit the context's policy prefers for its dimension."""
    ctx = ctx or UnitContext()
    text = preferred_unit_text(quantity.dimensions, ctx.policy, ctx.catalog)
    if not text:
        return Quantity(quantity.si_value, DIMENSIONLESS, "")
    return quantity.convert(text, ctx.catalog)


def render(value: object, ctx: Optional[UnitContext] = None) -> str:
    """Display text for an evaluator value."""
    ctx = ctx or UnitContext()
    if isinstance(value, ErrorValue):
        return str(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Quantity):
        if not value.display_unit and not value.is_dimensionless:
            value = normalize(value, ctx)
        return value.format(ctx.precision)
    if is_number(value):
        return format_number(value, ctx.precision)
    if isinstance(value, dict):
        return "{" + ", ".join(f"{k}: {render(v, ctx)}" for k, v in value.items()) + "}"
    return str(value)


__all__ = [
    "BaseUnitPolicy",
    "UnitContext",
    "preferred_unit_text",
    "normalize",
    "render",
]
