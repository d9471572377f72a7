"""Explicit simplification of quantities to named derived units.

Arithmetic never renames units: ``10 kg * 9.8 m/s^2`` stays ``98 kg*m/s^2``.
``UnitSimplifier`` is the opt-in step that looks for a named derived unit
(``N``, ``kJ``, ``Pa``…) with exactly the same dimension and SI factor and
re-labels the quantity with it. Because factors are exact fractions, "the same
factor" is plain equality, and the value never changes.
"""

from __future__ import annotations

from fractions import Fraction
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from cellunits.core.dimensions import Dimension
from cellunits.core.utils import format_dim

if TYPE_CHECKING:  # pragma: no cover - import only used for typing
    from cellunits.core.quantity import Quantity
    from cellunits.core.unit import Unit
    from cellunits.units.catalog import UnitCatalog, UnitEntry

_Key = Tuple[Dimension, Fraction]


class UnitSimplifier:
    """Finds named derived units in a catalog for a given unit."""

    def __init__(self, catalog: "UnitCatalog") -> None:
        self._catalog = catalog
        # first registered entry wins, so Hz is preferred over Bq and Gy over Sv
        self._by_key: Dict[_Key, "UnitEntry"] = {}
        for entry in catalog.derived_entries():
            if entry.has_offset:
                continue
            self._by_key.setdefault((entry.dimensions, entry.to_si_factor), entry)

    @property
    def catalog(self) -> "UnitCatalog":
        return self._catalog

    def named_unit_for(self, unit: "Unit") -> Optional["UnitEntry"]:
        """The preferred derived entry equal to ``unit``, or None."""
        if unit.has_offset:
            return None
        return self._by_key.get((unit.dimensions, unit.to_si_factor))

    def simplify(self, quantity: "Quantity") -> "Quantity":
        """
        Re-label ``quantity`` with a matching named derived unit.

        Returned unchanged when nothing matches, when the unit carries an
        offset, or when it is already displayed with that symbol.
        """
        from cellunits.core.quantity import Quantity

        entry = self.named_unit_for(quantity.unit)
        if entry is None or quantity.display_unit == entry.symbol:
            return quantity
        return Quantity(quantity.value, entry.unit, entry.symbol)

    def si_unit_text(self, dimension: Dimension) -> str:
        """
        Text for the coherent SI unit of ``dimension``.

        A named derived unit is used when one has factor 1 and its symbol
        resolves back to it without a dimension hint (``N``, ``Hz``); otherwise
        the base-unit composition (``kg*m/s^2``, ``s^4*A^2/kg/m^2``).
        """
        dim = Dimension(dimension)
        entry = self._by_key.get((dim, Fraction(1)))
        if entry is not None and self._catalog.get(entry.symbol) is entry:
            return entry.symbol
        return format_dim(dim)


__all__ = ["UnitSimplifier"]
