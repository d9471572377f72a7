"""
cellunits.units.catalog
=======================

The unit catalog: an immutable table from unit symbols (and aliases) to
:class:`UnitEntry` records.

Design
------
- ``CatalogBuilder`` is the only mutable piece. It is used once to register
  entries and aliases, then ``build()`` freezes everything into a
  ``UnitCatalog`` backed by read-only mappings.
- Every entry lives in the namespace of its dimension. The global symbol
  table keeps the first registered owner of a symbol, so a later entry of a
  *different* dimension that reuses the symbol (coulomb ``C`` after Celsius
  ``C``) is still reachable through a dimension-aware lookup.
- Lookups are case-sensitive. Input is NFC-normalised and the micro sign is
  folded to Greek mu.
- Unknown symbols raise ``UnknownUnitError`` with near-miss suggestions.

``DEFAULT_CATALOG`` is built once at import time and shared by everything
that is not handed an explicit catalog.
"""
from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from cellunits.core.dimensions import TEMPERATURE, Dimension
from cellunits.core.errors import UnknownUnitError
from cellunits.core.number import ONE, ZERO, Number, NumberLike, to_number
from cellunits.core.unit import Unit
from cellunits.units.utils import closest_symbols

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------
def normalize_symbol(s: str) -> str:
    """Normalize user-provided unit symbols.

    Rules:
    - Strip surrounding whitespace.
    - Unicode normalize to NFC (the angstrom sign becomes 'Å', the ohm sign 'Ω').
    - Fold the micro sign 'µ' (U+00B5) into Greek mu 'μ' (U+03BC).
    - Leave case as-is.
    """
    if not s:
        return s
    s = unicodedata.normalize("NFC", s.strip())
    return s.replace("µ", "μ")


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class UnitEntry:
    """A named catalog unit."""

    symbol: str
    name: str
    dimensions: Dimension
    to_si_factor: Number = ONE
    to_si_offset: Number = ZERO
    category: str = ""
    derived: bool = False
    aliases: Tuple[str, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "dimensions", Dimension(self.dimensions))
        object.__setattr__(self, "to_si_factor", to_number(self.to_si_factor))
        object.__setattr__(self, "to_si_offset", to_number(self.to_si_offset))
        if self.to_si_factor <= 0:
            raise ValueError(f"{self.symbol}: to_si_factor must be positive")
        if self.to_si_offset != 0 and self.dimensions != TEMPERATURE:
            raise ValueError(f"{self.symbol}: only pure temperature units may carry an offset")

    @property
    def unit(self) -> Unit:
        return Unit(self.dimensions, self.to_si_factor, self.to_si_offset)

    @property
    def has_offset(self) -> bool:
        return self.to_si_offset != 0


# ---------------------------------------------------------------------------
# Immutable catalog
# ---------------------------------------------------------------------------
class UnitCatalog:
    """Read-only symbol table. Build one with :class:`CatalogBuilder`."""

    __slots__ = ("_entries", "_symbols", "_namespaces")

    def __init__(
        self,
        entries: Tuple[UnitEntry, ...],
        symbols: Mapping[str, UnitEntry],
        namespaces: Mapping[Dimension, Mapping[str, UnitEntry]],
    ) -> None:
        self._entries = entries
        self._symbols = MappingProxyType(dict(symbols))
        self._namespaces = MappingProxyType(
            {d: MappingProxyType(dict(ns)) for d, ns in namespaces.items()}
        )

    def __contains__(self, symbol: str) -> bool:
        return normalize_symbol(symbol) in self._symbols

    def __iter__(self) -> Iterator[UnitEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, symbol: str, dimension: Optional[Dimension] = None) -> Optional[UnitEntry]:
        """Like :meth:`resolve` but returns None on a miss."""
        sym = normalize_symbol(symbol)
        if dimension is not None:
            ns = self._namespaces.get(Dimension(dimension))
            if ns is not None and sym in ns:
                return ns[sym]
        return self._symbols.get(sym)

    def resolve(self, symbol: str, dimension: Optional[Dimension] = None) -> UnitEntry:
        """Look up a unit symbol or alias.

        When ``dimension`` is given, the namespace for that dimension is tried
        first, which is how colliding symbols (``C``, ``F``) are told apart.

        Raises ``UnknownUnitError`` (with suggestions) if nothing matches.
        """
        entry = self.get(symbol, dimension)
        if entry is None:
            suggestions = closest_symbols(normalize_symbol(symbol), self._symbols.keys())
            raise UnknownUnitError(symbol, suggestions)
        return entry

    def symbols(self) -> Mapping[str, UnitEntry]:
        return self._symbols

    def namespace(self, dimension: Dimension) -> Mapping[str, UnitEntry]:
        return self._namespaces.get(Dimension(dimension), MappingProxyType({}))

    def derived_entries(self) -> List[UnitEntry]:
        """Named derived units, in registration order."""
        return [e for e in self._entries if e.derived]

    def by_category(self, category: str) -> List[UnitEntry]:
        return [e for e in self._entries if e.category == category]


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------
class CatalogBuilder:
    """Collects entries and aliases, then freezes them into a UnitCatalog."""

    def __init__(self) -> None:
        self._entries: List[UnitEntry] = []
        self._symbols: Dict[str, UnitEntry] = {}
        self._namespaces: Dict[Dimension, Dict[str, UnitEntry]] = {}
        self._shadowed = 0

    def _bind(self, key: str, entry: UnitEntry) -> None:
        key = normalize_symbol(key)
        ns = self._namespaces.setdefault(entry.dimensions, {})
        owner = ns.get(key)
        if owner is not None and owner is not entry:
            raise ValueError(
                f"Cannot register '{key}' for {entry.name}: "
                f"already used by {owner.name} with the same dimension."
            )
        ns[key] = entry

        current = self._symbols.get(key)
        if current is None:
            self._symbols[key] = entry
        elif current is not entry:
            self._shadowed += 1
            logger.debug(
                "symbol %r kept for %s; %s reachable only via the %s namespace",
                key, current.name, entry.name, entry.dimensions.name or entry.dimensions,
            )

    def register(self, entry: UnitEntry) -> UnitEntry:
        """Register an entry under its symbol and its aliases."""
        self._bind(entry.symbol, entry)
        for alias in entry.aliases:
            self._bind(alias, entry)
        self._entries.append(entry)
        return entry

    def define(
        self,
        symbol: str,
        name: str,
        dimensions: Dimension,
        factor: NumberLike = 1,
        *,
        offset: NumberLike = 0,
        category: str = "",
        derived: bool = False,
        aliases: Iterable[str] = (),
    ) -> UnitEntry:
        """Convenience wrapper around :meth:`register`."""
        return self.register(
            UnitEntry(
                symbol,
                name,
                dimensions,
                to_number(factor),
                to_number(offset),
                category,
                derived,
                tuple(aliases),
            )
        )

    def register_alias(self, alias: str, symbol: str, dimension: Optional[Dimension] = None) -> None:
        """Add another spelling for an already registered unit."""
        key = normalize_symbol(symbol)
        if dimension is not None:
            target = self._namespaces.get(Dimension(dimension), {}).get(key)
        else:
            target = self._symbols.get(key)
        if target is None:
            raise ValueError(f"Cannot alias '{alias}': unknown unit '{symbol}'")
        self._bind(alias, target)

    def build(self) -> UnitCatalog:
        catalog = UnitCatalog(tuple(self._entries), self._symbols, self._namespaces)
        logger.debug(
            "built unit catalog: %d units, %d symbols, %d namespace-only symbols",
            len(self._entries), len(self._symbols), self._shadowed,
        )
        return catalog


def _bootstrap_default_catalog() -> UnitCatalog:
    from cellunits.units.definitions import register_default_units

    builder = CatalogBuilder()
    register_default_units(builder)
    return builder.build()


# Public, shared default catalog
DEFAULT_CATALOG: UnitCatalog = _bootstrap_default_catalog()


__all__ = [
    "UnitEntry",
    "UnitCatalog",
    "CatalogBuilder",
    "DEFAULT_CATALOG",
    "normalize_symbol",
]
