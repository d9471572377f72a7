from cellunits.units.catalog import (
    DEFAULT_CATALOG,
    CatalogBuilder,
    UnitCatalog,
    UnitEntry,
    normalize_symbol,
)
from cellunits.units.parser import (
    parse_conversion,
    parse_quantity_literal,
    parse_quantity_string,
    parse_unit,
)

__all__ = [
    "DEFAULT_CATALOG",
    "CatalogBuilder",
    "UnitCatalog",
    "UnitEntry",
    "normalize_symbol",
    "parse_unit",
    "parse_quantity_literal",
    "parse_quantity_string",
    "parse_conversion",
]
