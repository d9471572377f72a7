"""
cellunits: physical units and dimensional analysis for spreadsheet-style formulas.

Formula cells may carry units (``100 @ km``, ``9.8 @ m/s^2``). cellunits checks
dimensions at evaluation time, converts between compatible units (including
the affine temperature scales), tracks composed units through arithmetic, and
exposes the unit functions formulas can call.
This module exposes a minimal, stable public API. Heavy subsystems (the unit
catalog, the function table) are imported lazily to avoid import-time side
effects.
"""

from importlib import metadata as _metadata


# Try to read the installed package version first; fall back to pyproject.toml for local dev.
try:
    __version__ = _metadata.version("cellunits")
except _metadata.PackageNotFoundError:
    import tomllib
    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from cellunits.functions import UnitFunctions
    from cellunits.units.catalog import UnitCatalog

_LAZY = {
    "Quantity": ("cellunits.core.quantity", "Quantity"),
    "Dimension": ("cellunits.core.dimensions", "Dimension"),
    "ErrorValue": ("cellunits.core.errors", "ErrorValue"),
    "UnitContext": ("cellunits.context", "UnitContext"),
    "BaseUnitPolicy": ("cellunits.context", "BaseUnitPolicy"),
    "render": ("cellunits.context", "render"),
    "binary": ("cellunits.dispatch", "binary"),
    "parse_unit": ("cellunits.units.parser", "parse_unit"),
}

# Public names exposed by the package. Keep this minimal and stable.
__all__ = ["__version__", "catalog", "default_functions", *_LAZY]

# Lazy access helpers -------------------------------------------------------

def _get_default_catalog() -> "UnitCatalog":
    # Import here to avoid building the catalog at import time.
    from cellunits.units.catalog import DEFAULT_CATALOG  # local import
    return DEFAULT_CATALOG

def _get_default_functions() -> "UnitFunctions":
    from cellunits.functions import DEFAULT_FUNCTIONS  # local import
    return DEFAULT_FUNCTIONS

def __getattr__(name: str) -> Any:
    """
    Lazy attribute access. ``catalog`` is the shared default unit catalog and
    ``default_functions`` the default function table (``cellunits.functions``
    is the submodule); the other public names resolve
    to their defining modules on first use.
    """
    if name == "catalog":
        return _get_default_catalog()
    if name == "default_functions":
        return _get_default_functions()
    if name in _LAZY:
        import importlib
        module, attr = _LAZY[name]
        return getattr(importlib.import_module(module), attr)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__() -> list[str]:
    # Improve discoverability in REPL / autocomplete.
    return sorted(list(globals().keys()) + ["catalog", "default_functions", *_LAZY])
