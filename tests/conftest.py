# tests/conftest.py
import pytest

from cellunits.context import BaseUnitPolicy, UnitContext
from cellunits.core.quantity import Quantity
from cellunits.units.catalog import DEFAULT_CATALOG as _catalog


@pytest.fixture(scope="session")
def catalog():
    return _catalog


@pytest.fixture
def ctx(catalog):
    return UnitContext(catalog=catalog)


@pytest.fixture
def imperial_ctx(catalog):
    return UnitContext(catalog=catalog, policy=BaseUnitPolicy.IMPERIAL)


@pytest.fixture
def q():
    """Shorthand constructor: q(5, "km")."""
    return Quantity.new
