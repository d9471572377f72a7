from fractions import Fraction

import pytest

from cellunits.core.dimensions import CAPACITANCE, CHARGE, FORCE, FREQUENCY, LENGTH, TEMPERATURE
from cellunits.core.errors import DimensionMismatchError, UnknownUnitError
from cellunits.core.quantity import Quantity, convert_value
from cellunits.core.unit import Unit
from cellunits.units.parser import parse_unit


# -------------------------------
# convert_value
# -------------------------------

def test_convert_value_linear():
    assert convert_value(Fraction(5), parse_unit("km"), parse_unit("m")) == 5000
    assert convert_value(Fraction(1), parse_unit("mi"), parse_unit("ft")) == 5280
    assert convert_value(Fraction(36), parse_unit("km/h"), parse_unit("m/s")) == 10

def test_convert_value_rejects_other_dimension():
    with pytest.raises(DimensionMismatchError):
        convert_value(Fraction(1), parse_unit("m"), parse_unit("s"))

def test_convert_value_same_unit_is_identity():
    km = parse_unit("km")
    assert convert_value(Fraction(7, 3), km, km) == Fraction(7, 3)


# -------------------------------
# Quantity.convert
# -------------------------------

def test_convert_keeps_target_text(q):
    r = q(5, "km").convert("m")
    assert r.value == 5000
    assert r.display_unit == "m"
    assert str(r) == "5000 m"

def test_convert_composite_units(q):
    r = q(1, "kWh").convert("J")
    assert r.value == 3600000
    assert q(10, "m/s").convert("km/h").value == 36
    assert q(1, "ft^2").convert("in^2").value == 144

@pytest.mark.parametrize("value, source, target, expected", [
    (20, "C", "F", 68),
    (20, "C", "K", Fraction("293.15")),
    (-40, "C", "F", -40),
    (212, "F", "C", 100),
    (0, "K", "C", Fraction("-273.15")),
    (32, "F", "K", Fraction("273.15")),
    (0, "F", "R", Fraction("459.67")),
    (1, "K", "mK", 1000),
    (9, "R", "K", 5),
])
def test_temperature_conversions(q, value, source, target, expected):
    assert q(value, source).convert(target).value == expected

def test_temperature_round_trip_is_exact(q):
    there = q(Fraction(98, 3), "F").convert("C")
    assert there.convert("F").value == Fraction(98, 3)

def test_convert_incompatible_names_both_units(q):
    with pytest.raises(DimensionMismatchError) as ei:
        q(5, "km").convert("kg")
    assert "'km'" in str(ei.value) and "'kg'" in str(ei.value)

def test_convert_unknown_target(q):
    with pytest.raises(UnknownUnitError):
        q(5, "km").convert("kmm")

def test_convert_uses_dimension_namespace(q):
    # "C" on a charge is the coulomb, "F" on a capacitance is the farad
    charge = q(1, "Ah").convert("C")
    assert charge.value == 3600
    assert charge.dimensions == CHARGE
    assert charge.display_unit == "C"

    cap = q(2, "s^4*A^2/kg/m^2").convert("F")
    assert cap.value == 2
    assert cap.dimensions == CAPACITANCE

    assert q(20, "C").convert("F").dimensions == TEMPERATURE

def test_convert_with_explicit_catalog(q):
    from cellunits.units.catalog import CatalogBuilder

    b = CatalogBuilder()
    b.define("m", "meter", LENGTH)
    b.define("rod", "rod", LENGTH, "5.0292")
    custom = b.build()

    r = Quantity.new(2, "rod", custom).convert("m", custom)
    assert r.value == Fraction("10.0584")


# -------------------------------
# to_base
# -------------------------------

@pytest.mark.parametrize("value, unit, si, text", [
    (5, "km", 5000, "m"),
    (1, "kN", 1000, "kg*m/s^2"),
    (20, "C", Fraction("293.15"), "K"),
    (2, "kHz", 2000, "1/s"),
    (3, "h", 10800, "s"),
    (1, "L", Fraction(1, 1000), "m^3"),
])
def test_to_base(q, value, unit, si, text):
    r = q(value, unit).to_base()
    assert r.value == si
    assert r.display_unit == text
    assert r.unit == Unit(r.dimensions)

def test_to_base_dimensions(q):
    assert q(1, "kN").to_base().dimensions == FORCE
    assert q(1, "rpm").to_base().dimensions == FREQUENCY

def test_to_base_dimensionless(q):
    r = q(2, "KiB").to_base()
    assert r.value == 16384
    assert r.display_unit == ""
    assert str(r) == "16384"
