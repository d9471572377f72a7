from fractions import Fraction

import pytest

from cellunits.context import UnitContext
from cellunits.core.dimensions import FORCE, LENGTH
from cellunits.core.errors import (
    DIV_ZERO,
    DOMAIN_ERROR,
    PARSE_ERROR,
    TYPE_ERROR,
    ErrorValue,
)
from cellunits.core.quantity import Quantity
from cellunits.dispatch import Kind, at, binary, kind_of, literal, type_name, unary_minus
from cellunits.functions import call
from cellunits.units.catalog import CatalogBuilder


# -------------------------------
# Kinds
# -------------------------------

@pytest.mark.parametrize("value, kind, name", [
    (3, Kind.NUMBER, "Number"),
    (Fraction(1, 2), Kind.NUMBER, "Number"),
    (2.5, Kind.NUMBER, "Number"),
    (Quantity(1), Kind.QUANTITY, "Quantity"),
    (ErrorValue.div_zero(), Kind.ERROR, "Error"),
    (True, Kind.OTHER, "Bool"),
    ("km", Kind.OTHER, "Text"),
    ({"a": 1}, Kind.OTHER, "Object"),
    (None, Kind.OTHER, "NoneType"),
])
def test_kind_and_type_name(value, kind, name):
    assert kind_of(value) is kind
    assert type_name(value) == name


# -------------------------------
# Numbers
# -------------------------------

@pytest.mark.parametrize("op, a, b, expected", [
    ("+", 1, 2, 3),
    ("-", 1, 2, -1),
    ("*", 3, 4, 12),
    ("×", 3, 4, 12),
    ("/", 1, 4, Fraction(1, 4)),
    ("÷", 1, 4, Fraction(1, 4)),
    ("^", 2, 10, 1024),
    ("**", 2, -1, Fraction(1, 2)),
    ("^", 4, Fraction(1, 2), 2),
])
def test_number_arithmetic(op, a, b, expected):
    assert binary(op, a, b) == expected

def test_number_division_by_zero():
    r = binary("/", 1, 0)
    assert isinstance(r, ErrorValue)
    assert r.code == DIV_ZERO

def test_negative_base_fractional_power():
    r = binary("^", -8, Fraction(1, 3))
    assert r.code == DOMAIN_ERROR

def test_unknown_operator_raises():
    with pytest.raises(ValueError):
        binary("%", 1, 2)


# -------------------------------
# Quantities
# -------------------------------

def test_add_compatible(q):
    r = binary("+", q(5, "km"), q(3, "m"))
    assert str(r) == "5.003 km"

def test_add_incompatible_is_domain_error_naming_both(q):
    r = binary("+", q(5, "km"), q(3, "kg"))
    assert isinstance(r, ErrorValue)
    assert r.code == DOMAIN_ERROR
    assert "'km'" in r.message and "'kg'" in r.message

def test_quantity_plus_number_is_domain_error(q):
    assert binary("+", q(5, "km"), 3).code == DOMAIN_ERROR
    assert binary("-", 3, q(5, "km")).code == DOMAIN_ERROR

def test_number_plus_dimensionless_quantity_is_number():
    r = binary("+", 3, Quantity(2))
    assert r == 5
    assert not isinstance(r, Quantity)

def test_multiply_composes_units(q):
    r = binary("*", q(10, "kg"), q(9.8, "m/s^2"))
    assert r.value == 98
    assert r.display_unit == "kg*m/s^2"
    assert r.dimensions == FORCE

def test_scalar_temperature_multiplication(q):
    assert str(binary("*", 2, q(20, "C"))) == "40 C"
    assert str(binary("*", q(20, "C"), 2)) == "40 C"

def test_temperature_scale_mix_is_domain_error(q):
    r = binary("+", q(20, "C"), q(5, "K"))
    assert r.code == DOMAIN_ERROR
    assert "convert" in r.message

def test_kelvin_plus_rankine_is_domain_error():
    r = binary("+", at(1, "K"), at(9, "R"))
    assert isinstance(r, ErrorValue)
    assert r.code == DOMAIN_ERROR

def test_zero_power_times_temperature_keeps_scale():
    t = binary("*", binary("^", at(5, "m"), 0), at(20, "C"))
    assert str(t) == "20 C"
    assert call("convert", [t, "K"]).value == Fraction("293.15")
    t = binary("*", at(20, "C"), at(3, ""))
    assert call("convert", [t, "K"]).value == Fraction("333.15")

def test_deeply_nested_unit_is_parse_error():
    r = at(1, "(" * 3000 + "m" + ")" * 3000)
    assert isinstance(r, ErrorValue)
    assert r.code == PARSE_ERROR

def test_huge_quantity_exponent_is_domain_error(q):
    assert binary("^", q(2, "km"), 999999999).code == DOMAIN_ERROR
    assert binary("^", at(2, ""), 10 ** 9).code == DOMAIN_ERROR

def test_number_divided_by_quantity(q):
    r = binary("/", 1, q(4, "s"))
    assert str(r) == "0.25 1/s"

def test_quantity_division_by_zero(q):
    assert binary("/", q(5, "m"), q(0, "s")).code == DIV_ZERO
    assert binary("/", q(5, "m"), 0).code == DIV_ZERO
    assert binary("/", 5, q(0, "s")).code == DIV_ZERO

def test_power(q):
    assert str(binary("^", q(5, "m"), 2)) == "25 m^2"
    assert str(binary("**", q(5, "m"), Quantity(3))) == "125 m^3"

def test_non_integer_power_is_domain_error(q):
    r = binary("^", q(5, "m"), Fraction(1, 2))
    assert r.code == DOMAIN_ERROR
    assert "non-integer unit exponent" in r.message

def test_number_to_quantity_power(q):
    assert binary("^", 2, Quantity(3)) == 8
    assert binary("^", 2, q(3, "m")).code == DOMAIN_ERROR


# -------------------------------
# Error propagation and bad operands
# -------------------------------

def test_first_error_short_circuits(q):
    first = ErrorValue.div_zero()
    second = ErrorValue.parse_error("bad")
    r = binary("+", first, second)
    assert r.code == DIV_ZERO
    assert r.notes == ("propagated through '+'",)

    r = binary("*", q(1, "m"), second)
    assert r.code == PARSE_ERROR
    assert r.notes == ("propagated through '*'",)

def test_text_operand_is_type_error(q):
    r = binary("+", q(1, "m"), "km")
    assert r.code == TYPE_ERROR
    assert r.message == "Expected Number or Quantity, got Text"
    assert binary("*", True, 2).message == "Expected Number or Quantity, got Bool"


# -------------------------------
# The @ literal
# -------------------------------

def test_at_builds_quantity():
    r = at(100, "km")
    assert isinstance(r, Quantity)
    assert str(r) == "100 km"
    assert str(at(9.8, " m/s^2 ")) == "9.8 m/s^2"

def test_at_unknown_unit_carries_suggestions():
    r = at(5, "foo")
    assert r.code == PARSE_ERROR
    assert r.suggestion is not None and r.suggestion.startswith("Did you mean: ")

def test_at_type_errors(q):
    assert at("5", "km").code == TYPE_ERROR
    assert at(q(5, "m"), "km").code == TYPE_ERROR
    assert at(5, 3).code == TYPE_ERROR

def test_at_propagates_errors():
    r = at(ErrorValue.div_zero(), "km")
    assert r.notes == ("propagated through '@'",)

def test_at_uses_context_catalog(ctx):
    b = CatalogBuilder()
    b.define("rod", "rod", LENGTH, "5.0292")
    custom = UnitContext(catalog=b.build())

    assert isinstance(at(1, "rod", custom), Quantity)
    assert at(1, "rod", ctx).code == PARSE_ERROR

def test_literal():
    assert str(literal("100 @ km")) == "100 km"
    assert literal("-40 @ C").value == -40
    assert literal("100 km").code == PARSE_ERROR
    assert literal("1 @ kmm").code == PARSE_ERROR


# -------------------------------
# Unary minus
# -------------------------------

def test_unary_minus(q):
    assert unary_minus(3) == -3
    assert str(unary_minus(q(5, "m"))) == "-5 m"
    assert unary_minus("x").code == TYPE_ERROR
    assert unary_minus(ErrorValue.div_zero()).notes == ("propagated through unary '-'",)
