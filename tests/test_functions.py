from fractions import Fraction

import pytest

from cellunits.context import UnitContext
from cellunits.core.dimensions import CHARGE, LENGTH
from cellunits.core.errors import (
    ARG_COUNT,
    ARG_TYPE,
    DOMAIN_ERROR,
    PARSE_ERROR,
    UNDEFINED_FUNC,
    ErrorValue,
)
from cellunits.core.quantity import Quantity
from cellunits.functions import DEFAULT_FUNCTIONS, FunctionMeta, UnitFunctions, call
from cellunits.units.catalog import CatalogBuilder


# -------------------------------
# Registry
# -------------------------------

def test_default_functions_registered():
    assert DEFAULT_FUNCTIONS.names() == sorted([
        "convert", "to_base", "simplify", "in_units", "value", "unit",
        "dimensions", "is_dimensionless", "compatible", "quantity",
    ])
    assert "convert" in DEFAULT_FUNCTIONS
    assert "sqrt" not in DEFAULT_FUNCTIONS

def test_meta_and_help():
    meta = DEFAULT_FUNCTIONS.meta("convert")
    assert meta.name == "convert"
    assert meta.usage.startswith("convert(")
    assert DEFAULT_FUNCTIONS.meta("value").returns == "Number"
    text = DEFAULT_FUNCTIONS.help("simplify")
    assert "simplify(quantity)" in text
    assert "Examples:" in text

def test_duplicate_registration_rejected():
    reg = UnitFunctions()
    meta = FunctionMeta("twice", "twice(x)", "Doubles x.")
    reg.register(meta, lambda args, ctx: args[0] * 2)
    assert reg.call("twice", [4]) == 8
    with pytest.raises(ValueError):
        reg.register(meta, lambda args, ctx: None)

def test_unknown_function_suggests_similar():
    r = call("convrt", [1])
    assert r.code == UNDEFINED_FUNC
    assert r.message == "Unknown function: convrt"
    assert r.suggestion == "Similar: convert"

def test_unknown_function_without_neighbours():
    assert call("zzzzzzzz", []).suggestion is None

def test_error_arguments_propagate():
    err = ErrorValue.div_zero()
    r = call("value", [err])
    assert r.code == err.code
    assert r.notes == ("propagated through value()",)

def test_arg_count():
    r = call("convert", [Quantity(1)])
    assert r.code == ARG_COUNT
    assert r.message == "convert() expects 2 or 3 arguments, got 1"
    assert r.suggestion == "Use help('convert') for usage"
    assert call("value", []).code == ARG_COUNT

def test_arg_type():
    r = call("convert", [5, "km"])
    assert r.code == ARG_TYPE
    assert r.message == "convert() argument 'quantity': expected Quantity, got Number"
    assert call("convert", [Quantity(1), 5]).code == ARG_TYPE
    assert call("value", [True]).code == ARG_TYPE


# -------------------------------
# convert / in_units
# -------------------------------

def test_convert_quantity(q):
    r = call("convert", [q(5, "km"), "m"])
    assert str(r) == "5000 m"

def test_convert_number_three_args():
    assert call("convert", [100, "C", "F"]) == 212
    assert call("convert", [1, "mi", "ft"]) == 5280

def test_convert_errors_are_values(q):
    r = call("convert", [q(5, "km"), "kg"])
    assert r.code == DOMAIN_ERROR
    assert "'km'" in r.message and "'kg'" in r.message
    r = call("convert", [q(5, "km"), "kmm"])
    assert r.code == PARSE_ERROR
    assert r.suggestion.startswith("Did you mean: ")

def test_convert_charge_to_coulomb(q):
    r = call("convert", [q(1, "mAh"), "C"])
    assert r.value == Fraction("3.6")
    assert r.dimensions == CHARGE

def test_in_units(q):
    assert str(call("in_units", [q(3, "ft"), "in"])) == "36 in"
    assert call("in_units", [5, "km->mi"]) == Fraction(5000) / Fraction("1609.344")
    assert call("in_units", [0, "C to F"]) == 32
    # a conversion string on a quantity uses its target side
    assert str(call("in_units", [q(1, "m"), "m->cm"])) == "100 cm"

def test_in_units_bad_conversion_string():
    assert call("in_units", [5, "km"]).code == PARSE_ERROR


# -------------------------------
# to_base / simplify
# -------------------------------

def test_to_base(q):
    r = call("to_base", [q(20, "C")])
    assert str(r) == "293.15 K"
    assert call("to_base", [1, "km"]) == 1000

def test_simplify(q):
    product = q(10, "kg") * q(9.8, "m/s^2")
    assert str(call("simplify", [product])) == "98 N"
    assert str(call("simplify", [2, "kg*m^2/s^2"])) == "2 J"
    unchanged = q(3, "m/s")
    assert call("simplify", [unchanged]) is unchanged


# -------------------------------
# Inspection
# -------------------------------

def test_value_and_unit(q):
    assert call("value", [q(5, "km")]) == 5
    assert call("unit", [q(5, "km")]) == "km"
    assert call("value", ["9.8 m/s^2"]) == Fraction(49, 5)
    assert call("unit", ["9.8 m/s^2"]) == "m/s^2"
    assert call("value", [7]) == 7
    assert call("unit", [7]) == ""

def test_dimensions(q):
    assert call("dimensions", ["kg*m/s^2"]) == {"length": 1, "mass": 1, "time": -2}
    assert call("dimensions", [q(1, "km/h")]) == {"length": 1, "time": -1}
    assert call("dimensions", [3]) == {}
    assert call("dimensions", ["foo"]).code == PARSE_ERROR

def test_is_dimensionless(q):
    assert call("is_dimensionless", [q(3, "rad")]) is True
    assert call("is_dimensionless", [q(3, "m/km")]) is True
    assert call("is_dimensionless", [q(3, "m")]) is False
    assert call("is_dimensionless", [4]) is True

@pytest.mark.parametrize("a, b", [
    ("km", "mi"),
    ("J", "kWh"),
    ("N", "kg*m/s^2"),
    ("km", "kg"),
    ("C", "K"),
    ("Hz", "1/s"),
])
def test_compatible_is_symmetric(q, a, b):
    assert call("compatible", [a, b]) == call("compatible", [b, a])
    assert call("compatible", [q(1, a), q(1, b)]) == call("compatible", [a, b])

@pytest.mark.parametrize("unit", ["km", "J", "C", "m/s^2", ""])
def test_compatible_is_reflexive(unit):
    assert call("compatible", [unit, unit]) is True

def test_compatible_values(q):
    assert call("compatible", [q(5, "km"), q(3, "mi")]) is True
    assert call("compatible", [q(5, "km"), "kg"]) is False
    assert call("compatible", [2, q(1, "m/m")]) is True


# -------------------------------
# quantity()
# -------------------------------

def test_quantity_constructor():
    r = call("quantity", [5, "km"])
    assert isinstance(r, Quantity)
    assert str(r) == "5 km"
    assert str(call("quantity", ["9.8 m/s^2"])) == "9.8 m/s^2"
    assert str(call("quantity", ["5 @ km"])) == "5 km"

def test_quantity_constructor_errors():
    assert call("quantity", [5, "foo"]).code == PARSE_ERROR
    assert call("quantity", ["km"]).code == PARSE_ERROR
    assert call("quantity", [5]).code == ARG_TYPE
    assert call("quantity", []).code == ARG_COUNT


# -------------------------------
# Context
# -------------------------------

def test_calls_use_context_catalog(ctx):
    b = CatalogBuilder()
    b.define("m", "meter", LENGTH)
    b.define("rod", "rod", LENGTH, "5.0292")
    custom = UnitContext(catalog=b.build())

    assert call("convert", [2, "rod", "m"], custom) == Fraction("10.0584")
    assert call("convert", [2, "rod", "m"], ctx).code == PARSE_ERROR
