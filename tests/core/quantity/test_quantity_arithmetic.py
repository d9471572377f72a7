from fractions import Fraction

import pytest

from cellunits.core.dimensions import AREA, DIM_0, FORCE, FREQUENCY, LENGTH, TIME
from cellunits.core.errors import (
    DimensionMismatchError,
    NonIntegerExponentError,
    TemperatureScaleError,
)
from cellunits.core.quantity import Quantity


# -------------------------------
# Addition / subtraction
# -------------------------------

def test_add_converts_into_left_unit(q):
    r = q(5, "km") + q(3, "m")
    assert r.value == Fraction("5.003")
    assert r.display_unit == "km"
    assert str(r) == "5.003 km"

def test_add_keeps_left_display_even_when_right_is_larger(q):
    r = q(30, "cm") + q(1, "m")
    assert str(r) == "130 cm"

def test_sub(q):
    assert str(q(10, "m") - q(50, "cm")) == "9.5 m"
    assert str(q(1, "h") - q(15, "min")) == "0.75 h"

def test_add_incompatible_names_both(q):
    with pytest.raises(DimensionMismatchError) as ei:
        q(5, "km") + q(3, "kg")
    msg = str(ei.value)
    assert "'km'" in msg and "'kg'" in msg

def test_add_number_to_dimensioned_quantity_fails(q):
    with pytest.raises(DimensionMismatchError):
        q(5, "km") + 3
    with pytest.raises(DimensionMismatchError):
        3 + q(5, "km")

def test_number_first_add_gives_number():
    r = 3 + Quantity(2)
    assert r == 5
    assert isinstance(r, Fraction)
    assert 10 - Quantity(4) == 6

def test_dimensionless_quantity_plus_number_stays_quantity():
    r = Quantity(2) + 3
    assert isinstance(r, Quantity)
    assert r.value == 5


# -------------------------------
# Temperature addition
# -------------------------------

def test_same_scale_temperatures_add_raw(q):
    assert str(q(20, "C") + q(5, "C")) == "25 C"
    assert str(q(50, "F") - q(10, "F")) == "40 F"

def test_offset_scales_do_not_mix(q):
    with pytest.raises(TemperatureScaleError):
        q(20, "C") + q(5, "K")
    with pytest.raises(TemperatureScaleError):
        q(5, "K") + q(20, "C")
    with pytest.raises(TemperatureScaleError):
        q(20, "C") - q(5, "F")

def test_different_temperature_units_never_mix(q):
    with pytest.raises(TemperatureScaleError):
        q(1, "K") + q(9, "R")
    with pytest.raises(TemperatureScaleError):
        q(1, "K") - q(500, "mK")
    # aliases of one unit are the same scale
    assert str(q(1, "K") + q(2, "kelvin")) == "3 K"

def test_temperature_per_time_is_not_a_scale(q):
    # composite units carry no offset, so they convert normally
    r = q(1, "C/s") + q(60, "C/min")
    assert r.value == 2


# -------------------------------
# Multiplication / division
# -------------------------------

def test_mul_composes_display_text(q):
    r = q(10, "kg") * q(9.8, "m/s^2")
    assert r.value == 98
    assert r.display_unit == "kg*m/s^2"
    assert r.dimensions == FORCE
    assert str(r) == "98 kg*m/s^2"

def test_mul_is_never_simplified(q):
    r = q(2, "m") * q(3, "m")
    assert r.display_unit == "m*m"
    assert r.dimensions == AREA

def test_div_parenthesises_compound_divisor(q):
    r = q(1, "J") / q(1, "kg*K")
    assert r.display_unit == "J/(kg*K)"
    s = q(6, "m") / q(2, "m/s")
    assert s.value == 3
    assert s.dimensions == TIME

def test_div_of_same_unit_is_dimensionless(q):
    r = q(6, "km") / q(2, "km")
    assert r.dimensions == DIM_0
    assert r.value == 3

def test_mixed_units_keep_factor(q):
    r = q(2, "km") * q(3, "m")
    assert r.si_value == 6000
    assert r.dimensions == AREA

def test_scalar_multiplication_scales_raw_value(q):
    assert str(2 * q(20, "C")) == "40 C"
    assert str(q(20, "C") * 2) == "40 C"
    assert str(q(5, "km") * Fraction(1, 2)) == "2.5 km"
    assert str(q(5, "km") / 2) == "2.5 km"

def test_unitless_quantity_acts_as_scalar(q):
    one = q(5, "m") ** 0
    assert one.is_scalar
    t = one * q(20, "C")
    assert str(t) == "20 C"
    assert t.unit.to_si_offset == Fraction("273.15")
    assert t.convert("K").value == Fraction("293.15")
    assert (q(20, "C") * one).unit == q(20, "C").unit

def test_to_base_of_radians_keeps_temperature_offset(q):
    two = q(2, "rad").to_base()
    t = two * q(20, "C")
    assert str(t) == "40 C"
    assert t.convert("K").value == Fraction("313.15")

def test_division_by_unitless_quantity_keeps_unit(q):
    t = q(20, "C") / q(2, "")
    assert str(t) == "10 C"
    assert t.convert("K").value == Fraction("283.15")
    r = q(2, "") / q(4, "s")
    assert r.value == Fraction(1, 2)
    assert r.display_unit == "1/s"

def test_named_dimensionless_unit_is_not_scalar(q):
    assert not q(2, "rad").is_scalar

def test_number_over_quantity_inverts_unit(q):
    r = 1 / q(2, "s")
    assert r.value == Fraction(1, 2)
    assert r.display_unit == "1/s"
    assert r.dimensions == FREQUENCY

def test_division_by_zero(q):
    with pytest.raises(ZeroDivisionError):
        q(5, "m") / q(0, "s")
    with pytest.raises(ZeroDivisionError):
        q(5, "m") / 0
    with pytest.raises(ZeroDivisionError):
        1 / q(0, "s")


# -------------------------------
# Powers
# -------------------------------

def test_pow_integer(q):
    r = q(5, "m") ** 2
    assert r.value == 25
    assert r.display_unit == "m^2"
    assert r.dimensions == AREA
    assert str(r) == "25 m^2"

@pytest.mark.parametrize("unit, n, text", [
    ("m^2", 2, "m^4"),
    ("m/s", 2, "(m/s)^2"),
    ("s", -1, "s^-1"),
    ("m", 1, "m"),
])
def test_pow_display(q, unit, n, text):
    assert (q(2, unit) ** n).display_unit == text

def test_pow_zero_is_dimensionless(q):
    r = q(5, "m") ** 0
    assert r.value == 1
    assert r.is_dimensionless

def test_pow_negative(q):
    r = q(2, "m") ** -1
    assert r.value == Fraction(1, 2)
    assert r.dimensions == LENGTH ** -1

def test_pow_accepts_integral_fraction_and_dimensionless_quantity(q):
    assert (q(3, "m") ** Fraction(4, 2)).value == 9
    assert (q(3, "m") ** Quantity(2)).value == 9

@pytest.mark.parametrize("exp", [Fraction(1, 2), 0.5, Quantity(Fraction(1, 2))])
def test_pow_non_integer_is_domain_error(q, exp):
    with pytest.raises(NonIntegerExponentError) as ei:
        q(5, "m") ** exp
    assert "non-integer unit exponent" in str(ei.value)

def test_pow_by_dimensioned_quantity(q):
    with pytest.raises(NonIntegerExponentError):
        q(5, "m") ** q(2, "s")

def test_pow_zero_base_negative_exponent(q):
    with pytest.raises(ZeroDivisionError):
        q(0, "m") ** -1


# -------------------------------
# Negation
# -------------------------------

def test_neg(q):
    r = -q(5, "m")
    assert r.value == -5
    assert r.display_unit == "m"
    assert str(-q(20, "C")) == "-20 C"
