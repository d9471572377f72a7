"""
cellunits.core.number
=====================

Exact rational numbers for quantity values and conversion factors.

Every value and every SI factor is held as a :class:`fractions.Fraction`, so
conversions round-trip exactly and "exact match" in simplification is a plain
equality test.
"""

from __future__ import annotations

from decimal import Decimal, localcontext
from fractions import Fraction
from typing import TypeAlias, Union

Number: TypeAlias = Fraction
NumberLike = Union[int, float, Decimal, Fraction, str]

ZERO = Fraction(0)
ONE = Fraction(1)

DEFAULT_PRECISION = 15


def to_number(x: NumberLike) -> Number:
    """Coerce ``x`` into an exact :data:`Number`.

    Floats are read through their shortest decimal ``repr`` so that ``9.8``
    becomes ``49/5`` rather than the binary approximation.

    Raises
    ------
    TypeError
        If ``x`` is not a number (``bool`` is rejected on purpose).
    ValueError
        If ``x`` is text that does not spell a number.
    """
    if isinstance(x, bool):
        raise TypeError("bool is not a number")
    if isinstance(x, Fraction):
        return x
    if isinstance(x, int):
        return Fraction(x)
    if isinstance(x, float):
        if x != x or x in (float("inf"), float("-inf")):
            raise ValueError(f"non-finite number: {x!r}")
        return Fraction(repr(x))
    if isinstance(x, Decimal):
        if not x.is_finite():
            raise ValueError(f"non-finite number: {x!r}")
        return Fraction(x)
    if isinstance(x, str):
        text = x.strip().replace("_", "")
        try:
            return Fraction(text)
        except (ValueError, ZeroDivisionError):
            raise ValueError(f"Not a number: {x!r}") from None
    raise TypeError(f"Expected a number, got {type(x).__name__}")


def is_number(x: object) -> bool:
    return isinstance(x, (int, Fraction, float, Decimal)) and not isinstance(x, bool)


def is_integral(x: Number) -> bool:
    return Fraction(x).denominator == 1


def _decimal_places(q: Fraction) -> int | None:
    """Number of decimal places of ``q`` if its expansion terminates, else None."""
    d = q.denominator
    twos = fives = 0
    while d % 2 == 0:
        d //= 2
        twos += 1
    while d % 5 == 0:
        d //= 5
        fives += 1
    return max(twos, fives) if d == 1 else None


def format_number(x: NumberLike, precision: int = DEFAULT_PRECISION) -> str:
    """Render a number as plain decimal text.

    Terminating fractions are printed exactly; anything else is rounded to
    ``precision`` significant digits. Trailing zeros are dropped.
    """
    q = to_number(x)
    if q.denominator == 1:
        return str(q.numerator)

    places = _decimal_places(q)
    if places is not None:
        d = Decimal(q.numerator * 10**places // q.denominator).scaleb(-places)
    else:
        with localcontext() as ctx:
            ctx.prec = precision
            d = Decimal(q.numerator) / Decimal(q.denominator)

    text = format(d, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text
