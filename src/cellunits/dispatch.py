"""
cellunits.dispatch
==================

Arithmetic between evaluator values.

The evaluator hands every binary operator to :func:`binary`. Operands come from
a closed set of kinds: plain numbers, quantities, error values, and anything
else (text, booleans…). Errors are values here: a failing operation returns an
:class:`~cellunits.core.errors.ErrorValue` instead of raising, and an
``ErrorValue`` operand short-circuits with a note saying where it passed.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from cellunits.core.errors import DomainError, ErrorValue, NonIntegerExponentError
from cellunits.core.number import Number, format_number, is_integral, is_number, to_number
from cellunits.core.quantity import Quantity

if TYPE_CHECKING:
    from cellunits.context import UnitContext

Value = Union[Number, Quantity, ErrorValue, Any]

_RECOVERABLE = (ValueError, TypeError, ArithmeticError)


class Kind(enum.Enum):
    NUMBER = "Number"
    QUANTITY = "Quantity"
    ERROR = "Error"
    OTHER = "Other"


def kind_of(value: object) -> Kind:
    if isinstance(value, ErrorValue):
        return Kind.ERROR
    if isinstance(value, Quantity):
        return Kind.QUANTITY
    if is_number(value):
        return Kind.NUMBER
    return Kind.OTHER


def type_name(value: object) -> str:
    k = kind_of(value)
    if k is not Kind.OTHER:
        return k.value
    if isinstance(value, bool):
        return "Bool"
    if isinstance(value, str):
        return "Text"
    if isinstance(value, dict):
        return "Object"
    return type(value).__name__


# ---------------------------------------------------------------------------
# Plain numbers
# ---------------------------------------------------------------------------
def _number_pow(base: Number, exp: Number) -> Number:
    if is_integral(exp):
        # Fraction(0) ** -n raises ZeroDivisionError
        return base ** int(exp)
    if base < 0:
        raise DomainError(f"cannot raise negative number {format_number(base)} to a fractional power")
    return to_number(float(base) ** float(exp))


def _numbers(op: str, a: Number, b: Number) -> Number:
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "*":
        return a * b
    if op == "/":
        return a / b
    return _number_pow(a, b)


# ---------------------------------------------------------------------------
# Quantities
# ---------------------------------------------------------------------------
def _quantity_left(op: str, q: Quantity, other: Union[Number, Quantity]) -> Union[Number, Quantity]:
    if op == "+":
        return q.add(other)
    if op == "-":
        return q.sub(other)
    if op == "*":
        return q.mul(other)
    if op == "/":
        return q.div(other)
    return q.pow(other)


def _number_left(op: str, n: Number, q: Quantity) -> Union[Number, Quantity]:
    if op == "+":
        return q.__radd__(n)
    if op == "-":
        return q.__rsub__(n)
    if op == "*":
        return q.mul(n)
    if op == "/":
        return q.rdiv(n)
    # number ^ quantity: the exponent must be a pure number
    if not q.is_dimensionless:
        raise NonIntegerExponentError(str(q))
    return _number_pow(n, q.si_value)


_OPS: Dict[str, str] = {"+": "+", "-": "-", "*": "*", "×": "*", "/": "/", "÷": "/", "^": "^", "**": "^"}


def binary(op: str, left: Value, right: Value) -> Value:
    """
    Apply ``left op right``.

    Parameters
    ----------
    op
        One of ``+ - * / ^`` (``**``, ``×`` and ``÷`` are accepted as spellings).
    left, right
        Numbers, quantities, error values or other evaluator values.

    Returns
    -------
    Number | Quantity | ErrorValue
        Never raises for bad operands; failures come back as error values.
    """
    symbol = _OPS.get(op)
    if symbol is None:
        raise ValueError(f"Unknown operator {op!r}")

    for operand in (left, right):
        if isinstance(operand, ErrorValue):
            return operand.with_note(f"propagated through '{symbol}'")

    lk, rk = kind_of(left), kind_of(right)
    if lk is Kind.OTHER or rk is Kind.OTHER:
        bad = left if lk is Kind.OTHER else right
        return ErrorValue.type_error("Number or Quantity", type_name(bad))

    try:
        if lk is Kind.QUANTITY:
            return _quantity_left(symbol, left, right if rk is Kind.QUANTITY else to_number(right))
        if rk is Kind.QUANTITY:
            return _number_left(symbol, to_number(left), right)
        return _numbers(symbol, to_number(left), to_number(right))
    except _RECOVERABLE as exc:
        return ErrorValue.from_exception(exc)


def at(value: Value, unit_text: Value, ctx: Optional["UnitContext"] = None) -> Value:
    """The ``value @ unit`` literal: attach a unit to a number."""
    for operand in (value, unit_text):
        if isinstance(operand, ErrorValue):
            return operand.with_note("propagated through '@'")
    if kind_of(value) is not Kind.NUMBER:
        return ErrorValue.type_error("Number", type_name(value))
    if not isinstance(unit_text, str):
        return ErrorValue.type_error("Text", type_name(unit_text))

    catalog = ctx.catalog if ctx is not None else None
    try:
        return Quantity.new(to_number(value), unit_text.strip(), catalog)
    except _RECOVERABLE as exc:
        return ErrorValue.from_exception(exc)


def literal(text: str, ctx: Optional["UnitContext"] = None) -> Value:
    """Evaluate literal text such as ``'100 @ km'``."""
    from cellunits.units.parser import parse_quantity_literal

    try:
        number, unit_text = parse_quantity_literal(text)
    except _RECOVERABLE as exc:
        return ErrorValue.from_exception(exc)
    return at(number, unit_text, ctx)


def unary_minus(value: Value) -> Value:
    if isinstance(value, ErrorValue):
        return value.with_note("propagated through unary '-'")
    k = kind_of(value)
    if k is Kind.QUANTITY:
        return value.neg()
    if k is Kind.NUMBER:
        return -to_number(value)
    return ErrorValue.type_error("Number or Quantity", type_name(value))


__all__ = [
    "Kind",
    "Value",
    "kind_of",
    "type_name",
    "binary",
    "at",
    "literal",
    "unary_minus",
]
