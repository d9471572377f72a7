"""
cellunits.functions
===================

The unit functions formulas can call: ``convert``, ``to_base``, ``simplify``,
``in_units``, ``value``, ``unit``, ``dimensions``, ``is_dimensionless``,
``compatible`` and ``quantity``.

Every function takes evaluator values and returns one. Bad input never raises:
wrong argument counts, wrong argument types, unknown units and incompatible
dimensions all come back as :class:`~cellunits.core.errors.ErrorValue`.

    >>> from cellunits.functions import DEFAULT_FUNCTIONS
    >>> q = DEFAULT_FUNCTIONS.call("quantity", [5, "km"])
    >>> str(DEFAULT_FUNCTIONS.call("convert", [q, "m"]))
    '5000 m'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from cellunits.context import UnitContext
from cellunits.core.errors import ErrorValue
from cellunits.core.number import is_number, to_number
from cellunits.core.quantity import Quantity
from cellunits.core.unit import DIMENSIONLESS, Unit
from cellunits.dispatch import Value, type_name
from cellunits.units.parser import parse_conversion, parse_quantity_string, parse_unit
from cellunits.units.utils import closest_symbols

logger = logging.getLogger(__name__)

_RECOVERABLE = (ValueError, TypeError, ArithmeticError)

Impl = Callable[[Sequence[Value], UnitContext], Value]


@dataclass(frozen=True)
class FunctionMeta:
    name: str
    usage: str
    description: str
    examples: Tuple[str, ...] = ()
    returns: str = "Quantity"
    category: str = "units"


class UnitFunctions:
    """Name -> (metadata, implementation) table with value-or-error calling."""

    def __init__(self) -> None:
        self._functions: Dict[str, Tuple[FunctionMeta, Impl]] = {}

    def register(self, meta: FunctionMeta, impl: Impl) -> None:
        if meta.name in self._functions:
            raise ValueError(f"Function {meta.name!r} is already registered")
        self._functions[meta.name] = (meta, impl)

    def __contains__(self, name: str) -> bool:
        return name in self._functions

    def names(self) -> List[str]:
        return sorted(self._functions)

    def meta(self, name: str) -> FunctionMeta:
        return self._functions[name][0]

    def help(self, name: str) -> str:
        meta = self.meta(name)
        lines = [meta.usage, "", meta.description]
        if meta.examples:
            lines += ["", "Examples:", *(f"  {e}" for e in meta.examples)]
        return "\n".join(lines)

    def call(self, name: str, args: Sequence[Value], ctx: Optional[UnitContext] = None) -> Value:
        """Call ``name`` with ``args``; always returns a value, never raises for bad input."""
        entry = self._functions.get(name)
        if entry is None:
            similar = closest_symbols(name, self._functions, max_distance=3)
            return ErrorValue.undefined_func(name, similar)

        for arg in args:
            if isinstance(arg, ErrorValue):
                return arg.with_note(f"propagated through {name}()")

        _, impl = entry
        try:
            return impl(args, ctx or UnitContext())
        except _RECOVERABLE as exc:
            logger.debug("%s() failed: %s", name, exc)
            return ErrorValue.from_exception(exc)

    @classmethod
    def with_defaults(cls) -> "UnitFunctions":
        registry = cls()
        for meta, impl in _BUILTINS:
            registry.register(meta, impl)
        return registry


_BUILTINS: List[Tuple[FunctionMeta, Impl]] = []


def _builtin(name: str, usage: str, description: str, *examples: str, returns: str = "Quantity"):
    def decorator(impl: Impl) -> Impl:
        _BUILTINS.append((FunctionMeta(name, usage, description, tuple(examples), returns), impl))
        return impl
    return decorator


# ---------------------------------------------------------------------------
# Argument helpers
# ---------------------------------------------------------------------------
class _ArgError(Exception):
    def __init__(self, error: ErrorValue) -> None:
        super().__init__(error.message)
        self.error = error


def _quantity_arg(func: str, arg: str, value: Value) -> Quantity:
    if not isinstance(value, Quantity):
        raise _ArgError(ErrorValue.arg_type(func, arg, "Quantity", type_name(value)))
    return value


def _text_arg(func: str, arg: str, value: Value) -> str:
    if not isinstance(value, str):
        raise _ArgError(ErrorValue.arg_type(func, arg, "Text", type_name(value)))
    return value


def _number_arg(func: str, arg: str, value: Value):
    if not is_number(value):
        raise _ArgError(ErrorValue.arg_type(func, arg, "Number", type_name(value)))
    return to_number(value)


def _unit_of(func: str, arg: str, value: Value, ctx: UnitContext) -> Unit:
    """The unit of a quantity, a number (dimensionless) or unit text."""
    if isinstance(value, Quantity):
        return value.unit
    if is_number(value):
        return DIMENSIONLESS
    return parse_unit(_text_arg(func, arg, value), ctx.catalog)


def _as_quantity(func: str, arg: str, value: Value, ctx: UnitContext) -> Quantity:
    """A quantity, a bare number (dimensionless), or quantity text such as ``'5 km'``."""
    if isinstance(value, Quantity):
        return value
    if is_number(value):
        return Quantity(to_number(value))
    number, unit_text = parse_quantity_string(_text_arg(func, arg, value))
    return Quantity.new(number, unit_text, ctx.catalog)


def _arity(func: str, args: Sequence[Value], *allowed: int) -> None:
    if len(args) not in allowed:
        expected = " or ".join(str(n) for n in allowed)
        raise _ArgError(ErrorValue.arg_count(func, expected, len(args)))


def _checked(impl: Impl) -> Impl:
    def wrapper(args: Sequence[Value], ctx: UnitContext) -> Value:
        try:
            return impl(args, ctx)
        except _ArgError as exc:
            return exc.error
    wrapper.__name__ = impl.__name__
    wrapper.__doc__ = impl.__doc__
    return wrapper


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------
@_builtin(
    "convert",
    "convert(quantity, unit) | convert(value, from_unit, to_unit)",
    "Convert a quantity to another unit of the same dimension. With three "
    "arguments, convert a plain number and return a plain number.",
    "convert(5 @ km, \"mi\")",
    "convert(100, \"C\", \"F\")  → 212",
)
@_checked
def _convert(args: Sequence[Value], ctx: UnitContext) -> Value:
    _arity("convert", args, 2, 3)
    if len(args) == 3:
        number = _number_arg("convert", "value", args[0])
        source = _text_arg("convert", "from_unit", args[1])
        target = _text_arg("convert", "to_unit", args[2])
        return Quantity.new(number, source, ctx.catalog).convert(target, ctx.catalog).value
    q = _quantity_arg("convert", "quantity", args[0])
    return q.convert(_text_arg("convert", "unit", args[1]), ctx.catalog)


@_builtin(
    "to_base",
    "to_base(quantity) | to_base(value, unit)",
    "Express a quantity in coherent SI base units. With a number and a unit, "
    "return the SI value as a plain number.",
    "to_base(20 @ C)  → 293.15 K",
    "to_base(1, \"km\")  → 1000",
)
@_checked
def _to_base(args: Sequence[Value], ctx: UnitContext) -> Value:
    _arity("to_base", args, 1, 2)
    if len(args) == 2:
        number = _number_arg("to_base", "value", args[0])
        unit_text = _text_arg("to_base", "unit", args[1])
        return Quantity.new(number, unit_text, ctx.catalog).si_value
    return _quantity_arg("to_base", "quantity", args[0]).to_base()


@_builtin(
    "simplify",
    "simplify(quantity) | simplify(value, unit)",
    "Re-label a quantity with the named derived unit that has exactly the same "
    "dimension and scale (kg*m/s^2 → N). The value is unchanged.",
    "simplify(10 @ kg * 9.8 @ m/s^2)  → 98 N",
)
@_checked
def _simplify(args: Sequence[Value], ctx: UnitContext) -> Value:
    _arity("simplify", args, 1, 2)
    if len(args) == 2:
        number = _number_arg("simplify", "value", args[0])
        q = Quantity.new(number, _text_arg("simplify", "unit", args[1]), ctx.catalog)
    else:
        q = _quantity_arg("simplify", "quantity", args[0])
    return ctx.simplifier.simplify(q)


@_builtin(
    "in_units",
    "in_units(quantity, unit) | in_units(value, \"from->to\")",
    "Same as convert(quantity, unit). A plain number takes a conversion string "
    "such as \"km->mi\" and returns a plain number.",
    "in_units(3 @ ft, \"in\")",
    "in_units(5, \"km->mi\")",
)
@_checked
def _in_units(args: Sequence[Value], ctx: UnitContext) -> Value:
    _arity("in_units", args, 2)
    text = _text_arg("in_units", "unit", args[1])
    if isinstance(args[0], Quantity):
        try:
            _, target = parse_conversion(text)
        except ValueError:
            target = text
        return args[0].convert(target, ctx.catalog)
    number = _number_arg("in_units", "value", args[0])
    source, target = parse_conversion(text)
    return Quantity.new(number, source, ctx.catalog).convert(target, ctx.catalog).value


# ---------------------------------------------------------------------------
# Inspection
# ---------------------------------------------------------------------------
@_builtin(
    "value",
    "value(quantity)",
    "The numeric part of a quantity, in its own unit.",
    "value(5 @ km)  → 5",
    "value(\"9.8 m/s^2\")  → 9.8",
    returns="Number",
)
@_checked
def _value(args: Sequence[Value], ctx: UnitContext) -> Value:
    _arity("value", args, 1)
    return _as_quantity("value", "quantity", args[0], ctx).value


@_builtin(
    "unit",
    "unit(quantity)",
    "The unit text of a quantity, exactly as displayed.",
    "unit(5 @ km)  → \"km\"",
    returns="Text",
)
@_checked
def _unit(args: Sequence[Value], ctx: UnitContext) -> Value:
    _arity("unit", args, 1)
    return _as_quantity("unit", "quantity", args[0], ctx).display_unit


@_builtin(
    "dimensions",
    "dimensions(quantity_or_unit)",
    "The base-dimension exponents of a quantity or unit, nonzero entries only.",
    "dimensions(\"m/s\")  → {length: 1, time: -1}",
    returns="Object",
)
@_checked
def _dimensions(args: Sequence[Value], ctx: UnitContext) -> Value:
    _arity("dimensions", args, 1)
    return _unit_of("dimensions", "quantity", args[0], ctx).dimensions.as_mapping()


@_builtin(
    "is_dimensionless",
    "is_dimensionless(quantity_or_unit)",
    "True if every base-dimension exponent is zero.",
    "is_dimensionless(3 @ rad)  → true",
    returns="Bool",
)
@_checked
def _is_dimensionless(args: Sequence[Value], ctx: UnitContext) -> Value:
    _arity("is_dimensionless", args, 1)
    return _unit_of("is_dimensionless", "quantity", args[0], ctx).is_dimensionless


@_builtin(
    "compatible",
    "compatible(a, b)",
    "True if two quantities (or unit texts) have the same dimension and can be "
    "added or converted into each other.",
    "compatible(5 @ km, 3 @ mi)  → true",
    "compatible(\"J\", \"kWh\")  → true",
    returns="Bool",
)
@_checked
def _compatible(args: Sequence[Value], ctx: UnitContext) -> Value:
    _arity("compatible", args, 2)
    a = _unit_of("compatible", "a", args[0], ctx)
    b = _unit_of("compatible", "b", args[1], ctx)
    return a.is_compatible(b)


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------
@_builtin(
    "quantity",
    "quantity(value, unit) | quantity(\"5 km\")",
    "Build a quantity from a number and a unit, or from quantity text.",
    "quantity(5, \"km\")",
    "quantity(\"9.8 m/s^2\")",
)
@_checked
def _quantity(args: Sequence[Value], ctx: UnitContext) -> Value:
    _arity("quantity", args, 1, 2)
    if len(args) == 1:
        text = _text_arg("quantity", "quantity", args[0])
        number, unit_text = parse_quantity_string(text)
        return Quantity.new(number, unit_text, ctx.catalog)
    number = _number_arg("quantity", "value", args[0])
    return Quantity.new(number, _text_arg("quantity", "unit", args[1]).strip(), ctx.catalog)


DEFAULT_FUNCTIONS = UnitFunctions.with_defaults()


def call(name: str, args: Sequence[Value], ctx: Optional[UnitContext] = None) -> Value:
    """Shorthand for ``DEFAULT_FUNCTIONS.call``."""
    return DEFAULT_FUNCTIONS.call(name, args, ctx)


__all__ = ["FunctionMeta", "UnitFunctions", "DEFAULT_FUNCTIONS", "call"]
