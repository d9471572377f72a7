"""
cellunits.core.errors
=====================

Exceptions raised inside the unit machinery, and the :class:`ErrorValue`
they become once they reach the evaluator.

The catalog, parser and :class:`~cellunits.core.quantity.Quantity` raise
ordinary exceptions. The dispatcher and the function surface catch them and
hand back an ``ErrorValue`` instead, so a failing cell never aborts the
document pass and later cells that depend on it short-circuit.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence

# Machine-readable error codes
PARSE_ERROR = "PARSE_ERROR"
DOMAIN_ERROR = "DOMAIN_ERROR"
DIV_ZERO = "DIV_ZERO"
TYPE_ERROR = "TYPE_ERROR"
ARG_COUNT = "ARG_COUNT"
ARG_TYPE = "ARG_TYPE"
UNDEFINED_FUNC = "UNDEFINED_FUNC"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------
class UnitParseError(ValueError):
    """Malformed unit expression, bad exponent text, or unknown symbol."""


class UnknownUnitError(UnitParseError):
    def __init__(self, symbol: str, suggestions: Sequence[str] = ()) -> None:
        self.symbol = symbol
        self.suggestions = tuple(suggestions)
        msg = f"Unknown unit symbol: {symbol!r}"
        if self.suggestions:
            msg += f" (did you mean {', '.join(self.suggestions)}?)"
        super().__init__(msg)


class DomainError(ValueError):
    """An operation that is well-formed but not defined for its operands."""


class DimensionMismatchError(DomainError, TypeError):
    def __init__(self, left: str, right: str, action: str = "combine") -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot {action} '{left or '1'}' and '{right or '1'}': incompatible dimensions"
        )


class TemperatureScaleError(DomainError):
    def __init__(self, left: str, right: str) -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot add temperatures on different scales ('{left}' and '{right}'); "
            f"use convert() to bring them onto one scale first"
        )


class NonIntegerExponentError(DomainError):
    def __init__(self, exponent: object, unit: str = "") -> None:
        self.exponent = exponent
        where = f" on '{unit}'" if unit else ""
        super().__init__(f"non-integer unit exponent {exponent}{where}")


# ---------------------------------------------------------------------------
# Error values
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class ErrorValue:
    """An error that travels through evaluation as an ordinary value."""

    code: str
    message: str
    suggestion: str | None = None
    notes: tuple[str, ...] = field(default=())

    def __str__(self) -> str:
        return self.message

    def with_note(self, note: str) -> "ErrorValue":
        return replace(self, notes=self.notes + (note,))

    def with_suggestion(self, suggestion: str) -> "ErrorValue":
        return replace(self, suggestion=suggestion)

    # --- common constructors ---
    @classmethod
    def parse_error(cls, details: str, suggestion: str | None = None) -> "ErrorValue":
        return cls(PARSE_ERROR, f"Parse error: {details}", suggestion)

    @classmethod
    def domain_error(cls, details: str) -> "ErrorValue":
        return cls(DOMAIN_ERROR, f"Domain error: {details}")

    @classmethod
    def div_zero(cls) -> "ErrorValue":
        return cls(DIV_ZERO, "Division by zero", "Ensure divisor is not zero")

    @classmethod
    def type_error(cls, expected: str, got: str) -> "ErrorValue":
        return cls(TYPE_ERROR, f"Expected {expected}, got {got}")

    @classmethod
    def arg_count(cls, func: str, expected: int | str, got: int) -> "ErrorValue":
        return cls(
            ARG_COUNT,
            f"{func}() expects {expected} arguments, got {got}",
            f"Use help('{func}') for usage",
        )

    @classmethod
    def arg_type(cls, func: str, arg: str, expected: str, got: str) -> "ErrorValue":
        return cls(ARG_TYPE, f"{func}() argument '{arg}': expected {expected}, got {got}")

    @classmethod
    def undefined_func(cls, name: str, similar: Sequence[str] = ()) -> "ErrorValue":
        suggestion = f"Similar: {', '.join(similar)}" if similar else None
        return cls(UNDEFINED_FUNC, f"Unknown function: {name}", suggestion)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorValue":
        """Map an exception raised by the unit machinery onto an error value."""
        if isinstance(exc, UnknownUnitError):
            suggestion = (
                f"Did you mean: {', '.join(exc.suggestions)}" if exc.suggestions else None
            )
            return cls.parse_error(str(exc), suggestion)
        if isinstance(exc, UnitParseError):
            return cls.parse_error(str(exc))
        if isinstance(exc, ZeroDivisionError):
            return cls.div_zero()
        if isinstance(exc, DomainError):
            return cls.domain_error(str(exc))
        if isinstance(exc, TypeError):
            return cls(TYPE_ERROR, str(exc))
        return cls.domain_error(str(exc))


__all__ = [
    "UnitParseError",
    "UnknownUnitError",
    "DomainError",
    "DimensionMismatchError",
    "TemperatureScaleError",
    "NonIntegerExponentError",
    "ErrorValue",
]
