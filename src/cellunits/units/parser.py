"""
cellunits.units.parser
======================

Unit-expression parsing.

    expr   := term (('*' | '·' | '/' | whitespace) term)*
    term   := factor ('^' signed_int | '**' signed_int | superscripts)?
    factor := NAME | '1' | '(' expr ')'

Operators are left-associative, so ``J/kg/K`` is ``(J/kg)/K``.

Parsing happens in two steps. Text is compiled into a *plan* (a small tuple
tree holding names but no catalog objects) and plans are cached by text.
Names are then bound against whichever catalog the caller passes, so one
cached plan serves every catalog.

Also here: the ``value @ unit`` literal, ``"5 km"`` quantity strings and
``"km->mi"`` conversion strings.
"""
from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Optional, Tuple, Union

from cellunits.core.dimensions import Dimension
from cellunits.core.errors import UnitParseError, UnknownUnitError
from cellunits.core.number import Number, to_number
from cellunits.core.unit import DIMENSIONLESS, MAX_EXPONENT, Unit
from cellunits.core.utils import SUPERSCRIPT_CHARS, superscript_to_int
from cellunits.units.catalog import DEFAULT_CATALOG, UnitCatalog, normalize_symbol

logger = logging.getLogger(__name__)

# --- Plan node types ------------------------------------------------
# ("name", <str>, None)
# ("one", None, None)
# ("pow", <plan>, <int>)
# ("mul", <plan>, <plan>)
# ("div", <plan>, <plan>)
Plan = Tuple[str, Union[str, "Plan", None], Union[int, "Plan", None]]

_ONE: Plan = ("one", None, None)

_OPERATOR_CHARS = "*/·^()"
_DISALLOWED = set("~!@#$%&|=,:;?<>'\"`\\[]{}")

# parenthesis nesting and operator count per expression
_MAX_DEPTH = 32
_MAX_OPERATORS = 128


def _is_name_char(ch: str) -> bool:
    return not (
        ch.isspace()
        or ch in _OPERATOR_CHARS
        or ch in SUPERSCRIPT_CHARS
        or ch in "+-"
        or ch in _DISALLOWED
    )


# ---------------- Parser that builds a PLAN (no catalog lookups!) ----------------
class _UnitExprParser:
    def __init__(self, text: str):
        self.s = text
        self.n = len(text)
        self.i = 0
        self.depth = 0
        self.operators = 0

    def parse(self) -> Plan:
        plan = self._parse_expr()
        self._skip_ws()
        if self.i != self.n:
            raise UnitParseError(
                f"Unexpected trailing input at {self.i}: {self.s[self.i:self.i + 10]!r}"
            )
        return plan

    # expr := term (('*' | '·' | '/' | whitespace) term)*
    def _parse_expr(self) -> Plan:
        left = self._parse_term()
        while True:
            self._skip_ws()
            if (self._peek("*") and not self._peek("**")) or self._peek("·"):
                self.i += 1
                self._count_operator()
                left = ("mul", left, self._parse_term())
            elif self._peek("/"):
                self.i += 1
                self._count_operator()
                left = ("div", left, self._parse_term())
            elif self._implicit_product():
                self._count_operator()
                left = ("mul", left, self._parse_term())
            else:
                break
        return left

    # term := factor ('^' signed_int | '**' signed_int | superscripts)?
    def _parse_term(self) -> Plan:
        base = self._parse_factor()
        if self._peek("**"):
            self.i += 2
            return self._pow(base, self._parse_exponent())
        if self._peek("^"):
            self.i += 1
            return self._pow(base, self._parse_exponent())
        # superscripts must follow the factor directly
        i0 = self.i
        while self.i < self.n and self.s[self.i] in SUPERSCRIPT_CHARS:
            self.i += 1
        if self.i > i0:
            try:
                exp = superscript_to_int(self.s[i0:self.i])
            except ValueError:
                raise UnitParseError(f"Bad superscript exponent {self.s[i0:self.i]!r}") from None
            return self._pow(base, self._bounded(exp, i0))
        return base

    def _implicit_product(self) -> bool:
        # "kg m" is kg*m: whitespace followed by another name or a group
        j = self.i
        if j == 0 or j >= self.n or not self.s[j - 1].isspace():
            return False
        ch = self.s[j]
        return ch == "(" or (_is_name_char(ch) and not ch.isdigit())

    def _count_operator(self) -> None:
        self.operators += 1
        if self.operators > _MAX_OPERATORS:
            raise UnitParseError(f"Unit expression has more than {_MAX_OPERATORS} operators")

    def _open(self) -> None:
        self.i += 1
        self.depth += 1
        if self.depth > _MAX_DEPTH:
            raise UnitParseError(f"Parentheses nested deeper than {_MAX_DEPTH} at {self.i - 1}")

    def _close(self) -> None:
        self._eat(")")
        self.depth -= 1

    @staticmethod
    def _bounded(exp: int, at: int) -> int:
        if abs(exp) > MAX_EXPONENT:
            raise UnitParseError(f"exponent {exp} at {at} is too large (limit {MAX_EXPONENT})")
        return exp

    @staticmethod
    def _pow(base: Plan, exp: int) -> Plan:
        if exp == 1:
            return base
        if exp == 0:
            return _ONE
        return ("pow", base, exp)

    # factor := NAME | '1' | '(' expr ')'
    def _parse_factor(self) -> Plan:
        self._skip_ws()
        if self._peek("("):
            self._open()
            val = self._parse_expr()
            self._close()
            return val
        if self.i < self.n and self.s[self.i].isdigit():
            i0 = self.i
            while self.i < self.n and (self.s[self.i].isdigit() or self.s[self.i] == "."):
                self.i += 1
            if self.s[i0:self.i] != "1":
                raise UnitParseError(
                    f"Unexpected number {self.s[i0:self.i]!r} at {i0}; only '1' may stand for a unit"
                )
            return _ONE
        name = self._parse_name()
        if not name:
            ch = self.s[self.i:self.i + 1]
            raise UnitParseError(f"Expected unit name or '(' at {self.i}, got {ch!r}")
        return ("name", name, None)

    # ---- token helpers ----
    def _parse_name(self) -> Optional[str]:
        i0 = self.i
        if i0 < self.n and _is_name_char(self.s[i0]) and not self.s[i0].isdigit():
            self.i += 1
            while self.i < self.n and _is_name_char(self.s[self.i]):
                self.i += 1
            return self.s[i0:self.i]
        return None

    def _parse_exponent(self) -> int:
        self._skip_ws()
        if self._peek("("):
            self._open()
            exp = self._parse_exponent()
            self._close()
            return exp
        i0 = self.i
        if self.i < self.n and self.s[self.i] in "+-":
            self.i += 1
        i1 = self.i
        while self.i < self.n and self.s[self.i].isdigit():
            self.i += 1
        if i1 == self.i or (self.i < self.n and self.s[self.i] in ".eE"):
            j = self.i
            while j < self.n and not self.s[j].isspace() and self.s[j] not in "*/·)":
                j += 1
            raise UnitParseError(f"non-integer exponent {self.s[i0:j] or '?'!r} at {i0}")
        # long digit runs are rejected before int() sees them
        if self.i - i1 > 4:
            raise UnitParseError(f"exponent {self.s[i0:self.i]!r} at {i0} is too large (limit {MAX_EXPONENT})")
        return self._bounded(int(self.s[i0:self.i]), i0)

    def _skip_ws(self) -> None:
        s, n, i = self.s, self.n, self.i
        while i < n and s[i].isspace():
            i += 1
        self.i = i

    def _peek(self, tok: str) -> bool:
        self._skip_ws()
        return self.s.startswith(tok, self.i)

    def _eat(self, tok: str) -> None:
        if not self._peek(tok):
            got = self.s[self.i:self.i + len(tok)]
            raise UnitParseError(f"Expected {tok!r} at {self.i}, got {got!r}")
        self.i += len(tok)


# ---------------- Evaluation of a plan against a given catalog ----------------
# "m2", "cm3", "ft2" written without a caret
_TRAILING_POWER_RE = re.compile(r"^(?P<base>.*\D)(?P<exp>[23])$")


def _resolve_name(name: str, catalog: UnitCatalog, dimension: Optional[Dimension], bare: bool) -> Unit:
    entry = catalog.get(name, dimension if bare else None)
    if entry is not None:
        unit = entry.unit
        if bare:
            return unit
        return Unit(unit.dimensions, unit.to_si_factor)

    m = _TRAILING_POWER_RE.match(name)
    if m:
        base = catalog.get(m.group("base"))
        if base is not None:
            return Unit(base.dimensions, base.to_si_factor).power(int(m.group("exp")))
    # raises UnknownUnitError with suggestions
    catalog.resolve(name)
    raise UnknownUnitError(name)  # pragma: no cover


def _eval_plan(plan: Plan, catalog: UnitCatalog) -> Unit:
    kind = plan[0]
    if kind == "name":
        return _resolve_name(plan[1], catalog, None, bare=False)
    elif kind == "one":
        return DIMENSIONLESS
    elif kind == "pow":
        return _eval_plan(plan[1], catalog).power(plan[2])
    elif kind == "mul":
        return _eval_plan(plan[1], catalog).multiply(_eval_plan(plan[2], catalog))
    elif kind == "div":
        return _eval_plan(plan[1], catalog).divide(_eval_plan(plan[2], catalog))
    else:
        raise RuntimeError(f"Invalid plan node: {plan!r}")


# ---------------- Public API with caching-safe compilation ----------------
# Only the syntax plan is cached; it holds no catalog objects.
@lru_cache(maxsize=4096)
def _compile_unit_expr(expr: str) -> Plan:
    logger.debug("compiling unit expression %r", expr)
    bad = sorted({c for c in expr if c in _DISALLOWED})
    if bad:
        raise UnitParseError(
            f"Unexpected character(s) {''.join(bad)!r} in unit expression {expr!r}"
        )
    return _UnitExprParser(expr).parse()


def compile_unit_expr(text: str) -> Plan:
    """Syntax-check ``text`` and return its (cached) plan."""
    return _compile_unit_expr(normalize_symbol(text))


def parse_unit(
    text: str,
    catalog: Optional[UnitCatalog] = None,
    dimension: Optional[Dimension] = None,
) -> Unit:
    """
    Parse a unit expression such as ``'kg*m/s^2'`` or ``'J/(kg·K)'`` into a Unit.

    Parameters
    ----------
    text
        The unit expression. Empty text is the dimensionless unit.
    catalog
        Where names are looked up. Defaults to ``DEFAULT_CATALOG``.
    dimension
        Namespace hint for a single bare symbol (``'C'`` with the charge
        dimension is the coulomb). Ignored for composite expressions.

    Only a bare single symbol keeps its entry's offset; every composite
    expression is a purely multiplicative unit.

    Raises
    ------
    UnitParseError
        Malformed text or a non-integer exponent.
    UnknownUnitError
        A name that is not in the catalog.
    """
    cat = DEFAULT_CATALOG if catalog is None else catalog
    expr = normalize_symbol(text or "")
    if not expr:
        return DIMENSIONLESS

    plan = _compile_unit_expr(expr)
    if plan[0] == "name":
        return _resolve_name(plan[1], cat, dimension, bare=True)
    return _eval_plan(plan, cat)


# ---------------- Literals ----------------
_QUANTITY_RE = re.compile(
    r"^\s*(?P<num>[+-]?(?:\d[\d_]*(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)\s*(?P<unit>.*?)\s*$",
    re.DOTALL,
)
_CONVERSION_SEPARATORS = ("->", "→", " to ", " in ")


def _number(text: str, source: str) -> Number:
    try:
        return to_number(text)
    except ValueError:
        raise UnitParseError(f"Expected a number before the unit in {source!r}") from None


def parse_quantity_literal(text: str) -> Tuple[Number, str]:
    """``'100 @ km'`` -> ``(100, 'km')``. The unit text is returned as written (trimmed)."""
    value, sep, unit_text = text.partition("@")
    if not sep:
        raise UnitParseError(f"Expected 'value @ unit', got {text!r}")
    return _number(value, text), unit_text.strip()


def parse_quantity_string(text: str) -> Tuple[Number, str]:
    """``'5 km'`` / ``'9.8 m/s^2'`` / ``'5 @ km'`` -> ``(value, unit_text)``."""
    if "@" in text:
        return parse_quantity_literal(text)
    m = _QUANTITY_RE.match(text)
    if not m:
        raise UnitParseError(f"Expected a number followed by a unit, got {text!r}")
    return _number(m.group("num"), text), m.group("unit")


def parse_conversion(text: str) -> Tuple[str, str]:
    """``'km->mi'`` / ``'C → F'`` / ``'ft to m'`` / ``'L in gal'`` -> ``(source, target)``."""
    for sep in _CONVERSION_SEPARATORS:
        source, found, target = text.partition(sep)
        if found:
            source, target = source.strip(), target.strip()
            if not source or not target:
                break
            return source, target
    raise UnitParseError(f"Expected a conversion like 'km->mi', got {text!r}")


__all__ = [
    "Plan",
    "compile_unit_expr",
    "parse_unit",
    "parse_quantity_literal",
    "parse_quantity_string",
    "parse_conversion",
]
