"""
cellunits.core.utils
====================

Helpers for building display-unit text.

Quantities keep the unit text the author typed. When an operation combines
two quantities, the result's display text is composed textually from the
operands' texts (``"kg"`` and ``"m/s^2"`` give ``"kg*m/s^2"``); nothing is
cancelled or renamed. Every string produced here parses back with
:mod:`cellunits.units.parser` to the same dimension and factor.
"""

from __future__ import annotations

import re
from typing import List, Pattern

from cellunits.core.dimensions import Dim

_FROM_SUPERSCRIPTS = str.maketrans("⁰¹²³⁴⁵⁶⁷⁸⁹⁻⁺", "0123456789-+")
SUPERSCRIPT_CHARS = "⁰¹²³⁴⁵⁶⁷⁸⁹⁻⁺"


def superscript_to_int(text: str) -> int:
    """'²' -> 2, '⁻¹' -> -1."""
    return int(text.translate(_FROM_SUPERSCRIPTS))


# a single name with an ASCII power, e.g. "m^2", "s^-1"
_POWER_RE: Pattern[str] = re.compile(r"^(?P<base>[^*/·^()\s⁰¹²³⁴⁵⁶⁷⁸⁹⁻⁺]+)\^(?P<exp>[+-]?\d+)$")
# a single name with unicode superscripts, e.g. "m²", "h⁻¹"
_SUPER_RE: Pattern[str] = re.compile(r"^(?P<base>[^*/·^()\s⁰¹²³⁴⁵⁶⁷⁸⁹⁻⁺]+)(?P<sup>[⁻⁺]?[⁰¹²³⁴⁵⁶⁷⁸⁹]+)$")


def normalize_power_name(name: str) -> str:
    """
    Make names canonical:
    - 'x^1'  -> 'x'
    - 'x^0'  -> ''    (dimensionless)
    - 'x^-1' stays 'x^-1'
    """
    m = _POWER_RE.match(name)
    if not m:
        return name
    base = m.group("base")
    exp = int(m.group("exp"))
    if exp == 1:
        return base
    if exp == 0:
        return ""
    return f"{base}^{exp}"


def _is_unity(text: str) -> bool:
    return text.strip() in ("", "1")


def _is_single_term(text: str) -> bool:
    """True if ``text`` has no top-level '*', '·' or '/'."""
    depth = 0
    for ch in text.replace("**", "^"):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif depth == 0 and (ch in "*/·" or ch.isspace()):
            return False
    return True


def compose_product(left: str, right: str) -> str:
    """Display text for ``left × right``."""
    left, right = left.strip(), right.strip()
    if _is_unity(left):
        return "" if _is_unity(right) else right
    if _is_unity(right):
        return left
    if right.startswith("1/"):
        return f"{left}/{right[2:]}"
    return f"{left}*{right}"


def compose_quotient(left: str, right: str) -> str:
    """Display text for ``left ÷ right``; a compound divisor is parenthesised."""
    left, right = left.strip(), right.strip()
    if _is_unity(right):
        return "" if _is_unity(left) else left
    numerator = "1" if _is_unity(left) else left
    denominator = right if _is_single_term(right) else f"({right})"
    return f"{numerator}/{denominator}"


def compose_power(text: str, n: int) -> str:
    """Display text for ``text ** n`` (integer ``n``)."""
    text = text.strip()
    if n == 1:
        return text
    if n == 0 or _is_unity(text):
        return ""

    m = _POWER_RE.match(text)
    if m:
        return normalize_power_name(f"{m.group('base')}^{int(m.group('exp')) * n}")
    m = _SUPER_RE.match(text)
    if m:
        return normalize_power_name(f"{m.group('base')}^{superscript_to_int(m.group('sup')) * n}")
    if _is_single_term(text) and "^" not in text:
        return f"{text}^{n}"
    return f"({text})^{n}"


# ---------- Dimension → base-SI unit text ----------
def format_dim(dim: Dim) -> str:
    """
    Turn a dimension tuple (L,M,T,I,Θ,N,J) into 'kg*m/s^2' style text that
    the unit parser accepts. Conventional order: M, L, T, I, Θ, N, J.
    """
    # indices: L=0 M=1 T=2 I=3 Θ=4 N=5 J=6
    labels: List[str] = ["m", "kg", "s", "A", "K", "mol", "cd"]
    order: List[int] = [1, 0, 2, 3, 4, 5, 6]

    num: List[str] = []
    den: List[str] = []
    for i in order:
        e = dim[i]
        if e > 0:
            num.append(labels[i] if e == 1 else f"{labels[i]}^{e}")
        elif e < 0:
            den.append(labels[i] if e == -1 else f"{labels[i]}^{-e}")

    if not num and not den:
        return ""
    numerator = "*".join(num) if num else "1"
    return "/".join([numerator, *den])
