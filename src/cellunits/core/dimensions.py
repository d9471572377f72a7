# cellunits.core.dimensions

from __future__ import annotations

from typing import Any, Dict, Iterable, Tuple, TypeAlias, Union

# --- Public typing -----------------------------------------------------------
Dim: TypeAlias = "Dimension"
DimTuple = Tuple[int, int, int, int, int, int, int]
DimLike = Union["Dimension", DimTuple, Iterable[int]]

BASE_NAMES = ("length", "mass", "time", "current", "temperature", "amount", "luminosity")
_SHORT_NAMES = ("L", "M", "T", "I", "Θ", "N", "J")

# --- Core object -------------------------------------------------------------

class Dimension(tuple):
    """
    Immutable 7-length vector of integer exponents for the SI base dimensions
    (length, mass, time, current, temperature, amount, luminosity).

    Tuple subclass => hashable, comparable, usable as dict keys. Two units are
    compatible exactly when their dimensions compare equal.
    """

    __slots__ = ()

    def __new__(cls, data: DimLike = (0, 0, 0, 0, 0, 0, 0)) -> "Dimension":
        if isinstance(data, Dimension):
            return data

        t = tuple(data)
        if len(t) != 7:
            raise ValueError("Dimension must have length 7 (L, M, T, I, Θ, N, J).")
        for x in t:
            if isinstance(x, bool) or not isinstance(x, int):
                raise TypeError(f"Dimension exponents must be integers, got {x!r}")
        return tuple.__new__(cls, t)

    # --- Algebra ---
    def add(self, other: DimLike) -> "Dimension":
        """Exponent-wise sum (multiplying units)."""
        o = Dimension(other)
        return Dimension(x + y for x, y in zip(self, o, strict=True))

    def sub(self, other: DimLike) -> "Dimension":
        """Exponent-wise difference (dividing units)."""
        o = Dimension(other)
        return Dimension(x - y for x, y in zip(self, o, strict=True))

    def scale(self, k: int) -> "Dimension":
        """Exponent-wise product by an integer (raising a unit to a power)."""
        if isinstance(k, bool) or not isinstance(k, int):
            raise TypeError(f"Dimension exponent must be an int, got {type(k).__name__}")
        return Dimension(x * k for x in self)

    def __mul__(self, other: DimLike) -> "Dimension":  # type: ignore[override]
        return self.add(other)

    def __truediv__(self, other: DimLike) -> "Dimension":
        return self.sub(other)

    def __pow__(self, k: int, modulo: Any | None = None) -> "Dimension":
        if modulo is not None:
            raise TypeError("Modulo exponentiation is not supported for Dimension.")
        return self.scale(k)

    def __rmul__(self, other: Any) -> "Dimension":
        """Prevent (int * Dimension) from falling back to tuple repetition."""
        return NotImplemented

    def __add__(self, other: Any) -> "Dimension":
        """Block tuple concatenation (e.g., LENGTH + MASS)."""
        return NotImplemented

    def __radd__(self, other: Any) -> "Dimension":
        return NotImplemented

    # --- Helpers ---
    @property
    def is_dimensionless(self) -> bool:
        return all(x == 0 for x in self)

    @property
    def name(self) -> str | None:
        """Common name of the dimension (``"velocity"``, ``"force"``…), if any."""
        return _NAMED.get(self)

    def as_tuple(self) -> DimTuple:
        return tuple(self)  # type: ignore[return-value]

    def as_mapping(self) -> Dict[str, int]:
        """Nonzero exponents keyed by base-dimension name."""
        return {n: e for n, e in zip(BASE_NAMES, self, strict=True) if e != 0}

    def __str__(self) -> str:
        parts = []
        for n, e in zip(_SHORT_NAMES, self, strict=True):
            if e == 1:
                parts.append(n)
            elif e != 0:
                parts.append(f"{n}^{e}")
        return " ".join(parts) if parts else "1"

    def __repr__(self) -> str:
        parts = "".join(
            f"[{n}^{e}]" for n, e in zip(_SHORT_NAMES, self, strict=True) if e != 0
        )
        return f"Dimension({parts or '1'})"

# --- Function forms ----------------------------------------------------------

def dim_mul(a: DimLike, b: DimLike) -> Dimension:
    return Dimension(a).add(b)

def dim_div(a: DimLike, b: DimLike) -> Dimension:
    return Dimension(a).sub(b)

def dim_pow(a: DimLike, n: int) -> Dimension:
    return Dimension(a).scale(n)

# --- Public constants --------------------------------------------------------

DIM_0: Dim       = Dimension((0, 0, 0, 0, 0, 0, 0))
LENGTH: Dim      = Dimension((1, 0, 0, 0, 0, 0, 0))
MASS: Dim        = Dimension((0, 1, 0, 0, 0, 0, 0))
TIME: Dim        = Dimension((0, 0, 1, 0, 0, 0, 0))
CURRENT: Dim     = Dimension((0, 0, 0, 1, 0, 0, 0))
TEMPERATURE: Dim = Dimension((0, 0, 0, 0, 1, 0, 0))
AMOUNT: Dim      = Dimension((0, 0, 0, 0, 0, 1, 0))
LUMINOUS: Dim    = Dimension((0, 0, 0, 0, 0, 0, 1))

BASE_DIMENSIONS = (LENGTH, MASS, TIME, CURRENT, TEMPERATURE, AMOUNT, LUMINOUS)

AREA         = dim_pow(LENGTH, 2)
VOLUME       = dim_pow(LENGTH, 3)
FREQUENCY    = dim_pow(TIME, -1)
VELOCITY     = dim_div(LENGTH, TIME)
ACCELERATION = dim_div(VELOCITY, TIME)
FORCE        = dim_mul(MASS, ACCELERATION)                  # N
PRESSURE     = dim_div(FORCE, AREA)                         # Pa
ENERGY       = dim_mul(FORCE, LENGTH)                       # J
POWER        = dim_div(ENERGY, TIME)                        # W
CHARGE       = dim_mul(CURRENT, TIME)                       # C
VOLTAGE      = dim_div(POWER, CURRENT)                      # V
CAPACITANCE  = dim_div(CHARGE, VOLTAGE)                     # F
RESISTANCE   = dim_div(VOLTAGE, CURRENT)                    # Ω
CONDUCTANCE  = dim_div(CURRENT, VOLTAGE)                    # S
FLUX         = dim_mul(VOLTAGE, TIME)                       # Wb
FLUX_DENSITY = dim_div(FLUX, AREA)                          # T (tesla)
INDUCTANCE   = dim_div(FLUX, CURRENT)                       # H
ILLUMINANCE  = dim_div(LUMINOUS, AREA)                      # lx
DOSE         = dim_div(ENERGY, MASS)                        # Gy, Sv
CATALYTIC    = dim_div(AMOUNT, TIME)                        # kat

_NAMED: Dict[Dimension, str] = {
    DIM_0: "dimensionless",
    **{d: n for d, n in zip(BASE_DIMENSIONS, BASE_NAMES)},
    AREA: "area",
    VOLUME: "volume",
    FREQUENCY: "frequency",
    VELOCITY: "velocity",
    ACCELERATION: "acceleration",
    FORCE: "force",
    PRESSURE: "pressure",
    ENERGY: "energy",
    POWER: "power",
    CHARGE: "charge",
    VOLTAGE: "voltage",
    CAPACITANCE: "capacitance",
    RESISTANCE: "resistance",
    CONDUCTANCE: "conductance",
    FLUX: "magnetic flux",
    FLUX_DENSITY: "magnetic flux density",
    INDUCTANCE: "inductance",
    ILLUMINANCE: "illuminance",
    DOSE: "absorbed dose",
    CATALYTIC: "catalytic activity",
}
