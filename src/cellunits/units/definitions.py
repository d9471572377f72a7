"""
cellunits.units.definitions
===========================

The unit tables loaded into :data:`cellunits.units.catalog.DEFAULT_CATALOG`.

Factors are written as decimal text so they become exact fractions; the
few irrational ones (angles) carry enough digits for display precision.
Registration order matters in two places:

- the global symbol table keeps the first owner of a symbol, so temperature
  is registered before the electrical units (``C`` and ``F`` default to
  Celsius and Fahrenheit);
- simplification picks the first matching derived unit, so ``Hz`` comes
  before ``Bq`` and ``Gy`` before ``Sv``.
"""
from __future__ import annotations

from fractions import Fraction
from typing import TYPE_CHECKING

from cellunits.core.dimensions import (
    ACCELERATION, AMOUNT, AREA, CAPACITANCE, CATALYTIC, CHARGE, CONDUCTANCE,
    CURRENT, DIM_0, DOSE, ENERGY, FLUX, FLUX_DENSITY, FORCE, FREQUENCY,
    ILLUMINANCE, INDUCTANCE, LENGTH, LUMINOUS, MASS, POWER, PRESSURE,
    RESISTANCE, TEMPERATURE, TIME, VELOCITY, VOLTAGE, VOLUME,
)

if TYPE_CHECKING:
    from cellunits.units.catalog import CatalogBuilder


_PI = "3.14159265358979323846264338327950288"


def _pi_over(n: int) -> Fraction:
    return Fraction(_PI) / n


# ---------------------------------------------------------------------------
# Base quantities
# ---------------------------------------------------------------------------
def _length(b: "CatalogBuilder") -> None:
    b.define("m", "meter", LENGTH, 1, category="length", aliases=("meter", "meters", "metre", "metres"))
    b.define("km", "kilometer", LENGTH, 1000, category="length",
             aliases=("kilometer", "kilometers", "kilometre", "kilometres"))
    b.define("cm", "centimeter", LENGTH, "0.01", category="length", aliases=("centimeter", "centimeters"))
    b.define("mm", "millimeter", LENGTH, "0.001", category="length", aliases=("millimeter", "millimeters"))
    b.define("μm", "micrometer", LENGTH, "1e-6", category="length", aliases=("um", "micron", "microns"))
    b.define("nm", "nanometer", LENGTH, "1e-9", category="length")
    b.define("pm", "picometer", LENGTH, "1e-12", category="length")
    b.define("Å", "angstrom", LENGTH, "1e-10", category="length", aliases=("angstrom",))
    # imperial / US
    b.define("in", "inch", LENGTH, "0.0254", category="length", aliases=("inch", "inches"))
    b.define("ft", "foot", LENGTH, "0.3048", category="length", aliases=("foot", "feet"))
    b.define("yd", "yard", LENGTH, "0.9144", category="length", aliases=("yard", "yards"))
    b.define("mi", "mile", LENGTH, "1609.344", category="length", aliases=("mile", "miles"))
    b.define("nmi", "nautical mile", LENGTH, 1852, category="length")
    # astronomical
    b.define("au", "astronomical unit", LENGTH, 149597870700, category="length")
    b.define("ly", "light year", LENGTH, 9460730472580800, category="length")
    b.define("pc", "parsec", LENGTH, 30856775814913673, category="length")


def _mass(b: "CatalogBuilder") -> None:
    b.define("kg", "kilogram", MASS, 1, category="mass", aliases=("kilogram", "kilograms"))
    b.define("g", "gram", MASS, "0.001", category="mass", aliases=("gram", "grams"))
    b.define("mg", "milligram", MASS, "1e-6", category="mass", aliases=("milligram", "milligrams"))
    b.define("μg", "microgram", MASS, "1e-9", category="mass", aliases=("ug", "mcg"))
    b.define("t", "tonne", MASS, 1000, category="mass", aliases=("tonne", "tonnes"))
    b.define("lb", "pound", MASS, "0.45359237", category="mass", aliases=("pound", "pounds", "lbs"))
    b.define("oz", "ounce", MASS, "0.028349523125", category="mass", aliases=("ounce", "ounces"))
    b.define("st", "stone", MASS, "6.35029318", category="mass")
    b.define("ton", "short ton", MASS, "907.18474", category="mass")
    b.define("lton", "long ton", MASS, "1016.0469088", category="mass")
    b.define("ct", "carat", MASS, "0.0002", category="mass")
    b.define("gr", "grain", MASS, "0.00006479891", category="mass")


def _time(b: "CatalogBuilder") -> None:
    b.define("s", "second", TIME, 1, category="time", aliases=("second", "seconds", "sec"))
    b.define("ms", "millisecond", TIME, "0.001", category="time", aliases=("millisecond", "milliseconds"))
    b.define("μs", "microsecond", TIME, "1e-6", category="time", aliases=("us", "microsecond", "microseconds"))
    b.define("ns", "nanosecond", TIME, "1e-9", category="time")
    b.define("min", "minute", TIME, 60, category="time", aliases=("minute", "minutes"))
    b.define("h", "hour", TIME, 3600, category="time", aliases=("hour", "hours", "hr"))
    b.define("d", "day", TIME, 86400, category="time", aliases=("day", "days"))
    b.define("wk", "week", TIME, 604800, category="time", aliases=("week", "weeks"))
    # Gregorian averages
    b.define("mo", "month", TIME, 2629746, category="time", aliases=("month", "months"))
    b.define("yr", "year", TIME, 31556952, category="time", aliases=("year", "years", "y"))


def _temperature(b: "CatalogBuilder") -> None:
    # si = (value + offset) * factor
    b.define("K", "kelvin", TEMPERATURE, 1, category="temperature", aliases=("kelvin",))
    b.define("mK", "millikelvin", TEMPERATURE, "0.001", category="temperature")
    b.define("C", "celsius", TEMPERATURE, 1, offset="273.15", category="temperature",
             aliases=("degC", "°C", "℃", "celsius"))
    b.define("F", "fahrenheit", TEMPERATURE, Fraction(5, 9), offset="459.67", category="temperature",
             aliases=("degF", "°F", "℉", "fahrenheit"))
    b.define("R", "rankine", TEMPERATURE, Fraction(5, 9), category="temperature",
             aliases=("°R", "rankine"))


def _current(b: "CatalogBuilder") -> None:
    b.define("A", "ampere", CURRENT, 1, category="current", aliases=("ampere", "amperes", "amp", "amps"))
    b.define("mA", "milliampere", CURRENT, "0.001", category="current")
    b.define("μA", "microampere", CURRENT, "1e-6", category="current", aliases=("uA",))
    b.define("kA", "kiloampere", CURRENT, 1000, category="current")


def _amount(b: "CatalogBuilder") -> None:
    b.define("mol", "mole", AMOUNT, 1, category="amount", aliases=("mole", "moles"))
    b.define("mmol", "millimole", AMOUNT, "0.001", category="amount")
    b.define("μmol", "micromole", AMOUNT, "1e-6", category="amount", aliases=("umol",))
    b.define("kmol", "kilomole", AMOUNT, 1000, category="amount")


def _luminosity(b: "CatalogBuilder") -> None:
    b.define("cd", "candela", LUMINOUS, 1, category="luminosity", aliases=("candela",))
    # cd·sr; steradians are dimensionless so this coincides with cd
    b.define("lm", "lumen", LUMINOUS, 1, category="luminosity", aliases=("lumen", "lumens"))
    b.define("lx", "lux", ILLUMINANCE, 1, category="luminosity", derived=True, aliases=("lux",))


# ---------------------------------------------------------------------------
# Geometry & mechanics
# ---------------------------------------------------------------------------
def _area(b: "CatalogBuilder") -> None:
    b.define("ha", "hectare", AREA, 10000, category="area", aliases=("hectare", "hectares"))
    b.define("ac", "acre", AREA, "4046.8564224", category="area", aliases=("acre", "acres"))


def _volume(b: "CatalogBuilder") -> None:
    b.define("L", "liter", VOLUME, "0.001", category="volume",
             aliases=("l", "liter", "liters", "litre", "litres"))
    b.define("dL", "deciliter", VOLUME, "0.0001", category="volume", aliases=("dl", "deciliter", "deciliters"))
    b.define("cL", "centiliter", VOLUME, "0.00001", category="volume", aliases=("cl", "centiliter", "centiliters"))
    b.define("mL", "milliliter", VOLUME, "1e-6", category="volume", aliases=("ml", "milliliter", "milliliters"))
    b.define("cc", "cubic centimeter", VOLUME, "1e-6", category="volume")
    # US customary
    b.define("gal", "gallon", VOLUME, "0.003785411784", category="volume", aliases=("gallon", "gallons"))
    b.define("qt", "quart", VOLUME, "0.000946352946", category="volume", aliases=("quart", "quarts"))
    b.define("pt", "pint", VOLUME, "0.000473176473", category="volume", aliases=("pint", "pints"))
    b.define("cup", "cup", VOLUME, "0.0002365882365", category="volume", aliases=("cups",))
    b.define("floz", "fluid ounce", VOLUME, "0.0000295735295625", category="volume")
    b.define("tbsp", "tablespoon", VOLUME, "0.00001478676478125", category="volume")
    b.define("tsp", "teaspoon", VOLUME, "0.00000492892159375", category="volume")
    # imperial
    b.define("impgal", "imperial gallon", VOLUME, "0.00454609", category="volume")
    b.define("imppt", "imperial pint", VOLUME, "0.00056826125", category="volume")


def _velocity(b: "CatalogBuilder") -> None:
    b.define("kph", "kilometer per hour", VELOCITY, Fraction(5, 18), category="velocity", aliases=("kmh", "kmph"))
    b.define("mph", "mile per hour", VELOCITY, "0.44704", category="velocity")
    b.define("fps", "foot per second", VELOCITY, "0.3048", category="velocity")
    b.define("kn", "knot", VELOCITY, Fraction(1852, 3600), category="velocity", aliases=("knot", "knots"))
    b.define("c", "speed of light", VELOCITY, 299792458, category="velocity")


def _acceleration(b: "CatalogBuilder") -> None:
    b.define("g0", "standard gravity", ACCELERATION, "9.80665", category="acceleration", aliases=("gee",))
    b.define("Gal", "galileo", ACCELERATION, "0.01", category="acceleration")


def _force(b: "CatalogBuilder") -> None:
    b.define("N", "newton", FORCE, 1, category="force", derived=True, aliases=("newton", "newtons"))
    b.define("kN", "kilonewton", FORCE, 1000, category="force", derived=True)
    b.define("mN", "millinewton", FORCE, "0.001", category="force", derived=True)
    b.define("dyn", "dyne", FORCE, "0.00001", category="force")
    b.define("lbf", "pound-force", FORCE, "4.4482216152605", category="force")
    b.define("kgf", "kilogram-force", FORCE, "9.80665", category="force")


def _energy(b: "CatalogBuilder") -> None:
    b.define("J", "joule", ENERGY, 1, category="energy", derived=True, aliases=("joule", "joules"))
    b.define("kJ", "kilojoule", ENERGY, 1000, category="energy", derived=True)
    b.define("MJ", "megajoule", ENERGY, 10**6, category="energy", derived=True)
    b.define("GJ", "gigajoule", ENERGY, 10**9, category="energy", derived=True)
    b.define("mJ", "millijoule", ENERGY, "0.001", category="energy", derived=True)
    b.define("cal", "calorie", ENERGY, "4.184", category="energy", aliases=("calorie", "calories"))
    b.define("kcal", "kilocalorie", ENERGY, 4184, category="energy",
             aliases=("kilocalorie", "kilocalories", "Cal", "Calorie", "Calories"))
    b.define("Wh", "watt-hour", ENERGY, 3600, category="energy")
    b.define("kWh", "kilowatt-hour", ENERGY, 3600000, category="energy")
    b.define("eV", "electronvolt", ENERGY, "1.602176634e-19", category="energy")
    b.define("BTU", "British thermal unit", ENERGY, "1055.05585262", category="energy", aliases=("Btu",))
    b.define("erg", "erg", ENERGY, "1e-7", category="energy")
    b.define("ftlb", "foot-pound", ENERGY, "1.3558179483314", category="energy")


def _power(b: "CatalogBuilder") -> None:
    b.define("W", "watt", POWER, 1, category="power", derived=True, aliases=("watt", "watts"))
    b.define("kW", "kilowatt", POWER, 1000, category="power", derived=True)
    b.define("MW", "megawatt", POWER, 10**6, category="power", derived=True)
    b.define("GW", "gigawatt", POWER, 10**9, category="power", derived=True)
    b.define("mW", "milliwatt", POWER, "0.001", category="power", derived=True)
    b.define("μW", "microwatt", POWER, "1e-6", category="power", derived=True, aliases=("uW",))
    b.define("hp", "horsepower", POWER, "745.699872", category="power", aliases=("horsepower",))
    b.define("PS", "metric horsepower", POWER, "735.49875", category="power")


def _pressure(b: "CatalogBuilder") -> None:
    b.define("Pa", "pascal", PRESSURE, 1, category="pressure", derived=True, aliases=("pascal", "pascals"))
    b.define("kPa", "kilopascal", PRESSURE, 1000, category="pressure", derived=True)
    b.define("MPa", "megapascal", PRESSURE, 10**6, category="pressure", derived=True)
    b.define("hPa", "hectopascal", PRESSURE, 100, category="pressure", derived=True)
    b.define("bar", "bar", PRESSURE, 100000, category="pressure")
    b.define("mbar", "millibar", PRESSURE, 100, category="pressure")
    b.define("atm", "atmosphere", PRESSURE, 101325, category="pressure", aliases=("atmosphere", "atmospheres"))
    b.define("psi", "pounds per square inch", PRESSURE, "6894.757293168", category="pressure")
    b.define("mmHg", "millimeter of mercury", PRESSURE, "133.322387415", category="pressure")
    b.define("torr", "torr", PRESSURE, Fraction(101325, 760), category="pressure", aliases=("Torr",))
    b.define("inHg", "inch of mercury", PRESSURE, "3386.389", category="pressure")


def _frequency(b: "CatalogBuilder") -> None:
    b.define("Hz", "hertz", FREQUENCY, 1, category="frequency", derived=True, aliases=("hertz",))
    b.define("kHz", "kilohertz", FREQUENCY, 1000, category="frequency", derived=True)
    b.define("MHz", "megahertz", FREQUENCY, 10**6, category="frequency", derived=True)
    b.define("GHz", "gigahertz", FREQUENCY, 10**9, category="frequency", derived=True)
    b.define("THz", "terahertz", FREQUENCY, 10**12, category="frequency", derived=True)
    b.define("rpm", "revolutions per minute", FREQUENCY, Fraction(1, 60), category="frequency")
    b.define("Bq", "becquerel", FREQUENCY, 1, category="radiation", derived=True, aliases=("becquerel",))


# ---------------------------------------------------------------------------
# Electromagnetism
# ---------------------------------------------------------------------------
def _electrical(b: "CatalogBuilder") -> None:
    b.define("V", "volt", VOLTAGE, 1, category="electrical", derived=True, aliases=("volt", "volts"))
    b.define("mV", "millivolt", VOLTAGE, "0.001", category="electrical", derived=True)
    b.define("kV", "kilovolt", VOLTAGE, 1000, category="electrical", derived=True)
    b.define("MV", "megavolt", VOLTAGE, 10**6, category="electrical", derived=True)

    b.define("ohm", "ohm", RESISTANCE, 1, category="electrical", derived=True, aliases=("Ω", "ohms"))
    b.define("kohm", "kiloohm", RESISTANCE, 1000, category="electrical", derived=True, aliases=("kΩ",))
    b.define("Mohm", "megaohm", RESISTANCE, 10**6, category="electrical", derived=True, aliases=("MΩ",))
    b.define("mohm", "milliohm", RESISTANCE, "0.001", category="electrical", derived=True, aliases=("mΩ",))

    # "C" and "F" stay Celsius/Fahrenheit globally; these live in their own namespaces
    b.define("C", "coulomb", CHARGE, 1, category="electrical", derived=True,
             aliases=("coulomb", "coulombs", "Coul"))
    b.define("mC", "millicoulomb", CHARGE, "0.001", category="electrical", derived=True)
    b.define("μC", "microcoulomb", CHARGE, "1e-6", category="electrical", derived=True, aliases=("uC",))
    b.define("Ah", "ampere-hour", CHARGE, 3600, category="electrical")
    b.define("mAh", "milliampere-hour", CHARGE, "3.6", category="electrical")

    b.define("F", "farad", CAPACITANCE, 1, category="electrical", derived=True, aliases=("farad", "farads"))
    b.define("S", "siemens", CONDUCTANCE, 1, category="electrical", derived=True, aliases=("siemens",))
    b.define("Wb", "weber", FLUX, 1, category="electrical", derived=True, aliases=("weber",))
    b.define("T", "tesla", FLUX_DENSITY, 1, category="electrical", derived=True, aliases=("tesla",))
    b.define("H", "henry", INDUCTANCE, 1, category="electrical", derived=True, aliases=("henry",))


def _radiation(b: "CatalogBuilder") -> None:
    b.define("Gy", "gray", DOSE, 1, category="radiation", derived=True, aliases=("gray",))
    b.define("Sv", "sievert", DOSE, 1, category="radiation", derived=True, aliases=("sievert",))
    b.define("kat", "katal", CATALYTIC, 1, category="catalytic", derived=True, aliases=("katal",))


# ---------------------------------------------------------------------------
# Dimensionless
# ---------------------------------------------------------------------------
def _data(b: "CatalogBuilder") -> None:
    b.define("bit", "bit", DIM_0, 1, category="data", aliases=("bits",))
    b.define("byte", "byte", DIM_0, 8, category="data", aliases=("bytes", "B"))
    b.define("kB", "kilobyte", DIM_0, 8 * 10**3, category="data", aliases=("kilobyte", "kilobytes"))
    b.define("MB", "megabyte", DIM_0, 8 * 10**6, category="data", aliases=("megabyte", "megabytes"))
    b.define("GB", "gigabyte", DIM_0, 8 * 10**9, category="data", aliases=("gigabyte", "gigabytes"))
    b.define("TB", "terabyte", DIM_0, 8 * 10**12, category="data", aliases=("terabyte", "terabytes"))
    b.define("KiB", "kibibyte", DIM_0, 8 * 2**10, category="data")
    b.define("MiB", "mebibyte", DIM_0, 8 * 2**20, category="data")
    b.define("GiB", "gibibyte", DIM_0, 8 * 2**30, category="data")
    b.define("TiB", "tebibyte", DIM_0, 8 * 2**40, category="data")
    # rates are per second
    b.define("bps", "bits per second", FREQUENCY, 1, category="data_rate")
    b.define("kbps", "kilobits per second", FREQUENCY, 10**3, category="data_rate")
    b.define("Mbps", "megabits per second", FREQUENCY, 10**6, category="data_rate")
    b.define("Gbps", "gigabits per second", FREQUENCY, 10**9, category="data_rate")


def _angle(b: "CatalogBuilder") -> None:
    b.define("rad", "radian", DIM_0, 1, category="angle", aliases=("radian", "radians"))
    b.define("sr", "steradian", DIM_0, 1, category="angle", aliases=("steradian",))
    b.define("deg", "degree", DIM_0, _pi_over(180), category="angle", aliases=("°", "degree", "degrees"))
    b.define("grad", "gradian", DIM_0, _pi_over(200), category="angle")
    b.define("arcmin", "arcminute", DIM_0, _pi_over(10800), category="angle")
    b.define("arcsec", "arcsecond", DIM_0, _pi_over(648000), category="angle")
    b.define("turn", "turn", DIM_0, 2 * Fraction(_PI), category="angle")


_TABLES = (
    _length, _mass, _time, _temperature, _current, _amount, _luminosity,
    _area, _volume, _velocity, _acceleration, _force, _energy, _power,
    _pressure, _frequency, _electrical, _radiation, _data, _angle,
)


def register_default_units(builder: "CatalogBuilder") -> None:
    """Load every default table into ``builder``, in order."""
    for table in _TABLES:
        table(builder)


__all__ = ["register_default_units"]
