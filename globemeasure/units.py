"""Display units and conversion.

Internal computation is always in meters and square meters; the tables here are
only used to convert published values for labels.
"""

from __future__ import annotations

import math
from enum import Enum

from globemeasure.exceptions import UnitConversionError
from globemeasure.geometry.contract import EARTH_RADIUS


class Unit(str, Enum):
    """Length/area unit names accepted by the converters."""
    METERS = "meters"
    KILOMETERS = "kilometers"
    CENTIMETERS = "centimeters"
    MILLIMETERS = "millimeters"
    MILES = "miles"
    NAUTICAL_MILES = "nauticalmiles"
    INCHES = "inches"
    YARDS = "yards"
    FEET = "feet"
    RADIANS = "radians"
    DEGREES = "degrees"
    ACRES = "acres"
    HECTARES = "hectares"

    @classmethod
    def _missing_(cls, value: object) -> "Unit | None":
        # british spellings
        if isinstance(value, str):
            normalized = value.strip().lower().replace("metres", "meters")
            for member in cls:
                if member.value == normalized:
                    return member
        return None


# Units per radian of arc on the mean earth sphere
LENGTH_FACTORS: dict[Unit, float] = {
    Unit.CENTIMETERS: EARTH_RADIUS * 100,
    Unit.DEGREES: 360 / (2 * math.pi),
    Unit.FEET: EARTH_RADIUS * 3.28084,
    Unit.INCHES: EARTH_RADIUS * 39.37,
    Unit.KILOMETERS: EARTH_RADIUS / 1000,
    Unit.METERS: EARTH_RADIUS,
    Unit.MILES: EARTH_RADIUS / 1609.344,
    Unit.MILLIMETERS: EARTH_RADIUS * 1000,
    Unit.NAUTICAL_MILES: EARTH_RADIUS / 1852,
    Unit.RADIANS: 1.0,
    Unit.YARDS: EARTH_RADIUS * 1.0936,
}

# Units per square meter
AREA_FACTORS: dict[Unit, float] = {
    Unit.ACRES: 0.000247105,
    Unit.CENTIMETERS: 10000.0,
    Unit.FEET: 10.763910417,
    Unit.HECTARES: 0.0001,
    Unit.INCHES: 1550.003100006,
    Unit.KILOMETERS: 0.000001,
    Unit.METERS: 1.0,
    Unit.MILES: 3.86e-7,
    Unit.MILLIMETERS: 1000000.0,
    Unit.NAUTICAL_MILES: 2.9155334959812285e-7,
    Unit.YARDS: 1.195990046,
}


def _factor(table: dict[Unit, float], unit: Unit | str, kind: str) -> float:
    try:
        return table[Unit(unit)]
    except (KeyError, ValueError) as exc:
        raise UnitConversionError(
            f"{unit} is not a valid {kind} unit",
            {"unit": str(unit), "kind": kind},
        ) from exc


def convert_length(
    value: float,
    from_unit: Unit | str = Unit.METERS,
    to_unit: Unit | str = Unit.KILOMETERS,
) -> float:
    """Convert a length between units (via radians of arc, sign preserved)."""
    radians = value / _factor(LENGTH_FACTORS, from_unit, "length")
    return radians * _factor(LENGTH_FACTORS, to_unit, "length")


def convert_area(
    value: float,
    from_unit: Unit | str = Unit.METERS,
    to_unit: Unit | str = Unit.KILOMETERS,
) -> float:
    """Convert an area between units; ``meters`` means square meters and so on."""
    square_meters = value / _factor(AREA_FACTORS, from_unit, "area")
    return square_meters * _factor(AREA_FACTORS, to_unit, "area")


__all__ = ["Unit", "LENGTH_FACTORS", "AREA_FACTORS", "convert_length", "convert_area"]
