"""Label vocabulary and default number formatting for measurement labels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from globemeasure.units import Unit

LengthFormatter = Callable[[float, float, Unit], str]
AreaFormatter = Callable[[float, float, Unit], str]


def _unit_name(unit: Unit | str) -> str:
    return unit.value if isinstance(unit, Unit) else str(unit)


def _number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_length(length: float, united_length: float, unit: Unit | str) -> str:
    """Meters below one kilometer, converted value otherwise."""
    if length < 1000:
        return f"{_number(length)}meters"
    return f"{_number(united_length)}{_unit_name(unit)}"


def format_area(area: float, united_area: float, unit: Unit | str) -> str:
    """Square meters below one square kilometer, converted value otherwise."""
    if area < 1000000:
        return f"{_number(area)} square meters "
    return f"{_number(united_area)} square {_unit_name(unit)}"


@dataclass(frozen=True)
class MeasureLocale:
    """
    Words and formatters used to build label text.

    ``format_length(meters, converted, unit)`` and
    ``format_area(square_meters, converted, unit)`` must be pure functions of
    their numeric inputs.
    """

    start: str = "start"
    total: str = "Total"
    area: str = "Area"
    format_length: LengthFormatter = format_length
    format_area: AreaFormatter = format_area


__all__ = ["MeasureLocale", "format_length", "format_area"]
