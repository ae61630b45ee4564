"""Tests for display unit conversion."""

import pytest

from globemeasure.exceptions import UnitConversionError
from globemeasure.units import Unit, convert_area, convert_length


def test_length_meters_to_kilometers():
    assert convert_length(1500.0, Unit.METERS, Unit.KILOMETERS) == pytest.approx(1.5)


def test_length_accepts_plain_names():
    assert convert_length(1.0, "miles", "meters") == pytest.approx(1609.344)
    assert convert_length(1.0, "meters", "feet") == pytest.approx(3.28084)


def test_length_keeps_sign():
    assert convert_length(-2000.0, Unit.METERS, Unit.KILOMETERS) == pytest.approx(-2.0)


def test_area_square_meters_to_hectares_and_km2():
    assert convert_area(25000.0, Unit.METERS, Unit.HECTARES) == pytest.approx(2.5)
    assert convert_area(3000000.0, Unit.METERS, Unit.KILOMETERS) == pytest.approx(3.0)


def test_area_rejects_angular_units():
    with pytest.raises(UnitConversionError) as exc_info:
        convert_area(1.0, Unit.METERS, Unit.DEGREES)
    assert exc_info.value.details["kind"] == "area"


def test_length_rejects_area_only_units():
    with pytest.raises(UnitConversionError):
        convert_length(1.0, Unit.METERS, Unit.ACRES)


def test_unknown_unit_name():
    with pytest.raises(UnitConversionError):
        convert_length(1.0, "meters", "furlongs")


def test_british_spelling():
    assert Unit("kilometres") is Unit.KILOMETERS
    assert Unit("Metres") is Unit.METERS
