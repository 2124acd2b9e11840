"""Shared fixtures for the reflector model tests."""

import math

import pytest

from reflector_model.reflector import Reflector
from reflector_model.sun_data import SunPositionSeries

SUN_TEXT = (
    "startday_196_lat_38.9_long_-120.0_timezone_-8\n"
    "t\tx0\ty0\tx1\ty1\n"
    "11.9\t170.0\t70.0\t171.0\t69.5\n"
    "12.0\t180.0\t71.0\t181.0\t70.5\n"
    "12.1\t190.0\t70.0\t191.0\t69.5\n"
)


@pytest.fixture
def sun_text() -> str:
    return SUN_TEXT


@pytest.fixture
def flat_reflector() -> Reflector:
    reflector = Reflector()
    reflector.refresh_axes()
    return reflector


@pytest.fixture
def south_series() -> SunPositionSeries:
    """One day, three samples due south at 10, 45 and 80 degrees altitude."""
    return SunPositionSeries.from_degrees(
        hours=[11.9, 12.0, 12.1],
        azimuth_deg=[[180.0, 180.0, 180.0]],
        altitude_deg=[[10.0, 45.0, 80.0]],
        start_day=196,
    )


@pytest.fixture
def south_panel() -> Reflector:
    """East-west tilt axis tilted 60 degrees: normal points south, 30 degrees up."""
    reflector = Reflector(tilt_axis_azimuth=math.pi / 2, tilt=math.radians(60.0))
    reflector.refresh_axes()
    return reflector
