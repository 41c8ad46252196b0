"""
Pytest configuration and shared fixtures.

This module provides a scripted in-memory provider, a fixed clock and a
recording map surface so session tests never touch the network.
"""

import threading
from datetime import datetime

import pytest

from aqmonitor.exceptions import DataFetchFailed
from aqmonitor.metrics.categories import Category

# ============================================================================
# Readings Fixtures
# ============================================================================

# One PM2.5-driven snapshot per severity bin, with the expected category
READINGS_PER_BIN = [
    ({"pm2_5": 5.0, "pm10": 10.0, "no2": 4.1}, Category.GOOD),
    ({"pm2_5": 20.0, "pm10": 30.0}, Category.MODERATE),
    ({"pm2_5": 45.0, "pm10": 60.0, "o3": 80.2}, Category.UNHEALTHY_SENSITIVE),
    ({"pm2_5": 100.0, "pm10": 120.0}, Category.UNHEALTHY),
    ({"pm2_5": 200.0, "pm10": 250.0}, Category.VERY_UNHEALTHY),
    ({"pm2_5": 400.0, "pm10": 500.0, "co": 4200.0}, Category.HAZARDOUS),
]


@pytest.fixture
def good_readings():
    return {"pm2_5": 5.0, "pm10": 10.0, "no2": 4.1, "o3": 60.3, "co": 201.9}


@pytest.fixture
def sample_weather():
    return {
        "temperature": 24,
        "humidity": 61,
        "wind_speed": 3.6,
        "visibility_km": 10.0,
        "description": "scattered clouds",
    }


# ============================================================================
# Fake Provider
# ============================================================================


class FakeProvider:
    """
    Scripted provider with the same call signatures as a real one.

    Attributes:
        readings: Pollutant snapshot returned for every coordinate unless
                  overridden in ``readings_by_coord``
        failing_coords: Coordinates (rounded to 4 dp) whose calls fail
        geocode_results: Query -> GeocodeResult (missing query = no match)
        gates: Coordinate -> threading.Event the pollutant call waits on
    """

    def __init__(self, readings, weather):
        self.readings = readings
        self.weather = weather
        self.readings_by_coord = {}
        self.failing_coords = set()
        self.weather_fails = False
        self.geocode_results = {}
        self.geocode_fails = False
        self.gates = {}
        self.pollutant_calls = []
        self.weather_calls = []
        self.geocode_calls = []
        self._lock = threading.Lock()

    @staticmethod
    def _key(lat, lon):
        return (round(lat, 4), round(lon, 4))

    def fetch_pollutants(self, lat, lon):
        key = self._key(lat, lon)
        with self._lock:
            self.pollutant_calls.append(key)
        gate = self.gates.get(key)
        if gate is not None:
            gate.wait(timeout=5)
        if key in self.failing_coords:
            raise DataFetchFailed(f"Pollutant request failed for {key}", status=503)
        return dict(self.readings_by_coord.get(key, self.readings))

    def fetch_weather(self, lat, lon):
        key = self._key(lat, lon)
        with self._lock:
            self.weather_calls.append(key)
        if self.weather_fails:
            raise DataFetchFailed(f"Weather request failed for {key}", status=500)
        return dict(self.weather)

    def geocode(self, query):
        self.geocode_calls.append(query)
        if self.geocode_fails:
            raise DataFetchFailed(
                "Geocoding failed",
                user_message="Failed to search for city. Please try again.",
            )
        return self.geocode_results.get(query)

    def spec(self):
        return {
            "name": "Fake",
            "fetch_pollutants": self.fetch_pollutants,
            "fetch_weather": self.fetch_weather,
            "geocode": self.geocode,
            "requires_api_key": False,
        }


@pytest.fixture
def fake_provider(good_readings, sample_weather):
    return FakeProvider(good_readings, sample_weather)


# ============================================================================
# Clock and Map Surface
# ============================================================================


class FixedClock:
    """Clock that advances one minute per call, starting at 09:00."""

    def __init__(self):
        self.calls = 0

    def __call__(self):
        minute = self.calls
        self.calls += 1
        return datetime(2024, 1, 15, 9 + minute // 60, minute % 60)


@pytest.fixture
def clock():
    return FixedClock()


class RecordingSurface:
    """Map surface that records every instruction it receives."""

    def __init__(self):
        self.instructions = []

    def upsert_marker(self, record):
        self.instructions.append(("upsert", record.key, record.color, record.radius))

    def remove_marker(self, key):
        self.instructions.append(("remove", key))


@pytest.fixture
def surface():
    return RecordingSurface()
