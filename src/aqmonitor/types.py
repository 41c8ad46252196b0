# AQ Monitor: real-time air quality index, advisories and map markers
# Copyright (C) 2025 Ruaraidh Dobson, South London Scientific

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Core type definitions for AQ Monitor.

This module defines the record schemas exchanged with data providers and
the callable signatures a provider must implement.
"""

from typing import Callable, TypeAlias, TypedDict


# Standardised record schemas
class PollutantReading(TypedDict, total=False):
    """
    Snapshot of pollutant concentrations for one coordinate.

    All values are in µg/m³ (CO is reported on a larger scale by most
    providers but is carried through unchanged). Every field is optional;
    an absent pollutant contributes nothing to the AQI and is shown as
    "N/A" downstream.
    """
    pm2_5: float
    pm10: float
    no2: float
    o3: float
    so2: float
    co: float
    no: float
    nh3: float


class WeatherReport(TypedDict):
    """
    Current weather conditions for one coordinate.

    Fields:
        temperature: Air temperature in °C, rounded to an integer
        humidity: Relative humidity in percent
        wind_speed: Wind speed in m/s, one decimal place
        visibility_km: Visibility in km, one decimal place, None if unreported
        description: Short text description (e.g., "light rain")
    """
    temperature: int
    humidity: int
    wind_speed: float
    visibility_km: float | None
    description: str


class GeocodeResult(TypedDict):
    """Best match for a free-text place name."""
    name: str
    lat: float
    lon: float


# Pollutant symbols in display order
POLLUTANTS = ["pm2_5", "pm10", "no2", "o3", "so2", "co", "no", "nh3"]


# Function type aliases - these define the "interface" for providers
PollutantFetcher: TypeAlias = Callable[[float, float], PollutantReading]
"""
A function that fetches a pollutant snapshot for a coordinate.

Args:
    lat: Latitude in decimal degrees
    lon: Longitude in decimal degrees

Returns:
    PollutantReading for the coordinate

Raises:
    DataFetchFailed: If the provider call does not succeed
"""

WeatherFetcher: TypeAlias = Callable[[float, float], WeatherReport]
"""
A function that fetches current weather for a coordinate.

Raises:
    DataFetchFailed: If the provider call does not succeed
"""

Geocoder: TypeAlias = Callable[[str], GeocodeResult | None]
"""
A function that maps a place name to its best-match coordinate.

Returns:
    GeocodeResult, or None if nothing matched

Raises:
    DataFetchFailed: If the provider call does not succeed
"""

Geolocator: TypeAlias = Callable[[], tuple[float, float]]
"""
A function that returns the caller's (lat, lon).

Raises:
    LocationUnavailable: If the position is denied or cannot be determined
"""


class ProviderSpec(TypedDict):
    """
    Specification for a data provider.

    A ProviderSpec is a bundle of functions that together give the session
    everything it needs from one upstream service.
    """
    name: str
    fetch_pollutants: PollutantFetcher
    fetch_weather: WeatherFetcher
    geocode: Geocoder
    requires_api_key: bool
