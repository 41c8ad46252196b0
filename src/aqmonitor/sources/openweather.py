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
OpenWeatherMap provider.

This module provides the pollutant, weather and geocoding fetchers backed by
the OpenWeatherMap APIs:

- Air Pollution API: current pollutant concentrations for a coordinate
- Current Weather API: temperature, humidity, wind, visibility
- Geocoding API: best-match coordinate for a place name

All fetchers raise DataFetchFailed on any non-success outcome so the
session can show a single "network/API failure" message.

API Documentation: https://openweathermap.org/api
"""

import math
from logging import getLogger
from typing import Any

import requests

from ..config import DEFAULT_REQUEST_TIMEOUT, get_api_key, load_settings
from ..decorators import retry_on_network_error, with_timeout
from ..exceptions import GEOCODING_FAILED_MESSAGE, DataFetchFailed
from ..registry import register_provider
from ..types import POLLUTANTS, GeocodeResult, PollutantReading, WeatherReport

logger = getLogger(__name__)

# ============================================================================
# CONSTANTS
# ============================================================================

API_BASE = "https://api.openweathermap.org"

AIR_POLLUTION_ENDPOINT = "data/2.5/air_pollution"
WEATHER_ENDPOINT = "data/2.5/weather"
GEOCODING_ENDPOINT = "geo/1.0/direct"


# ============================================================================
# API CLIENT
# ============================================================================


@retry_on_network_error
@with_timeout(DEFAULT_REQUEST_TIMEOUT)
def _call_openweather_api(
    endpoint: str, params: dict | None = None, timeout: float | None = None
) -> Any:
    """
    Make a request to an OpenWeatherMap API.

    Args:
        endpoint: API endpoint path (e.g., "data/2.5/weather")
        params: Query parameters (API key added automatically)
        timeout: Request timeout in seconds

    Returns:
        Parsed JSON response

    Raises:
        DataFetchFailed: If the API key is missing or rejected
        requests.RequestException: On network or HTTP errors
    """
    try:
        api_key = get_api_key()
    except ValueError as e:
        raise DataFetchFailed(str(e)) from None

    params = dict(params or {})
    params["appid"] = api_key

    url = f"{API_BASE}/{endpoint}"
    response = requests.get(url, params=params, timeout=timeout)

    if response.status_code == 401:
        raise DataFetchFailed(
            "OpenWeatherMap authentication failed. Check your OPENWEATHER_API_KEY.",
            url=url,
            status=401,
        )

    response.raise_for_status()
    return response.json()


def _request(endpoint: str, params: dict, user_message: str | None = None) -> Any:
    """Call the API, converting every transport failure into DataFetchFailed."""
    url = f"{API_BASE}/{endpoint}"
    try:
        return _call_openweather_api(
            endpoint, params, timeout=load_settings().request_timeout
        )
    except DataFetchFailed as e:
        if user_message is not None:
            e.user_message = user_message
        raise
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise DataFetchFailed(
            f"OpenWeatherMap request failed: {e}",
            url=url,
            status=status,
            user_message=user_message,
        ) from e
    except requests.exceptions.RequestException as e:
        raise DataFetchFailed(
            f"OpenWeatherMap request failed: {e}", url=url, user_message=user_message
        ) from e
    except ValueError as e:
        raise DataFetchFailed(
            f"Failed to parse OpenWeatherMap response: {e}",
            url=url,
            user_message=user_message,
        ) from e


# ============================================================================
# NORMALISATION
# ============================================================================


def normalise_components(components: dict[str, Any]) -> PollutantReading:
    """
    Keep the known pollutants from an Air Pollution API "components" object.

    Missing, null, negative and non-numeric values are dropped so they
    show as "N/A" rather than skewing the AQI.

    Example:
        >>> normalise_components({"pm2_5": 8.2, "pm10": None, "foo": 1})
        {'pm2_5': 8.2}
    """
    readings: PollutantReading = {}
    for pollutant in POLLUTANTS:
        value = components.get(pollutant)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if math.isnan(value) or value < 0:
            continue
        readings[pollutant] = float(value)
    return readings


def normalise_weather(payload: dict[str, Any]) -> WeatherReport:
    """
    Convert a Current Weather API payload into a WeatherReport.

    Raises:
        KeyError, IndexError, TypeError: If required fields are missing
    """
    main = payload["main"]
    visibility = payload.get("visibility")

    return WeatherReport(
        temperature=int(math.floor(main["temp"] + 0.5)),
        humidity=main["humidity"],
        wind_speed=round(float(payload["wind"]["speed"]), 1),
        visibility_km=round(visibility / 1000, 1) if visibility else None,
        description=payload["weather"][0]["description"],
    )


# ============================================================================
# FETCHERS
# ============================================================================


def fetch_openweather_pollutants(lat: float, lon: float) -> PollutantReading:
    """
    Fetch current pollutant concentrations for a coordinate.

    Example:
        >>> readings = fetch_openweather_pollutants(28.6139, 77.2090)
        >>> readings["pm2_5"]
        87.4
    """
    data = _request(AIR_POLLUTION_ENDPOINT, {"lat": lat, "lon": lon})

    try:
        components = data["list"][0]["components"]
    except (KeyError, IndexError, TypeError) as e:
        raise DataFetchFailed(
            f"Unexpected air pollution payload for ({lat}, {lon}): {e}"
        ) from e

    return normalise_components(components)


def fetch_openweather_weather(lat: float, lon: float) -> WeatherReport:
    """Fetch current weather for a coordinate in metric units."""
    data = _request(WEATHER_ENDPOINT, {"lat": lat, "lon": lon, "units": "metric"})

    try:
        return normalise_weather(data)
    except (KeyError, IndexError, TypeError) as e:
        raise DataFetchFailed(
            f"Unexpected weather payload for ({lat}, {lon}): {e}"
        ) from e


def geocode_openweather(query: str) -> GeocodeResult | None:
    """
    Find the best-match coordinate for a place name.

    Returns:
        GeocodeResult named "City, CC", or None if nothing matched

    Example:
        >>> geocode_openweather("London")
        {'name': 'London, GB', 'lat': 51.5073, 'lon': -0.1276}
    """
    data = _request(
        GEOCODING_ENDPOINT,
        {"q": query, "limit": 1},
        user_message=GEOCODING_FAILED_MESSAGE,
    )

    if not data:
        return None

    try:
        match = data[0]
        name = match["name"]
        country = match.get("country")
        return GeocodeResult(
            name=f"{name}, {country}" if country else name,
            lat=float(match["lat"]),
            lon=float(match["lon"]),
        )
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise DataFetchFailed(
            f"Unexpected geocoding payload for '{query}': {e}",
            user_message=GEOCODING_FAILED_MESSAGE,
        ) from e


# ============================================================================
# PROVIDER REGISTRATION
# ============================================================================

register_provider(
    "OPENWEATHER",
    {
        "name": "OpenWeatherMap",
        "fetch_pollutants": fetch_openweather_pollutants,
        "fetch_weather": fetch_openweather_weather,
        "geocode": geocode_openweather,
        "requires_api_key": True,
    },
)
