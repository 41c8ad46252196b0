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
User-friendly public API for AQ Monitor.

Basic usage:
    >>> import aqmonitor
    >>>
    >>> # One-off lookups
    >>> result = aqmonitor.get_aqi(51.5073, -0.1276)
    >>> print(result.aqi, result.label)
    >>>
    >>> # A full session with history and map markers
    >>> import asyncio
    >>> session = aqmonitor.create_session()
    >>> asyncio.run(session.seed_markers())
    >>> asyncio.run(session.search_city("Mumbai"))
    >>> session.history_frame()
"""

# Import sources to trigger registration
from . import sources as _sources  # noqa: F401
from .config import Settings, load_settings
from .exceptions import PlaceNotFound
from .metrics.aqi import evaluate
from .metrics.base import AQIResult
from .registry import get_provider
from .registry import list_providers as _list_providers
from .session.controller import QuerySessionController
from .session.markers import MAJOR_CITIES, LocationQuery, MapSurface
from .types import Geolocator, ProviderSpec


def list_providers() -> list[str]:
    """
    List all available data providers.

    Example:
        >>> aqmonitor.list_providers()
        ['OPENWEATHER']
    """
    return _list_providers()


def _resolve_provider(provider: str | None) -> ProviderSpec:
    name = provider or load_settings().provider
    spec = get_provider(name)
    if spec is None:
        available = ", ".join(list_providers())
        raise ValueError(
            f"Provider '{name}' not found. Available providers: {available}"
        )
    return spec


def create_session(
    provider: str | None = None,
    geolocator: Geolocator | None = None,
    settings: Settings | None = None,
    surface: MapSurface | None = None,
    major_cities: list[LocationQuery] | None = None,
) -> QuerySessionController:
    """
    Create a query session.

    Args:
        provider: Registered provider name. Defaults to AQMONITOR_PROVIDER,
                  or OPENWEATHER.
        geolocator: Callable returning the caller's (lat, lon); without one,
                    ``locate_me`` reports geolocation as unsupported.
        settings: Session settings. Defaults to load_settings().
        surface: Map surface to mirror marker changes to
        major_cities: Cities to seed markers for. Defaults to MAJOR_CITIES.

    Raises:
        ValueError: If the provider is not registered
    """
    settings = settings or load_settings()
    spec = _resolve_provider(provider or settings.provider)

    return QuerySessionController(
        spec,
        geolocator=geolocator,
        settings=settings,
        surface=surface,
        major_cities=MAJOR_CITIES if major_cities is None else major_cities,
    )


def get_aqi(lat: float, lon: float, provider: str | None = None) -> AQIResult:
    """
    Fetch pollutants for a coordinate and evaluate the AQI.

    This is a single blocking call with no session state.

    Raises:
        DataFetchFailed: If the provider call fails
        ValueError: If the coordinate is out of range or the provider is unknown
    """
    location = LocationQuery("", lat, lon)
    spec = _resolve_provider(provider)
    return evaluate(spec["fetch_pollutants"](location.lat, location.lon))


def search(city: str, provider: str | None = None) -> AQIResult:
    """
    Geocode a place name and evaluate the AQI at the best match.

    Raises:
        PlaceNotFound: If the name does not match any place
        ValueError: If the name is blank
        DataFetchFailed: If a provider call fails
    """
    query = city.strip()
    if not query:
        raise ValueError("City name must not be blank")

    spec = _resolve_provider(provider)
    match = spec["geocode"](query)
    if not match:
        raise PlaceNotFound(query)
    return get_aqi(match["lat"], match["lon"], provider)
