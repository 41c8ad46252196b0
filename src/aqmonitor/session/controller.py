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
Query session controller.

The controller turns a location request (coordinates, a map click, a city
name or the caller's own position) into an AQIResult and keeps the
session's shared state: the current result, the bounded AQI history and
the marker registry. Nothing else writes to these.

Provider functions are blocking HTTP calls, so they run in worker threads
via asyncio.to_thread; the controller itself is single-threaded and only
suspends while waiting on them. Pollutant and weather data for a
coordinate are fetched concurrently.

Overlapping lookups are not cancelled. Every lookup takes a generation
number and only the most recent generation may change session state; a
response that arrives after a newer lookup has started is discarded.

Example:
    >>> import asyncio
    >>> from aqmonitor import create_session
    >>>
    >>> session = create_session()
    >>> asyncio.run(session.search_city("Delhi"))
    >>> session.current_result.aqi, session.current_result.label
    (168, 'Unhealthy')
"""

import asyncio
from dataclasses import dataclass, replace
from datetime import datetime
from logging import getLogger
from typing import Awaitable, Callable, Sequence, Union

import pandas as pd

from ..config import Settings
from ..exceptions import (
    DATA_FETCH_MESSAGE,
    AQMonitorError,
    DataFetchFailed,
    LocationUnavailable,
    PerCityFetchFailed,
    PlaceNotFound,
)
from ..metrics.aqi import evaluate
from ..metrics.base import AQIResult
from ..types import Geolocator, ProviderSpec, WeatherReport
from .history import HistorySample, HistoryTracker
from .markers import (
    MAJOR_CITIES,
    LocationQuery,
    MapSurface,
    MarkerRecord,
    MarkerRegistry,
)
from .state import SessionState, SessionStatus

logger = getLogger(__name__)

CURRENT_LOCATION_NAME = "Current Location"
TIME_LABEL_FORMAT = "%H:%M"


# ============================================================================
# LOOKUP SOURCES
# ============================================================================


@dataclass(frozen=True)
class Coordinates:
    """An explicit coordinate, e.g. from a map click."""

    lat: float
    lon: float
    name: str | None = None


@dataclass(frozen=True)
class CityName:
    """Free text that must be geocoded first."""

    text: str


@dataclass(frozen=True)
class CurrentLocation:
    """The caller's own position, from the geolocator."""


LocationSource = Union[Coordinates, CityName, CurrentLocation]

_Lookup = Callable[[], Awaitable[LocationQuery]]


def map_click_name(lat: float, lon: float) -> str:
    return f"Location ({lat:.3f}, {lon:.3f})"


def _external_location(name: str, lat: float, lon: float) -> LocationQuery:
    """Build a LocationQuery from provider output, rejecting bad coordinates."""
    try:
        return LocationQuery(name, float(lat), float(lon))
    except (TypeError, ValueError) as e:
        raise DataFetchFailed(f"Provider returned an invalid coordinate: {e}") from e


# ============================================================================
# CONTROLLER
# ============================================================================


class QuerySessionController:
    """Orchestrates AQI lookups and owns all mutable session state."""

    def __init__(
        self,
        provider: ProviderSpec,
        geolocator: Geolocator | None = None,
        settings: Settings | None = None,
        surface: MapSurface | None = None,
        major_cities: Sequence[LocationQuery] = MAJOR_CITIES,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.settings = settings or Settings()
        self._provider = provider
        self._geolocator = geolocator
        self._major_cities = list(major_cities)
        self._clock = clock

        self._state = SessionState()
        self._history = HistoryTracker(self.settings.history_size)
        self._markers = MarkerRegistry(surface)
        self._generation = 0

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error_message(self) -> str | None:
        return self._state.error_message

    @property
    def current_result(self) -> AQIResult | None:
        return self._state.current_result

    @property
    def current_location(self) -> LocationQuery | None:
        return self._state.current_location

    @property
    def current_weather(self) -> WeatherReport | None:
        return self._state.current_weather

    @property
    def history(self) -> tuple[HistorySample, ...]:
        return self._history.samples

    @property
    def markers(self) -> tuple[MarkerRecord, ...]:
        return self._markers.snapshot()

    def history_frame(self) -> pd.DataFrame:
        return self._history.to_frame()

    def markers_frame(self) -> pd.DataFrame:
        return self._markers.to_frame()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def resolve_location(self, source: LocationSource) -> AQIResult | None:
        """
        Resolve AQI for any kind of location source.

        Returns:
            The new AQIResult, or None if the lookup failed, was discarded
            as stale, or (for a blank city name) never started. Failures
            are reported through ``error_message``, not raised.
        """
        if isinstance(source, Coordinates):
            return await self.resolve_coordinates(source.lat, source.lon, source.name)
        if isinstance(source, CityName):
            return await self.search_city(source.text)
        if isinstance(source, CurrentLocation):
            return await self.locate_me()
        raise TypeError(f"Unsupported location source: {source!r}")

    async def resolve_coordinates(
        self, lat: float, lon: float, name: str | None = None
    ) -> AQIResult | None:
        """
        Resolve AQI for an explicit coordinate.

        Raises:
            ValueError: If the coordinate is out of range
        """
        location = LocationQuery(name or map_click_name(lat, lon), lat, lon)

        async def lookup() -> LocationQuery:
            return location

        return await self._run(lookup)

    async def handle_map_click(self, lat: float, lon: float) -> AQIResult | None:
        """Resolve AQI for a map click, naming the point by its coordinates."""
        return await self.resolve_coordinates(lat, lon, map_click_name(lat, lon))

    async def search_city(self, text: str) -> AQIResult | None:
        """
        Geocode a place name, then resolve AQI at the best match.

        Blank text is ignored and leaves the session untouched.
        """
        query = text.strip()
        if not query:
            return None

        async def lookup() -> LocationQuery:
            match = await asyncio.to_thread(self._provider["geocode"], query)
            if not match:
                raise PlaceNotFound(query)
            return _external_location(match["name"], match["lat"], match["lon"])

        return await self._run(lookup)

    async def locate_me(self) -> AQIResult | None:
        """Resolve AQI at the caller's position from the geolocator."""
        geolocator = self._geolocator

        async def lookup() -> LocationQuery:
            if geolocator is None:
                raise LocationUnavailable("unsupported")
            lat, lon = await asyncio.to_thread(geolocator)
            return _external_location(CURRENT_LOCATION_NAME, lat, lon)

        return await self._run(lookup)

    # ------------------------------------------------------------------
    # Markers
    # ------------------------------------------------------------------

    async def _resolve_pollutants(self, location: LocationQuery) -> AQIResult:
        readings = await asyncio.to_thread(
            self._provider["fetch_pollutants"], location.lat, location.lon
        )
        return evaluate(readings)

    async def seed_markers(self) -> int:
        """Add a major-city marker for each configured city."""
        return await self._markers.seed_major_cities(
            self._major_cities,
            self._resolve_pollutants,
            concurrency=self.settings.seed_concurrency,
        )

    async def clear_markers(self) -> int:
        """Remove every marker, then re-seed the major cities from fresh data."""
        return await self._markers.clear_ad_hoc(
            self._major_cities,
            self._resolve_pollutants,
            concurrency=self.settings.seed_concurrency,
        )

    @property
    def seed_failures(self) -> list[PerCityFetchFailed]:
        return list(self._markers.seed_failures)

    def reset(self) -> None:
        """Return to a fresh IDLE session. Markers are kept."""
        self._generation += 1
        self._state = SessionState()
        self._history.clear()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _run(self, lookup: _Lookup) -> AQIResult | None:
        self._generation += 1
        generation = self._generation
        self._state = replace(
            self._state, status=SessionStatus.LOADING, error_message=None
        )

        try:
            location = await lookup()
            result, weather = await self._fetch(location)
        except AQMonitorError as e:
            if not self._is_current(generation):
                logger.debug(f"Discarding stale failure from lookup #{generation}: {e}")
                return None
            logger.error(f"AQI lookup failed: {e}")
            self._state = replace(
                self._state, status=SessionStatus.ERROR, error_message=e.user_message
            )
            return None
        except Exception:
            # Propagated, but the session never stays in LOADING
            if self._is_current(generation):
                self._state = replace(
                    self._state,
                    status=SessionStatus.ERROR,
                    error_message=DATA_FETCH_MESSAGE,
                )
            raise

        if not self._is_current(generation):
            logger.debug(
                f"Discarding stale result for {location.name} from lookup #{generation}"
            )
            return None

        self._history.record(
            HistorySample(self._clock().strftime(TIME_LABEL_FORMAT), result.aqi)
        )
        self._markers.upsert(location, result)
        self._state = SessionState(
            status=SessionStatus.SUCCESS,
            current_result=result,
            current_location=location,
            current_weather=weather,
        )
        logger.info(f"AQI for {location.name}: {result.aqi} ({result.label})")
        return result

    async def _fetch(self, location: LocationQuery) -> tuple[AQIResult, WeatherReport]:
        readings, weather = await asyncio.gather(
            asyncio.to_thread(
                self._provider["fetch_pollutants"], location.lat, location.lon
            ),
            asyncio.to_thread(
                self._provider["fetch_weather"], location.lat, location.lon
            ),
        )
        return evaluate(readings), weather
