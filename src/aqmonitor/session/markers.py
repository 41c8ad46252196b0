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
Registry of map markers, keyed by coordinate.

The registry owns every MarkerRecord; a map surface only receives the
visual projection of each change. Records come in two tiers: major-city
markers seeded in bulk, and ad-hoc markers added for user lookups.

Seeding resolves cities one after another, in list order, so markers
appear deterministically and the provider sees one request at a time.
Clearing removes everything and seeds again from fresh data.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from logging import getLogger
from typing import Awaitable, Callable, Protocol, Sequence

import pandas as pd

from ..exceptions import AQMonitorError, PerCityFetchFailed
from ..metrics.base import AQIResult
from ..metrics.categories import Category

logger = getLogger(__name__)

# Coordinates are compared at this many decimal places
KEY_PRECISION = 4

MarkerKey = tuple[float, float]


@dataclass(frozen=True)
class LocationQuery:
    """
    A named point. Identity is the rounded coordinate pair, not the name.

    Raises:
        ValueError: If latitude or longitude is out of range
    """

    name: str
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not -90 <= self.lat <= 90:
            raise ValueError(f"Latitude must be in [-90, 90], got {self.lat}")
        if not -180 <= self.lon <= 180:
            raise ValueError(f"Longitude must be in [-180, 180], got {self.lon}")

    @property
    def key(self) -> MarkerKey:
        return (round(self.lat, KEY_PRECISION), round(self.lon, KEY_PRECISION))


class MarkerTier(str, Enum):
    MAJOR_CITY = "major-city"
    AD_HOC = "ad-hoc"


# Circle marker styling per tier: (radius, border weight)
TIER_STYLES = {
    MarkerTier.MAJOR_CITY: (10, 2),
    MarkerTier.AD_HOC: (12, 3),
}
BORDER_COLOR = "white"
FILL_OPACITY = 0.8


@dataclass(frozen=True)
class MarkerRecord:
    """One marker and the visual parameters a map surface needs to draw it."""

    location: LocationQuery
    aqi: int
    color: str
    category: Category
    tier: MarkerTier

    @property
    def key(self) -> MarkerKey:
        return self.location.key

    @property
    def radius(self) -> int:
        return TIER_STYLES[self.tier][0]

    @property
    def weight(self) -> int:
        return TIER_STYLES[self.tier][1]

    @property
    def border_color(self) -> str:
        return BORDER_COLOR

    @property
    def fill_opacity(self) -> float:
        return FILL_OPACITY

    @property
    def popup_text(self) -> str:
        lines = [self.location.name, str(self.aqi), self.category.label]
        if self.tier is MarkerTier.AD_HOC:
            lines.append(f"{self.location.lat:.4f}, {self.location.lon:.4f}")
        return "\n".join(lines)


MAJOR_CITIES = [
    LocationQuery("Mumbai", 19.0760, 72.8777),
    LocationQuery("Delhi", 28.6139, 77.2090),
    LocationQuery("Bangalore", 12.9716, 77.5946),
    LocationQuery("Chennai", 13.0827, 80.2707),
    LocationQuery("Kolkata", 22.5726, 88.3639),
    LocationQuery("Pune", 18.5204, 73.8567),
    LocationQuery("Hyderabad", 17.3850, 78.4867),
    LocationQuery("Ahmedabad", 23.0225, 72.5714),
]

CityResolver = Callable[[LocationQuery], Awaitable[AQIResult]]


class MapSurface(Protocol):
    """Anything that can draw markers, e.g. an adapter around a web map."""

    def upsert_marker(self, record: MarkerRecord) -> None: ...

    def remove_marker(self, key: MarkerKey) -> None: ...


class MarkerRegistry:
    """Keyed collection of MarkerRecord, optionally mirrored to a map surface."""

    def __init__(self, surface: MapSurface | None = None) -> None:
        self._records: dict[MarkerKey, MarkerRecord] = {}
        self._surface = surface
        self.seed_failures: list[PerCityFetchFailed] = []

    # ------------------------------------------------------------------
    # Single-record operations
    # ------------------------------------------------------------------

    def upsert(
        self,
        location: LocationQuery,
        result: AQIResult,
        tier: MarkerTier = MarkerTier.AD_HOC,
    ) -> MarkerRecord:
        """Insert or replace the marker at ``location``'s coordinate."""
        record = MarkerRecord(
            location=location,
            aqi=result.aqi,
            color=result.color,
            category=result.category,
            tier=tier,
        )
        self._records[record.key] = record
        if self._surface is not None:
            self._surface.upsert_marker(record)
        return record

    def remove(self, location: LocationQuery) -> bool:
        """Remove the marker at ``location``'s coordinate, if any."""
        record = self._records.pop(location.key, None)
        if record is None:
            return False
        if self._surface is not None:
            self._surface.remove_marker(record.key)
        return True

    def get(self, location: LocationQuery) -> MarkerRecord | None:
        return self._records.get(location.key)

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------

    async def _resolve_city(
        self, city: LocationQuery, resolve: CityResolver
    ) -> AQIResult | None:
        try:
            return await resolve(city)
        except AQMonitorError as e:
            failure = PerCityFetchFailed(city.name, e)
            self.seed_failures.append(failure)
            logger.warning(f"Skipping {city.name}: {failure.message}")
            return None
        except Exception as e:
            failure = PerCityFetchFailed(city.name, e)
            self.seed_failures.append(failure)
            logger.warning(
                f"Skipping {city.name}: unexpected error: {e!r}", exc_info=True
            )
            return None

    async def seed_major_cities(
        self,
        cities: Sequence[LocationQuery],
        resolve: CityResolver,
        concurrency: int = 1,
    ) -> int:
        """
        Resolve each city and add it as a major-city marker.

        With the default ``concurrency=1`` each city is awaited before the
        next starts, and its marker is added as soon as it resolves. A
        higher value runs up to that many lookups at once; a city's marker
        is added once it and every city before it have settled, so markers
        still appear in list order. A failing city is logged, recorded in
        ``seed_failures`` and skipped.

        Returns:
            int: Number of markers added
        """
        if concurrency < 1:
            raise ValueError(f"Seed concurrency must be at least 1, got {concurrency}")

        self.seed_failures = []
        logger.info(f"Seeding {len(cities)} major city markers")

        added = 0
        if concurrency == 1:
            for city in cities:
                result = await self._resolve_city(city, resolve)
                if result is not None:
                    self.upsert(city, result, tier=MarkerTier.MAJOR_CITY)
                    added += 1
        else:
            semaphore = asyncio.Semaphore(concurrency)

            async def bounded(city: LocationQuery) -> AQIResult | None:
                async with semaphore:
                    return await self._resolve_city(city, resolve)

            tasks = [asyncio.create_task(bounded(city)) for city in cities]
            try:
                for city, task in zip(cities, tasks):
                    result = await task
                    if result is not None:
                        self.upsert(city, result, tier=MarkerTier.MAJOR_CITY)
                        added += 1
            finally:
                for task in tasks:
                    task.cancel()

        logger.info(
            f"Seeded {added} of {len(cities)} major city markers "
            f"({len(self.seed_failures)} failed)"
        )
        return added

    def remove_all(self) -> None:
        """Remove every marker of every tier."""
        for key in list(self._records):
            del self._records[key]
            if self._surface is not None:
                self._surface.remove_marker(key)

    async def clear_ad_hoc(
        self,
        cities: Sequence[LocationQuery],
        resolve: CityResolver,
        concurrency: int = 1,
    ) -> int:
        """
        Remove every marker, then seed the major cities again.

        Major-city markers are re-fetched, not restored from the removed
        records, so this is as slow as the initial seeding.
        """
        self.remove_all()
        return await self.seed_major_cities(cities, resolve, concurrency=concurrency)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def snapshot(self) -> tuple[MarkerRecord, ...]:
        """All markers, in insertion order."""
        return tuple(self._records.values())

    def to_frame(self) -> pd.DataFrame:
        """Return all markers as a DataFrame, one row per marker."""
        columns = ["name", "lat", "lon", "aqi", "category", "color", "tier"]
        return pd.DataFrame(
            [
                {
                    "name": r.location.name,
                    "lat": r.location.lat,
                    "lon": r.location.lon,
                    "aqi": r.aqi,
                    "category": r.category.label,
                    "color": r.color,
                    "tier": r.tier.value,
                }
                for r in self._records.values()
            ],
            columns=columns,
        )

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, location: object) -> bool:
        return isinstance(location, LocationQuery) and location.key in self._records
