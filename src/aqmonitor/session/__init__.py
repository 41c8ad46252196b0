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
Session layer: lookup orchestration, AQI history and map markers.
"""

from .controller import (
    CityName,
    Coordinates,
    CurrentLocation,
    LocationSource,
    QuerySessionController,
)
from .history import HistorySample, HistoryTracker
from .markers import (
    MAJOR_CITIES,
    LocationQuery,
    MapSurface,
    MarkerRecord,
    MarkerRegistry,
    MarkerTier,
)
from .state import SessionState, SessionStatus

__all__ = [
    "QuerySessionController",
    "Coordinates",
    "CityName",
    "CurrentLocation",
    "LocationSource",
    "HistorySample",
    "HistoryTracker",
    "LocationQuery",
    "MapSurface",
    "MarkerRecord",
    "MarkerRegistry",
    "MarkerTier",
    "MAJOR_CITIES",
    "SessionState",
    "SessionStatus",
]
