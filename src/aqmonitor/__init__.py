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

"""Air quality index engine, query sessions and map markers"""

from .api import create_session, get_aqi, list_providers, search
from .exceptions import (
    AQMonitorError,
    DataFetchFailed,
    LocationUnavailable,
    PerCityFetchFailed,
    PlaceNotFound,
)
from .metrics import AQIResult, Category, advise, calculate_aqi, classify, evaluate

__version__ = "0.1.0"

__all__ = [
    "create_session",
    "get_aqi",
    "list_providers",
    "search",
    "AQIResult",
    "Category",
    "advise",
    "calculate_aqi",
    "classify",
    "evaluate",
    "AQMonitorError",
    "DataFetchFailed",
    "LocationUnavailable",
    "PerCityFetchFailed",
    "PlaceNotFound",
]
