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

"""Session status and the state exposed to a UI layer."""

from dataclasses import dataclass
from enum import Enum

from ..metrics.base import AQIResult
from ..types import WeatherReport
from .markers import LocationQuery


class SessionStatus(str, Enum):
    """
    Lifecycle of a location lookup.

    IDLE -> LOADING -> SUCCESS | ERROR. SUCCESS and ERROR are resting
    states: the session accepts a new lookup from either.
    """

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class SessionState:
    """Point-in-time view of a session."""

    status: SessionStatus = SessionStatus.IDLE
    current_result: AQIResult | None = None
    current_location: LocationQuery | None = None
    current_weather: WeatherReport | None = None
    error_message: str | None = None

    @property
    def loading(self) -> bool:
        return self.status is SessionStatus.LOADING
