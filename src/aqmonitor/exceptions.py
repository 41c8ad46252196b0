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
Errors raised while resolving air quality for a location.

Each error carries a ``user_message`` suitable for showing directly in a UI,
so that callers can surface distinct causes (location unavailable, place not
found, data fetch failure) without collapsing them into one generic string.
"""

from typing import Literal

GEOLOCATION_UNSUPPORTED_MESSAGE = "Geolocation is not supported on this device."
GEOLOCATION_DENIED_MESSAGE = (
    "Unable to get your location. Please search for a city manually."
)
DATA_FETCH_MESSAGE = (
    "Failed to fetch air quality data. "
    "Please check your internet connection and try again."
)
GEOCODING_FAILED_MESSAGE = "Failed to search for city. Please try again."
PLACE_NOT_FOUND_MESSAGE = "City not found. Please check the spelling and try again."


class AQMonitorError(Exception):
    """Base class for all AQ Monitor errors.

    Attributes:
        message -- An explanation of the error, for logs.
        user_message -- Text safe to show to the end user.
    """

    user_message: str = DATA_FETCH_MESSAGE

    def __init__(self, message: str, user_message: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if user_message is not None:
            self.user_message = user_message

    def __str__(self) -> str:
        return f"[{self.__class__.__name__}]: {self.message}"


class LocationUnavailable(AQMonitorError):
    """Raised when the caller's position cannot be obtained.

    Attributes:
        reason -- "unsupported" when no geolocation provider exists,
                  "denied" when the provider refused or failed.
    """

    def __init__(
        self,
        reason: Literal["denied", "unsupported"] = "denied",
        message: str | None = None,
    ) -> None:
        user_message = (
            GEOLOCATION_UNSUPPORTED_MESSAGE
            if reason == "unsupported"
            else GEOLOCATION_DENIED_MESSAGE
        )
        super().__init__(message or f"Geolocation {reason}", user_message)
        self.reason = reason


class PlaceNotFound(AQMonitorError):
    """Raised when geocoding a place name returns no match."""

    user_message = PLACE_NOT_FOUND_MESSAGE

    def __init__(self, query: str) -> None:
        super().__init__(f"No geocoding match for '{query}'")
        self.query = query


class DataFetchFailed(AQMonitorError):
    """Raised when a pollutant, weather or geocoding provider call fails.

    Attributes:
        url    -- The URL that failed, when known.
        status -- HTTP status code returned by the server, when known.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status: int | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message)
        self.url = url
        self.status = status


class PerCityFetchFailed(DataFetchFailed):
    """Isolated failure while seeding one major city marker.

    Never surfaced to the UI; the marker registry logs it and moves on.
    """

    def __init__(self, city: str, cause: Exception) -> None:
        super().__init__(f"Failed to load AQI for {city}: {cause}")
        self.city = city
        self.cause = cause
