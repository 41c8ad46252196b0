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

"""Formatting of pollutant readings for display."""

from ..types import POLLUTANTS, PollutantReading

NOT_AVAILABLE = "N/A"

POLLUTANT_LABELS = {
    "pm2_5": "PM2.5",
    "pm10": "PM10",
    "no2": "NO₂",
    "o3": "O₃",
    "so2": "SO₂",
    "co": "CO",
    "no": "NO",
    "nh3": "NH₃",
}

# CO values are large, so no decimals
DECIMALS = {"co": 0}


def format_concentration(readings: PollutantReading, pollutant: str) -> str:
    """Format one pollutant value, or "N/A" if it is missing."""
    value = readings.get(pollutant)
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.{DECIMALS.get(pollutant, 1)}f}"


def format_pollutants(readings: PollutantReading) -> dict[str, str]:
    """
    Format every known pollutant for display, in the standard order.

    Example:
        >>> format_pollutants({"pm2_5": 8.04, "co": 201.94})["PM2.5"]
        '8.0'
    """
    return {
        POLLUTANT_LABELS[pollutant]: format_concentration(readings, pollutant)
        for pollutant in POLLUTANTS
    }
