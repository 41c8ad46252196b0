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
Overall AQI from a pollutant snapshot.

Each indexed pollutant is converted to a sub-index with its own breakpoint
table and the worst (highest) sub-index becomes the AQI, floored at 1.
"""

from ..types import PollutantReading
from .base import AQI_FLOOR, AQIResult, calculate_sub_index, round_aqi
from .breakpoints import BREAKPOINTS
from .categories import ADVISORIES, COLORS, get_category


def calculate_sub_indices(readings: PollutantReading) -> dict[str, float]:
    """
    Calculate the sub-index of every indexed pollutant.

    Missing pollutants (absent or None) contribute a sub-index of 0.

    Example:
        >>> calculate_sub_indices({"pm2_5": 12.0})
        {'pm2_5': 50.0, 'pm10': 0.0}
    """
    sub_indices = {}
    for pollutant, table in BREAKPOINTS.items():
        concentration = readings.get(pollutant)
        if concentration is None:
            sub_indices[pollutant] = 0.0
        else:
            sub_indices[pollutant] = float(calculate_sub_index(concentration, table))
    return sub_indices


def calculate_aqi(readings: PollutantReading) -> float:
    """
    Calculate the unrounded overall AQI for a pollutant snapshot.

    Only PM2.5 and PM10 are consulted. The result is never below 1, so an
    empty or all-zero snapshot does not read as a perfect 0.

    Args:
        readings: Pollutant concentrations in µg/m³

    Returns:
        float: max(PM2.5 sub-index, PM10 sub-index, 1)
    """
    return float(max(*calculate_sub_indices(readings).values(), AQI_FLOOR))


def evaluate(readings: PollutantReading) -> AQIResult:
    """
    Evaluate a pollutant snapshot into a complete AQIResult.

    The AQI is rounded half-up before classification, so the category,
    colour and advice always agree with the displayed number.

    Example:
        >>> result = evaluate({"pm2_5": 35.5, "pm10": 20.0})
        >>> result.aqi, result.label
        (101, 'Unhealthy for Sensitive')
    """
    sub_indices = calculate_sub_indices(readings)
    aqi = round_aqi(max(*sub_indices.values(), AQI_FLOOR))
    category = get_category(aqi)

    return AQIResult(
        aqi=aqi,
        category=category,
        color=COLORS[category],
        pollutants=dict(readings),
        sub_indices=sub_indices,
        advice=ADVISORIES[category],
    )
