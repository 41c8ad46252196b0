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
Air Quality Index calculations.

The AQI is derived from PM2.5 and PM10 concentrations by breakpoint
interpolation, combined with a worst-case rule and classified into six
severity bins, each with a colour and health advice.

Quick Start:
    >>> from aqmonitor import metrics
    >>>
    >>> result = metrics.evaluate({"pm2_5": 18.3, "pm10": 41.0})
    >>> result.aqi, result.label, result.color
    (64, 'Moderate', '#eab308')
    >>>
    >>> metrics.advise(result.aqi)[0]
    'Air quality is acceptable for most people.'
"""

from .aqi import calculate_aqi, calculate_sub_indices, evaluate
from .base import (
    AQI_CEILING,
    AQI_FLOOR,
    AQIResult,
    Breakpoint,
    calculate_sub_index,
    round_aqi,
)
from .breakpoints import BREAKPOINTS, PM10_BREAKPOINTS, PM25_BREAKPOINTS
from .categories import (
    AQI_SCALE,
    Category,
    CategoryInfo,
    advise,
    classify,
    get_category,
    get_color,
)
from .display import format_pollutants

__all__ = [
    # Calculation
    "calculate_sub_index",
    "calculate_sub_indices",
    "calculate_aqi",
    "round_aqi",
    "evaluate",
    # Classification
    "classify",
    "get_category",
    "get_color",
    "advise",
    "format_pollutants",
    # Types and tables
    "AQIResult",
    "Breakpoint",
    "Category",
    "CategoryInfo",
    "AQI_SCALE",
    "AQI_CEILING",
    "AQI_FLOOR",
    "BREAKPOINTS",
    "PM25_BREAKPOINTS",
    "PM10_BREAKPOINTS",
]
