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
Base types and breakpoint interpolation for AQI calculations.

The interpolator is the standard EPA-style piecewise-linear formula:

AQI = ((high_aqi - low_aqi) / (high_conc - low_conc)) * (conc - low_conc) + low_aqi

applied in the first breakpoint row whose upper concentration bound covers
the input. Concentrations above the final row saturate at AQI_CEILING
instead of being extrapolated.

A concentration in the gap between two rows (PM2.5 12.05, PM10 354.5)
takes the upper row's low_aqi. Just below the PM10 tier edges this moves
the reading up a category: PM10 354.3 gives 201 (Very Unhealthy) rather
than the 200 (Unhealthy) that interpolating in the upper row would give,
and 424.5 gives 301 (Hazardous). In exchange the sub-index never
decreases as the concentration rises.
"""

import math
from dataclasses import dataclass, field
from typing import Sequence, TypedDict

from ..types import PollutantReading
from .categories import CSS_CLASSES, Category

# Saturation value for concentrations beyond the last breakpoint
AQI_CEILING = 500

# AQI is never reported below this, even for clean or missing readings
AQI_FLOOR = 1


# =============================================================================
# Types
# =============================================================================


class Breakpoint(TypedDict):
    """A single breakpoint row for one pollutant."""

    low_conc: float  # Low concentration bound (inclusive)
    high_conc: float  # High concentration bound (inclusive)
    low_aqi: int  # AQI at low_conc
    high_aqi: int  # AQI at high_conc


@dataclass(frozen=True)
class AQIResult:
    """Result of an AQI evaluation for one pollutant snapshot."""

    aqi: int  # Rounded overall AQI (>= 1)
    category: Category
    color: str  # Hex colour code
    pollutants: PollutantReading
    sub_indices: dict[str, float] = field(default_factory=dict)
    advice: tuple[str, ...] = ()

    @property
    def label(self) -> str:
        return self.category.label

    @property
    def css_class(self) -> str:
        return CSS_CLASSES[self.category]


# =============================================================================
# Breakpoint Interpolation
# =============================================================================


def calculate_sub_index(
    concentration: float,
    breakpoints: Sequence[Breakpoint],
) -> float:
    """
    Calculate a pollutant sub-index by linear interpolation.

    Rows are scanned in order and the first row whose ``high_conc`` is at
    least the concentration is used. A value that falls in the gap between
    two rows (e.g. 12.05 between 12.0 and 12.1) takes the upper row's
    ``low_aqi``, which keeps the sub-index non-decreasing.

    Args:
        concentration: Pollutant concentration (>= 0, table units)
        breakpoints: Rows sorted ascending by concentration

    Returns:
        Unrounded sub-index; AQI_CEILING when the concentration exceeds
        every row

    Raises:
        ValueError: If the concentration is negative or the table is empty
    """
    if concentration < 0:
        raise ValueError(f"Concentration must be non-negative, got {concentration}")
    if not breakpoints:
        raise ValueError("Breakpoint table is empty")

    for bp in breakpoints:
        if concentration <= bp["high_conc"]:
            conc_range = bp["high_conc"] - bp["low_conc"]
            if conc_range == 0:
                # Edge case: single-point breakpoint
                return float(bp["low_aqi"])

            # Gap between rows
            if concentration < bp["low_conc"]:
                return float(bp["low_aqi"])

            aqi_range = bp["high_aqi"] - bp["low_aqi"]
            return (aqi_range / conc_range) * (concentration - bp["low_conc"]) + bp[
                "low_aqi"
            ]

    return float(AQI_CEILING)


def validate_breakpoints(breakpoints: Sequence[Breakpoint]) -> None:
    """
    Check that a breakpoint table is well formed.

    Rows must start at zero concentration, have low <= high, and ascend in
    both concentration and AQI.

    Raises:
        ValueError: Describing the first problem found
    """
    if not breakpoints:
        raise ValueError("Breakpoint table is empty")
    if breakpoints[0]["low_conc"] != 0:
        raise ValueError("Breakpoint table must start at zero concentration")

    previous = None
    for i, bp in enumerate(breakpoints):
        if bp["low_conc"] > bp["high_conc"] or bp["low_aqi"] > bp["high_aqi"]:
            raise ValueError(f"Breakpoint row {i} has inverted bounds: {bp}")
        if previous is not None:
            if bp["low_conc"] < previous["high_conc"]:
                raise ValueError(f"Breakpoint row {i} overlaps the previous row")
            if bp["low_aqi"] < previous["high_aqi"]:
                raise ValueError(f"Breakpoint row {i} AQI bounds are not ascending")
        previous = bp


def round_aqi(value: float) -> int:
    """
    Round an AQI value to the nearest integer, halves rounding up.

    Python's built-in round() uses banker's rounding (round(50.5) == 50),
    which would disagree with the published values at half points.
    """
    return int(math.floor(value + 0.5))
