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
Breakpoint tables for the particulate pollutants used in the AQI.

Both tables follow the pre-2024 US EPA particulate breakpoints with six
tiers on a 0-500 scale. Only PM2.5 and PM10 feed the overall AQI; the
gaseous pollutants are reported alongside but not indexed.

Reference: https://www.airnow.gov/aqi/aqi-basics/
"""

from .base import Breakpoint, validate_breakpoints


def _make_breakpoint(
    low_conc: float,
    high_conc: float,
    low_aqi: int,
    high_aqi: int,
) -> Breakpoint:
    return Breakpoint(
        low_conc=low_conc,
        high_conc=high_conc,
        low_aqi=low_aqi,
        high_aqi=high_aqi,
    )


# PM2.5 (µg/m³)
PM25_BREAKPOINTS = [
    _make_breakpoint(0.0, 12.0, 0, 50),
    _make_breakpoint(12.1, 35.4, 51, 100),
    _make_breakpoint(35.5, 55.4, 101, 150),
    _make_breakpoint(55.5, 150.4, 151, 200),
    _make_breakpoint(150.5, 250.4, 201, 300),
    _make_breakpoint(250.5, 500.0, 301, 500),
]

# PM10 (µg/m³)
PM10_BREAKPOINTS = [
    _make_breakpoint(0, 54, 0, 50),
    _make_breakpoint(55, 154, 51, 100),
    _make_breakpoint(155, 254, 101, 150),
    _make_breakpoint(255, 354, 151, 200),
    _make_breakpoint(355, 424, 201, 300),
    _make_breakpoint(425, 604, 301, 500),
]

# Pollutant symbol -> table, for every pollutant that contributes to the AQI
BREAKPOINTS = {
    "pm2_5": PM25_BREAKPOINTS,
    "pm10": PM10_BREAKPOINTS,
}

for _table in BREAKPOINTS.values():
    validate_breakpoints(_table)
