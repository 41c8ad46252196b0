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
Runtime configuration.

Settings are read from the environment at call time (a .env file loaded by
the host application works too), so tests can patch os.environ freely.

Environment variables:
    OPENWEATHER_API_KEY: API key for the OpenWeatherMap provider
    AQMONITOR_PROVIDER: Registered provider name (default: OPENWEATHER)
    AQMONITOR_HISTORY_SIZE: Number of AQI samples kept for trends (default: 10)
    AQMONITOR_SEED_CONCURRENCY: Parallel city lookups while seeding markers;
        1 keeps seeding strictly sequential (default: 1)
    AQMONITOR_REQUEST_TIMEOUT: Provider request timeout in seconds (default: 30)
"""

import os
from dataclasses import dataclass

DEFAULT_PROVIDER = "OPENWEATHER"
DEFAULT_HISTORY_SIZE = 10
DEFAULT_SEED_CONCURRENCY = 1
DEFAULT_REQUEST_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    """Session-wide settings."""

    provider: str = DEFAULT_PROVIDER
    history_size: int = DEFAULT_HISTORY_SIZE
    seed_concurrency: int = DEFAULT_SEED_CONCURRENCY
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from None
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


def load_settings() -> Settings:
    """
    Build Settings from the environment.

    Raises:
        ValueError: If a numeric variable is not a positive number
    """
    raw_timeout = os.getenv("AQMONITOR_REQUEST_TIMEOUT")
    timeout = DEFAULT_REQUEST_TIMEOUT
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(
                f"AQMONITOR_REQUEST_TIMEOUT must be a number, got '{raw_timeout}'"
            ) from None
        if timeout <= 0:
            raise ValueError("AQMONITOR_REQUEST_TIMEOUT must be positive")

    return Settings(
        provider=os.getenv("AQMONITOR_PROVIDER") or DEFAULT_PROVIDER,
        history_size=_positive_int("AQMONITOR_HISTORY_SIZE", DEFAULT_HISTORY_SIZE),
        seed_concurrency=_positive_int(
            "AQMONITOR_SEED_CONCURRENCY", DEFAULT_SEED_CONCURRENCY
        ),
        request_timeout=timeout,
    )


def get_api_key() -> str:
    """
    Get the OpenWeatherMap API key from the environment.

    Raises:
        ValueError: If the key is not configured
    """
    api_key = os.getenv("OPENWEATHER_API_KEY")
    if not api_key:
        raise ValueError(
            "OpenWeatherMap API key required. Set OPENWEATHER_API_KEY in .env file. "
            "Get a free key at: https://openweathermap.org/api"
        )
    return api_key
