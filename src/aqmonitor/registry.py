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
Lookup table of data providers by name.

A provider bundles the pollutant, weather and geocoding calls for one
upstream service (see ProviderSpec). Modules under ``aqmonitor.sources``
add themselves here on import; sessions pick one by name, which is matched
without regard to case.
"""

import warnings

from .types import ProviderSpec

# Upper-cased provider name -> ProviderSpec
_PROVIDERS: dict[str, ProviderSpec] = {}


def register_provider(name: str, spec: ProviderSpec) -> None:
    """
    Make a provider available to sessions under ``name``.

    A second registration under the same name replaces the first and
    emits a UserWarning.
    """
    key = name.upper()

    if key in _PROVIDERS:
        warnings.warn(
            f"Provider '{key}' is already registered and will be replaced",
            UserWarning,
            stacklevel=2,
        )

    _PROVIDERS[key] = spec


def get_provider(name: str) -> ProviderSpec | None:
    """Return the provider registered as ``name``, or None."""
    return _PROVIDERS.get(name.upper())


def list_providers() -> list[str]:
    """Registered provider names, sorted."""
    return sorted(_PROVIDERS)
