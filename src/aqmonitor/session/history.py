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
Bounded AQI history for trend displays.

The tracker is a sliding window: once full, recording a new sample evicts
the oldest one.
"""

from collections import deque
from dataclasses import dataclass

import pandas as pd

from ..config import DEFAULT_HISTORY_SIZE


@dataclass(frozen=True)
class HistorySample:
    """One AQI reading, labelled with the wall-clock time it arrived."""

    time_label: str
    aqi: int


class HistoryTracker:
    """
    Fixed-capacity, insertion-ordered buffer of HistorySample.

    Example:
        >>> history = HistoryTracker(capacity=3)
        >>> for i in range(5):
        ...     history.record(HistorySample(f"10:0{i}", 40 + i))
        >>> [s.aqi for s in history.samples]
        [42, 43, 44]
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE) -> None:
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}")
        self._samples: deque[HistorySample] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._samples.maxlen

    @property
    def samples(self) -> tuple[HistorySample, ...]:
        """Samples oldest first. A tuple, so consumers cannot mutate it."""
        return tuple(self._samples)

    @property
    def latest(self) -> HistorySample | None:
        return self._samples[-1] if self._samples else None

    def record(self, sample: HistorySample) -> tuple[HistorySample, ...]:
        """Append a sample, evicting the oldest when full, and return the window."""
        self._samples.append(sample)
        return self.samples

    def clear(self) -> None:
        self._samples.clear()

    def to_frame(self) -> pd.DataFrame:
        """
        Return the history as a DataFrame with columns ``time`` and ``aqi``.

        An empty history gives an empty DataFrame with the same columns.
        """
        return pd.DataFrame(
            {
                "time": [s.time_label for s in self._samples],
                "aqi": pd.Series([s.aqi for s in self._samples], dtype="int64"),
            },
            columns=["time", "aqi"],
        )

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self):
        return iter(self.samples)
