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
AQI categories, colours and health advice.

Classification is a step function over six fixed severity bins with
inclusive upper bounds. Each bin maps 1:1 to a display colour, a CSS class
for UI chrome, and a hand-written ordered list of recommendations.
"""

from enum import Enum
from typing import TypedDict


class Category(str, Enum):
    """AQI severity bins, ordered from least to most severe."""

    GOOD = "Good"
    MODERATE = "Moderate"
    UNHEALTHY_SENSITIVE = "Unhealthy for Sensitive"
    UNHEALTHY = "Unhealthy"
    VERY_UNHEALTHY = "Very Unhealthy"
    HAZARDOUS = "Hazardous"

    @property
    def label(self) -> str:
        return self.value


class CategoryInfo(TypedDict):
    """Display attributes of one severity bin."""

    category: Category
    label: str
    color: str
    css_class: str


# Inclusive upper bound of each bin; anything above 300 is Hazardous
UPPER_BOUNDS = [
    (50, Category.GOOD),
    (100, Category.MODERATE),
    (150, Category.UNHEALTHY_SENSITIVE),
    (200, Category.UNHEALTHY),
    (300, Category.VERY_UNHEALTHY),
]

COLORS = {
    Category.GOOD: "#10b981",  # Green
    Category.MODERATE: "#eab308",  # Yellow
    Category.UNHEALTHY_SENSITIVE: "#f97316",  # Orange
    Category.UNHEALTHY: "#ef4444",  # Red
    Category.VERY_UNHEALTHY: "#a855f7",  # Purple
    Category.HAZARDOUS: "#6b21a8",  # Dark purple
}

CSS_CLASSES = {
    Category.GOOD: "aqi-good",
    Category.MODERATE: "aqi-moderate",
    Category.UNHEALTHY_SENSITIVE: "aqi-unhealthy-sensitive",
    Category.UNHEALTHY: "aqi-unhealthy",
    Category.VERY_UNHEALTHY: "aqi-very-unhealthy",
    Category.HAZARDOUS: "aqi-hazardous",
}

ADVISORIES = {
    Category.GOOD: (
        "Air quality is good. Perfect for outdoor activities!",
        "Great day for jogging, cycling, or outdoor sports.",
        "Windows can be opened for fresh air ventilation.",
    ),
    Category.MODERATE: (
        "Air quality is acceptable for most people.",
        "Sensitive individuals should consider limiting prolonged outdoor activities.",
        "Good day for normal outdoor activities with minor precautions.",
    ),
    Category.UNHEALTHY_SENSITIVE: (
        "Sensitive groups should reduce outdoor activities.",
        "Children, elderly, and people with respiratory issues should stay indoors.",
        "Consider wearing a mask if you must go outside.",
    ),
    Category.UNHEALTHY: (
        "Everyone should limit outdoor activities.",
        "Wear N95 masks when going outside.",
        "Keep windows closed and use air purifiers indoors.",
        "Avoid outdoor exercise and strenuous activities.",
    ),
    Category.VERY_UNHEALTHY: (
        "Avoid all outdoor activities.",
        "Stay indoors with windows and doors closed.",
        "Use air purifiers and wear masks even indoors if needed.",
        "Seek medical attention if experiencing breathing difficulties.",
    ),
    Category.HAZARDOUS: (
        "Health emergency conditions! Stay indoors.",
        "Avoid all outdoor exposure.",
        "Use high-quality air purifiers and sealed indoor spaces.",
        "Seek immediate medical attention for any respiratory symptoms.",
    ),
}

# Legend rows: (category, range text, short description)
AQI_SCALE = [
    (Category.GOOD, "0-50", "Minimal impact"),
    (Category.MODERATE, "51-100", "Acceptable quality"),
    (Category.UNHEALTHY_SENSITIVE, "101-150", "Sensitive groups affected"),
    (Category.UNHEALTHY, "151-200", "Everyone affected"),
    (Category.VERY_UNHEALTHY, "201-300", "Health warnings"),
    (Category.HAZARDOUS, "300+", "Emergency conditions"),
]


def get_category(aqi: float) -> Category:
    """Return the severity bin containing ``aqi``."""
    for upper, category in UPPER_BOUNDS:
        if aqi <= upper:
            return category
    return Category.HAZARDOUS


def classify(aqi: float) -> CategoryInfo:
    """
    Map an AQI value to its category, label, colour and CSS class.

    Example:
        >>> classify(42)["label"]
        'Good'
        >>> classify(151)["color"]
        '#ef4444'
    """
    category = get_category(aqi)
    return CategoryInfo(
        category=category,
        label=category.label,
        color=COLORS[category],
        css_class=CSS_CLASSES[category],
    )


def get_color(aqi: float) -> str:
    """Return the display colour for an AQI value."""
    return COLORS[get_category(aqi)]


def advise(aqi: float) -> list[str]:
    """
    Return the ordered health recommendations for an AQI value.

    A fresh list is returned on every call.
    """
    return list(ADVISORIES[get_category(aqi)])
