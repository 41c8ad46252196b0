"""
Tests for the aqmonitor.metrics module.

Tests cover:
- Breakpoint interpolation and saturation
- Worst-case aggregation of PM2.5 and PM10
- Category, colour and advisory mapping
- Display formatting of pollutant readings
"""

import pytest

from aqmonitor import metrics
from aqmonitor.metrics.base import (
    AQI_CEILING,
    calculate_sub_index,
    round_aqi,
    validate_breakpoints,
)
from aqmonitor.metrics.breakpoints import PM10_BREAKPOINTS, PM25_BREAKPOINTS
from aqmonitor.metrics.categories import (
    ADVISORIES,
    AQI_SCALE,
    COLORS,
    Category,
    advise,
    classify,
    get_category,
)
from aqmonitor.metrics.display import format_pollutants

from conftest import READINGS_PER_BIN

# =============================================================================
# Breakpoint Interpolation Tests
# =============================================================================


class TestSubIndex:
    """Tests for calculate_sub_index()."""

    def test_zero_concentration(self):
        """Zero maps to the first row's low AQI."""
        assert calculate_sub_index(0, PM25_BREAKPOINTS) == 0

    def test_pm25_good_upper_bound(self):
        """12 µg/m³ is the inclusive top of the Good tier."""
        assert calculate_sub_index(12.0, PM25_BREAKPOINTS) == pytest.approx(50)

    def test_pm25_moderate_upper_bound(self):
        assert calculate_sub_index(35.4, PM25_BREAKPOINTS) == pytest.approx(100)

    def test_pm25_next_tier_starts_at_101(self):
        """The jump from 100 to 101 at the tier edge is preserved."""
        assert calculate_sub_index(35.5, PM25_BREAKPOINTS) == pytest.approx(101)

    def test_interpolates_within_tier(self):
        """Midpoint of the PM10 Good tier is half of 50."""
        assert calculate_sub_index(27, PM10_BREAKPOINTS) == pytest.approx(25)

    def test_gap_between_rows_uses_next_row(self):
        """A value between two rows takes the upper row's low AQI."""
        assert calculate_sub_index(12.05, PM25_BREAKPOINTS) == 51
        assert calculate_sub_index(354.5, PM10_BREAKPOINTS) == 201

    def test_last_row_upper_bound(self):
        assert calculate_sub_index(500.0, PM25_BREAKPOINTS) == pytest.approx(500)
        assert calculate_sub_index(604, PM10_BREAKPOINTS) == pytest.approx(500)

    def test_saturates_above_table(self):
        """Concentrations beyond the table cap at 500, not extrapolate."""
        assert calculate_sub_index(750.0, PM25_BREAKPOINTS) == AQI_CEILING
        assert calculate_sub_index(10_000, PM10_BREAKPOINTS) == AQI_CEILING

    def test_zero_width_row(self):
        table = [{"low_conc": 0, "high_conc": 0, "low_aqi": 7, "high_aqi": 7}]
        assert calculate_sub_index(0, table) == 7

    def test_negative_concentration_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            calculate_sub_index(-1.0, PM25_BREAKPOINTS)

    def test_empty_table_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            calculate_sub_index(5.0, [])

    @pytest.mark.parametrize("table", [PM25_BREAKPOINTS, PM10_BREAKPOINTS])
    def test_non_decreasing(self, table):
        """Sub-index never drops as concentration rises."""
        concentrations = [i * 0.05 for i in range(0, 14000)]
        values = [calculate_sub_index(c, table) for c in concentrations]
        assert all(a <= b + 1e-9 for a, b in zip(values, values[1:]))


class TestValidateBreakpoints:
    """Tests for breakpoint table validation."""

    def test_builtin_tables_are_valid(self):
        validate_breakpoints(PM25_BREAKPOINTS)
        validate_breakpoints(PM10_BREAKPOINTS)

    def test_overlapping_rows_rejected(self):
        table = [
            {"low_conc": 0, "high_conc": 10, "low_aqi": 0, "high_aqi": 50},
            {"low_conc": 5, "high_conc": 20, "low_aqi": 51, "high_aqi": 100},
        ]
        with pytest.raises(ValueError, match="overlaps"):
            validate_breakpoints(table)

    def test_must_start_at_zero(self):
        table = [{"low_conc": 1, "high_conc": 10, "low_aqi": 0, "high_aqi": 50}]
        with pytest.raises(ValueError, match="zero"):
            validate_breakpoints(table)

    def test_descending_aqi_rejected(self):
        table = [
            {"low_conc": 0, "high_conc": 10, "low_aqi": 0, "high_aqi": 50},
            {"low_conc": 11, "high_conc": 20, "low_aqi": 40, "high_aqi": 100},
        ]
        with pytest.raises(ValueError, match="ascending"):
            validate_breakpoints(table)


class TestRoundAqi:
    """Tests for half-up rounding."""

    def test_half_rounds_up(self):
        assert round_aqi(50.5) == 51
        assert round_aqi(2.5) == 3

    def test_below_half_rounds_down(self):
        assert round_aqi(67.49) == 67


# =============================================================================
# Aggregation Tests
# =============================================================================


class TestCalculateAqi:
    """Tests for the worst-case AQI aggregator."""

    def test_empty_reading_floors_at_one(self):
        assert metrics.calculate_aqi({}) == 1

    def test_zero_reading_floors_at_one(self):
        assert metrics.calculate_aqi({"pm2_5": 0.0, "pm10": 0.0}) == 1

    def test_takes_maximum_sub_index(self):
        # PM10 150 -> ~99, PM2.5 5 -> ~21
        aqi = metrics.calculate_aqi({"pm2_5": 5.0, "pm10": 150.0})
        assert aqi == pytest.approx(calculate_sub_index(150.0, PM10_BREAKPOINTS))

    def test_ignores_gaseous_pollutants(self):
        """Only particulates feed the AQI."""
        assert metrics.calculate_aqi({"no2": 900.0, "o3": 400.0, "co": 9000.0}) == 1

    def test_missing_pollutant_contributes_zero(self):
        assert metrics.calculate_aqi({"pm10": 54}) == pytest.approx(50)

    def test_none_value_treated_as_missing(self):
        assert metrics.calculate_aqi({"pm2_5": None, "pm10": 27}) == pytest.approx(25)

    def test_result_is_unrounded(self):
        assert metrics.calculate_aqi({"pm2_5": 20.0}) == pytest.approx(67.61, abs=0.01)

    def test_sub_indices_reported_for_both_particulates(self):
        sub = metrics.calculate_sub_indices({"pm2_5": 12.0})
        assert sub == {"pm2_5": pytest.approx(50), "pm10": 0.0}


class TestEvaluate:
    """Tests for evaluate(), which builds a full AQIResult."""

    def test_boundary_readings(self):
        assert metrics.evaluate({"pm2_5": 35.4}).aqi == 100
        assert metrics.evaluate({"pm2_5": 35.5}).aqi == 101

    @pytest.mark.parametrize(
        "pm10,aqi,category",
        [
            (354.0, 200, Category.UNHEALTHY),
            (354.3, 201, Category.VERY_UNHEALTHY),
            (424.0, 300, Category.VERY_UNHEALTHY),
            (424.5, 301, Category.HAZARDOUS),
        ],
    )
    def test_pm10_gap_moves_up_a_category(self, pm10, aqi, category):
        """Readings between PM10 rows are classified with the upper row."""
        result = metrics.evaluate({"pm10": pm10})

        assert result.aqi == aqi
        assert result.category is category

    def test_result_fields(self, good_readings):
        result = metrics.evaluate(good_readings)

        assert result.aqi == 21
        assert result.category is Category.GOOD
        assert result.label == "Good"
        assert result.color == "#10b981"
        assert result.css_class == "aqi-good"
        assert result.pollutants == good_readings
        assert result.advice == ADVISORIES[Category.GOOD]

    def test_pollutants_are_copied(self, good_readings):
        result = metrics.evaluate(good_readings)
        good_readings["pm2_5"] = 300.0
        assert result.pollutants["pm2_5"] == 5.0

    def test_result_is_immutable(self, good_readings):
        result = metrics.evaluate(good_readings)
        with pytest.raises(AttributeError):
            result.aqi = 99

    @pytest.mark.parametrize("readings,expected", READINGS_PER_BIN)
    def test_classify_of_computed_aqi(self, readings, expected):
        """classify(calculate_aqi(r)) lands in the expected bin for each fixture."""
        aqi = round_aqi(metrics.calculate_aqi(readings))
        assert classify(aqi)["category"] is expected
        assert metrics.evaluate(readings).category is expected


# =============================================================================
# Classification Tests
# =============================================================================


class TestClassify:
    """Tests for the category step function."""

    @pytest.mark.parametrize(
        "aqi,expected",
        [
            (1, Category.GOOD),
            (50, Category.GOOD),
            (51, Category.MODERATE),
            (100, Category.MODERATE),
            (101, Category.UNHEALTHY_SENSITIVE),
            (150, Category.UNHEALTHY_SENSITIVE),
            (151, Category.UNHEALTHY),
            (200, Category.UNHEALTHY),
            (201, Category.VERY_UNHEALTHY),
            (300, Category.VERY_UNHEALTHY),
            (301, Category.HAZARDOUS),
            (500, Category.HAZARDOUS),
        ],
    )
    def test_bin_boundaries(self, aqi, expected):
        assert get_category(aqi) is expected

    def test_classify_returns_display_attributes(self):
        info = classify(175)

        assert info["category"] is Category.UNHEALTHY
        assert info["label"] == "Unhealthy"
        assert info["color"] == "#ef4444"
        assert info["css_class"] == "aqi-unhealthy"

    def test_hazardous_colour(self):
        assert classify(500)["color"] == "#6b21a8"

    def test_one_colour_per_category(self):
        assert len(set(COLORS.values())) == len(Category)

    def test_scale_covers_every_category_in_order(self):
        assert [row[0] for row in AQI_SCALE] == list(Category)


class TestAdvise:
    """Tests for health advisories."""

    def test_good_advice(self):
        advice = advise(20)
        assert len(advice) == 3
        assert advice[0] == "Air quality is good. Perfect for outdoor activities!"

    def test_unhealthy_advice_has_four_entries(self):
        assert len(advise(180)) == 4

    def test_every_bin_has_three_or_four_entries(self):
        for advice in ADVISORIES.values():
            assert 3 <= len(advice) <= 4

    def test_advice_is_a_fresh_copy(self):
        advice = advise(20)
        advice.clear()
        assert len(advise(20)) == 3

    def test_step_function(self):
        """Advice changes only at bin edges."""
        assert advise(51) == advise(100)
        assert advise(100) != advise(101)


# =============================================================================
# Display Tests
# =============================================================================


class TestFormatPollutants:
    """Tests for pollutant display formatting."""

    def test_all_labels_in_order(self):
        formatted = format_pollutants({})
        assert list(formatted) == ["PM2.5", "PM10", "NO₂", "O₃", "SO₂", "CO", "NO", "NH₃"]

    def test_missing_is_not_available(self):
        assert format_pollutants({"pm2_5": 8.04})["PM10"] == "N/A"

    def test_one_decimal_place(self):
        assert format_pollutants({"pm2_5": 8.04})["PM2.5"] == "8.0"

    def test_co_has_no_decimals(self):
        assert format_pollutants({"co": 201.94})["CO"] == "202"

    def test_zero_is_shown(self):
        assert format_pollutants({"no": 0.0})["NO"] == "0.0"
