"""
Tests for salary conversion, ladders and format toggles.
"""

from dataclasses import replace

import pytest

from mploy_onboarding.salary import (
    MONTHLY_LADDER,
    YEARLY_LADDER,
    SalaryFormat,
    SalaryPreference,
    SalaryRange,
    apply_threshold,
    closest_ladder_step,
    convert,
    format_inr,
    nearest_ladder_step,
    round_half_up,
    to_yearly,
    toggle_format,
)

MONTHLY = SalaryFormat.MONTHLY
YEARLY = SalaryFormat.YEARLY


def pref(fmt, low, high, threshold):
    return SalaryPreference(format=fmt, range=SalaryRange(min=low, max=high), threshold=threshold)


class TestConvert:
    """Test single-amount conversion."""

    def test_identity(self):
        assert convert(42_000, MONTHLY, MONTHLY) == 42_000
        assert convert(42_000, YEARLY, YEARLY) == 42_000

    def test_monthly_to_yearly(self):
        assert convert(30_000, MONTHLY, YEARLY) == 360_000

    def test_yearly_to_monthly_rounds_half_up(self):
        assert convert(360_000, YEARLY, MONTHLY) == 30_000
        assert convert(18, YEARLY, MONTHLY) == 2  # 1.5 -> 2
        assert convert(17, YEARLY, MONTHLY) == 1  # 1.41 -> 1

    def test_none_passes_through(self):
        assert convert(None, MONTHLY, YEARLY) is None

    @pytest.mark.parametrize("amount", [0, 1, 7, 999, 30_000, 123_457, -5, -30_001, 1.4, 2.5])
    def test_round_trip_within_one(self, amount):
        back = convert(convert(amount, MONTHLY, YEARLY), YEARLY, MONTHLY)
        assert abs(back - amount) <= 1
        assert (back >= 0) == (amount >= 0) or back == 0

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.49) == 2


class TestLadder:
    """Test threshold ladder lookup."""

    def test_yearly_ladder_mirrors_monthly(self):
        assert YEARLY_LADDER == tuple(step * 12 for step in MONTHLY_LADDER)
        assert YEARLY_LADDER[0] == 120_000
        assert YEARLY_LADDER[-1] == 1_200_000

    def test_nearest_step_at_or_above(self):
        assert nearest_ladder_step(240_000, YEARLY) == 240_000
        assert nearest_ladder_step(240_001, YEARLY) == 300_000
        assert nearest_ladder_step(1, MONTHLY) == 10_000

    def test_above_top_clamps(self):
        assert nearest_ladder_step(5_000_000, YEARLY) == 1_200_000

    def test_none(self):
        assert nearest_ladder_step(None, MONTHLY) is None

    def test_closest_step(self):
        assert closest_ladder_step(21_000, MONTHLY) == 20_000
        assert closest_ladder_step(24_000, MONTHLY) == 25_000
        assert closest_ladder_step(22_500, MONTHLY) == 20_000  # tie goes low


class TestToggleFormat:
    """Test converting a whole preference between formats."""

    def test_monthly_to_yearly_example(self):
        result = toggle_format(pref(MONTHLY, 30_000, 50_000, 20_000), YEARLY)
        assert result.format == YEARLY
        assert result.range.min == 360_000
        assert result.range.max == 600_000
        assert result.threshold == 240_000

    def test_back_to_monthly(self):
        result = toggle_format(pref(YEARLY, 360_000, 600_000, 240_000), MONTHLY)
        assert (result.range.min, result.range.max, result.threshold) == (30_000, 50_000, 20_000)

    def test_same_format_is_noop(self):
        original = pref(MONTHLY, 30_000, 50_000, 20_000)
        assert toggle_format(original, MONTHLY) is original

    def test_does_not_mutate_input(self):
        original = pref(MONTHLY, 30_000, 50_000, 20_000)
        toggle_format(original, YEARLY)
        assert original.range.min == 30_000
        assert original.format == MONTHLY

    def test_unset_amounts_stay_unset(self):
        result = toggle_format(SalaryPreference(), YEARLY)
        assert result.range.min is None
        assert result.range.max is None
        assert result.threshold is None

    @pytest.mark.parametrize("low,high,threshold", [
        (30_000, 50_000, 20_000),
        (10_001, 10_002, 10_000),
        (12_345, 99_999, 10_000),
        (75_000, 75_000, 75_000),
        (400_000, 900_000, 100_000),
    ])
    def test_ordering_survives_round_trip(self, low, high, threshold):
        yearly = toggle_format(pref(MONTHLY, low, high, threshold), YEARLY)
        assert yearly.threshold <= yearly.range.min <= yearly.range.max
        monthly = toggle_format(yearly, MONTHLY)
        assert monthly.threshold <= monthly.range.min <= monthly.range.max

    def test_snapped_threshold_raises_minimum(self):
        """An off-ladder threshold snaps up and drags min (and max) along."""
        result = toggle_format(pref(YEARLY, 250_000, 250_000, 250_000), MONTHLY)
        assert result.threshold == 25_000
        assert result.range.min >= result.threshold
        assert result.range.max >= result.range.min

    def test_yearly_amounts_survive_repeated_toggles(self):
        result = pref(YEARLY, 250_001, 250_001, 240_000)
        for _ in range(5):
            result = toggle_format(toggle_format(result, MONTHLY), YEARLY)
        assert (result.range.min, result.range.max, result.threshold) == (250_001, 250_001, 240_000)
        assert result.yearly_basis is None

    def test_edited_monthly_amount_converts_fresh(self):
        monthly = toggle_format(pref(YEARLY, 250_001, 250_001, None), MONTHLY)
        assert monthly.range.min == 20_833
        edited = replace(monthly, range=SalaryRange(min=monthly.range.min, max=30_000))

        result = toggle_format(edited, YEARLY)
        assert result.range.min == 250_001
        assert result.range.max == 360_000

    def test_canonical_view_uses_yearly_basis(self):
        monthly = toggle_format(pref(YEARLY, 250_001, 300_007, None), MONTHLY)
        canonical = to_yearly(monthly)
        assert (canonical.range.min, canonical.range.max) == (250_001, 300_007)


class TestApplyThreshold:
    """Test slider threshold changes."""

    def test_snaps_to_closest_step(self):
        result = apply_threshold(pref(MONTHLY, 30_000, 50_000, None), 19_000)
        assert result.threshold == 20_000
        assert result.range.min == 30_000

    def test_raises_minimum_when_pushed_past(self):
        result = apply_threshold(pref(MONTHLY, 30_000, 50_000, None), 40_000)
        assert result.threshold == 40_000
        assert result.range.min == 40_000
        assert result.range.max == 50_000

    def test_clear_threshold(self):
        result = apply_threshold(pref(MONTHLY, 30_000, 50_000, 20_000), None)
        assert result.threshold is None


class TestCanonicalView:
    """Test the yearly canonical view and display helpers."""

    def test_to_yearly(self):
        canonical = to_yearly(pref(MONTHLY, 30_000, 50_000, 20_000))
        assert canonical.format == YEARLY
        assert canonical.range.min == 360_000
        assert canonical.threshold == 240_000

    def test_yearly_is_returned_as_is(self):
        original = pref(YEARLY, 360_000, 600_000, None)
        assert to_yearly(original) is original

    def test_format_inr(self):
        assert format_inr(360_000) == "₹3,60,000"
        assert format_inr(1_200_000) == "₹12,00,000"
        assert format_inr(999) == "₹999"
