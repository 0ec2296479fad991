"""Tests for the Decimal projection formulas."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from winnie_core.calculations import (
    add_months,
    future_value,
    horizon_text,
    inflation_adjusted,
    monthly_rate,
    months_to_reach_target,
    required_monthly_contribution,
    time_to_completion_text,
    whole_months_between,
)


NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
CENTS = Decimal("0.01")


class TestMonthlyRate:
    """Annual rates are divided into twelve monthly periods."""

    def test_divides_by_twelve(self):
        assert monthly_rate(Decimal("0.12")) == Decimal("0.01")

    def test_zero_rate(self):
        assert monthly_rate(Decimal("0")) == 0


class TestFutureValue:
    """Test suite for future_value."""

    def test_zero_months_returns_present_value(self):
        """No time means no growth and no contributions."""
        result = future_value(Decimal("1000"), Decimal("100"), Decimal("0.07"), 0)
        assert result == Decimal("1000")

    def test_zero_interest_is_simple_addition(self):
        """At 0% the balance is present value plus contributions."""
        result = future_value(Decimal("1000"), Decimal("100"), Decimal("0"), 12)
        assert result == Decimal("2200")

    def test_compound_interest_with_contributions(self):
        """$100/month for a year at 12% grows to about $1,268.25."""
        result = future_value(Decimal("0"), Decimal("100"), Decimal("0.12"), 12)
        assert result.quantize(CENTS) == Decimal("1268.25")

    def test_compound_interest_without_contributions(self):
        """Present value alone compounds monthly."""
        result = future_value(Decimal("1000"), Decimal("0"), Decimal("0.12"), 12)
        assert result.quantize(CENTS) == Decimal("1126.83")

    def test_large_amounts_keep_precision(self):
        """Large balances stay exact to the cent at zero rate."""
        result = future_value(
            Decimal("1000000.01"), Decimal("12345.67"), Decimal("0"), 600
        )
        assert result == Decimal("1000000.01") + Decimal("12345.67") * 600


class TestMonthsToReachTarget:
    """Test suite for months_to_reach_target."""

    def test_already_exceeded_returns_zero(self):
        assert months_to_reach_target(
            Decimal("5000"), Decimal("6000"), Decimal("100"), Decimal("0.05")
        ) == 0

    def test_exactly_reached_returns_zero(self):
        assert months_to_reach_target(
            Decimal("5000"), Decimal("5000"), Decimal("0"), Decimal("0")
        ) == 0

    def test_no_contribution_no_interest_is_unreachable(self):
        assert months_to_reach_target(
            Decimal("10000"), Decimal("0"), Decimal("0"), Decimal("0")
        ) is None

    def test_simple_zero_rate_case(self):
        """$5,000 short at $500/month takes exactly 10 months."""
        assert months_to_reach_target(
            Decimal("10000"), Decimal("5000"), Decimal("500"), Decimal("0")
        ) == 10

    def test_zero_rate_rounds_partial_month_up(self):
        """A final partial month still counts as a month."""
        assert months_to_reach_target(
            Decimal("1000"), Decimal("0"), Decimal("300"), Decimal("0")
        ) == 4

    def test_zero_rate_matches_simple_addition(self):
        """At 0% the answer is the first n with current + c*n >= target."""
        target = Decimal("12345.67")
        current = Decimal("1234.56")
        contribution = Decimal("321.09")

        months = months_to_reach_target(target, current, contribution, Decimal("0"))

        assert current + contribution * months >= target
        assert current + contribution * (months - 1) < target

    def test_interest_is_faster_than_simple_saving(self):
        """7% growth beats the 40 months needed without growth."""
        months = months_to_reach_target(
            Decimal("50000"), Decimal("10000"), Decimal("1000"), Decimal("0.07")
        )
        assert months is not None
        assert months < 40

    def test_growth_alone_can_reach_target(self):
        """Doubling at 1%/month takes 70 months."""
        assert months_to_reach_target(
            Decimal("2000"), Decimal("1000"), Decimal("0"), Decimal("0.12")
        ) == 70

    def test_growth_on_nothing_is_unreachable(self):
        """Interest on a zero balance never grows it."""
        assert months_to_reach_target(
            Decimal("1000"), Decimal("0"), Decimal("0"), Decimal("0.05")
        ) is None

    def test_beyond_horizon_is_unreachable(self):
        """A tiny contribution toward a huge target passes the 50-year cap."""
        assert months_to_reach_target(
            Decimal("10000000"), Decimal("0"), Decimal("10"), Decimal("0.045")
        ) is None

    def test_custom_horizon(self):
        """The cap can be lowered."""
        assert months_to_reach_target(
            Decimal("10000"), Decimal("0"), Decimal("500"), Decimal("0"), max_months=12
        ) is None

    def test_negative_contribution_treated_as_zero(self):
        assert months_to_reach_target(
            Decimal("10000"), Decimal("0"), Decimal("-500"), Decimal("0")
        ) is None

    def test_very_small_contribution_eventually_reaches(self):
        """$50/month reaches $10,000 well inside the horizon at 4.5%."""
        months = months_to_reach_target(
            Decimal("10000"), Decimal("0"), Decimal("50"), Decimal("0.045")
        )
        assert months is not None
        assert 100 < months < 200


class TestMonthArithmetic:
    """Test suite for add_months and whole_months_between."""

    def test_add_zero_months(self):
        assert add_months(NOW, 0) == NOW

    def test_add_twelve_months(self):
        assert add_months(NOW, 12) == datetime(2027, 1, 15, 12, 0, tzinfo=timezone.utc)

    def test_add_months_clamps_to_month_end(self):
        start = datetime(2026, 1, 31, tzinfo=timezone.utc)
        assert add_months(start, 1) == datetime(2026, 2, 28, tzinfo=timezone.utc)

    def test_whole_months_counts_completed_months(self):
        assert whole_months_between(NOW, datetime(2026, 4, 15, 12, 0, tzinfo=timezone.utc)) == 3
        assert whole_months_between(NOW, datetime(2026, 4, 14, tzinfo=timezone.utc)) == 2

    def test_whole_months_negative_when_reversed(self):
        assert whole_months_between(datetime(2026, 4, 15, 12, 0, tzinfo=timezone.utc), NOW) == -3

    def test_naive_datetimes_are_treated_as_utc(self):
        assert whole_months_between(NOW, datetime(2026, 7, 15, 12, 0)) == 6


class TestRequiredMonthlyContribution:
    """Test suite for required_monthly_contribution."""

    def test_past_date_returns_none(self):
        result = required_monthly_contribution(
            Decimal("10000"), Decimal("0"), datetime(2025, 6, 1, tzinfo=timezone.utc),
            Decimal("0.05"), NOW,
        )
        assert result is None

    def test_past_date_returns_none_even_when_complete(self):
        result = required_monthly_contribution(
            Decimal("10000"), Decimal("20000"), datetime(2025, 6, 1, tzinfo=timezone.utc),
            Decimal("0.05"), NOW,
        )
        assert result is None

    def test_already_complete_returns_zero(self):
        result = required_monthly_contribution(
            Decimal("10000"), Decimal("10000"), add_months(NOW, 12), Decimal("0.05"), NOW,
        )
        assert result == Decimal("0")

    def test_complete_with_deadline_now_returns_zero(self):
        result = required_monthly_contribution(
            Decimal("10000"), Decimal("12000"), NOW, Decimal("0.05"), NOW,
        )
        assert result == Decimal("0")

    def test_no_whole_month_left_returns_none(self):
        """A deadline inside the current month leaves nothing to compound."""
        result = required_monthly_contribution(
            Decimal("10000"), Decimal("0"), datetime(2026, 2, 1, tzinfo=timezone.utc),
            Decimal("0"), NOW,
        )
        assert result is None

    def test_zero_rate_divides_remaining_evenly(self):
        result = required_monthly_contribution(
            Decimal("10000"), Decimal("4000"), add_months(NOW, 12), Decimal("0"), NOW,
        )
        assert result == Decimal("500.00")

    def test_rounds_up_to_the_cent(self):
        result = required_monthly_contribution(
            Decimal("10000"), Decimal("0"), add_months(NOW, 3), Decimal("0"), NOW,
        )
        assert result == Decimal("3333.34")

    def test_growth_alone_sufficient_returns_zero(self):
        """$1,000 at 12% passes $1,100 within a year with no contributions."""
        result = required_monthly_contribution(
            Decimal("1100"), Decimal("1000"), add_months(NOW, 12), Decimal("0.12"), NOW,
        )
        assert result == Decimal("0")

    def test_interest_lowers_requirement(self):
        """Growth means less than the no-interest amount is needed."""
        with_growth = required_monthly_contribution(
            Decimal("50000"), Decimal("10000"), add_months(NOW, 36), Decimal("0.07"), NOW,
        )
        without_growth = required_monthly_contribution(
            Decimal("50000"), Decimal("10000"), add_months(NOW, 36), Decimal("0"), NOW,
        )
        assert Decimal("0") < with_growth < without_growth

    def test_window_capped_at_horizon(self):
        """A deadline past the horizon is solved over the horizon."""
        result = required_monthly_contribution(
            Decimal("100000"), Decimal("0"), add_months(NOW, 720), Decimal("0"), NOW,
        )

        assert result == Decimal("166.67")
        assert months_to_reach_target(
            Decimal("100000"), Decimal("0"), result, Decimal("0")
        ) == 600

    def test_custom_horizon_caps_window(self):
        result = required_monthly_contribution(
            Decimal("12000"), Decimal("0"), add_months(NOW, 36), Decimal("0"), NOW,
            max_months=12,
        )
        assert result == Decimal("1000.00")

    @pytest.mark.parametrize(
        "target,current,rate,months",
        [
            ("50000", "10000", "0.07", 36),
            ("60000", "15000", "0.045", 24),
            ("8000", "2500", "0.04", 7),
            ("1000000", "50000", "0.07", 360),
            ("10000", "0", "0.05", 1),
        ],
    )
    def test_result_reaches_target_by_deadline(self, target, current, rate, months):
        """Paying the required amount never finishes after the deadline."""
        contribution = required_monthly_contribution(
            Decimal(target), Decimal(current), add_months(NOW, months), Decimal(rate), NOW,
        )

        reached = months_to_reach_target(
            Decimal(target), Decimal(current), contribution, Decimal(rate)
        )

        assert reached is not None
        assert reached <= months


class TestInflationAdjusted:
    """Test suite for inflation_adjusted."""

    def test_zero_years_unchanged(self):
        assert inflation_adjusted(Decimal("1000"), 0) == Decimal("1000")

    def test_zero_rate_unchanged(self):
        assert inflation_adjusted(Decimal("1000"), 10, Decimal("0")) == Decimal("1000")

    def test_reduces_value(self):
        result = inflation_adjusted(Decimal("1000"), 1, Decimal("0.03"))
        assert result.quantize(CENTS) == Decimal("970.87")

    def test_default_rate_applies(self):
        assert inflation_adjusted(Decimal("1000"), 10) < Decimal("1000")


class TestTimeToCompletionText:
    """Labels shown next to projections."""

    @pytest.mark.parametrize(
        "months,expected",
        [
            (None, "50+ years"),
            (0, "Complete!"),
            (1, "1 month"),
            (7, "7 months"),
            (12, "1 year"),
            (24, "2 years"),
            (40, "3y 4m"),
        ],
    )
    def test_labels(self, months, expected):
        assert time_to_completion_text(months) == expected

    @pytest.mark.parametrize(
        "max_months,expected",
        [
            (600, "50+ years"),
            (120, "10+ years"),
            (12, "1+ year"),
            (18, "18+ months"),
        ],
    )
    def test_unreachable_label_follows_horizon(self, max_months, expected):
        assert time_to_completion_text(None, max_months) == expected


class TestHorizonText:
    """Horizon descriptions used in unreachable warnings."""

    @pytest.mark.parametrize(
        "months,expected",
        [
            (600, "50 years"),
            (12, "1 year"),
            (1, "1 month"),
            (30, "30 months"),
        ],
    )
    def test_text(self, months, expected):
        assert horizon_text(months) == expected
