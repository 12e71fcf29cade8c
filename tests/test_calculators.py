"""Tests for the save-vs-credit purchase calculators."""

from __future__ import annotations

from datetime import date

import pytest
from debtpath.services.calculators import (
    calculate_credit,
    calculate_leftover,
    calculate_minimum_payment,
    calculate_savings,
    calculate_unexpected_buffer,
    compare_options,
    format_months,
)
from debtpath.services.debt_engine import NEVER, Finite
from tests.conftest import assert_float_equal

TODAY = date(2026, 3, 15)


class TestSavings:
    def test_months_to_save(self):
        result = calculate_savings(1000.0, 100.0, today=TODAY)

        assert result.months_to_save == Finite(10)
        assert result.total_saved == 1000.0
        assert result.target_date == date(2027, 1, 15)

    def test_partial_month_rounds_up(self):
        assert calculate_savings(1050.0, 100.0, today=TODAY).months_to_save == Finite(11)

    def test_no_savings_never_reaches_target(self):
        result = calculate_savings(1000.0, 0.0, today=TODAY)
        assert result.months_to_save is NEVER
        assert result.target_date is None


class TestCredit:
    def test_interest_free_credit(self):
        result = calculate_credit(1000.0, 0.0, 100.0, today=TODAY)

        assert result.months_to_pay == Finite(10)
        assert_float_equal(result.total_paid, 1000.0)
        assert_float_equal(result.total_interest, 0.0)

    def test_interest_bearing_credit(self):
        result = calculate_credit(1200.0, 12.0, 100.0, today=TODAY)

        assert result.months_to_pay == Finite(13)
        assert 0.0 < result.total_interest < 100.0
        assert_float_equal(result.total_paid, 1200.0 + result.total_interest)

    def test_payment_below_interest_never_pays_off(self):
        result = calculate_credit(1000.0, 24.0, 10.0, today=TODAY)

        assert result.months_to_pay is NEVER
        assert result.total_paid is NEVER
        assert result.payoff_date is None

    def test_zero_payment_means_no_credit_schedule(self):
        result = calculate_credit(800.0, 20.0, 0.0, today=TODAY)
        assert result.months_to_pay == Finite(0)
        assert result.total_paid == 800.0

    def test_simulation_is_capped_at_ten_years(self):
        result = calculate_credit(100000.0, 1.0, 100.0, today=TODAY)

        assert result.months_to_pay == Finite(120)
        assert result.capped is True
        assert result.payoff_date is None
        assert_float_equal(result.total_paid, 12000.0)
        # about 83 of interest a month on a balance that barely moves
        assert 9000.0 < result.total_interest < 10000.0

    def test_cleared_credit_is_not_capped(self):
        result = calculate_credit(1200.0, 12.0, 100.0, today=TODAY)
        assert result.capped is False
        assert result.payoff_date is not None


class TestCompareOptions:
    def test_cheap_short_credit_wins(self):
        result = compare_options(500.0, 50.0, 0.0, 100.0, today=TODAY)

        assert result.winner == "credit"
        assert result.time_difference == 5
        assert_float_equal(result.cost_difference, 0.0)

    def test_long_credit_loses(self):
        result = compare_options(1000.0, 100.0, 30.0, 50.0, today=TODAY)

        assert result.credit.months_to_pay.count > 24
        assert result.winner == "save"

    def test_unpayable_credit_loses(self):
        result = compare_options(1000.0, 100.0, 24.0, 10.0, today=TODAY)

        assert result.winner == "save"
        assert result.time_difference is None
        assert result.cost_difference is NEVER


@pytest.mark.parametrize("balance,expected", [(1000.0, 25.0), (100.0, 5.0), (0.0, 5.0)])
def test_minimum_payment(balance, expected):
    assert calculate_minimum_payment(balance) == expected


def test_leftover_reserves_ten_percent_buffer():
    assert calculate_unexpected_buffer(2000.0) == 200.0
    assert calculate_leftover(income=2000.0, essentials=1000.0, debt_minimums=300.0) == 500.0


@pytest.mark.parametrize(
    "months,text",
    [
        (1, "1 month"),
        (5, "5 months"),
        (12, "1 year"),
        (13, "1 year, 1 month"),
        (27, "2 years, 3 months"),
        (Finite(24), "2 years"),
        (NEVER, "cannot pay off at current rate"),
    ],
)
def test_format_months(months, text):
    assert format_months(months) == text
