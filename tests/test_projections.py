"""Tests for portfolio payoff projections and interest comparisons."""

from __future__ import annotations

from datetime import date, timedelta

import pytest
from debtpath.services.debt_engine import NEVER, DebtType, Finite, compute_all_debts
from debtpath.services.projections import (
    WEEKS_PER_MONTH,
    ProjectionScenario,
    add_months,
    calculate_debt_projection,
    calculate_interest_for_debt,
    calculate_interest_savings,
    calculate_phases,
    calculate_total_interest,
    project_payoff,
)
from tests.conftest import assert_float_equal

TODAY = date(2026, 1, 1)


@pytest.fixture
def portfolio(simple_debt_factory):
    """A card paid off in 25 months and a personal loan paid off in 27."""
    return compute_all_debts(
        [
            simple_debt_factory(debt_id="card", balance=1000.0, interest_rate=20.0, monthly_payment=50.0),
            simple_debt_factory(
                debt_id="loan",
                balance=5000.0,
                interest_rate=6.0,
                monthly_payment=200.0,
                debt_type=DebtType.PERSONAL_LOAN,
            ),
        ]
    )


@pytest.fixture
def stuck_portfolio(simple_debt_factory):
    """Same card plus a card whose payment never covers its interest."""
    return compute_all_debts(
        [
            simple_debt_factory(debt_id="card", balance=1000.0, interest_rate=20.0, monthly_payment=50.0),
            simple_debt_factory(debt_id="stuck", balance=5000.0, interest_rate=30.0, monthly_payment=20.0),
        ]
    )


class TestProjectPayoff:
    def test_weekly_conversion_constant(self):
        assert WEEKS_PER_MONTH == 4.33

    def test_current_pace_uses_weekly_minimum(self, portfolio):
        projection = project_payoff(portfolio, monthly_leftover=0.0, average_extra_payment=0.0, today=TODAY)

        # 6000 / (250 / 4.33) = 103.92
        assert projection.current_pace.weeks_remaining == Finite(104)
        assert projection.current_pace.date_estimate == TODAY + timedelta(weeks=104)
        assert projection.current_pace.weeks_saved == 0

    def test_extra_payments_and_best_case(self, portfolio):
        projection = project_payoff(
            portfolio, monthly_leftover=433.0, average_extra_payment=10.0, today=TODAY
        )

        assert projection.with_extra_payments.weeks_remaining == Finite(89)
        assert projection.with_extra_payments.weeks_saved == 15
        assert projection.best_case.weeks_remaining == Finite(39)
        assert projection.best_case.weeks_saved == 65
        assert projection.best_case.date_estimate == TODAY + timedelta(weeks=39)

    def test_zero_extra_matches_current_pace(self, portfolio):
        projection = project_payoff(portfolio, 0.0, 0.0, today=TODAY)
        assert projection.with_extra_payments.weeks_remaining == projection.current_pace.weeks_remaining
        assert projection.with_extra_payments.weeks_saved == 0

    @pytest.mark.parametrize("leftover,extra", [(0.0, 0.0), (500.0, 25.0), (-100.0, -5.0)])
    def test_zero_balance_reports_zero_everywhere(self, simple_debt_factory, leftover, extra):
        cleared = compute_all_debts(
            [simple_debt_factory(balance=0.0), simple_debt_factory(debt_id="d2", balance=0.0, monthly_payment=0.0)]
        )

        projection = project_payoff(cleared, leftover, extra, today=TODAY)

        for scenario in (projection.current_pace, projection.with_extra_payments, projection.best_case):
            assert scenario.weeks_remaining == Finite(0)
            assert scenario.weeks_saved == 0

    def test_empty_portfolio_reports_zero(self):
        projection = project_payoff([], 300.0, 10.0, today=TODAY)
        assert projection.best_case.weeks_remaining == Finite(0)

    def test_non_positive_scenario_payment_falls_back_to_current(self, portfolio):
        projection = project_payoff(portfolio, monthly_leftover=-1000.0, average_extra_payment=-100.0, today=TODAY)

        assert projection.with_extra_payments.weeks_remaining == Finite(104)
        assert projection.best_case.weeks_remaining == Finite(104)
        assert projection.best_case.weeks_saved == 0

    def test_slower_scenario_never_reports_negative_savings(self, portfolio):
        projection = project_payoff(portfolio, monthly_leftover=-100.0, average_extra_payment=-5.0, today=TODAY)

        assert projection.with_extra_payments.weeks_remaining.count > 104
        assert projection.with_extra_payments.weeks_saved == 0
        assert projection.best_case.weeks_saved == 0

    def test_no_payments_at_all_is_indefinite(self, simple_debt_factory):
        unpaid = compute_all_debts([simple_debt_factory(balance=6000.0, monthly_payment=0.0)])

        projection = project_payoff(unpaid, monthly_leftover=500.0, average_extra_payment=0.0, today=TODAY)

        assert projection.current_pace.weeks_remaining is NEVER
        assert projection.current_pace.date_estimate is None
        assert projection.with_extra_payments.weeks_remaining is NEVER
        assert projection.best_case.weeks_remaining is NEVER
        assert projection.best_case.weeks_saved == 0

    @pytest.mark.parametrize("leftover,extra", [(0.0, 0.0), (433.0, 10.0), (5000.0, 500.0)])
    def test_never_paying_debt_makes_weekly_projection_indefinite(self, stuck_portfolio, leftover, extra):
        projection = project_payoff(stuck_portfolio, leftover, extra, today=TODAY)

        for scenario in (projection.current_pace, projection.with_extra_payments, projection.best_case):
            assert scenario.weeks_remaining is NEVER
            assert scenario.date_estimate is None
            assert scenario.weeks_saved == 0

    def test_single_unpayable_card_has_no_date(self, simple_debt_factory):
        stuck = compute_all_debts(
            [simple_debt_factory(balance=5000.0, interest_rate=30.0, monthly_payment=20.0)]
        )

        projection = project_payoff(stuck, 0.0, 0.0, today=TODAY)

        assert projection.current_pace == ProjectionScenario(NEVER, None, 0)

    def test_mortgage_counts_principal(self, mortgage_factory):
        computed = compute_all_debts([mortgage_factory(principal=100000.0, custom_monthly_payment=433.0)])

        projection = project_payoff(computed, 0.0, 0.0, today=TODAY)

        # 100000 / (433 / 4.33) = 1000 weeks, give or take float noise
        assert projection.current_pace.weeks_remaining.count in (1000, 1001)


class TestDebtProjection:
    def test_current_timeline_is_slowest_debt(self, portfolio):
        projection = calculate_debt_projection(portfolio, today=TODAY)

        assert projection.current_timeline == Finite(27)
        assert projection.with_extra == Finite(27)
        assert projection.months_saved == 0
        assert projection.debt_free_date == date(2028, 4, 1)

    def test_committed_extra_is_spread_proportionally(self, portfolio):
        projection = calculate_debt_projection(portfolio, extra_payment=100.0, committed=True, today=TODAY)

        # card pays 70 (17 months), loan pays 280 (19 months)
        assert projection.with_extra == Finite(19)
        assert projection.months_saved == 8
        assert projection.debt_free_date_with_extra == date(2027, 8, 1)

    def test_uncommitted_extra_is_ignored(self, portfolio):
        projection = calculate_debt_projection(portfolio, extra_payment=100.0, committed=False, today=TODAY)
        assert projection.with_extra == projection.current_timeline

    def test_never_paying_debt_makes_timeline_indefinite(self, stuck_portfolio):
        projection = calculate_debt_projection(stuck_portfolio, extra_payment=100.0, committed=True, today=TODAY)

        assert projection.current_timeline is NEVER
        assert projection.with_extra is NEVER
        assert projection.debt_free_date is None
        assert projection.months_saved == 0

    def test_empty_portfolio(self):
        projection = calculate_debt_projection([], today=TODAY)
        assert projection.current_timeline == Finite(0)
        assert projection.debt_free_date == TODAY


class TestPhases:
    def test_empty_debts_give_no_phases(self):
        assert calculate_phases([], 100.0, True) == []

    def test_current_pace_only_when_not_committed(self, portfolio):
        phases = calculate_phases(portfolio, 100.0, committed=False, today=TODAY)

        assert len(phases) == 1
        assert phases[0].label == "Current pace"
        assert phases[0].monthly_payment == 250.0
        assert phases[0].timeline == Finite(27)

    def test_habit_phase(self, portfolio):
        phases = calculate_phases(portfolio, 100.0, committed=True, today=TODAY)

        assert [phase.label for phase in phases] == ["Current pace", "With 1% habit"]
        assert phases[1].description == "Add 100/month"
        assert phases[1].monthly_payment == 350.0
        assert phases[1].timeline == Finite(19)

    def test_custom_amount_is_step_up_strategy(self, portfolio):
        phases = calculate_phases(portfolio, 100.0, committed=True, is_custom_amount=True, today=TODAY)
        assert phases[1].label == "Step-up strategy"


class TestInterestApproximation:
    def test_average_balance_formula(self):
        # (1000 / 2) * 1% * 10 months
        assert_float_equal(calculate_interest_for_debt(1000.0, 12.0, 10), 50.0)

    @pytest.mark.parametrize("balance,rate,months", [(1000.0, 0.0, 10), (1000.0, 12.0, 0), (0.0, 12.0, 10)])
    def test_degenerate_inputs_cost_nothing(self, balance, rate, months):
        assert calculate_interest_for_debt(balance, rate, months) == 0.0

    def test_total_interest_caps_each_debt_at_horizon(self, portfolio):
        assert_float_equal(calculate_total_interest(portfolio, 100), 545.83)
        assert_float_equal(calculate_total_interest(portfolio, 12), 250.0)

    def test_total_interest_skips_never_paying_debts(self, stuck_portfolio):
        assert_float_equal(calculate_total_interest(stuck_portfolio, 100), 208.33)


class TestInterestSavings:
    def test_extra_payment_saves_interest(self, portfolio):
        savings = calculate_interest_savings(portfolio, 27, 19, 100.0)

        assert_float_equal(savings.current_interest, 545.83)
        assert_float_equal(savings.strategy_interest, 379.17)
        assert_float_equal(savings.interest_saved, 166.66, tolerance=0.02)

    def test_no_extra_same_horizon_saves_nothing(self, portfolio):
        savings = calculate_interest_savings(portfolio, 27, 27, 0.0)
        assert savings.interest_saved == 0.0
        assert savings.current_interest == savings.strategy_interest

    def test_longer_strategy_horizon_floors_at_zero(self, portfolio):
        savings = calculate_interest_savings(portfolio, 10, 40, 0.0)

        assert savings.strategy_interest > savings.current_interest
        assert savings.interest_saved == 0.0

    @pytest.mark.parametrize("current_months", [0, 1, 12, 60])
    @pytest.mark.parametrize("strategy_months", [0, 6, 120])
    @pytest.mark.parametrize("extra", [-50.0, 0.0, 25.0, 1000.0])
    def test_never_negative(self, portfolio, current_months, strategy_months, extra):
        savings = calculate_interest_savings(portfolio, current_months, strategy_months, extra)
        assert savings.interest_saved >= 0.0

    def test_never_paying_debt_does_not_poison_totals(self, stuck_portfolio):
        savings = calculate_interest_savings(stuck_portfolio, 25, 25, 50.0)

        assert savings.current_interest == pytest.approx(208.33, abs=0.01)
        assert savings.interest_saved >= 0.0


def test_add_months_clamps_day():
    assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)
    assert add_months(date(2026, 11, 15), 3) == date(2027, 2, 15)
