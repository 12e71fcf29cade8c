"""Portfolio payoff projections over computed debts.

Everything here works on snapshots of :class:`ComputedDebt` and is
approximate on purpose: monthly figures become weekly ones through a fixed
``WEEKS_PER_MONTH`` factor, and interest comparisons assume a linear paydown
(average balance = half the starting balance). The numbers are for planning
and motivation, not for a lender's statement.
"""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

from ..logging_config import get_logger
from .debt_engine import (
    NEVER,
    ComputedDebt,
    Finite,
    NeverPaysOff,
    Timeline,
    monthly_rate,
    months_at_payment,
    round_cents,
)

logger = get_logger("services.projections")

WEEKS_PER_MONTH = 4.33


@dataclass(slots=True)
class ProjectionScenario:
    """One hypothetical payoff path."""

    weeks_remaining: Timeline
    date_estimate: Optional[date]
    weeks_saved: int = 0


@dataclass(slots=True)
class PayoffProjection:
    current_pace: ProjectionScenario
    with_extra_payments: ProjectionScenario
    best_case: ProjectionScenario


@dataclass(slots=True)
class DebtProjection:
    """Month-based timeline with and without a committed extra payment."""

    current_timeline: Timeline
    with_extra: Timeline
    months_saved: int
    debt_free_date: Optional[date]
    debt_free_date_with_extra: Optional[date]


@dataclass(slots=True)
class Phase:
    label: str
    description: str
    monthly_payment: float
    timeline: Timeline
    debt_free_date: Optional[date]


@dataclass(slots=True)
class InterestSavings:
    current_interest: float
    strategy_interest: float
    interest_saved: float


def add_months(start: date, months: int) -> date:
    """Advance *start* by whole calendar months, clamping the day."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def timeline_saved(current: Timeline, scenario: Timeline) -> int:
    """Periods saved by *scenario*; 0 when either side cannot be measured."""
    if isinstance(current, NeverPaysOff) or isinstance(scenario, NeverPaysOff):
        return 0
    return max(0, current.count - scenario.count)


def _longest(timelines: Sequence[Timeline]) -> Timeline:
    """The portfolio is clear when its slowest debt is; NEVER dominates."""
    longest = 0
    for timeline in timelines:
        if isinstance(timeline, NeverPaysOff):
            return NEVER
        longest = max(longest, timeline.count)
    return Finite(longest)


def _weeks_to_clear(total_balance: float, weekly_payment: float) -> Timeline:
    if total_balance <= 0:
        return Finite(0)
    if weekly_payment <= 0:
        return NEVER
    return Finite(math.ceil(total_balance / weekly_payment))


def _week_scenario(weeks: Timeline, current: Timeline, today: date) -> ProjectionScenario:
    if isinstance(weeks, NeverPaysOff):
        return ProjectionScenario(NEVER, None, 0)
    return ProjectionScenario(
        weeks_remaining=weeks,
        date_estimate=today + timedelta(weeks=weeks.count),
        weeks_saved=timeline_saved(current, weeks),
    )


def project_payoff(
    debts: Sequence[ComputedDebt],
    monthly_leftover: float,
    average_extra_payment: float,
    *,
    today: date | None = None,
) -> PayoffProjection:
    """Project payoff in weeks at current pace, with extras, and best case.

    ``average_extra_payment`` is a weekly figure (from check-in history);
    ``monthly_leftover`` is the disposable income left each month.

    If any debt never pays off, every scenario is ``NEVER``.
    """
    today = today or date.today()
    unpayable = [debt.id for debt in debts if not debt.pays_off]
    if unpayable:
        logger.debug("Projected payoff", extra={"unpayable": unpayable})
        return PayoffProjection(
            current_pace=ProjectionScenario(NEVER, None, 0),
            with_extra_payments=ProjectionScenario(NEVER, None, 0),
            best_case=ProjectionScenario(NEVER, None, 0),
        )

    total_balance = sum(debt.outstanding for debt in debts)
    weekly_minimum = sum(debt.monthly_payment for debt in debts) / WEEKS_PER_MONTH

    current_weeks = _weeks_to_clear(total_balance, weekly_minimum)

    def scenario(weekly_payment: float) -> ProjectionScenario:
        if total_balance <= 0:
            return ProjectionScenario(Finite(0), today, 0)
        if weekly_payment <= 0:
            return _week_scenario(current_weeks, current_weeks, today)
        return _week_scenario(_weeks_to_clear(total_balance, weekly_payment), current_weeks, today)

    projection = PayoffProjection(
        current_pace=_week_scenario(current_weeks, current_weeks, today),
        with_extra_payments=scenario(weekly_minimum + average_extra_payment),
        best_case=scenario(weekly_minimum + monthly_leftover / WEEKS_PER_MONTH),
    )
    logger.debug(
        "Projected payoff",
        extra={
            "total_balance": total_balance,
            "weekly_minimum": round(weekly_minimum, 2),
            "current_weeks": str(current_weeks),
        },
    )
    return projection


def _spread_extra(debts: Sequence[ComputedDebt], extra_payment: float) -> list[float]:
    """Split *extra_payment* across debts by their share of the total payment."""
    total_payment = sum(debt.monthly_payment for debt in debts)
    if total_payment <= 0:
        return [debt.monthly_payment for debt in debts]
    return [
        debt.monthly_payment + extra_payment * debt.monthly_payment / total_payment
        for debt in debts
    ]


def _timelines_with_extra(debts: Sequence[ComputedDebt], extra_payment: float) -> list[Timeline]:
    timelines: list[Timeline] = []
    for debt, payment in zip(debts, _spread_extra(debts, extra_payment)):
        if not debt.pays_off:
            timelines.append(NEVER)
            continue
        timelines.append(months_at_payment(debt, payment))
    return timelines


def _date_after(today: date, timeline: Timeline) -> Optional[date]:
    if isinstance(timeline, NeverPaysOff):
        return None
    return add_months(today, timeline.count)


def calculate_debt_projection(
    debts: Sequence[ComputedDebt],
    extra_payment: float = 0.0,
    committed: bool = False,
    *,
    today: date | None = None,
) -> DebtProjection:
    """Debt-free timeline in months, with and without a committed extra payment."""
    today = today or date.today()
    current = _longest([debt.months_to_payoff for debt in debts])

    with_extra = current
    if committed and extra_payment > 0 and debts:
        with_extra = _longest(_timelines_with_extra(debts, extra_payment))

    return DebtProjection(
        current_timeline=current,
        with_extra=with_extra,
        months_saved=timeline_saved(current, with_extra),
        debt_free_date=_date_after(today, current),
        debt_free_date_with_extra=_date_after(today, with_extra),
    )


def calculate_phases(
    debts: Sequence[ComputedDebt],
    habit_amount: float,
    committed: bool,
    is_custom_amount: bool = False,
    *,
    today: date | None = None,
) -> list[Phase]:
    """Side-by-side phases: current pace and, if committed, the extra-payment plan."""
    if not debts:
        return []

    today = today or date.today()
    total_payment = sum(debt.monthly_payment for debt in debts)
    current = _longest([debt.months_to_payoff for debt in debts])
    phases = [
        Phase(
            label="Current pace",
            description="Continue as you are",
            monthly_payment=round_cents(total_payment),
            timeline=current,
            debt_free_date=_date_after(today, current),
        )
    ]

    if committed and habit_amount > 0:
        timeline = _longest(_timelines_with_extra(debts, habit_amount))
        phases.append(
            Phase(
                label="Step-up strategy" if is_custom_amount else "With 1% habit",
                description=f"Add {habit_amount:.0f}/month",
                monthly_payment=round_cents(total_payment + habit_amount),
                timeline=timeline,
                debt_free_date=_date_after(today, timeline),
            )
        )
    return phases


def calculate_interest_for_debt(balance: float, annual_rate: float, months: int) -> float:
    """Approximate interest as average balance x monthly rate x months.

    Assumes the balance falls linearly to zero, so the average balance is
    half the starting one. This is an estimate, not an amortization integral.
    """
    if annual_rate <= 0 or months <= 0 or balance <= 0:
        return 0.0
    return max(0.0, (balance / 2) * monthly_rate(annual_rate) * months)


def _approximate_interest(
    debts: Sequence[ComputedDebt], timelines: Sequence[Timeline], months: int
) -> float:
    total = 0.0
    for debt, timeline in zip(debts, timelines):
        if isinstance(timeline, NeverPaysOff):
            continue
        total += calculate_interest_for_debt(
            debt.outstanding, debt.interest_rate, min(timeline.count, months)
        )
    return total


def calculate_total_interest(debts: Sequence[ComputedDebt], months: int) -> float:
    """Approximate interest across debts within a *months* horizon.

    Debts that never pay off are skipped.
    """
    return round_cents(
        _approximate_interest(debts, [debt.months_to_payoff for debt in debts], months)
    )


def calculate_interest_savings(
    debts: Sequence[ComputedDebt],
    current_months: int,
    strategy_months: int,
    strategy_extra_payment: float,
) -> InterestSavings:
    """Compare approximate interest at current pace against an extra-payment strategy.

    The extra payment is shared across debts in proportion to their minimum
    payments and each debt's timeline is re-solved at its adjusted payment.
    ``interest_saved`` is floored at zero.
    """
    current_interest = calculate_total_interest(debts, current_months)

    adjusted: list[Timeline] = []
    for debt, payment in zip(debts, _spread_extra(debts, max(0.0, strategy_extra_payment))):
        if not debt.pays_off:
            adjusted.append(NEVER)
        elif payment == debt.monthly_payment:
            adjusted.append(debt.months_to_payoff)
        else:
            adjusted.append(months_at_payment(debt, payment))
    strategy_interest = round_cents(_approximate_interest(debts, adjusted, strategy_months))

    return InterestSavings(
        current_interest=current_interest,
        strategy_interest=strategy_interest,
        interest_saved=round_cents(max(0.0, current_interest - strategy_interest)),
    )


__all__ = [
    "WEEKS_PER_MONTH",
    "DebtProjection",
    "InterestSavings",
    "PayoffProjection",
    "Phase",
    "ProjectionScenario",
    "add_months",
    "calculate_debt_projection",
    "calculate_interest_for_debt",
    "calculate_interest_savings",
    "calculate_phases",
    "calculate_total_interest",
    "project_payoff",
    "timeline_saved",
]
