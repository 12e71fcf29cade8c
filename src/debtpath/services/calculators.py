"""Purchase calculators: save up for something, or put it on credit?"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

from .debt_engine import NEVER, Amount, Finite, NeverPaysOff, Timeline, monthly_rate, round_cents
from .projections import add_months

CREDIT_SIMULATION_CAP_MONTHS = 120
MINIMUM_PAYMENT_RATE = 0.025
MINIMUM_PAYMENT_FLOOR = 5.0
UNEXPECTED_BUFFER_RATE = 0.10


@dataclass(slots=True)
class SavingsCalculation:
    months_to_save: Timeline
    total_saved: float
    target_date: date | None


@dataclass(slots=True)
class CreditCalculation:
    monthly_payment: float
    total_interest: Amount
    total_paid: Amount
    months_to_pay: Timeline
    payoff_date: date | None
    # True when the ten-year simulation ran out with a balance still owing;
    # the totals then cover only those 120 payments.
    capped: bool = False


@dataclass(slots=True)
class Comparison:
    savings: SavingsCalculation
    credit: CreditCalculation
    time_difference: int | None  # months; None when either side never finishes
    cost_difference: Amount
    winner: str  # "save" | "credit"


def calculate_savings(
    target_amount: float, monthly_savings: float, *, today: date | None = None
) -> SavingsCalculation:
    """How long saving *monthly_savings* a month takes to reach *target_amount*."""
    today = today or date.today()
    if target_amount <= 0:
        return SavingsCalculation(Finite(0), 0.0, today)
    if monthly_savings <= 0:
        return SavingsCalculation(NEVER, target_amount, None)
    months = math.ceil(target_amount / monthly_savings)
    return SavingsCalculation(Finite(months), target_amount, add_months(today, months))


def calculate_credit(
    amount: float,
    annual_rate: float,
    monthly_payment: float,
    *,
    today: date | None = None,
) -> CreditCalculation:
    """Cost of borrowing *amount* and repaying a fixed monthly payment.

    Simulated month by month for at most ten years; a payment that does not
    cover the first month's interest never pays off. A balance still owing
    after ten years is reported with ``capped=True`` and no payoff date.
    """
    today = today or date.today()
    if monthly_payment <= 0:
        return CreditCalculation(0.0, 0.0, amount, Finite(0), today)

    rate = monthly_rate(max(0.0, annual_rate))
    balance = amount
    months = 0
    total_paid = 0.0
    interest = 0.0
    while balance > 0 and months < CREDIT_SIMULATION_CAP_MONTHS:
        principal_payment = monthly_payment - balance * rate
        if principal_payment <= 0:
            return CreditCalculation(monthly_payment, NEVER, NEVER, NEVER, None)
        interest += balance * rate
        if principal_payment >= balance:
            total_paid += balance * (1 + rate)
            balance = 0.0
        else:
            balance -= principal_payment
            total_paid += monthly_payment
        months += 1

    capped = balance > 0
    total_paid = round_cents(total_paid)
    return CreditCalculation(
        monthly_payment=monthly_payment,
        total_interest=round_cents(interest if capped else total_paid - amount),
        total_paid=total_paid,
        months_to_pay=Finite(months),
        payoff_date=None if capped else add_months(today, months),
        capped=capped,
    )


def compare_options(
    price: float,
    monthly_savings: float,
    annual_rate: float,
    monthly_payment: float,
    *,
    today: date | None = None,
) -> Comparison:
    """Saving wins when credit costs over 10% of the price or runs past two years."""
    savings = calculate_savings(price, monthly_savings, today=today)
    credit = calculate_credit(price, annual_rate, monthly_payment, today=today)

    if isinstance(credit.total_paid, NeverPaysOff) or isinstance(credit.months_to_pay, NeverPaysOff):
        return Comparison(savings, credit, None, NEVER, "save")

    cost_difference = round_cents(credit.total_interest)
    time_difference = None
    if isinstance(savings.months_to_save, Finite):
        time_difference = savings.months_to_save.count - credit.months_to_pay.count

    winner = "save" if cost_difference > price * 0.1 or credit.months_to_pay.count > 24 else "credit"
    return Comparison(savings, credit, time_difference, cost_difference, winner)


def calculate_minimum_payment(balance: float) -> float:
    """Typical card minimum: 2.5% of the balance or 5, whichever is greater."""
    return round_cents(max(balance * MINIMUM_PAYMENT_RATE, MINIMUM_PAYMENT_FLOOR))


def calculate_unexpected_buffer(monthly_income: float) -> float:
    return round_cents(monthly_income * UNEXPECTED_BUFFER_RATE)


def calculate_leftover(*, income: float, essentials: float, debt_minimums: float) -> float:
    """Income left after essentials, the unexpected-costs buffer and debt minimums."""
    buffer = calculate_unexpected_buffer(income)
    return round_cents(income - (essentials + buffer + debt_minimums))


def format_months(months: Timeline | int) -> str:
    """Render a month count as ``"2 years, 3 months"``."""
    if isinstance(months, NeverPaysOff):
        return str(months)
    count = months.count if isinstance(months, Finite) else int(months)
    if count < 12:
        return f"{count} month{'s' if count != 1 else ''}"

    years, remaining = divmod(count, 12)
    year_text = f"{years} year{'s' if years != 1 else ''}"
    if remaining == 0:
        return year_text
    return f"{year_text}, {remaining} month{'s' if remaining != 1 else ''}"


__all__ = [
    "Comparison",
    "CreditCalculation",
    "SavingsCalculation",
    "calculate_credit",
    "calculate_leftover",
    "calculate_minimum_payment",
    "calculate_savings",
    "calculate_unexpected_buffer",
    "compare_options",
    "format_months",
]
