"""Debt payoff computation engine.

Turns one normalized debt description into a computed payoff summary
(monthly payment, months to payoff, total paid, total interest) using the
formula that matches its repayment style:

* mortgages are fixed-term annuities, paid for the full contractual term;
* credit cards are revolving balances paid down by a fixed payment;
* personal, car and student loans are amortizing loans where the caller
  supplies the payment and the term is solved for.

A debt whose payment never outruns its monthly interest is reported with the
``NEVER`` sentinel instead of a number. Negative inputs are clamped to zero by
:func:`sanitize`; nothing in this module raises for bad numbers.

Multi-debt ordering (snowball/avalanche) is intentionally not done here; it
can sit on top of :func:`compute_all_debts`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable, Optional, Union


class DebtType(str, Enum):
    """Kinds of debt the engine understands."""

    CREDIT_CARD = "credit_card"
    PERSONAL_LOAN = "personal_loan"
    CAR_LOAN = "car_loan"
    STUDENT_LOAN = "student_loan"
    MORTGAGE = "mortgage"


SIMPLE_DEBT_TYPES = frozenset(
    {DebtType.CREDIT_CARD, DebtType.PERSONAL_LOAN, DebtType.CAR_LOAN, DebtType.STUDENT_LOAN}
)


@dataclass(frozen=True, slots=True)
class Finite:
    """A payoff timeline that ends after ``count`` periods."""

    count: int


@dataclass(frozen=True, slots=True)
class NeverPaysOff:
    """The payment never outruns the interest; the debt is never cleared."""

    def __str__(self) -> str:
        return "cannot pay off at current rate"


NEVER = NeverPaysOff()

Timeline = Union[Finite, NeverPaysOff]
Amount = Union[float, NeverPaysOff]


@dataclass(frozen=True, slots=True)
class SimpleDebt:
    """Debt where the user supplies balance, APR and monthly payment."""

    id: str
    name: str
    debt_type: DebtType
    balance: float
    interest_rate: float  # APR, % per year
    monthly_payment: float

    def __post_init__(self) -> None:
        kind = DebtType(self.debt_type)
        if kind not in SIMPLE_DEBT_TYPES:
            raise ValueError(f"{kind.value} is not a simple debt type; use Mortgage")
        object.__setattr__(self, "debt_type", kind)


@dataclass(frozen=True, slots=True)
class Mortgage:
    """Amortizing loan described by principal, APR and total term."""

    id: str
    name: str
    principal: float
    interest_rate: float  # APR, % per year
    term_years: float
    custom_monthly_payment: Optional[float] = None  # bank quote overriding the formula

    @property
    def debt_type(self) -> DebtType:
        return DebtType.MORTGAGE


DebtRecord = Union[SimpleDebt, Mortgage]


@dataclass(frozen=True, slots=True)
class ComputedDebt:
    """A debt record together with its derived payoff figures."""

    record: DebtRecord
    monthly_payment: float
    months_to_payoff: Timeline
    total_paid: Amount
    total_interest: Amount

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def debt_type(self) -> DebtType:
        return self.record.debt_type

    @property
    def interest_rate(self) -> float:
        return self.record.interest_rate

    @property
    def outstanding(self) -> float:
        """Balance for simple debts, principal for mortgages."""
        if isinstance(self.record, Mortgage):
            return self.record.principal
        return self.record.balance

    @property
    def pays_off(self) -> bool:
        return isinstance(self.months_to_payoff, Finite)


def round_cents(value: float) -> float:
    """Round to cents using half-up rounding."""

    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def monthly_rate(annual_rate: float) -> float:
    """Convert an APR percentage to a monthly decimal rate."""

    return annual_rate / 100 / 12


def sanitize(debt: DebtRecord) -> DebtRecord:
    """Return a copy of *debt* with every numeric field clamped to >= 0."""

    if isinstance(debt, Mortgage):
        custom = debt.custom_monthly_payment
        return replace(
            debt,
            principal=max(0.0, debt.principal),
            interest_rate=max(0.0, debt.interest_rate),
            term_years=max(0.0, debt.term_years),
            custom_monthly_payment=None if custom is None else max(0.0, custom),
        )
    if isinstance(debt, SimpleDebt):
        return replace(
            debt,
            balance=max(0.0, debt.balance),
            interest_rate=max(0.0, debt.interest_rate),
            monthly_payment=max(0.0, debt.monthly_payment),
        )
    raise TypeError(f"Unsupported debt record: {type(debt).__name__}")


def amortised_payment(principal: float, annual_rate: float, years: float) -> float:
    """Return the level monthly payment that retires *principal* in *years*.

    The formula is::

        M = P * r(1 + r)^n / ((1 + r)^n - 1)

    where ``r`` is the monthly rate and ``n`` the number of payments. With a
    zero rate the payment is simply ``P / n``.
    """
    n = term_months(years)
    if n <= 0 or principal <= 0:
        return 0.0

    r = monthly_rate(annual_rate)
    if r == 0:
        return round_cents(principal / n)

    factor = (1 + r) ** n
    return round_cents(principal * (r * factor) / (factor - 1))


def term_months(years: float) -> int:
    return int(round(years * 12))


def credit_card_months(balance: float, payment: float, annual_rate: float) -> Timeline:
    """Months to clear a revolving balance at a fixed payment."""

    if balance <= 0:
        return Finite(0)
    if payment <= 0:
        return NEVER

    r = monthly_rate(annual_rate)
    if r == 0:
        return Finite(math.ceil(balance / payment))
    if payment <= balance * r:
        return NEVER

    months = -math.log(1 - (balance * r) / payment) / math.log(1 + r)
    return Finite(math.ceil(months))


def amortised_months(principal: float, payment: float, annual_rate: float) -> Timeline:
    """Months to retire an amortizing loan at a caller-supplied payment."""

    if principal <= 0:
        return Finite(0)
    if payment <= 0:
        return NEVER

    r = monthly_rate(annual_rate)
    if r == 0:
        return Finite(math.ceil(principal / payment))
    if payment <= principal * r:
        return NEVER

    months = math.log(payment / (payment - principal * r)) / math.log(1 + r)
    return Finite(math.ceil(months))


def _compute_mortgage(debt: Mortgage) -> ComputedDebt:
    custom = debt.custom_monthly_payment
    if custom is not None and custom > 0:
        payment = round_cents(custom)
    else:
        payment = amortised_payment(debt.principal, debt.interest_rate, debt.term_years)

    # Mortgages run their full contractual term whatever the payment.
    n = term_months(debt.term_years)
    if n <= 0:
        return ComputedDebt(debt, payment, Finite(0), 0.0, 0.0)

    total_paid = round_cents(payment * n)
    total_interest = round_cents(total_paid - debt.principal)
    return ComputedDebt(debt, payment, Finite(n), total_paid, total_interest)


def _compute_simple(debt: SimpleDebt) -> ComputedDebt:
    payment = round_cents(debt.monthly_payment)
    if debt.debt_type is DebtType.CREDIT_CARD:
        months = credit_card_months(debt.balance, payment, debt.interest_rate)
    else:
        months = amortised_months(debt.balance, payment, debt.interest_rate)

    if isinstance(months, NeverPaysOff):
        return ComputedDebt(debt, payment, NEVER, NEVER, NEVER)

    total_paid = round_cents(months.count * payment)
    total_interest = round_cents(total_paid - debt.balance)
    return ComputedDebt(debt, payment, months, total_paid, total_interest)


def compute_debt(debt: DebtRecord) -> ComputedDebt:
    """Return the fully computed payoff figures for one debt."""

    clean = sanitize(debt)
    if isinstance(clean, Mortgage):
        return _compute_mortgage(clean)
    if isinstance(clean, SimpleDebt):
        return _compute_simple(clean)
    raise TypeError(f"Unsupported debt record: {type(clean).__name__}")


def compute_all_debts(debts: Iterable[DebtRecord]) -> list[ComputedDebt]:
    """Compute every debt independently; order is preserved."""

    return [compute_debt(debt) for debt in debts]


def months_at_payment(debt: ComputedDebt, payment: float) -> Timeline:
    """Re-solve *debt*'s payoff timeline at a different monthly payment.

    Credit cards use the revolving formula; every other kind, mortgages
    included, uses the amortised-loan formula on its outstanding amount.
    """
    if debt.debt_type is DebtType.CREDIT_CARD:
        return credit_card_months(debt.outstanding, payment, debt.interest_rate)
    return amortised_months(debt.outstanding, payment, debt.interest_rate)


__all__ = [
    "NEVER",
    "SIMPLE_DEBT_TYPES",
    "Amount",
    "ComputedDebt",
    "DebtRecord",
    "DebtType",
    "Finite",
    "Mortgage",
    "NeverPaysOff",
    "SimpleDebt",
    "Timeline",
    "amortised_months",
    "amortised_payment",
    "compute_all_debts",
    "compute_debt",
    "credit_card_months",
    "monthly_rate",
    "months_at_payment",
    "round_cents",
    "sanitize",
    "term_months",
]
