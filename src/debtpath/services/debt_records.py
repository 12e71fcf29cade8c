"""Conversion from stored debt records to engine inputs, plus portfolio totals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Union

from ..logging_config import get_logger
from ..models.debt import DebtItem, reads_loan_amount
from .debt_engine import (
    ComputedDebt,
    DebtRecord,
    DebtType,
    Mortgage,
    NeverPaysOff,
    SimpleDebt,
    compute_all_debts,
)

logger = get_logger("services.debt_records")

DEFAULT_MORTGAGE_TERM_YEARS = 30

StoreRecord = Union[Mapping[str, Any], DebtItem]


@dataclass(slots=True)
class DebtTotals:
    """Portfolio-level sums over computed debts."""

    total_debt: float
    total_monthly_payment: float
    total_interest: float  # never-paying debts are left out of this sum
    has_unpayable_debt: bool


def _number(value: Any) -> float:
    """Coerce a stored value to float; blanks and junk become 0."""
    if value is None or value == "":
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _resolve_debt_type(raw: Any) -> DebtType:
    if raw in (None, ""):
        return DebtType.CREDIT_CARD
    try:
        return DebtType(raw)
    except ValueError:
        raise ValueError(f"Unknown debt type: {raw!r}") from None


def _legacy_debt_type(label: Any) -> DebtType:
    try:
        return DebtType(label)
    except ValueError:
        return DebtType.CREDIT_CARD


def _build_record(
    *,
    debt_id: str,
    name: str,
    debt_type: DebtType,
    balance: float,
    interest_rate: float,
    monthly_payment: float,
    loan_amount: float,
    term_years: float,
) -> DebtRecord:
    # Loans and mortgages prefer the recorded loan amount; cards only have a balance.
    if reads_loan_amount(debt_type.value, loan_amount):
        balance = loan_amount

    if debt_type is DebtType.MORTGAGE:
        return Mortgage(
            id=debt_id,
            name=name,
            principal=balance,
            interest_rate=interest_rate,
            term_years=term_years or DEFAULT_MORTGAGE_TERM_YEARS,
            custom_monthly_payment=monthly_payment if monthly_payment > 0 else None,
        )

    return SimpleDebt(
        id=debt_id,
        name=name,
        debt_type=debt_type,
        balance=balance,
        interest_rate=interest_rate,
        monthly_payment=monthly_payment,
    )


def convert_store_record(record: Mapping[str, Any]) -> DebtRecord:
    """Convert a store-shaped mapping into an engine debt record.

    Reads the camelCase store schema: ``id, type, name, debtType, balance,
    interestRate, monthlyPayment`` plus the optional ``loanAmount`` and
    ``mortgageTermYears``. When ``debtType`` is missing the legacy ``type``
    field is tried, then ``credit_card``.
    """
    raw_type = record.get("debtType")
    if raw_type in (None, ""):
        # Legacy "type" held free-form labels such as "Credit Card".
        debt_type = _legacy_debt_type(record.get("type"))
    else:
        debt_type = _resolve_debt_type(raw_type)

    return _build_record(
        debt_id=str(record.get("id", "")),
        name=str(record.get("name", "")),
        debt_type=debt_type,
        balance=_number(record.get("balance")),
        interest_rate=_number(record.get("interestRate")),
        monthly_payment=_number(record.get("monthlyPayment")),
        loan_amount=_number(record.get("loanAmount")),
        term_years=_number(record.get("mortgageTermYears")),
    )


def convert_debt_item(item: DebtItem) -> DebtRecord:
    """Convert a stored ``DebtItem`` row into an engine debt record."""
    return _build_record(
        debt_id=item.id,
        name=item.name,
        debt_type=_resolve_debt_type(item.debt_type),
        balance=_number(item.balance),
        interest_rate=_number(item.interest_rate),
        monthly_payment=_number(item.monthly_payment),
        loan_amount=_number(item.loan_amount),
        term_years=_number(item.mortgage_term_years),
    )


def convert_record(record: StoreRecord) -> DebtRecord:
    if isinstance(record, DebtItem):
        return convert_debt_item(record)
    return convert_store_record(record)


def compute_debts_from_store(records: Iterable[StoreRecord]) -> list[ComputedDebt]:
    """Convert stored debts and compute each one."""
    inputs = [convert_record(record) for record in records]
    computed = compute_all_debts(inputs)
    logger.debug(
        "Computed debts from store",
        extra={
            "debt_count": len(computed),
            "unpayable": [debt.id for debt in computed if not debt.pays_off],
        },
    )
    return computed


def calculate_debt_totals(computed_debts: Iterable[ComputedDebt]) -> DebtTotals:
    """Sum outstanding amounts, payments and interest across debts.

    Interest of a debt that never pays off is skipped rather than added as a
    huge number; ``has_unpayable_debt`` reports that it happened.
    """
    total_debt = 0.0
    total_monthly_payment = 0.0
    total_interest = 0.0
    has_unpayable = False

    for debt in computed_debts:
        total_debt += debt.outstanding
        total_monthly_payment += debt.monthly_payment
        if isinstance(debt.total_interest, NeverPaysOff):
            has_unpayable = True
            continue
        total_interest += debt.total_interest

    return DebtTotals(
        total_debt=round(total_debt, 2),
        total_monthly_payment=round(total_monthly_payment, 2),
        total_interest=round(total_interest, 2),
        has_unpayable_debt=has_unpayable,
    )


__all__ = [
    "DebtTotals",
    "calculate_debt_totals",
    "compute_debts_from_store",
    "convert_debt_item",
    "convert_record",
    "convert_store_record",
]
