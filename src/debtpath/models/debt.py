"""Stored debt rows."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional
from uuid import uuid4

from sqlmodel import Field, SQLModel


LOAN_AMOUNT_TYPES = frozenset(
    {"personal_loan", "car_loan", "student_loan", "mortgage"}
)


def _new_debt_id() -> str:
    return uuid4().hex[:12]


def reads_loan_amount(debt_type: str, loan_amount: Optional[float]) -> bool:
    """Whether a debt's outstanding amount is its recorded loan amount.

    Loans and mortgages that record a loan amount are tracked by it; every
    other debt, cards included, is tracked by its balance.
    """
    kind = getattr(debt_type, "value", debt_type)
    return kind in LOAN_AMOUNT_TYPES and bool(loan_amount)


class DebtItem(SQLModel, table=True):
    """A debt as the user entered it at onboarding or on the dashboard.

    Rows are raw input only. Payoff figures are derived on demand by the
    debt engine and never written back.
    """

    __tablename__: ClassVar[str] = "debt"

    id: str = Field(default_factory=_new_debt_id, primary_key=True, max_length=64)
    name: str = Field(nullable=False, max_length=80, index=True)
    debt_type: str = Field(default="credit_card", max_length=32)
    balance: float = Field(default=0.0, nullable=False)
    interest_rate: float = Field(default=0.0, nullable=False, description="APR, % per year")
    monthly_payment: float = Field(default=0.0, nullable=False)

    # Loans may record the original amount; mortgages also record the term.
    loan_amount: Optional[float] = Field(default=None)
    mortgage_term_years: Optional[float] = Field(default=None)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    @property
    def outstanding(self) -> float:
        if reads_loan_amount(self.debt_type, self.loan_amount):
            return self.loan_amount or 0.0
        return self.balance
