"""SQLModel implementation of the debt repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.debt import DebtItem, reads_loan_amount


class SQLModelDebtRepository:
    """SQLModel-based debt repository implementation.

    Writes are last-write-wins: ``upsert`` replaces whatever row has the same id.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, debt_id: str) -> Optional[DebtItem]:
        """Retrieve a debt by ID."""
        with self.session_factory() as session:
            return session.get(DebtItem, debt_id)

    def list_all(self) -> list[DebtItem]:
        """List all debts in entry order."""
        with self.session_factory() as session:
            statement = select(DebtItem).order_by(DebtItem.created_at, DebtItem.id)  # type: ignore
            return list(session.exec(statement).all())

    def list_active(self) -> list[DebtItem]:
        """List debts with something left to pay."""
        return [item for item in self.list_all() if item.outstanding > 0]

    def upsert(self, debt: DebtItem) -> DebtItem:
        """Create the debt, or overwrite the stored row with the same id."""
        with self.session_factory() as session:
            merged = session.merge(debt)
            session.commit()
            session.refresh(merged)
            return merged

    def delete(self, debt_id: str) -> bool:
        """Delete a debt by ID; return whether a row was removed."""
        with self.session_factory() as session:
            debt = session.get(DebtItem, debt_id)
            if debt is None:
                return False
            session.delete(debt)
            session.commit()
            return True

    def record_payment(self, debt_id: str, amount: float) -> Optional[DebtItem]:
        """Reduce what is owed on a debt by *amount*, never below zero.

        Loans tracked by their loan amount have that amount reduced; the
        balance is kept no higher than it so the two never disagree.
        """
        with self.session_factory() as session:
            debt = session.get(DebtItem, debt_id)
            if debt is None:
                return None
            remaining = max(0.0, debt.outstanding - max(0.0, amount))
            if reads_loan_amount(debt.debt_type, debt.loan_amount):
                debt.loan_amount = remaining
                debt.balance = max(0.0, min(debt.balance, remaining))
            else:
                debt.balance = remaining
            session.add(debt)
            session.commit()
            session.refresh(debt)
            return debt

    def get_total_debt(self) -> float:
        """Sum of what is owed across stored debts."""
        return sum(item.outstanding for item in self.list_all())
