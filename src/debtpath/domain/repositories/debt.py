"""Debt repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.debt import DebtItem


class DebtRepository(Protocol):
    """Repository for managing stored debts."""

    def get_by_id(self, debt_id: str) -> Optional[DebtItem]:
        """Retrieve a debt by ID."""
        ...

    def list_all(self) -> list[DebtItem]:
        """List all debts."""
        ...

    def list_active(self) -> list[DebtItem]:
        """List debts with something left to pay."""
        ...

    def upsert(self, debt: DebtItem) -> DebtItem:
        """Create or overwrite a debt."""
        ...

    def delete(self, debt_id: str) -> bool:
        """Delete a debt by ID."""
        ...

    def record_payment(self, debt_id: str, amount: float) -> Optional[DebtItem]:
        """Reduce a debt's balance by a payment."""
        ...

    def get_total_debt(self) -> float:
        """Calculate total outstanding debt."""
        ...
