"""Check-in repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.check_in import CheckIn


class CheckInRepository(Protocol):
    """Repository for weekly check-ins."""

    def get_by_week(self, week: int) -> Optional[CheckIn]:
        """Retrieve the check-in for a week."""
        ...

    def record(self, week: int, extra_payment: float = 0.0, mood: str = "okay") -> CheckIn:
        """Create or replace the check-in for a week."""
        ...

    def list_all(self) -> list[CheckIn]:
        """List check-ins ordered by week."""
        ...

    def list_recent(self, limit: int = 8) -> list[CheckIn]:
        """List the newest check-ins first."""
        ...
