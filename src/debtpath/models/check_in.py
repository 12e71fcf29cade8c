"""Weekly check-in records."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class CheckIn(SQLModel, table=True):
    """One weekly check-in; the extra payment feeds payoff projections."""

    __tablename__: ClassVar[str] = "check_in"

    id: Optional[int] = Field(default=None, primary_key=True)
    week: int = Field(nullable=False, ge=1, unique=True, index=True)
    extra_payment: float = Field(default=0.0, nullable=False, ge=0)
    mood: str = Field(default="okay", max_length=32)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
