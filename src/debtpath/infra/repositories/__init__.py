"""Concrete repository implementations using SQLModel."""

from .check_in import SQLModelCheckInRepository
from .debt import SQLModelDebtRepository
from .settings import SQLModelSettingsRepository

__all__ = [
    "SQLModelCheckInRepository",
    "SQLModelDebtRepository",
    "SQLModelSettingsRepository",
]
