"""Repository protocol definitions for domain layer."""

from .check_in import CheckInRepository
from .debt import DebtRepository
from .settings import SettingsRepository

__all__ = [
    "CheckInRepository",
    "DebtRepository",
    "SettingsRepository",
]
