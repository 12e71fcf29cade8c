"""SQLModel table exports."""

from .check_in import CheckIn
from .debt import DebtItem
from .settings import AppSetting

__all__ = [
    "AppSetting",
    "CheckIn",
    "DebtItem",
]
