"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .infra.database import bootstrap_database
from .infra.repositories import (
    SQLModelCheckInRepository,
    SQLModelDebtRepository,
    SQLModelSettingsRepository,
)
from .services.debt_engine import ComputedDebt
from .services.debt_records import compute_debts_from_store

MONTHLY_LEFTOVER_KEY = "monthly_leftover"


@dataclass
class AppContext:
    """Centralized application context with repositories."""

    config: BaseConfig
    session_factory: Callable[[], Session]

    debt_repo: SQLModelDebtRepository
    check_in_repo: SQLModelCheckInRepository
    settings_repo: SQLModelSettingsRepository

    def computed_debts(self) -> list[ComputedDebt]:
        """Fresh computation over the current stored debt list."""
        return compute_debts_from_store(self.debt_repo.list_all())

    def monthly_leftover(self) -> float:
        return self.settings_repo.get_float(MONTHLY_LEFTOVER_KEY, 0.0)


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    _engine, session_factory = bootstrap_database(config)

    return AppContext(
        config=config,
        session_factory=session_factory,
        debt_repo=SQLModelDebtRepository(session_factory),
        check_in_repo=SQLModelCheckInRepository(session_factory),
        settings_repo=SQLModelSettingsRepository(session_factory),
    )
