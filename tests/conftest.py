"""Pytest configuration and shared fixtures for DebtPath tests.

This module provides database fixtures, test data factories, and helper utilities
for testing the payoff engine, repositories, and CLI without touching the real
app database.
"""

from __future__ import annotations

import tempfile
from contextlib import contextmanager
from pathlib import Path

import pytest
from debtpath.config import TestConfig
from debtpath.context import AppContext, create_app_context
from debtpath.infra.repositories import (
    SQLModelCheckInRepository,
    SQLModelDebtRepository,
    SQLModelSettingsRepository,
)

# Import all models to ensure they're registered with SQLModel metadata
from debtpath.models import AppSetting, CheckIn, DebtItem  # noqa: F401
from debtpath.services.debt_engine import DebtType, Mortgage, SimpleDebt
from sqlmodel import Session, SQLModel, create_engine

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the repository ``Callable[[], Session]`` contract."""

    @contextmanager
    def factory():
        session = Session(db_engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


@pytest.fixture
def debt_repo(session_factory) -> SQLModelDebtRepository:
    return SQLModelDebtRepository(session_factory)


@pytest.fixture
def check_in_repo(session_factory) -> SQLModelCheckInRepository:
    return SQLModelCheckInRepository(session_factory)


@pytest.fixture
def settings_repo(session_factory) -> SQLModelSettingsRepository:
    return SQLModelSettingsRepository(session_factory)


@pytest.fixture
def app_context(tmp_path, monkeypatch) -> AppContext:
    """Application context on an in-memory database."""
    monkeypatch.setenv("DEBTPATH_DATA_DIR", str(tmp_path))
    return create_app_context(TestConfig())


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def simple_debt_factory():
    """Factory for engine-level simple debts.

    Returns:
        Callable: Function that builds SimpleDebt instances
    """

    def _create(
        balance: float = 1000.0,
        interest_rate: float = 20.0,
        monthly_payment: float = 50.0,
        debt_type: DebtType = DebtType.CREDIT_CARD,
        name: str = "Test Card",
        debt_id: str = "d1",
    ) -> SimpleDebt:
        return SimpleDebt(
            id=debt_id,
            name=name,
            debt_type=debt_type,
            balance=balance,
            interest_rate=interest_rate,
            monthly_payment=monthly_payment,
        )

    return _create


@pytest.fixture
def mortgage_factory():
    """Factory for engine-level mortgages."""

    def _create(
        principal: float = 200000.0,
        interest_rate: float = 4.8,
        term_years: float = 25,
        custom_monthly_payment: float | None = None,
        name: str = "Home",
        debt_id: str = "m1",
    ) -> Mortgage:
        return Mortgage(
            id=debt_id,
            name=name,
            principal=principal,
            interest_rate=interest_rate,
            term_years=term_years,
            custom_monthly_payment=custom_monthly_payment,
        )

    return _create


@pytest.fixture
def debt_item_factory(debt_repo):
    """Factory for creating stored debt rows.

    Returns:
        Callable: Function that creates and persists DebtItem instances
    """

    def _create(
        name: str = "Test Debt",
        debt_type: str = "credit_card",
        balance: float = 1000.00,
        interest_rate: float = 18.0,
        monthly_payment: float = 50.00,
        loan_amount: float | None = None,
        mortgage_term_years: float | None = None,
    ) -> DebtItem:
        return debt_repo.upsert(
            DebtItem(
                name=name,
                debt_type=debt_type,
                balance=balance,
                interest_rate=interest_rate,
                monthly_payment=monthly_payment,
                loan_amount=loan_amount,
                mortgage_term_years=mortgage_term_years,
            )
        )

    return _create


# =============================================================================
# Helper Utilities
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)

    Raises:
        AssertionError: If values differ by more than tolerance
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (diff: {abs(actual - expected)})"
