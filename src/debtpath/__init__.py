"""DebtPath debt payoff engine and projections."""

from __future__ import annotations

from .config import BaseConfig, DevConfig, TestConfig
from .services.debt_engine import compute_all_debts, compute_debt
from .services.projections import calculate_interest_savings, project_payoff

__all__ = [
    "BaseConfig",
    "DevConfig",
    "TestConfig",
    "calculate_interest_savings",
    "compute_all_debts",
    "compute_debt",
    "project_payoff",
]
