"""Service module exports."""

from . import calculators, debt_engine, debt_records, projections, velocity

__all__ = [
    "calculators",
    "debt_engine",
    "debt_records",
    "projections",
    "velocity",
]
