"""Payment velocity analytics over weekly check-ins."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Protocol

TREND_WINDOW = 4
TREND_TOLERANCE = 0.10


class CheckInLike(Protocol):
    week: int
    extra_payment: float


@dataclass(slots=True)
class PaymentVelocity:
    """How much extra the user has been paying, and in which direction."""

    average_weekly_payment: float
    average_extra_payment: float
    total_extra_payments: float
    trend: str = "stable"  # increasing | decreasing | stable


def calculate_payment_velocity(check_ins: Iterable[CheckInLike]) -> PaymentVelocity:
    """Summarize extra payments recorded at check-in.

    ``average_weekly_payment`` spreads the extras over every check-in, while
    ``average_extra_payment`` averages only the weeks that had one; the latter
    is what payoff projections add to the weekly payment.
    """
    rows = list(check_ins)
    if not rows:
        return PaymentVelocity(0.0, 0.0, 0.0, "stable")

    extras = [row.extra_payment for row in rows if row.extra_payment and row.extra_payment > 0]
    total_extra = sum(extras)
    average_weekly = total_extra / len(rows) if extras else 0.0
    average_extra = total_extra / len(extras) if extras else 0.0

    trend = "stable"
    if len(rows) >= TREND_WINDOW * 2:
        newest_first = sorted(rows, key=lambda row: row.week, reverse=True)
        recent = sum(row.extra_payment or 0.0 for row in newest_first[:TREND_WINDOW])
        older = sum(
            row.extra_payment or 0.0 for row in newest_first[TREND_WINDOW : TREND_WINDOW * 2]
        )
        if recent > older * (1 + TREND_TOLERANCE):
            trend = "increasing"
        elif recent < older * (1 - TREND_TOLERANCE):
            trend = "decreasing"

    return PaymentVelocity(
        average_weekly_payment=round(average_weekly, 2),
        average_extra_payment=round(average_extra, 2),
        total_extra_payments=round(total_extra, 2),
        trend=trend,
    )


def calculate_debt_progress(original_debt: float, current_debt: float) -> int:
    """Percentage of the original debt paid off, clamped to 0..100."""
    if original_debt <= 0:
        return 0
    percentage = round((original_debt - current_debt) / original_debt * 100)
    return min(max(percentage, 0), 100)


__all__ = ["PaymentVelocity", "calculate_debt_progress", "calculate_payment_velocity"]
