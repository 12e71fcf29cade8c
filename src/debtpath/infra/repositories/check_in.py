"""SQLModel implementation of the check-in repository."""

from __future__ import annotations

from typing import Callable, Optional

from sqlmodel import Session, select

from ...models.check_in import CheckIn


class SQLModelCheckInRepository:
    """SQLModel-based weekly check-in repository."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get_by_week(self, week: int) -> Optional[CheckIn]:
        with self.session_factory() as session:
            return session.exec(select(CheckIn).where(CheckIn.week == week)).first()

    def record(self, week: int, extra_payment: float = 0.0, mood: str = "okay") -> CheckIn:
        """Store the check-in for *week*; a second check-in replaces the first."""
        with self.session_factory() as session:
            check_in = session.exec(select(CheckIn).where(CheckIn.week == week)).first()
            if check_in is None:
                check_in = CheckIn(week=week)
            check_in.extra_payment = max(0.0, extra_payment)
            check_in.mood = mood
            session.add(check_in)
            session.commit()
            session.refresh(check_in)
            return check_in

    def list_all(self) -> list[CheckIn]:
        with self.session_factory() as session:
            return list(session.exec(select(CheckIn).order_by(CheckIn.week)).all())  # type: ignore

    def list_recent(self, limit: int = 8) -> list[CheckIn]:
        """Most recent check-ins, newest first."""
        with self.session_factory() as session:
            statement = select(CheckIn).order_by(CheckIn.week.desc()).limit(limit)  # type: ignore
            return list(session.exec(statement).all())
