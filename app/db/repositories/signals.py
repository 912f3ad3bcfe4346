"""
Daily signal repositories: check-ins, diary entries and load metrics.
"""

import datetime
from typing import Any, Optional

from sqlmodel import Session, select

from app.models.signals import DailyCheckIn, DiaryEntry, LoadMetric


class CheckInRepository:
    """Repository for DailyCheckIn database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_user_and_date(self, user_id: int, date: datetime.date) -> Optional[DailyCheckIn]:
        statement = select(DailyCheckIn).where(DailyCheckIn.user_id == user_id, DailyCheckIn.date == date)
        return self.session.exec(statement).first()

    def upsert(self, user_id: int, date: datetime.date, values: dict[str, Any]) -> DailyCheckIn:
        """Create the day's check-in or overwrite it with *values*."""
        entry = self.get_by_user_and_date(user_id, date)
        if entry is None:
            entry = DailyCheckIn(user_id=user_id, date=date, **values)
        else:
            for name, value in values.items():
                setattr(entry, name, value)
            entry.updated_at = datetime.datetime.utcnow()
        self.session.add(entry)
        self.session.flush()
        self.session.refresh(entry)
        return entry


class DiaryRepository:
    """Repository for DiaryEntry database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_user_and_date(self, user_id: int, date: datetime.date) -> Optional[DiaryEntry]:
        statement = select(DiaryEntry).where(DiaryEntry.user_id == user_id, DiaryEntry.date == date)
        return self.session.exec(statement).first()


class LoadMetricRepository:
    """Repository for LoadMetric database operations."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_user_and_date(self, user_id: int, date: datetime.date) -> Optional[LoadMetric]:
        statement = select(LoadMetric).where(LoadMetric.user_id == user_id, LoadMetric.date == date)
        return self.session.exec(statement).first()
