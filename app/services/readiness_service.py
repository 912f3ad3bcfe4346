"""
Readiness service.

Assembles a :class:`SignalSnapshot` from the stored check-in, diary and
load rows for one day and scores it.
"""

import datetime
from typing import NamedTuple, Optional

from sqlmodel import Session

from app.atlas.readiness import score_readiness
from app.db.repositories.signals import CheckInRepository, DiaryRepository, LoadMetricRepository
from app.models.signals import DailyCheckIn
from app.schemas.readiness import ReadinessResult
from app.schemas.signals import (
    CheckInSignals,
    DiarySignals,
    HrvSignals,
    LoadSignals,
    SignalSnapshot,
)


class AdjustmentInputs(NamedTuple):
    """Values the plan generator uses to decide on an easier version."""

    readiness_score: Optional[int] = None
    fatigue_100: Optional[int] = None
    soreness_100: Optional[int] = None


def checkin_to_signals(entry: DailyCheckIn) -> CheckInSignals:
    return CheckInSignals.model_validate(entry, from_attributes=True)


class ReadinessService:
    """Service for readiness scoring over stored signals."""

    def __init__(self, session: Session):
        self.checkins = CheckInRepository(session)
        self.diary = DiaryRepository(session)
        self.loads = LoadMetricRepository(session)

    def snapshot(self, user_id: int, date: datetime.date) -> SignalSnapshot:
        checkin = self.checkins.get_by_user_and_date(user_id, date)
        diary = self.diary.get_by_user_and_date(user_id, date)
        load = self.loads.get_by_user_and_date(user_id, date)

        hrv = None
        if load and load.hrv and load.hrv_baseline:
            hrv = HrvSignals(hrv=load.hrv, hrv_baseline=load.hrv_baseline)

        return SignalSnapshot(
            user_id=user_id,
            date=date,
            checkin=checkin_to_signals(checkin) if checkin else None,
            diary=DiarySignals.model_validate(diary, from_attributes=True) if diary else None,
            load=LoadSignals.model_validate(load, from_attributes=True) if load else None,
            hrv=hrv,
        )

    def get(self, user_id: int, date: datetime.date) -> ReadinessResult:
        return score_readiness(self.snapshot(user_id, date))

    def adjustment_inputs(self, user_id: int, date: datetime.date) -> AdjustmentInputs:
        """Readiness plus check-in fatigue/soreness for *date*, where known."""
        snapshot = self.snapshot(user_id, date)
        readiness = score_readiness(snapshot)
        if snapshot.checkin is None:
            return AdjustmentInputs(readiness_score=readiness.score)
        return AdjustmentInputs(
            readiness_score=readiness.score,
            fatigue_100=snapshot.checkin.fatigue_100,
            soreness_100=snapshot.checkin.soreness_100,
        )
