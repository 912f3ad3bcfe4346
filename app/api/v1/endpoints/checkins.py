"""
Check-in endpoints.

A daily check-in scores readiness and adapts the day's planned workout.
"""

import datetime

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.dependencies import get_current_user_id
from app.db.session import get_db
from app.schemas.checkin import CheckInOutcome
from app.schemas.signals import CheckInSignals
from app.services.checkin_service import CheckInService

router = APIRouter()


@router.post("/{date}", summary="Submit the daily check-in for a date.", response_model=CheckInOutcome, )
def submit_checkin(date: datetime.date, data: CheckInSignals, db: Session = Depends(get_db),
                   user_id: int = Depends(get_current_user_id), ):
    """
    Returns readiness, the decision for the day's planned workout and what
    happened to it:

    - **applied**: the workout was changed directly
    - **proposed**: the workout is locked; a proposal awaits a decision
    - **none**: no change (no workout, PROCEED, or a proposal already pending)

    Only today's date is accepted: a past date is rejected with 409 and a
    future one with 400.
    """
    service = CheckInService(db)
    return service.submit(user_id, date, data)
