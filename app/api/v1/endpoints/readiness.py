"""
Readiness endpoints.
"""

import datetime

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.dependencies import get_current_user_id
from app.db.session import get_db
from app.schemas.readiness import ReadinessResult
from app.services.readiness_service import ReadinessService

router = APIRouter()


@router.get("/{date}", summary="Readiness score for a date.", response_model=ReadinessResult, )
def get_readiness(date: datetime.date, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id), ):
    """
    Scored from the stored check-in, or estimated from diary and load data
    when there is none.  Without any data ``score`` is null.
    """
    service = ReadinessService(db)
    return service.get(user_id, date)
