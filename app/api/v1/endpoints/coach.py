"""
Coach endpoints.
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.api.dependencies import get_current_user_id
from app.db.session import get_db
from app.schemas.intent import CoachIntentRequest, CoachIntentResponse
from app.services.coach_service import CoachIntentService

router = APIRouter()


@router.post("/intent", summary="Turn a free-text request into a plan.", response_model=CoachIntentResponse, )
def coach_intent(data: CoachIntentRequest, db: Session = Depends(get_db),
                 user_id: int = Depends(get_current_user_id), ):
    """
    Example: ``"3500m swim tomorrow, generate it and add it to my calendar"``.
    ``check`` reports whether the generated plan matches the request.
    """
    service = CoachIntentService(db)
    return service.handle(user_id, data)
