"""
Plan-change proposal endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from app.api.dependencies import get_current_user_id
from app.db.session import get_db
from app.schemas.proposal import DecideResult, ProposalDecideRequest, ProposalResponse, UndoResult
from app.services.proposal_service import ProposalService

router = APIRouter()


@router.get("", summary="List proposals for a workout.", response_model=list[ProposalResponse], )
def list_proposals(workout_id: int = Query(..., ge=1, description="Workout to list proposals for"),
                   db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id), ):
    service = ProposalService(db)
    return service.list_for_workout(user_id, workout_id)


@router.post("/{proposal_id}/decide", summary="Accept or decline a pending proposal.", response_model=DecideResult, )
def decide_proposal(proposal_id: int, data: ProposalDecideRequest, db: Session = Depends(get_db),
                    user_id: int = Depends(get_current_user_id), ):
    """Accepting applies the change immediately.  Deciding twice returns 409."""
    service = ProposalService(db)
    return service.decide(user_id, proposal_id, data.decision)


@router.post("/{proposal_id}/undo", summary="Undo an applied proposal.", response_model=UndoResult, )
def undo_proposal(proposal_id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id), ):
    service = ProposalService(db)
    return service.undo(user_id, proposal_id)
