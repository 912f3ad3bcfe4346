"""
Workout endpoints.

Workout creation and lookup, plus structured plan generation and
application.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, status
from sqlmodel import Session

from app.api.dependencies import get_current_user_id
from app.db.session import get_db
from app.schemas.plan import PlanOptions
from app.schemas.workout import (
    PlanApplyRequest,
    PlanApplyResult,
    PlanGenerateRequest,
    WorkoutCreate,
    WorkoutResponse,
)
from app.services.workout_service import WorkoutService

router = APIRouter()


@router.post("", summary="Create a workout.", response_model=WorkoutResponse, status_code=status.HTTP_201_CREATED, )
def create_workout(data: WorkoutCreate, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id), ):
    service = WorkoutService(db)
    return service.create(user_id, data)


@router.get("/{workout_id}", summary="Get a workout.", response_model=WorkoutResponse, )
def get_workout(workout_id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id), ):
    service = WorkoutService(db)
    return service.get(user_id, workout_id)


@router.post("/{workout_id}/plan/generate", summary="Generate planned and adjusted plans.",
             response_model=PlanOptions, )
def generate_plan(workout_id: int, data: Optional[PlanGenerateRequest] = Body(None), db: Session = Depends(get_db),
                  user_id: int = Depends(get_current_user_id), ):
    """Nothing is written; pick a version and send it to ``/plan/apply``."""
    service = WorkoutService(db)
    target = data.target_meters if data else None
    return service.generate_plan(user_id, workout_id, target)


@router.post("/{workout_id}/plan/apply", summary="Apply a plan to a workout.", response_model=PlanApplyResult, )
def apply_plan(workout_id: int, data: PlanApplyRequest, db: Session = Depends(get_db),
               user_id: int = Depends(get_current_user_id), ):
    """Inside the lock window the plan is proposed instead of applied."""
    service = WorkoutService(db)
    return service.apply_plan(user_id, workout_id, data)
