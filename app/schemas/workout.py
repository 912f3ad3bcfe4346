"""Workout API schemas."""

import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.plan import StructuredPlan

WorkoutType = Literal["run", "bike", "swim", "strength", "rest", "other"]


class WorkoutCreate(BaseModel):
    date: datetime.date
    title: str = Field("", max_length=255)
    type: WorkoutType = "other"
    duration_min: Optional[int] = Field(None, ge=0, le=600)
    tss: Optional[float] = Field(None, ge=0)
    description_md: Optional[str] = None


class WorkoutResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    date: datetime.date
    title: str
    type: str
    duration_min: Optional[int] = None
    tss: Optional[float] = None
    planned: bool
    completed: bool
    description_md: Optional[str] = None
    prescription_json: Optional[dict[str, Any]] = None
    ai_generated: bool = False
    ai_reason: Optional[str] = None
    ai_confidence: Optional[int] = None
    source: Optional[str] = None
    created_at: datetime.datetime
    updated_at: datetime.datetime


class PlanGenerateRequest(BaseModel):
    target_meters: Optional[int] = Field(None, gt=0, le=20000, description="Exact swim total to enforce")


class PlanApplyRequest(BaseModel):
    plan: StructuredPlan
    adjusted: bool = Field(False, description="Whether this is the adjusted (easier) version")
    reason: Optional[str] = Field(None, max_length=1000)


class PlanApplyResult(BaseModel):
    outcome: Literal["applied", "proposed"]
    workout_id: int
    applied_patch_id: Optional[int] = None
    proposal_id: Optional[int] = None
