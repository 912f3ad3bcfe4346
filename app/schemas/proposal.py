"""
Plan-change proposal schemas.

Lifecycle::

    PENDING ──accept──▶ ACCEPTED ──apply──▶ APPLIED ──undo──▶ UNDONE
        └────decline──▶ DECLINED

ACCEPTED is never persisted: acceptance and application happen in the
same operation, so stored proposals are PENDING, DECLINED, APPLIED or
UNDONE.
"""

import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.patch import PatchOperation


class ProposalStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"
    APPLIED = "APPLIED"
    UNDONE = "UNDONE"


class ProposalSourceType(str, Enum):
    DAILY_CHECKIN = "DAILY_CHECKIN"
    COACH = "COACH"
    RULE = "RULE"


class ProposalDecision(str, Enum):
    ACCEPT = "ACCEPT"
    DECLINE = "DECLINE"


class Proposal(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    workout_id: int
    summary: str
    patch: PatchOperation
    before: dict[str, Any] = Field(
        default_factory=dict,
        description="Pre-patch values of every touched field (JSON form)",
    )
    confidence: int = Field(..., ge=0, le=100)
    source_type: ProposalSourceType
    status: ProposalStatus = ProposalStatus.PENDING
    applied_patch_id: Optional[int] = None
    created_at: Optional[datetime.datetime] = None
    decided_at: Optional[datetime.datetime] = None
    undone_at: Optional[datetime.datetime] = None


class AppliedPatchRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workout_id: int
    before: dict[str, Any]
    after: dict[str, Any]
    applied_at: Optional[datetime.datetime] = None
    reverted_at: Optional[datetime.datetime] = None


class DecideResult(BaseModel):
    applied: bool
    status: ProposalStatus
    applied_patch_id: Optional[int] = None


class UndoResult(BaseModel):
    reverted: bool
    status: ProposalStatus


# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------

class ProposalDecideRequest(BaseModel):
    decision: ProposalDecision


class ProposalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    workout_id: int
    summary: str
    changes: dict[str, Any] = Field(..., description="Touched fields and their proposed values")
    before: dict[str, Any]
    confidence: int
    source_type: ProposalSourceType
    status: ProposalStatus
    created_at: Optional[datetime.datetime] = None
    decided_at: Optional[datetime.datetime] = None
    undone_at: Optional[datetime.datetime] = None
