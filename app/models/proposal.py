"""
Plan-change proposal and applied-patch models.

``plan_change_proposals`` holds proposals for locked workouts.  A partial
unique index allows at most one PENDING proposal per workout, so two
concurrent check-ins cannot both leave a pending change behind.

``applied_patches`` records the before/after values of every patch that
touched a workout, which is what makes undo possible.
"""

import datetime
from typing import Optional

from sqlalchemy import Column, Index, text
from sqlalchemy.dialects.postgresql import JSON
from sqlmodel import Field, SQLModel

PENDING_INDEX_NAME = "uq_proposal_pending_workout"


class PlanChangeProposal(SQLModel, table=True):
    __tablename__ = "plan_change_proposals"
    __table_args__ = (
        Index(
            PENDING_INDEX_NAME,
            "workout_id",
            unique=True,
            postgresql_where=text("status = 'PENDING'"),
            sqlite_where=text("status = 'PENDING'"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    workout_id: int = Field(foreign_key="workouts.id", nullable=False, index=True)

    summary: str = Field(max_length=500, nullable=False)
    patch: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    before: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    confidence: int = Field(nullable=False)
    source_type: str = Field(max_length=32, nullable=False)
    status: str = Field(default="PENDING", max_length=16, nullable=False, index=True)
    applied_patch_id: Optional[int] = Field(default=None, foreign_key="applied_patches.id")

    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    decided_at: Optional[datetime.datetime] = Field(default=None)
    undone_at: Optional[datetime.datetime] = Field(default=None)


class AppliedPatch(SQLModel, table=True):
    __tablename__ = "applied_patches"

    id: Optional[int] = Field(default=None, primary_key=True)
    workout_id: int = Field(foreign_key="workouts.id", nullable=False, index=True)

    before: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    after: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    applied_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    reverted_at: Optional[datetime.datetime] = Field(default=None)
