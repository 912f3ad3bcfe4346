"""
Workout database model.

One scheduled session.  The structured prescription is stored as JSON
next to its Markdown rendering; the AI metadata columns record why the
plan was last changed automatically.
"""

import datetime
from typing import Optional

from sqlalchemy import Column
from sqlalchemy.dialects.postgresql import JSON
from sqlmodel import Field, SQLModel


class Workout(SQLModel, table=True):
    __tablename__ = "workouts"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    date: datetime.date = Field(nullable=False, index=True)

    title: str = Field(default="", max_length=255, nullable=False)
    type: str = Field(default="other", max_length=32, nullable=False)
    duration_min: Optional[int] = Field(default=None)
    tss: Optional[float] = Field(default=None)
    planned: bool = Field(default=True, nullable=False)
    completed: bool = Field(default=False, nullable=False)

    # Prescription
    description_md: Optional[str] = Field(default=None)
    prescription_json: Optional[dict] = Field(default=None, sa_column=Column(JSON, nullable=True))

    # AI metadata
    ai_generated: bool = Field(default=False, nullable=False)
    ai_reason: Optional[str] = Field(default=None)
    ai_confidence: Optional[int] = Field(default=None)
    source: Optional[str] = Field(default=None, max_length=32)

    # Timestamps
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow)
