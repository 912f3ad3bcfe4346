"""
User database model.

Authentication lives outside this service; a user row carries the
profile and the per-user plan rigidity.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """
    Athlete profile.

    ``plan_rigidity`` is a :class:`~app.atlas.lock.RigiditySetting` value
    and is always per user, never global.
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255, nullable=False)
    full_name: Optional[str] = Field(default=None, max_length=255)

    plan_rigidity: str = Field(default="LOCKED_1_DAY", max_length=32, nullable=False)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
