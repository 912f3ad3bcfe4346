"""Per-user settings schemas."""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.atlas.lock import RigiditySetting


class RigidityUpdate(BaseModel):
    rigidity: RigiditySetting


class RigidityResponse(BaseModel):
    rigidity: RigiditySetting
    locked_until: Optional[datetime.date] = Field(
        None, description="Last calendar day currently protected from automatic changes",
    )
