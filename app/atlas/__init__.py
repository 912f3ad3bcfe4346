"""ATLAS core: readiness scoring, decisions, lock policy and plan changes."""

from app.atlas.decision import decide
from app.atlas.lock import RigiditySetting, is_locked
from app.atlas.readiness import score_readiness

__all__ = ["RigiditySetting", "decide", "is_locked", "score_readiness"]
