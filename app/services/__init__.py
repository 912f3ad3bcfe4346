"""Business logic services."""

from app.services.checkin_service import CheckInService
from app.services.coach_service import CoachIntentService
from app.services.proposal_service import ProposalService
from app.services.readiness_service import ReadinessService
from app.services.settings_service import SettingsService
from app.services.workout_service import WorkoutService

__all__ = [
    "CheckInService",
    "CoachIntentService",
    "ProposalService",
    "ReadinessService",
    "SettingsService",
    "WorkoutService",
]
