"""
Workout service.

Creates and reads workouts, and generates or applies their structured
plans.  Applying a plan to a workout inside the lock window creates a
COACH proposal instead of changing the workout.
"""

import datetime
import logging
from typing import Callable, Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.atlas.adaptation import prescription_change
from app.atlas.ledger import ProposalLedger
from app.atlas.lock import is_locked, parse_rigidity
from app.atlas.patcher import PlanPatcher
from app.atlas.prescription import generate_plan_options
from app.core.config import settings
from app.db.repositories.benchmarks import BenchmarkRepository
from app.db.repositories.proposal import AppliedPatchRepository, ProposalRepository
from app.db.repositories.workout import WorkoutRepository
from app.models.workout import Workout
from app.schemas.benchmarks import BenchmarkSet
from app.schemas.patch import AiMetadataChange, PatchOperation
from app.schemas.plan import PlanOptions
from app.schemas.proposal import ProposalSourceType
from app.schemas.workout import PlanApplyRequest, PlanApplyResult, WorkoutCreate, WorkoutResponse
from app.services.common import ensure_not_past, require_user, unit_of_work
from app.services.readiness_service import ReadinessService

logger = logging.getLogger(__name__)

COACH_SOURCE = "coach"


def load_benchmarks(session: Session, user_id: int) -> Optional[BenchmarkSet]:
    stored = BenchmarkRepository(session).get_by_user(user_id)
    return BenchmarkSet.model_validate(stored) if stored else None


class WorkoutService:
    """Service for workout CRUD and plan generation."""

    def __init__(
        self,
        session: Session,
        today: Optional[Callable[[], datetime.date]] = None,
    ):
        self.session = session
        self.today = today or datetime.date.today
        self.repository = WorkoutRepository(session)
        self.readiness = ReadinessService(session)
        self.patcher = PlanPatcher(self.repository, AppliedPatchRepository(session))
        self.ledger = ProposalLedger(ProposalRepository(session), self.patcher)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create(self, user_id: int, data: WorkoutCreate) -> WorkoutResponse:
        with unit_of_work(self.session):
            require_user(self.session, user_id)
            workout = self.repository.create(Workout(user_id=user_id, **data.model_dump()))
        return WorkoutResponse.model_validate(workout)

    def get(self, user_id: int, workout_id: int) -> WorkoutResponse:
        return WorkoutResponse.model_validate(self._get_owned(user_id, workout_id))

    # ------------------------------------------------------------------
    # Plans
    # ------------------------------------------------------------------

    def generate_plan(
        self, user_id: int, workout_id: int, target_meters: Optional[int] = None,
    ) -> PlanOptions:
        """Planned and, when the day's signals call for it, adjusted plans."""
        workout = self._get_owned(user_id, workout_id)
        inputs = self.readiness.adjustment_inputs(user_id, workout.date)
        return generate_plan_options(
            workout.type,
            workout.duration_min or settings.DEFAULT_WORKOUT_DURATION_MIN,
            title=workout.title,
            benchmarks=load_benchmarks(self.session, user_id),
            readiness_score=inputs.readiness_score,
            fatigue_100=inputs.fatigue_100,
            soreness_100=inputs.soreness_100,
            target_meters=target_meters,
        )

    def apply_plan(self, user_id: int, workout_id: int, data: PlanApplyRequest) -> PlanApplyResult:
        """Write a chosen plan to the workout, or propose it when locked."""
        with unit_of_work(self.session):
            user = require_user(self.session, user_id)
            workout = self._get_owned(user_id, workout_id)
            today = self.today()
            ensure_not_past(workout.date, today)
            confidence = settings.COACH_PLAN_CONFIDENCE
            version = "Adjusted" if data.adjusted else "Planned"

            patch = PatchOperation(changes=(
                prescription_change(data.plan),
                AiMetadataChange(
                    ai_generated=True,
                    ai_reason=data.reason or f"{version} coach plan",
                    ai_confidence=confidence,
                    source=COACH_SOURCE,
                ),
            ))

            if is_locked(workout.date, today, parse_rigidity(user.plan_rigidity)):
                proposal = self.ledger.create(
                    workout.id,
                    f"{version} coach plan for {workout.date.isoformat()}: {workout.title}",
                    patch,
                    confidence,
                    ProposalSourceType.COACH,
                )
                result = PlanApplyResult(outcome="proposed", workout_id=workout.id, proposal_id=proposal.id)
            else:
                patch_id = self.patcher.apply(workout.id, patch)
                result = PlanApplyResult(outcome="applied", workout_id=workout.id, applied_patch_id=patch_id)
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_owned(self, user_id: int, workout_id: int) -> Workout:
        workout = self.repository.get_for_user(user_id, workout_id)
        if not workout:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Workout not found",
            )
        return workout
