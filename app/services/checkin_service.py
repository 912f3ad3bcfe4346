"""
Check-in service.

Submitting a check-in scores readiness, maps it to a decision for the
day's planned workout and then either changes the workout directly or,
inside the athlete's lock window, leaves a proposal to accept or decline.
"""

import datetime
import logging
from typing import Callable, Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.atlas.adaptation import patch_for_decision, summarize_decision
from app.atlas.decision import decide
from app.atlas.ledger import ProposalLedger
from app.atlas.lock import is_locked, parse_rigidity
from app.atlas.patcher import PlanPatcher
from app.atlas.readiness import score_readiness
from app.db.repositories.benchmarks import BenchmarkRepository
from app.db.repositories.proposal import AppliedPatchRepository, ProposalRepository
from app.db.repositories.signals import CheckInRepository
from app.db.repositories.workout import WorkoutRepository
from app.models.workout import Workout
from app.schemas.benchmarks import BenchmarkSet
from app.schemas.checkin import CheckInOutcome
from app.schemas.decision import WorkoutMeta
from app.schemas.proposal import ProposalSourceType
from app.schemas.signals import CheckInSignals
from app.services.common import ensure_not_past, require_user, unit_of_work
from app.services.readiness_service import ReadinessService

logger = logging.getLogger(__name__)


def workout_meta(workout: Workout) -> WorkoutMeta:
    return WorkoutMeta(
        id=workout.id,
        type=workout.type,
        title=workout.title,
        duration_min=workout.duration_min,
        date=workout.date,
    )


class CheckInService:
    """Service for check-in submission and the resulting plan change."""

    def __init__(
        self,
        session: Session,
        today: Optional[Callable[[], datetime.date]] = None,
    ):
        self.session = session
        self.today = today or datetime.date.today
        self.checkins = CheckInRepository(session)
        self.workouts = WorkoutRepository(session)
        self.benchmarks = BenchmarkRepository(session)
        self.readiness = ReadinessService(session)
        self.patcher = PlanPatcher(self.workouts, AppliedPatchRepository(session))
        self.ledger = ProposalLedger(ProposalRepository(session), self.patcher)

    def submit(self, user_id: int, date: datetime.date, data: CheckInSignals) -> CheckInOutcome:
        """Store today's check-in and act on it.

        Only today's check-in is accepted: a past day is history and a
        future day has nothing to report yet.
        """
        with unit_of_work(self.session):
            user = require_user(self.session, user_id)
            today = self.today()
            ensure_not_past(date, today)
            if date > today:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Check-ins are only accepted for today",
                )
            entry = self.checkins.upsert(user_id, date, data.model_dump(mode="json"))

            readiness = score_readiness(self.readiness.snapshot(user_id, date))
            entry.readiness_score = readiness.score
            self.session.add(entry)

            result = CheckInOutcome(readiness=readiness, top_factors=readiness.top_factors(5))

            workout = self.workouts.get_planned_on_date(user_id, date)
            if workout is None:
                logger.info("Check-in for user %s on %s: no planned workout", user_id, date)
                return result

            meta = workout_meta(workout)
            decision = decide(readiness, meta)
            result.decision = decision
            result.workout_id = workout.id

            if not decision.proposes_change:
                logger.info("Check-in for workout %s: %s, no change", workout.id, decision.action)
                return result

            stored = self.benchmarks.get_by_user(user_id)
            benchmarks = BenchmarkSet.model_validate(stored) if stored else None
            patch = patch_for_decision(decision, meta, benchmarks)

            result.locked = is_locked(workout.date, today, parse_rigidity(user.plan_rigidity))
            if not result.locked:
                result.applied_patch_id = self.patcher.apply(workout.id, patch)
                result.outcome = "applied"
            else:
                pending = self.ledger.pending_for_workout(workout.id)
                if pending is not None:
                    result.proposal_id = pending.id
                else:
                    proposal = self.ledger.create(
                        workout.id,
                        summarize_decision(decision, meta),
                        patch,
                        decision.confidence,
                        ProposalSourceType.DAILY_CHECKIN,
                    )
                    result.proposal_id = proposal.id
                    result.outcome = "proposed"

            logger.info(
                "Check-in for workout %s: %s (%s, locked=%s)",
                workout.id, decision.action, result.outcome, result.locked,
            )
        return result
