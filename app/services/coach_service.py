"""
Coach intent service.

Parses a free-text request with the locale's parser, generates the plan
it asks for (enforcing an exact swim total when one was given), checks
the result against the request and optionally adds it to the calendar.
"""

import datetime
import logging
from typing import Callable, Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.atlas.intents import IntentParserRegistry, intent_workout_type, validate_plan_matches_intent
from app.atlas.plan_format import export_plan_to_text
from app.atlas.prescription import generate_plan_options
from app.core.config import settings
from app.db.repositories.workout import WorkoutRepository
from app.models.workout import Workout
from app.schemas.intent import CoachIntentRequest, CoachIntentResponse
from app.services.common import ensure_not_past, require_user, unit_of_work
from app.services.readiness_service import ReadinessService
from app.services.workout_service import COACH_SOURCE, load_benchmarks

logger = logging.getLogger(__name__)


class CoachIntentService:
    """Service for free-text coach requests."""

    def __init__(
        self,
        session: Session,
        today: Optional[Callable[[], datetime.date]] = None,
    ):
        self.session = session
        self.today = today or datetime.date.today
        self.workouts = WorkoutRepository(session)
        self.readiness = ReadinessService(session)

    def handle(self, user_id: int, data: CoachIntentRequest) -> CoachIntentResponse:
        locale = data.locale or settings.DEFAULT_INTENT_LOCALE
        try:
            parser = IntentParserRegistry.get_or_raise(locale)
        except KeyError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unsupported locale '{locale}'",
            ) from exc

        with unit_of_work(self.session):
            require_user(self.session, user_id)
            today = self.today()
            intent = parser.parse(data.message, today)

            workout_type = intent_workout_type(intent)
            date = intent.target_date or today
            ensure_not_past(date, today)
            duration = intent.duration_min or settings.DEFAULT_WORKOUT_DURATION_MIN
            inputs = self.readiness.adjustment_inputs(user_id, date)

            options = generate_plan_options(
                workout_type,
                duration,
                benchmarks=load_benchmarks(self.session, user_id),
                readiness_score=inputs.readiness_score,
                fatigue_100=inputs.fatigue_100,
                soreness_100=inputs.soreness_100,
                target_meters=intent.swim_meters,
            )
            total = options.planned.total_meters
            check = validate_plan_matches_intent(intent, workout_type, date, total)
            if not check.valid:
                logger.warning("Coach plan does not match intent: %s", check.mismatch_reason)

            plan_text = export_plan_to_text(options.planned)
            workout_id = None
            if intent.adds_to_calendar:
                workout = self.workouts.create(Workout(
                    user_id=user_id,
                    date=date,
                    title=options.label.capitalize(),
                    type=workout_type,
                    duration_min=duration,
                    description_md=plan_text,
                    prescription_json=options.planned.model_dump(mode="json"),
                    ai_generated=True,
                    ai_reason=options.reason,
                    ai_confidence=settings.COACH_PLAN_CONFIDENCE,
                    source=COACH_SOURCE,
                ))
                workout_id = workout.id
                logger.info("Coach plan added as workout %s on %s", workout_id, date)

        return CoachIntentResponse(
            intent=intent,
            check=check,
            options=options,
            plan_text=plan_text,
            total_meters=total,
            workout_id=workout_id,
        )
