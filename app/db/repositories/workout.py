"""
Workout repository.

Handles database operations for :class:`Workout` and implements the
:class:`~app.atlas.ports.WorkoutStore` protocol used by the plan patcher.
"""

import datetime
from typing import Any, Iterable, Optional

from sqlmodel import Session, select

from app.models.workout import Workout


class WorkoutRepository:
    """Repository for Workout database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, workout: Workout) -> Workout:
        self.session.add(workout)
        self.session.flush()
        self.session.refresh(workout)
        return workout

    def get_by_id(self, workout_id: int) -> Optional[Workout]:
        return self.session.get(Workout, workout_id)

    def get_for_user(self, user_id: int, workout_id: int) -> Optional[Workout]:
        statement = select(Workout).where(Workout.id == workout_id, Workout.user_id == user_id)
        return self.session.exec(statement).first()

    def get_planned_on_date(self, user_id: int, date: datetime.date) -> Optional[Workout]:
        """First planned, not yet completed workout of the day."""
        statement = (
            select(Workout)
            .where(
                Workout.user_id == user_id,
                Workout.date == date,
                Workout.planned == True,  # noqa: E712
                Workout.completed == False,  # noqa: E712
            )
            .order_by(Workout.id)
        )
        return self.session.exec(statement).first()

    # ------------------------------------------------------------------
    # WorkoutStore
    # ------------------------------------------------------------------

    def get_fields(self, workout_id: int, fields: Iterable[str]) -> Optional[dict[str, Any]]:
        workout = self.get_by_id(workout_id)
        if workout is None:
            return None
        return {name: getattr(workout, name) for name in fields}

    def update_fields(self, workout_id: int, values: dict[str, Any]) -> None:
        workout = self.get_by_id(workout_id)
        if workout is None:
            raise LookupError(f"Workout {workout_id} not found")
        for name, value in values.items():
            setattr(workout, name, value)
        workout.updated_at = datetime.datetime.utcnow()
        self.session.add(workout)
        self.session.flush()
