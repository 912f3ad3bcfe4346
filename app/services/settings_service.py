"""
Per-user settings service: plan rigidity and benchmarks.
"""

import datetime
import logging
from typing import Callable, Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.atlas.lock import lock_window_end, parse_rigidity
from app.atlas.zones import compute_swim_paces, parse_swim_pr
from app.db.repositories.benchmarks import BenchmarkRepository
from app.db.repositories.user import UserRepository
from app.schemas.benchmarks import BenchmarkResponse, BenchmarkUpdate
from app.schemas.settings import RigidityResponse, RigidityUpdate
from app.services.common import require_user, unit_of_work

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for per-user settings."""

    def __init__(
        self,
        session: Session,
        today: Optional[Callable[[], datetime.date]] = None,
    ):
        self.session = session
        self.today = today or datetime.date.today
        self.users = UserRepository(session)
        self.benchmarks = BenchmarkRepository(session)

    # ------------------------------------------------------------------
    # Rigidity
    # ------------------------------------------------------------------

    def get_rigidity(self, user_id: int) -> RigidityResponse:
        user = require_user(self.session, user_id)
        return self._rigidity_response(user.plan_rigidity)

    def set_rigidity(self, user_id: int, data: RigidityUpdate) -> RigidityResponse:
        with unit_of_work(self.session):
            user = require_user(self.session, user_id)
            user.plan_rigidity = data.rigidity.value
            user.updated_at = datetime.datetime.utcnow()
            self.users.update(user)
        logger.info("User %s plan rigidity set to %s", user_id, data.rigidity.value)
        return self._rigidity_response(data.rigidity.value)

    # ------------------------------------------------------------------
    # Benchmarks
    # ------------------------------------------------------------------

    def get_benchmarks(self, user_id: int) -> BenchmarkResponse:
        require_user(self.session, user_id)
        stored = self.benchmarks.get_by_user(user_id)
        if not stored:
            return BenchmarkResponse()
        return BenchmarkResponse.model_validate(stored)

    def put_benchmarks(self, user_id: int, data: BenchmarkUpdate) -> BenchmarkResponse:
        values = data.model_dump(exclude={"swim_pr"})
        if data.swim_pr:
            values.update(self._swim_pr_fields(data.swim_pr, values))
        with unit_of_work(self.session):
            require_user(self.session, user_id)
            stored = self.benchmarks.upsert(user_id, values)
            response = BenchmarkResponse.model_validate(stored)
        return response

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _swim_pr_fields(text: str, values: dict) -> dict:
        """Benchmark fields for a swim PR, never overriding explicit ones.

        400 m and 100 m records are stored as such; any other distance is
        turned into a CSS estimate.
        """
        pr = parse_swim_pr(text)
        if pr is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Cannot read swim PR '{text}', expected e.g. '400m in 6:20'",
            )
        if pr.distance_m == 400:
            field, value = "swim_400_time_sec", float(pr.time_sec)
        elif pr.distance_m == 100:
            field, value = "swim_100_time_sec", float(pr.time_sec)
        else:
            field, value = "swim_css_sec_per_100", compute_swim_paces(pr).css_like_per_100
        if values.get(field) is not None:
            return {}
        return {field: value}

    def _rigidity_response(self, stored: str) -> RigidityResponse:
        rigidity = parse_rigidity(stored)
        return RigidityResponse(
            rigidity=rigidity,
            locked_until=lock_window_end(self.today(), rigidity),
        )
