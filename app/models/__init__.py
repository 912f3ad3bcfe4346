"""SQLModel database models."""

from app.models.user import User
from app.models.workout import Workout
from app.models.signals import DailyCheckIn, DiaryEntry, LoadMetric
from app.models.benchmarks import Benchmarks
from app.models.proposal import AppliedPatch, PlanChangeProposal

__all__ = [
    "User",
    "Workout",
    "DailyCheckIn",
    "DiaryEntry",
    "LoadMetric",
    "Benchmarks",
    "PlanChangeProposal",
    "AppliedPatch",
]
