"""Database repositories."""

from app.db.repositories.user import UserRepository
from app.db.repositories.workout import WorkoutRepository
from app.db.repositories.signals import CheckInRepository, DiaryRepository, LoadMetricRepository
from app.db.repositories.benchmarks import BenchmarkRepository
from app.db.repositories.proposal import AppliedPatchRepository, ProposalRepository

__all__ = [
    "UserRepository",
    "WorkoutRepository",
    "CheckInRepository",
    "DiaryRepository",
    "LoadMetricRepository",
    "BenchmarkRepository",
    "ProposalRepository",
    "AppliedPatchRepository",
]
