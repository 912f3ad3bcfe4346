"""
Base database configuration.

Import all models here so Alembic can detect them for migrations.
"""

# Import all models for Alembic autogenerate
from app.models.user import User  # noqa: F401
from app.models.workout import Workout  # noqa: F401
from app.models.signals import DailyCheckIn, DiaryEntry, LoadMetric  # noqa: F401
from app.models.benchmarks import Benchmarks  # noqa: F401
from app.models.proposal import AppliedPatch, PlanChangeProposal  # noqa: F401
