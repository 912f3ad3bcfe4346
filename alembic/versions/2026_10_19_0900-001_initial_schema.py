"""Initial schema: users, workouts, daily signals, benchmarks, proposals

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_NOW = sa.text('(CURRENT_TIMESTAMP)')


def _timestamps(*names: str) -> list[sa.Column]:
    return [sa.Column(name, sa.DateTime(), nullable=False, server_default=_NOW) for name in names]


def upgrade() -> None:
    """Create all tables."""
    op.create_table('users', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('full_name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('plan_rigidity', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=False,
                  server_default='LOCKED_1_DAY'),
        *_timestamps('created_at', 'updated_at'),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    op.create_table('workouts', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False, server_default=''),
        sa.Column('type', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=False, server_default='other'),
        sa.Column('duration_min', sa.Integer(), nullable=True),
        sa.Column('tss', sa.Float(), nullable=True),
        sa.Column('planned', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('description_md', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('prescription_json', postgresql.JSON(), nullable=True),
        sa.Column('ai_generated', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('ai_reason', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('ai_confidence', sa.Integer(), nullable=True),
        sa.Column('source', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=True),
        *_timestamps('created_at', 'updated_at'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_workouts_user_id'), 'workouts', ['user_id'])
    op.create_index(op.f('ix_workouts_date'), 'workouts', ['date'])

    op.create_table('daily_checkins', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('sleep_duration_hrs', sa.Float(), nullable=False),
        sa.Column('sleep_quality', sa.Integer(), nullable=False),
        sa.Column('physical_fatigue', sa.Integer(), nullable=False),
        sa.Column('muscle_soreness', sqlmodel.sql.sqltypes.AutoString(length=16), nullable=False),
        sa.Column('mental_readiness', sa.Integer(), nullable=False),
        sa.Column('motivation', sa.Integer(), nullable=False),
        sa.Column('stress_level', sa.Integer(), nullable=False),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column('readiness_score', sa.Integer(), nullable=True),
        *_timestamps('created_at', 'updated_at'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'date', name='uq_checkin_user_date'))
    op.create_index(op.f('ix_daily_checkins_user_id'), 'daily_checkins', ['user_id'])
    op.create_index(op.f('ix_daily_checkins_date'), 'daily_checkins', ['date'])

    op.create_table('diary_entries', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('mood', sa.Integer(), nullable=True),
        sa.Column('energy', sa.Integer(), nullable=True),
        sa.Column('sleep_hrs', sa.Float(), nullable=True),
        sa.Column('sleep_qual', sa.Integer(), nullable=True),
        sa.Column('stress', sa.Integer(), nullable=True),
        sa.Column('soreness', sa.Integer(), nullable=True),
        *_timestamps('created_at'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'date', name='uq_diary_user_date'))
    op.create_index(op.f('ix_diary_entries_user_id'), 'diary_entries', ['user_id'])
    op.create_index(op.f('ix_diary_entries_date'), 'diary_entries', ['date'])

    op.create_table('load_metrics', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('atl', sa.Float(), nullable=True),
        sa.Column('ctl', sa.Float(), nullable=True),
        sa.Column('tsb', sa.Float(), nullable=True),
        sa.Column('hrv', sa.Float(), nullable=True),
        sa.Column('hrv_baseline', sa.Float(), nullable=True),
        *_timestamps('created_at'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'date', name='uq_load_user_date'))
    op.create_index(op.f('ix_load_metrics_user_id'), 'load_metrics', ['user_id'])
    op.create_index(op.f('ix_load_metrics_date'), 'load_metrics', ['date'])

    op.create_table('benchmarks', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('swim_css_sec_per_100', sa.Float(), nullable=True),
        sa.Column('swim_400_time_sec', sa.Float(), nullable=True),
        sa.Column('swim_100_time_sec', sa.Float(), nullable=True),
        sa.Column('run_5k_time_sec', sa.Float(), nullable=True),
        sa.Column('run_10k_time_sec', sa.Float(), nullable=True),
        sa.Column('run_threshold_sec_per_km', sa.Float(), nullable=True),
        sa.Column('run_hm_time_sec', sa.Float(), nullable=True),
        sa.Column('run_marathon_time_sec', sa.Float(), nullable=True),
        sa.Column('ftp', sa.Integer(), nullable=True),
        sa.Column('bike_best_20min_watts', sa.Integer(), nullable=True),
        *_timestamps('updated_at'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_benchmarks_user_id'), 'benchmarks', ['user_id'], unique=True)

    op.create_table('applied_patches', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('workout_id', sa.Integer(), nullable=False),
        sa.Column('before', postgresql.JSON(), nullable=False),
        sa.Column('after', postgresql.JSON(), nullable=False),
        *_timestamps('applied_at'),
        sa.Column('reverted_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['workout_id'], ['workouts.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_applied_patches_workout_id'), 'applied_patches', ['workout_id'])

    op.create_table('plan_change_proposals', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('workout_id', sa.Integer(), nullable=False),
        sa.Column('summary', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=False),
        sa.Column('patch', postgresql.JSON(), nullable=False),
        sa.Column('before', postgresql.JSON(), nullable=False),
        sa.Column('confidence', sa.Integer(), nullable=False),
        sa.Column('source_type', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=False),
        sa.Column('status', sqlmodel.sql.sqltypes.AutoString(length=16), nullable=False, server_default='PENDING'),
        sa.Column('applied_patch_id', sa.Integer(), nullable=True),
        *_timestamps('created_at'),
        sa.Column('decided_at', sa.DateTime(), nullable=True),
        sa.Column('undone_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['workout_id'], ['workouts.id']),
        sa.ForeignKeyConstraint(['applied_patch_id'], ['applied_patches.id']),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_plan_change_proposals_workout_id'), 'plan_change_proposals', ['workout_id'])
    op.create_index(op.f('ix_plan_change_proposals_status'), 'plan_change_proposals', ['status'])
    # At most one PENDING proposal per workout
    op.create_index('uq_proposal_pending_workout', 'plan_change_proposals', ['workout_id'], unique=True,
                    postgresql_where=sa.text("status = 'PENDING'"),
                    sqlite_where=sa.text("status = 'PENDING'"))


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index('uq_proposal_pending_workout', table_name='plan_change_proposals')
    op.drop_table('plan_change_proposals')
    op.drop_table('applied_patches')
    op.drop_table('benchmarks')
    op.drop_table('load_metrics')
    op.drop_table('diary_entries')
    op.drop_table('daily_checkins')
    op.drop_table('workouts')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
