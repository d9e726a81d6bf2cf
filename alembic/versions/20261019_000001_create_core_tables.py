"""Create users, trackers, participants, flats and commute times

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

This migration creates the full schema for trackers and their flats.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

FLAT_STATUSES = ('Seen', 'ReachedOut', 'Answered', 'VisitArranged', 'Visited', 'Accepted')
PARTICIPANT_ROLES = ('Admin', 'Participant')


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=True),
        sa.Column('work_address', sa.String(length=500), nullable=True),
        sa.Column('work_latitude', sa.Float(), nullable=True),
        sa.Column('work_longitude', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'trackers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id'], name='fk_trackers_owner_id'),
    )
    op.create_index('ix_trackers_owner_id', 'trackers', ['owner_id'])

    op.create_table(
        'tracker_participants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tracker_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column(
            'role',
            sa.Enum(*PARTICIPANT_ROLES, name='participant_role', create_constraint=True),
            nullable=False,
            server_default='Participant'
        ),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tracker_id', 'user_id', name='uq_tracker_participants_tracker_user'),
        sa.ForeignKeyConstraint(
            ['tracker_id'],
            ['trackers.id'],
            name='fk_tracker_participants_tracker_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['user_id'],
            ['users.id'],
            name='fk_tracker_participants_user_id',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_tracker_participants_tracker_id', 'tracker_participants', ['tracker_id'])
    op.create_index('ix_tracker_participants_user_id', 'tracker_participants', ['user_id'])

    op.create_table(
        'flats',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tracker_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('url', sa.String(length=1000), nullable=True),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('area', sa.Float(), nullable=True),
        sa.Column('bedrooms', sa.Integer(), nullable=True),
        sa.Column('bathrooms', sa.Integer(), nullable=True),
        sa.Column(
            'status',
            sa.Enum(*FLAT_STATUSES, name='flat_status', create_constraint=True),
            nullable=False
        ),
        sa.Column('created_by_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('price IS NULL OR price >= 0', name='ck_flats_price_non_negative'),
        sa.CheckConstraint('area IS NULL OR area >= 0', name='ck_flats_area_non_negative'),
        sa.CheckConstraint('bedrooms IS NULL OR bedrooms >= 0', name='ck_flats_bedrooms_non_negative'),
        sa.CheckConstraint('bathrooms IS NULL OR bathrooms >= 0', name='ck_flats_bathrooms_non_negative'),
        sa.ForeignKeyConstraint(
            ['tracker_id'],
            ['trackers.id'],
            name='fk_flats_tracker_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(['created_by_id'], ['users.id'], name='fk_flats_created_by_id'),
    )
    op.create_index('ix_flats_tracker_id', 'flats', ['tracker_id'])
    op.create_index('ix_flats_status', 'flats', ['status'])

    op.create_table(
        'commute_times',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('flat_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('time_minutes', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['flat_id'],
            ['flats.id'],
            name='fk_commute_times_flat_id',
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['user_id'],
            ['users.id'],
            name='fk_commute_times_user_id',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_commute_times_flat_id', 'commute_times', ['flat_id'])
    op.create_index('ix_commute_times_user_id', 'commute_times', ['user_id'])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index('ix_commute_times_user_id', table_name='commute_times')
    op.drop_index('ix_commute_times_flat_id', table_name='commute_times')
    op.drop_table('commute_times')

    op.drop_index('ix_flats_status', table_name='flats')
    op.drop_index('ix_flats_tracker_id', table_name='flats')
    op.drop_table('flats')

    op.drop_index('ix_tracker_participants_user_id', table_name='tracker_participants')
    op.drop_index('ix_tracker_participants_tracker_id', table_name='tracker_participants')
    op.drop_table('tracker_participants')

    op.drop_index('ix_trackers_owner_id', table_name='trackers')
    op.drop_table('trackers')

    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    # Drop the enum types (PostgreSQL)
    if op.get_bind().dialect.name == 'postgresql':
        op.execute("DROP TYPE IF EXISTS flat_status")
        op.execute("DROP TYPE IF EXISTS participant_role")
