"""Initial migration - create all tables

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create events table
    op.create_table(
        'events',
        sa.Column('event_id', sa.String(64), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('rank', sa.Integer(), nullable=False),
        sa.Column('format', sa.String(10), nullable=False),
        sa.Column('default_round_format', sa.String(1), nullable=False),
        sa.Column('participants', sa.Integer(), nullable=False),
        sa.Column('submissions_allowed', sa.Boolean(), nullable=False),
        sa.Column('hidden', sa.Boolean(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
    )

    # Create persons table
    op.create_table(
        'persons',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('localized_name', sa.String(255), nullable=True),
        sa.Column('region_code', sa.String(2), nullable=False),
        sa.Column('wca_id', sa.String(10), unique=True, nullable=True),
        sa.Column('approved', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    # Create contests table
    op.create_table(
        'contests',
        sa.Column('competition_id', sa.String(64), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('short_name', sa.String(64), nullable=False),
        sa.Column('type', sa.String(10), nullable=False),
        sa.Column('state', sa.String(10), nullable=False),
        sa.Column('region_code', sa.String(2), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('participants', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    # Create rounds table
    op.create_table(
        'rounds',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('competition_id', sa.String(64), sa.ForeignKey('contests.competition_id'), nullable=False),
        sa.Column('event_id', sa.String(64), sa.ForeignKey('events.event_id'), nullable=False),
        sa.Column('round_number', sa.Integer(), nullable=False),
        sa.Column('round_type_id', sa.String(1), nullable=False),
        sa.Column('format', sa.String(1), nullable=False),
        sa.Column('time_limit_centiseconds', sa.Integer(), nullable=True),
        sa.Column('time_limit_cumulative_round_ids', sa.JSON(), nullable=True),
        sa.Column('cutoff_attempt_result', sa.Integer(), nullable=True),
        sa.Column('cutoff_number_of_attempts', sa.Integer(), nullable=True),
        sa.Column('proceed_type', sa.String(10), nullable=True),
        sa.Column('proceed_value', sa.Integer(), nullable=True),
        sa.Column('open', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_rounds_competition_id', 'rounds', ['competition_id'])

    # Create record_configs table
    op.create_table(
        'record_configs',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('record_type_id', sa.String(3), nullable=False),
        sa.Column('category', sa.String(30), nullable=False),
        sa.Column('label', sa.String(10), unique=True, nullable=False),
        sa.Column('active', sa.Boolean(), nullable=False),
        sa.Column('rank', sa.Integer(), nullable=False),
        sa.Column('color', sa.String(7), nullable=False),
    )

    # Create results table
    op.create_table(
        'results',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('event_id', sa.String(64), sa.ForeignKey('events.event_id'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('approved', sa.Boolean(), nullable=False),
        sa.Column('person_ids', sa.JSON(), nullable=False),
        sa.Column('region_code', sa.String(2), nullable=True),
        sa.Column('super_region_code', sa.String(20), nullable=True),
        sa.Column('attempts', sa.JSON(), nullable=False),
        sa.Column('best', sa.BigInteger(), nullable=False),
        sa.Column('average', sa.BigInteger(), nullable=False),
        sa.Column('record_category', sa.String(30), nullable=False),
        sa.Column('regional_single_record', sa.String(3), nullable=True),
        sa.Column('regional_average_record', sa.String(3), nullable=True),
        sa.Column('competition_id', sa.String(64), sa.ForeignKey('contests.competition_id'), nullable=True),
        sa.Column('round_id', sa.Integer(), sa.ForeignKey('rounds.id'), nullable=True),
        sa.Column('ranking', sa.Integer(), nullable=True),
        sa.Column('proceeds', sa.Boolean(), nullable=True),
        sa.Column('video_link', sa.String(500), nullable=True),
        sa.Column('discussion_link', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_results_round_id', 'results', ['round_id'])
    op.create_index('ix_results_partition_date', 'results', ['event_id', 'record_category', 'date'])


def downgrade() -> None:
    op.drop_index('ix_results_partition_date', table_name='results')
    op.drop_index('ix_results_round_id', table_name='results')
    op.drop_table('results')
    op.drop_table('record_configs')
    op.drop_index('ix_rounds_competition_id', table_name='rounds')
    op.drop_table('rounds')
    op.drop_table('contests')
    op.drop_table('persons')
    op.drop_table('events')
