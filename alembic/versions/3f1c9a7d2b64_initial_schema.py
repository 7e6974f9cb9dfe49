"""initial schema

Revision ID: 3f1c9a7d2b64
Revises: 
Create Date: 2026-10-18 10:12:41.513309

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b64'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_id', 'users', ['id'])

    op.create_table(
        'goals',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('floor', sa.Text(), nullable=False),
        sa.Column('ceiling', sa.Text(), nullable=False),
        sa.Column('unit', sa.String(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('frequency_type', sa.String(), nullable=False),
        sa.Column('specific_days', sa.JSON(), nullable=True),
        sa.Column('days_per_period', sa.Integer(), nullable=True),
        sa.Column('period_unit', sa.String(), nullable=True),
        sa.Column('repeat_every_n_days', sa.Integer(), nullable=True),
        sa.Column('target_date', sa.Date(), nullable=True),
        sa.Column('target_successes', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_goals_id', 'goals', ['id'])
    op.create_index('ix_goals_user_id', 'goals', ['user_id'])

    op.create_table(
        'goal_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('goal_id', sa.Integer(), sa.ForeignKey('goals.id'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('goal_id', 'user_id', 'date', name='uq_goal_user_date'),
    )
    op.create_index('ix_goal_logs_id', 'goal_logs', ['id'])
    op.create_index('ix_goal_logs_goal_id', 'goal_logs', ['goal_id'])


def downgrade() -> None:
    op.drop_index('ix_goal_logs_goal_id', table_name='goal_logs')
    op.drop_index('ix_goal_logs_id', table_name='goal_logs')
    op.drop_table('goal_logs')
    op.drop_index('ix_goals_user_id', table_name='goals')
    op.drop_index('ix_goals_id', table_name='goals')
    op.drop_table('goals')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
