"""create_work_sessions

Work sessions table with the single-active-session guard.

Revision ID: 3c9e1f7a2b40
Revises:
Create Date: 2026-10-17 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c9e1f7a2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create work_sessions.

    The partial unique index admits at most one row with end_time IS NULL:
    every row it covers has the same indexed value, so a second running
    session fails the INSERT even when two requests race.
    """
    op.create_table(
        'work_sessions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.CheckConstraint(
            'end_time IS NULL OR end_time >= start_time',
            name='ck_work_sessions_end_after_start',
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        op.f('ix_work_sessions_start_time'), 'work_sessions', ['start_time'], unique=False
    )
    op.execute(
        """
        CREATE UNIQUE INDEX uq_work_sessions_single_active
        ON work_sessions ((end_time IS NULL))
        WHERE end_time IS NULL;
        """
    )


def downgrade() -> None:
    op.execute("DROP INDEX IF EXISTS uq_work_sessions_single_active;")
    op.drop_index(op.f('ix_work_sessions_start_time'), table_name='work_sessions')
    op.drop_table('work_sessions')
