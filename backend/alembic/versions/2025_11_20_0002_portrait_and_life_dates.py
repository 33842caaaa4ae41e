"""add portrait_url, birth_date and death_date to homes

Revision ID: 0002_life_dates
Revises: 0001_initial
Create Date: 2025-11-20

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers
revision: str = '0002_life_dates'
down_revision: Union[str, None] = '0001_initial'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column('homes', sa.Column('portrait_url', sa.String(), nullable=True))
    # YYYY-MM-DD text, matched by substring for the calendar
    op.add_column('homes', sa.Column('birth_date', sa.String(), nullable=True))
    op.add_column('homes', sa.Column('death_date', sa.String(), nullable=True))

    op.create_index('idx_homes_dates', 'homes', ['birth_date', 'death_date'])


def downgrade() -> None:
    op.drop_index('idx_homes_dates', table_name='homes')
    with op.batch_alter_table('homes') as batch_op:
        batch_op.drop_column('death_date')
        batch_op.drop_column('birth_date')
        batch_op.drop_column('portrait_url')
