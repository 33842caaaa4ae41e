"""homes and partners tables

Revision ID: 0001_initial
Revises: 
Create Date: 2025-11-07

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'homes',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('biography', sa.Text(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('lat', sa.Float(), nullable=True),
        sa.Column('lng', sa.Float(), nullable=True),
        sa.Column('images', sa.Text(), nullable=False, server_default='[]'),
        sa.Column('sources', sa.Text(), nullable=False, server_default='[]'),
        sa.Column('tags', sa.Text(), nullable=False, server_default='[]'),
        sa.Column('photo_date', sa.String(), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_homes_slug', 'homes', ['slug'], unique=True)
    op.create_index('ix_homes_name', 'homes', ['name'])
    op.create_index('ix_homes_published', 'homes', ['published'])

    op.create_table(
        'partners',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('logo_url', sa.String(), nullable=True),
        sa.Column('website', sa.String(), nullable=True),
        sa.Column('instagram', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_partners_published', 'partners', ['published'])
    op.create_index('ix_partners_display_order', 'partners', ['display_order'])


def downgrade() -> None:
    op.drop_index('ix_partners_display_order', table_name='partners')
    op.drop_index('ix_partners_published', table_name='partners')
    op.drop_table('partners')

    op.drop_index('ix_homes_published', table_name='homes')
    op.drop_index('ix_homes_name', table_name='homes')
    op.drop_index('ix_homes_slug', table_name='homes')
    op.drop_table('homes')
