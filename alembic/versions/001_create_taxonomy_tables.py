"""Create sections, categories, types and brands tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create taxonomy and brand tables."""
    op.create_table(
        'sections',
        sa.Column('seq', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('slug', sa.String(200), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.UniqueConstraint('id', name='uq_sections_id'),
        sa.UniqueConstraint('slug', name='uq_sections_slug'),
    )

    # Categories point at their section by slug, not by foreign key
    op.create_table(
        'categories',
        sa.Column('seq', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('slug', sa.String(200), nullable=False),
        sa.Column('section_slug', sa.String(200), nullable=False, index=True),
        sa.Column('icon_secure_url', sa.String(1000), nullable=True),
        sa.Column('icon_public_id', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.UniqueConstraint('id', name='uq_categories_id'),
        sa.UniqueConstraint('slug', name='uq_categories_slug'),
    )

    op.create_table(
        'types',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('slug', sa.String(200), nullable=False),
        sa.Column('category_id', sa.String(36), sa.ForeignKey('categories.id'), nullable=False, index=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.UniqueConstraint('slug', name='uq_types_slug'),
    )

    op.create_table(
        'brands',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(200), nullable=False, index=True),
        sa.Column('logo', sa.String(1000), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.text('now()')),
    )


def downgrade() -> None:
    """Drop taxonomy and brand tables."""
    op.drop_table('brands')
    op.drop_table('types')
    op.drop_table('categories')
    op.drop_table('sections')
