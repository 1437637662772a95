"""create spot tables

Revision ID: a7c3e91f2b40
Revises:
Create Date: 2026-10-19 09:00:00.000000

Creates users, tags, reviews, spots and the two tables that make up the rest of
a spot document: spot_reviews (ordered review references) and spot_reports.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a7c3e91f2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create spot tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('username', sa.String(50), nullable=False),
        sa.Column('reputation', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
    )

    op.create_table(
        'tags',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('label', sa.String(30), nullable=False),
        sa.Column('seeded', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('label'),
    )

    op.create_table(
        'reviews',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('creator_id', sa.Uuid(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['creator_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_reviews_creator_id', 'reviews', ['creator_id'])

    op.create_table(
        'spots',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(20), nullable=False),
        sa.Column('creator_id', sa.Uuid(), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('floor', sa.String(3), nullable=False, server_default='1'),
        sa.Column('tag_id', sa.Uuid(), nullable=False),
        sa.Column('rating', sa.Float(), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('title'),
        sa.ForeignKeyConstraint(['creator_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id']),
    )
    op.create_index('ix_spots_creator_id', 'spots', ['creator_id'])
    op.create_index('ix_spots_tag_id', 'spots', ['tag_id'])
    # Bounding box lookups
    op.create_index('ix_spot_coordinates', 'spots', ['latitude', 'longitude'])

    op.create_table(
        'spot_reviews',
        sa.Column('spot_id', sa.Uuid(), nullable=False),
        sa.Column('review_id', sa.Uuid(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('spot_id', 'review_id'),
        sa.ForeignKeyConstraint(['spot_id'], ['spots.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['review_id'], ['reviews.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_spot_reviews_review_id', 'spot_reviews', ['review_id'])

    op.create_table(
        'spot_reports',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('spot_id', sa.Uuid(), nullable=False),
        sa.Column('reporter_id', sa.Uuid(), nullable=False),
        sa.Column('reporter_score', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('spot_id', 'reporter_id', name='uq_spot_report_reporter'),
        sa.ForeignKeyConstraint(['spot_id'], ['spots.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['reporter_id'], ['users.id'], ondelete='CASCADE'),
    )
    op.create_index('ix_spot_reports_spot_id', 'spot_reports', ['spot_id'])


def downgrade() -> None:
    """Drop spot tables."""
    op.drop_index('ix_spot_reports_spot_id', table_name='spot_reports')
    op.drop_table('spot_reports')
    op.drop_index('ix_spot_reviews_review_id', table_name='spot_reviews')
    op.drop_table('spot_reviews')
    op.drop_index('ix_spot_coordinates', table_name='spots')
    op.drop_index('ix_spots_tag_id', table_name='spots')
    op.drop_index('ix_spots_creator_id', table_name='spots')
    op.drop_table('spots')
    op.drop_index('ix_reviews_creator_id', table_name='reviews')
    op.drop_table('reviews')
    op.drop_table('tags')
    op.drop_table('users')
