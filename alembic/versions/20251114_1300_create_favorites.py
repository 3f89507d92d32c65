"""create favorites table

Revision ID: 20251114_1300_create_favorites
Revises: 20251114_1200_create_users_and_tours
Create Date: 2025-11-14 13:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20251114_1300_create_favorites'
down_revision = '20251114_1200_create_users_and_tours'
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table(
        'favorites',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tour_id', sa.Integer(), sa.ForeignKey('tours.id'), nullable=False),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('user_id', 'tour_id', name='uq_favorites_user_tour'),
    )
    op.create_index('ix_favorites_user_id', 'favorites', ['user_id'])
    op.create_index('ix_favorites_tour_id', 'favorites', ['tour_id'])
    op.create_index('ix_favorites_user_order', 'favorites', ['user_id', 'order'])

def downgrade() -> None:
    op.drop_index('ix_favorites_user_order', table_name='favorites')
    op.drop_index('ix_favorites_tour_id', table_name='favorites')
    op.drop_index('ix_favorites_user_id', table_name='favorites')
    op.drop_table('favorites')
