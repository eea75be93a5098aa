"""Initial schema - shops, products and activity_log

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'shops',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_activity_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('external_id', sa.String(length=100), nullable=False),
        sa.Column('shop_id', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description_html', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['shop_id'], ['shops.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_products_external_id', 'products', ['external_id'], unique=True)
    op.create_index('ix_products_shop_id', 'products', ['shop_id'], unique=False)

    op.create_table(
        'activity_log',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('action', sa.String(length=50), nullable=False),
        sa.Column('entity_type', sa.String(length=50), nullable=False),
        sa.Column('entity_id', sa.String(length=255), nullable=False),
        sa.Column('shop', sa.String(length=255), nullable=True),
        sa.Column('details', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_activity_log_action', 'activity_log', ['action'], unique=False)
    op.create_index('ix_activity_log_entity_type', 'activity_log', ['entity_type'], unique=False)
    op.create_index('ix_activity_log_entity_id', 'activity_log', ['entity_id'], unique=False)
    op.create_index('ix_activity_log_shop', 'activity_log', ['shop'], unique=False)
    op.create_index('ix_activity_log_created_at', 'activity_log', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_activity_log_created_at', table_name='activity_log')
    op.drop_index('ix_activity_log_shop', table_name='activity_log')
    op.drop_index('ix_activity_log_entity_id', table_name='activity_log')
    op.drop_index('ix_activity_log_entity_type', table_name='activity_log')
    op.drop_index('ix_activity_log_action', table_name='activity_log')
    op.drop_table('activity_log')
    op.drop_index('ix_products_shop_id', table_name='products')
    op.drop_index('ix_products_external_id', table_name='products')
    op.drop_table('products')
    op.drop_table('shops')
