"""Create catalog and account tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000

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
    """Create catalog and account tables"""

    # 1. Create categories table
    op.create_table('categories',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('title', sa.String(120), nullable=False),
        sa.Column('slug', sa.String(140), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_categories'),
        sa.UniqueConstraint('slug', name='uq_categories_slug'),
    )

    op.create_index('ix_categories_title', 'categories', ['title'])

    # 2. Create products table
    op.create_table('products',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('product_code', sa.String(64), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('image_path', sa.String(500), nullable=True),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('manufacturer', sa.String(120), nullable=True),
        sa.Column('available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('category_id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_products'),
        sa.UniqueConstraint('product_code', name='uq_products_product_code'),
        sa.ForeignKeyConstraint(
            ['category_id'], ['categories.id'],
            name='fk_products_category_id_categories',
            ondelete='RESTRICT',
        ),
        sa.CheckConstraint('price >= 0', name='ck_products_price_non_negative'),
    )

    op.create_index('ix_products_category_id', 'products', ['category_id'])
    op.create_index('ix_products_created_at', 'products', ['created_at'])

    # 3. Create users table
    op.create_table('users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('username', sa.String(80), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),

        sa.PrimaryKeyConstraint('id', name='pk_users'),
    )

    op.create_index('ix_users_email', 'users', ['email'], unique=True)


def downgrade() -> None:
    """Drop catalog and account tables"""
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    op.drop_index('ix_products_created_at', table_name='products')
    op.drop_index('ix_products_category_id', table_name='products')
    op.drop_table('products')

    op.drop_index('ix_categories_title', table_name='categories')
    op.drop_table('categories')
