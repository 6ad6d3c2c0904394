"""Create storefront tables

Revision ID: 3f2a9c41d7e0
Revises: 
Create Date: 2026-10-17 10:12:44.318205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# Revision identifiers used by Alembic
revision: str = '3f2a9c41d7e0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'buyers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_buyers_id', 'buyers', ['id'])
    op.create_index('ix_buyers_email', 'buyers', ['email'])

    op.create_table(
        'suppliers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('inn', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_suppliers_id', 'suppliers', ['id'])

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_categories_id', 'categories', ['id'])
    op.create_index('ix_categories_name', 'categories', ['name'])

    op.create_table(
        'pickup_points',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('address', sa.String(), nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_pickup_points_id', 'pickup_points', ['id'])

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), sa.CheckConstraint('price >= 0'), nullable=False),
        sa.Column('photo', sa.String(), nullable=True),
        sa.Column('characteristics', sa.String(), nullable=True),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id'), nullable=True),
        sa.Column('manufacturer_id', sa.Integer(), sa.ForeignKey('suppliers.id'), nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_products_id', 'products', ['id'])
    op.create_index('ix_products_name', 'products', ['name'])
    op.create_index('ix_products_category_id', 'products', ['category_id'])
    op.create_index('ix_products_manufacturer_id', 'products', ['manufacturer_id'])

    op.create_table(
        'carts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('buyer_id', sa.Integer(), sa.ForeignKey('buyers.id'), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_carts_id', 'carts', ['id'])
    op.create_index('ix_carts_buyer_id', 'carts', ['buyer_id'], unique=True)

    op.create_table(
        'cart_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('cart_id', sa.Integer(), sa.ForeignKey('carts.id'), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), sa.CheckConstraint('quantity >= 1'), nullable=False),
        sa.UniqueConstraint('cart_id', 'product_id', name='uq_cartitem_cart_product'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_cart_items_id', 'cart_items', ['id'])
    op.create_index('ix_cart_items_cart_id', 'cart_items', ['cart_id'])
    op.create_index('ix_cart_items_product_id', 'cart_items', ['product_id'])

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('buyer_id', sa.Integer(), nullable=False),
        sa.Column('total_cost', sa.Numeric(12, 2), nullable=False),
        sa.Column('pickup_point_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_orders_id', 'orders', ['id'])
    op.create_index('ix_orders_buyer_id', 'orders', ['buyer_id'])

    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id'), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(12, 2), nullable=False),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_order_items_id', 'order_items', ['id'])

    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('ts', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('buyer_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(50)),
        sa.Column('resource', sa.String(50)),
        sa.Column('status', sa.String(20)),
        sa.Column('meta', sa.JSON(), nullable=True),
        sqlite_autoincrement=True,
    )
    for column in ('ts', 'buyer_id', 'action', 'resource', 'status'):
        op.create_index(f'ix_audit_logs_{column}', 'audit_logs', [column])


def downgrade() -> None:
    """Downgrade schema."""
    for table in ('audit_logs', 'order_items', 'orders', 'cart_items', 'carts',
                  'products', 'pickup_points', 'categories', 'suppliers', 'buyers'):
        op.drop_table(table)
