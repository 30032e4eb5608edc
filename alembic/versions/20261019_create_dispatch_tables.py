"""create_dispatch_tables

Revision ID: 20261019_dispatch
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '20261019_dispatch'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ORDER_STATUSES = (
    'pending', 'confirmed', 'preparing', 'ready',
    'picked_up', 'on_way', 'delivered', 'cancelled',
)


def table_exists(table_name):
    """Check if a table exists in the database"""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def index_exists(table_name, index_name):
    """Check if an index exists on a table"""
    bind = op.get_bind()
    inspector = inspect(bind)
    indexes = inspector.get_indexes(table_name)
    return any(idx['name'] == index_name for idx in indexes)


def upgrade():
    # 1. Restaurants (contact details shown on orders)
    if not table_exists('restaurants'):
        op.create_table(
            'restaurants',
            sa.Column('id', sa.String(), primary_key=True),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('phone', sa.String(), nullable=True),
            sa.Column('address', sa.String(), nullable=True),
        )

    # 2. Drivers
    if not table_exists('drivers'):
        op.create_table(
            'drivers',
            sa.Column('id', sa.String(), primary_key=True),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('phone', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=True),
            sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column('current_location', sa.String(), nullable=True),
            sa.Column('last_active_at', sa.DateTime(), nullable=True),
        )

    # 3. Orders
    if not table_exists('orders'):
        op.create_table(
            'orders',
            sa.Column('id', sa.String(), primary_key=True),
            sa.Column('order_number', sa.String(), nullable=True),
            sa.Column('customer_name', sa.String(), nullable=False),
            sa.Column('customer_phone', sa.String(), nullable=False),
            sa.Column('delivery_address', sa.String(), nullable=False),
            sa.Column('items', sa.Text(), nullable=False, server_default='[]'),
            sa.Column('total_amount', sa.Numeric(10, 2), nullable=False, server_default='0'),
            sa.Column('restaurant_id', sa.String(), sa.ForeignKey('restaurants.id'), nullable=True),
            sa.Column('driver_id', sa.String(), sa.ForeignKey('drivers.id'), nullable=True),
            sa.Column(
                'status',
                sa.Enum(*ORDER_STATUSES, name='order_status', native_enum=False),
                nullable=False,
                server_default='pending',
            ),
            sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
            sa.Column('accepted_at', sa.DateTime(), nullable=True),
            sa.Column('delivered_at', sa.DateTime(), nullable=True),
            sa.Column('delivery_location', sa.String(), nullable=True),
            sa.Column('driver_earnings', sa.Numeric(10, 2), nullable=True),
        )

    if table_exists('orders'):
        if not index_exists('orders', 'idx_orders_driver'):
            op.create_index('idx_orders_driver', 'orders', ['driver_id'])
        if not index_exists('orders', 'idx_orders_status'):
            op.create_index('idx_orders_status', 'orders', ['status', 'driver_id'])
        if not index_exists('orders', 'idx_orders_customer_phone'):
            op.create_index('idx_orders_customer_phone', 'orders', ['customer_phone'])


def downgrade():
    if table_exists('orders'):
        op.drop_table('orders')
    if table_exists('drivers'):
        op.drop_table('drivers')
    if table_exists('restaurants'):
        op.drop_table('restaurants')
