"""Baseline schema: recipes, pre-production stock, customers, invoices, activity log

Revision ID: baseline_001
Revises:
Create Date: 2026-10-18

Tables already created by create_all at startup are skipped, so this can be
stamped onto an existing database.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'baseline_001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    from sqlalchemy import inspect

    existing_tables = inspect(op.get_bind()).get_table_names()

    if 'conrods' not in existing_tables:
        op.create_table(
            'conrods',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('serial_number', sa.String(length=50), nullable=False),
            sa.Column('conrod_name', sa.String(length=255), nullable=False),
            sa.Column('conrod_variant', sa.String(length=100), nullable=False),
            sa.Column('conrod_size', sa.String(length=50), nullable=False),
            sa.Column('small_end_diameter', sa.Float(), nullable=False),
            sa.Column('big_end_diameter', sa.Float(), nullable=False),
            sa.Column('center_distance', sa.Float(), nullable=False),
            sa.Column('pin_name', sa.String(length=255), nullable=False),
            sa.Column('pin_size', sa.String(length=50), nullable=False),
            sa.Column('ball_bearing_name', sa.String(length=255), nullable=False),
            sa.Column('ball_bearing_variant', sa.String(length=100), nullable=False),
            sa.Column('ball_bearing_size', sa.String(length=50), nullable=False),
            sa.Column('amount', sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_conrods_id', 'conrods', ['id'])
        op.create_index('ix_conrods_serial_number', 'conrods', ['serial_number'], unique=True)
        op.create_index('ix_conrods_conrod_name', 'conrods', ['conrod_name'])

    if 'pre_production' not in existing_tables:
        op.create_table(
            'pre_production',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('type', sa.String(length=20), nullable=False),
            sa.Column('size', sa.String(length=50), nullable=True),
            sa.Column('variant', sa.String(length=100), nullable=True),
            sa.Column('quantity', sa.Integer(), nullable=False),
            sa.Column('date_updated', sa.Date(), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_pre_production_id', 'pre_production', ['id'])
        op.create_index('ix_pre_production_name', 'pre_production', ['name'])
        op.create_index('ix_pre_production_type', 'pre_production', ['type'])

    if 'customers' not in existing_tables:
        op.create_table(
            'customers',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('address', sa.Text(), nullable=False),
            sa.Column('phone_number', sa.String(length=50), nullable=True),
            sa.Column('gst_no', sa.String(length=50), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_customers_id', 'customers', ['id'])
        op.create_index('ix_customers_name', 'customers', ['name'])

    if 'invoices' not in existing_tables:
        op.create_table(
            'invoices',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('invoice_no', sa.String(length=50), nullable=False),
            sa.Column('customer_id', sa.Integer(), nullable=False),
            sa.Column('total_amount', sa.Numeric(precision=12, scale=2), nullable=False),
            sa.Column('status', sa.String(length=20), nullable=False),
            sa.Column('transport', sa.String(length=255), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.ForeignKeyConstraint(['customer_id'], ['customers.id']),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_invoices_id', 'invoices', ['id'])
        op.create_index('ix_invoices_invoice_no', 'invoices', ['invoice_no'], unique=True)
        op.create_index('ix_invoices_customer_id', 'invoices', ['customer_id'])

    if 'invoice_items' not in existing_tables:
        op.create_table(
            'invoice_items',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('invoice_id', sa.Integer(), nullable=False),
            sa.Column('product_id', sa.Integer(), nullable=False),
            sa.Column('product_name', sa.String(length=255), nullable=False),
            sa.Column('quantity', sa.Integer(), nullable=False),
            sa.Column('amount_per_unit', sa.Numeric(precision=12, scale=2), nullable=False),
            sa.Column('total_amount', sa.Numeric(precision=12, scale=2), nullable=False),
            sa.ForeignKeyConstraint(['invoice_id'], ['invoices.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_invoice_items_id', 'invoice_items', ['id'])
        op.create_index('ix_invoice_items_invoice_id', 'invoice_items', ['invoice_id'])

    if 'activity_logs' not in existing_tables:
        op.create_table(
            'activity_logs',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('action', sa.String(length=20), nullable=False),
            sa.Column('module', sa.String(length=50), nullable=False),
            sa.Column('entity_id', sa.Integer(), nullable=True),
            sa.Column('entity_name', sa.String(length=255), nullable=True),
            sa.Column('description', sa.String(length=500), nullable=False),
            sa.Column('details', sa.Text(), nullable=True),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_activity_logs_id', 'activity_logs', ['id'])
        op.create_index('ix_activity_logs_action', 'activity_logs', ['action'])
        op.create_index('ix_activity_logs_module', 'activity_logs', ['module'])
        op.create_index('ix_activity_logs_created_at', 'activity_logs', ['created_at'])


def downgrade() -> None:
    op.drop_table('activity_logs')
    op.drop_table('invoice_items')
    op.drop_table('invoices')
    op.drop_table('customers')
    op.drop_table('pre_production')
    op.drop_table('conrods')
