"""Initial bandwidth billing schema

Revision ID: 001_initial
Revises: 
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    ]


def _document_columns():
    """Header columns shared by purchase_bills and sales_invoices"""
    return [
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('invoice_number', sa.String(), nullable=False),
        sa.Column('billing_date', sa.Date(), nullable=False),
        sa.Column('currency', sa.String(), nullable=True),
        sa.Column('subtotal', sa.Numeric(12, 2), nullable=False),
        sa.Column('vat_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('discount', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('paid_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('due_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('payment_status', sa.String(), nullable=False),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('created_by', sa.String(), nullable=True),
    ] + _timestamps()


def _line_columns():
    """Columns shared by purchase_bill_items and sales_invoice_items"""
    return [
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('line_no', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=True),
        sa.Column('item_name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('unit', sa.String(), nullable=True),
        sa.Column('quantity', sa.Numeric(12, 2), nullable=False),
        sa.Column('rate', sa.Numeric(12, 2), nullable=False),
        sa.Column('vat_percent', sa.Numeric(5, 2), nullable=False),
        sa.Column('from_date', sa.Date(), nullable=True),
        sa.Column('to_date', sa.Date(), nullable=True),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('vat_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('total', sa.Numeric(12, 2), nullable=False),
        sa.ForeignKeyConstraint(['item_id'], ['bandwidth_items.id'], ondelete='SET NULL'),
    ]


def _counterparty_columns():
    return [
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('company_name', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('contact_person', sa.String(), nullable=True),
        sa.Column('account_number', sa.String(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
    ] + _timestamps()


def upgrade() -> None:
    # Catalog
    op.create_table(
        'bandwidth_item_categories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_bandwidth_item_categories_id'), 'bandwidth_item_categories', ['id'], unique=False)
    op.create_index(op.f('ix_bandwidth_item_categories_tenant_id'), 'bandwidth_item_categories', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_bandwidth_item_categories_name'), 'bandwidth_item_categories', ['name'], unique=False)

    op.create_table(
        'bandwidth_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('category_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('unit', sa.String(), nullable=False, server_default='Mbps'),
        sa.Column('unit_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.ForeignKeyConstraint(['category_id'], ['bandwidth_item_categories.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_bandwidth_items_id'), 'bandwidth_items', ['id'], unique=False)
    op.create_index(op.f('ix_bandwidth_items_tenant_id'), 'bandwidth_items', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_bandwidth_items_name'), 'bandwidth_items', ['name'], unique=False)
    op.create_index(op.f('ix_bandwidth_items_category_id'), 'bandwidth_items', ['category_id'], unique=False)

    # Counterparties
    op.create_table(
        'bandwidth_providers',
        *_counterparty_columns(),
        sa.Column('total_due', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table(
        'bandwidth_clients',
        *_counterparty_columns(),
        sa.Column('pop_name', sa.String(), nullable=True),
        sa.Column('vlan_name', sa.String(), nullable=True),
        sa.Column('ip_address', sa.String(), nullable=True),
        sa.Column('total_receivable', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id')
    )
    for table in ('bandwidth_providers', 'bandwidth_clients'):
        op.create_index(op.f(f'ix_{table}_id'), table, ['id'], unique=False)
        op.create_index(op.f(f'ix_{table}_tenant_id'), table, ['tenant_id'], unique=False)
        op.create_index(op.f(f'ix_{table}_name'), table, ['name'], unique=False)

    # Purchase bills
    op.create_table(
        'purchase_bills',
        *_document_columns(),
        sa.Column('provider_id', sa.Integer(), nullable=True),
        sa.Column('payment_method', sa.String(), nullable=True),
        sa.Column('paid_by', sa.String(), nullable=True),
        sa.Column('received_by', sa.String(), nullable=True),
        sa.ForeignKeyConstraint(['provider_id'], ['bandwidth_providers.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tenant_id', 'invoice_number', name='uq_purchase_bills_tenant_number')
    )
    op.create_table(
        'purchase_bill_items',
        *_line_columns(),
        sa.Column('bill_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['bill_id'], ['purchase_bills.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_purchase_bill_items_id'), 'purchase_bill_items', ['id'], unique=False)
    op.create_index(op.f('ix_purchase_bill_items_bill_id'), 'purchase_bill_items', ['bill_id'], unique=False)

    # Sales invoices
    op.create_table(
        'sales_invoices',
        *_document_columns(),
        sa.Column('client_id', sa.Integer(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.ForeignKeyConstraint(['client_id'], ['bandwidth_clients.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tenant_id', 'invoice_number', name='uq_sales_invoices_tenant_number')
    )
    op.create_table(
        'sales_invoice_items',
        *_line_columns(),
        sa.Column('invoice_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['invoice_id'], ['sales_invoices.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_sales_invoice_items_id'), 'sales_invoice_items', ['id'], unique=False)
    op.create_index(op.f('ix_sales_invoice_items_invoice_id'), 'sales_invoice_items', ['invoice_id'], unique=False)

    for table in ('purchase_bills', 'sales_invoices'):
        op.create_index(op.f(f'ix_{table}_id'), table, ['id'], unique=False)
        op.create_index(op.f(f'ix_{table}_tenant_id'), table, ['tenant_id'], unique=False)
        op.create_index(op.f(f'ix_{table}_invoice_number'), table, ['invoice_number'], unique=False)
        op.create_index(op.f(f'ix_{table}_payment_status'), table, ['payment_status'], unique=False)

    # Payment ledger
    op.create_table(
        'bill_collections',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('receipt_number', sa.String(), nullable=False),
        sa.Column('client_id', sa.Integer(), nullable=True),
        sa.Column('invoice_id', sa.Integer(), nullable=True),
        sa.Column('collection_date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('payment_method', sa.String(), nullable=False),
        sa.Column('received_by', sa.String(), nullable=True),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('created_by', sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['client_id'], ['bandwidth_clients.id'], ),
        sa.ForeignKeyConstraint(['invoice_id'], ['sales_invoices.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tenant_id', 'receipt_number', name='uq_bill_collections_tenant_number')
    )
    op.create_index(op.f('ix_bill_collections_id'), 'bill_collections', ['id'], unique=False)
    op.create_index(op.f('ix_bill_collections_tenant_id'), 'bill_collections', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_bill_collections_receipt_number'), 'bill_collections', ['receipt_number'], unique=False)
    op.create_index(op.f('ix_bill_collections_invoice_id'), 'bill_collections', ['invoice_id'], unique=False)

    op.create_table(
        'provider_payments',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('payment_number', sa.String(), nullable=False),
        sa.Column('provider_id', sa.Integer(), nullable=True),
        sa.Column('bill_id', sa.Integer(), nullable=True),
        sa.Column('payment_date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('payment_method', sa.String(), nullable=False),
        sa.Column('paid_by', sa.String(), nullable=True),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('created_by', sa.String(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['provider_id'], ['bandwidth_providers.id'], ),
        sa.ForeignKeyConstraint(['bill_id'], ['purchase_bills.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tenant_id', 'payment_number', name='uq_provider_payments_tenant_number')
    )
    op.create_index(op.f('ix_provider_payments_id'), 'provider_payments', ['id'], unique=False)
    op.create_index(op.f('ix_provider_payments_tenant_id'), 'provider_payments', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_provider_payments_payment_number'), 'provider_payments', ['payment_number'], unique=False)
    op.create_index(op.f('ix_provider_payments_bill_id'), 'provider_payments', ['bill_id'], unique=False)

    # Audit trail
    op.create_table(
        'activity_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.String(), nullable=False),
        sa.Column('user_identifier', sa.String(), nullable=True),
        sa.Column('action', sa.String(), nullable=False),
        sa.Column('entity_type', sa.String(), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=False),
        sa.Column('details', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_activity_logs_id'), 'activity_logs', ['id'], unique=False)
    op.create_index(op.f('ix_activity_logs_tenant_id'), 'activity_logs', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_activity_logs_action'), 'activity_logs', ['action'], unique=False)


def downgrade() -> None:
    op.drop_table('activity_logs')
    op.drop_table('provider_payments')
    op.drop_table('bill_collections')
    op.drop_table('sales_invoice_items')
    op.drop_table('sales_invoices')
    op.drop_table('purchase_bill_items')
    op.drop_table('purchase_bills')
    op.drop_table('bandwidth_clients')
    op.drop_table('bandwidth_providers')
    op.drop_table('bandwidth_items')
    op.drop_table('bandwidth_item_categories')
