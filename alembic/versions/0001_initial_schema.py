"""initial booking schema

Revision ID: initial_schema_001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'initial_schema_001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


MONEY = sa.Numeric(precision=18, scale=6)
RATE = sa.Numeric(precision=12, scale=6)

quote_status = sa.Enum('DRAFT', 'SENT', 'ACCEPTED', 'REJECTED', name='quotestatus')
currency_code = sa.Enum('MXN', 'USD', 'GBP', 'EUR', 'CAD', name='currencycode')
discount_type = sa.Enum('PERCENT', 'AMOUNT', name='discounttype')
template_type = sa.Enum('CONTRACT', 'QUESTIONNAIRE', name='templatetype')
invoice_status = sa.Enum('DRAFT', 'SENT', 'PAID', 'OVERDUE', 'CANCELLED', name='invoicestatus')
invoice_type = sa.Enum('STANDARD', name='invoicetype')
contract_status = sa.Enum('DRAFT', 'SENT', 'SIGNED', name='contractstatus')
questionnaire_status = sa.Enum('PENDING', 'COMPLETED', name='questionnairestatus')


def timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'clients',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('first_name', sa.String(120), nullable=False),
        sa.Column('last_name', sa.String(120), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('zip_code', sa.String(20), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *timestamps(),
    )

    op.create_table(
        'venues',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('zip_code', sa.String(20), nullable=True),
        sa.Column('website', sa.String(255), nullable=True),
        *timestamps(),
    )

    op.create_table(
        'planners',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('company', sa.String(255), nullable=True),
        sa.Column('first_name', sa.String(120), nullable=True),
        sa.Column('last_name', sa.String(120), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('instagram', sa.String(120), nullable=True),
        *timestamps(),
    )

    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('clients.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('venue_id', sa.Integer(), sa.ForeignKey('venues.id', ondelete='SET NULL'), nullable=True),
        sa.Column('planner_id', sa.Integer(), sa.ForeignKey('planners.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', sa.String(100), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('guest_count', sa.Integer(), nullable=True),
        sa.Column('start_time', sa.String(8), nullable=True),
        sa.Column('end_time', sa.String(8), nullable=True),
        sa.Column('setup_time', sa.String(8), nullable=True),
        sa.Column('arrive_venue_time', sa.String(8), nullable=True),
        sa.Column('venue_name', sa.String(255), nullable=True),
        sa.Column('venue_address', sa.Text(), nullable=True),
        sa.Column('venue_sub_location', sa.String(255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *timestamps(),
    )
    op.create_index('ix_events_client_id', 'events', ['client_id'])

    op.create_table(
        'templates',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('type', template_type, nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_templates_type', 'templates', ['type'])

    op.create_table(
        'payment_schedules',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        sa.Column('milestones', sa.JSON(), nullable=False),
        *timestamps(),
    )

    op.create_table(
        'quotes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('clients.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id', ondelete='SET NULL'), nullable=True),
        sa.Column('quote_number', sa.String(50), nullable=False),
        sa.Column('status', quote_status, nullable=False),
        sa.Column('valid_until', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('currency', currency_code, nullable=False),
        sa.Column('exchange_rate', RATE, nullable=False),
        sa.Column('discount_type', discount_type, nullable=False),
        sa.Column('discount_value', MONEY, nullable=False),
        sa.Column('subtotal', MONEY, nullable=False),
        sa.Column('discount_amount', MONEY, nullable=False),
        sa.Column('total_amount', MONEY, nullable=False),
        sa.Column('total_foreign', MONEY, nullable=False),
        sa.Column('questionnaire_template_id', sa.String(64), nullable=True),
        sa.Column('contract_template_id', sa.Integer(), sa.ForeignKey('templates.id', ondelete='SET NULL'), nullable=True),
        sa.Column(
            'payment_plan_template_id',
            sa.Integer(),
            sa.ForeignKey('payment_schedules.id', ondelete='SET NULL'),
            nullable=True,
        ),
        *timestamps(),
    )
    op.create_index('ix_quotes_client_id', 'quotes', ['client_id'])
    op.create_index('ix_quotes_event_id', 'quotes', ['event_id'])
    op.create_index('ix_quotes_quote_number', 'quotes', ['quote_number'], unique=True)

    op.create_table(
        'quote_items',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('quote_id', sa.Integer(), sa.ForeignKey('quotes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('quantity', MONEY, nullable=False),
        sa.Column('unit_price', MONEY, nullable=False),
        sa.Column('cost', MONEY, nullable=False),
        sa.Column('total', MONEY, nullable=False),
        sa.Column('is_taxable', sa.Boolean(), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_quote_items_quote_id', 'quote_items', ['quote_id'])

    op.create_table(
        'quote_taxes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('quote_id', sa.Integer(), sa.ForeignKey('quotes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('rate', RATE, nullable=False),
        sa.Column('amount', MONEY, nullable=False),
        sa.Column('is_retention', sa.Boolean(), nullable=False),
        *timestamps(),
    )
    op.create_index('ix_quote_taxes_quote_id', 'quote_taxes', ['quote_id'])

    op.create_table(
        'invoices',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('quote_id', sa.Integer(), sa.ForeignKey('quotes.id', ondelete='SET NULL'), nullable=True),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('clients.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id', ondelete='SET NULL'), nullable=True),
        sa.Column('invoice_number', sa.String(50), nullable=False),
        sa.Column('status', invoice_status, nullable=False),
        sa.Column('type', invoice_type, nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('total_amount', MONEY, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
    )
    op.create_index('ix_invoices_quote_id', 'invoices', ['quote_id'])
    op.create_index('ix_invoices_client_id', 'invoices', ['client_id'])
    op.create_index('ix_invoices_invoice_number', 'invoices', ['invoice_number'])

    op.create_table(
        'invoice_items',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('invoice_id', sa.Integer(), sa.ForeignKey('invoices.id', ondelete='CASCADE'), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('amount', MONEY, nullable=False),
        *timestamps(),
    )
    op.create_index('ix_invoice_items_invoice_id', 'invoice_items', ['invoice_id'])

    op.create_table(
        'contracts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('quote_id', sa.Integer(), sa.ForeignKey('quotes.id', ondelete='SET NULL'), nullable=True),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('clients.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id', ondelete='SET NULL'), nullable=True),
        sa.Column('template_id', sa.Integer(), sa.ForeignKey('templates.id', ondelete='SET NULL'), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('status', contract_status, nullable=False),
        sa.Column('document_version', sa.Integer(), nullable=False),
        sa.Column('signed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('signed_by', sa.String(255), nullable=True),
        *timestamps(),
    )
    op.create_index('ix_contracts_quote_id', 'contracts', ['quote_id'])
    op.create_index('ix_contracts_client_id', 'contracts', ['client_id'])

    op.create_table(
        'questionnaires',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('quote_id', sa.Integer(), sa.ForeignKey('quotes.id', ondelete='SET NULL'), nullable=True),
        sa.Column('client_id', sa.Integer(), sa.ForeignKey('clients.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id', ondelete='SET NULL'), nullable=True),
        sa.Column('template_id', sa.String(64), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('status', questionnaire_status, nullable=False),
        sa.Column('answers', sa.JSON(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
    )
    op.create_index('ix_questionnaires_quote_id', 'questionnaires', ['quote_id'])
    op.create_index('ix_questionnaires_client_id', 'questionnaires', ['client_id'])


def downgrade() -> None:
    op.drop_table('questionnaires')
    op.drop_table('contracts')
    op.drop_table('invoice_items')
    op.drop_table('invoices')
    op.drop_table('quote_taxes')
    op.drop_table('quote_items')
    op.drop_table('quotes')
    op.drop_table('payment_schedules')
    op.drop_table('templates')
    op.drop_table('events')
    op.drop_table('planners')
    op.drop_table('venues')
    op.drop_table('clients')

    bind = op.get_bind()
    for enum in (
        questionnaire_status,
        contract_status,
        invoice_type,
        invoice_status,
        template_type,
        discount_type,
        currency_code,
        quote_status,
    ):
        enum.drop(bind, checkfirst=True)
