"""create family finance tables

Revision ID: 0001ffa1b2c3
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001ffa1b2c3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _money(name: str, scale: int = 2, **kwargs) -> sa.Column:
    return sa.Column(name, sa.Numeric(precision=20, scale=scale), nullable=False, **kwargs)


def upgrade() -> None:
    op.create_table(
        'user_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('account_id', sa.Integer(), nullable=False, unique=True),
        sa.Column('name', sa.String(255), nullable=False),
        _money('monthly_income'),
        sa.Column('dependents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'budget_categories',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('account_id', sa.Integer(), nullable=False, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        _money('budgeted_amount'),
        sa.Column('type', sa.String(16), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
    )

    op.create_table(
        'transactions',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('account_id', sa.Integer(), nullable=False, index=True),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('category_id', sa.String(36), nullable=False, index=True),
        _money('amount'),
        sa.Column('type', sa.String(16), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('month', sa.String(7), nullable=False),
    )
    op.create_index('ix_transactions_account_month', 'transactions', ['account_id', 'month'])

    op.create_table(
        'savings_goals',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('account_id', sa.Integer(), nullable=False, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        _money('target_amount'),
        _money('current_amount', server_default='0'),
        _money('monthly_contribution', server_default='0'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'ipp_accounts',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('account_id', sa.Integer(), nullable=False, unique=True),
        _money('current_balance', server_default='0'),
        _money('monthly_contribution', server_default='0'),
        _money('total_contributions', server_default='0'),
        sa.Column('tax_relief_rate', sa.Numeric(precision=5, scale=4), nullable=False),
        _money('realized_value', server_default='0'),
        sa.Column('last_updated', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'assets',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('account_id', sa.Integer(), nullable=False, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        _money('amount'),
        sa.Column('type', sa.String(16), nullable=False),
        sa.Column('category', sa.String(64), nullable=False, server_default='other'),
        sa.Column('last_updated', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'investments',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('account_id', sa.Integer(), nullable=False, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('type', sa.String(32), nullable=False),
        _money('units', scale=4),
        _money('purchase_price', scale=4),
        _money('current_price', scale=4),
        sa.Column('purchase_date', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('last_updated', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'additional_income',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('account_id', sa.Integer(), nullable=False, index=True),
        sa.Column('date', sa.DateTime(), nullable=False),
        _money('amount'),
        sa.Column('source', sa.String(128), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('month', sa.String(7), nullable=False),
        sa.Column('deleted', sa.Boolean(), nullable=False, server_default='false'),
    )
    op.create_index('ix_additional_income_account_month', 'additional_income', ['account_id', 'month'])

    op.create_table(
        'monthly_snapshots',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('account_id', sa.Integer(), nullable=False, index=True),
        sa.Column('month', sa.String(7), nullable=False),
        _money('income'),
        _money('total_expenses'),
        _money('total_savings'),
        _money('ipp_contributions'),
        _money('net_worth'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint('account_id', 'month', name='uq_snapshot_account_month'),
    )


def downgrade() -> None:
    op.drop_table('monthly_snapshots')
    op.drop_index('ix_additional_income_account_month', table_name='additional_income')
    op.drop_table('additional_income')
    op.drop_table('investments')
    op.drop_table('assets')
    op.drop_table('ipp_accounts')
    op.drop_table('savings_goals')
    op.drop_index('ix_transactions_account_month', table_name='transactions')
    op.drop_table('transactions')
    op.drop_table('budget_categories')
    op.drop_table('user_profiles')
