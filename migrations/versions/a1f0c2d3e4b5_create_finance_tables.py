"""create users, wallets, categories, expenses, budgets

Revision ID: a1f0c2d3e4b5
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa


revision = 'a1f0c2d3e4b5'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('username', sa.String(64), primary_key=True),
        sa.Column('full_name', sa.String(255), nullable=False, server_default=''),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('password_changed_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        'wallets',
        sa.Column('id', sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column('owner', sa.String(64), sa.ForeignKey('users.username', ondelete='RESTRICT'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_wallets_owner', 'wallets', ['owner'])

    # owner NULL = global category
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('owner', sa.String(64), sa.ForeignKey('users.username', ondelete='RESTRICT'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_categories_owner', 'categories', ['owner'])

    op.create_table(
        'expenses',
        sa.Column('id', sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column('wallet_id', sa.Integer(), sa.ForeignKey('wallets.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('amount', sa.BigInteger(), nullable=False),
        sa.Column('expense_description', sa.Text(), nullable=True),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id', ondelete='RESTRICT'), nullable=True),
        sa.Column('expense_date', sa.Date(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('amount > 0', name='ck_expenses_amount_positive'),
    )
    op.create_index('ix_expenses_wallet_id', 'expenses', ['wallet_id'])

    op.create_table(
        'budgets',
        sa.Column('id', sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column('wallet_id', sa.Integer(), sa.ForeignKey('wallets.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('amount', sa.BigInteger(), nullable=False),
        sa.Column('category_id', sa.Integer(), sa.ForeignKey('categories.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('amount > 0', name='ck_budgets_amount_positive'),
    )
    op.create_index('ix_budgets_wallet_id', 'budgets', ['wallet_id'])


def downgrade():
    op.drop_index('ix_budgets_wallet_id', 'budgets')
    op.drop_table('budgets')
    op.drop_index('ix_expenses_wallet_id', 'expenses')
    op.drop_table('expenses')
    op.drop_index('ix_categories_owner', 'categories')
    op.drop_table('categories')
    op.drop_index('ix_wallets_owner', 'wallets')
    op.drop_table('wallets')
    op.drop_table('users')
