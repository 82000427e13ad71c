"""create ledger tables

Revision ID: 3f2a9c1d7e04
Revises:
Create Date: 2026-10-12 18:04:11.512230

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7e04'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'groups',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('created_by', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_groups_id', 'groups', ['id'])

    op.create_table(
        'group_members',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), server_default=sa.func.now()),

        sa.ForeignKeyConstraint(
            ['group_id'],
            ['groups.id'],
            ondelete='CASCADE',
        ),

        sa.UniqueConstraint('group_id', 'email', name='uq_group_member_email'),
    )
    op.create_index('ix_group_members_id', 'group_members', ['id'])
    op.create_index('ix_group_members_email', 'group_members', ['email'])

    op.create_table(
        'expenses',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('amount_cents', sa.BigInteger(), nullable=False),
        sa.Column('paid_by', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),

        sa.ForeignKeyConstraint(
            ['group_id'],
            ['groups.id'],
            ondelete='CASCADE',
        ),
    )
    op.create_index('ix_expenses_id', 'expenses', ['id'])
    op.create_index('ix_expenses_group_id', 'expenses', ['group_id'])

    op.create_table(
        'expense_splits',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('expense_id', sa.Integer(), nullable=False),
        sa.Column('member_email', sa.String(), nullable=False),
        sa.Column('amount_cents', sa.BigInteger(), nullable=False),

        sa.ForeignKeyConstraint(
            ['expense_id'],
            ['expenses.id'],
            ondelete='CASCADE',
        ),
    )
    op.create_index('ix_expense_splits_expense_id', 'expense_splits', ['expense_id'])


def downgrade() -> None:
    op.drop_table('expense_splits')
    op.drop_table('expenses')
    op.drop_table('group_members')
    op.drop_table('groups')
