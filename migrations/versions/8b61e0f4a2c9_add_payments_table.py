"""add payments table

Revision ID: 8b61e0f4a2c9
Revises: 3f2a9c1d7e04
Create Date: 2026-10-14 09:41:52.087311

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8b61e0f4a2c9'
down_revision: Union[str, Sequence[str], None] = '3f2a9c1d7e04'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # existing groups simply have no payments yet
    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('group_id', sa.Integer(), nullable=False),
        sa.Column('from_member', sa.String(), nullable=False),
        sa.Column('to_member', sa.String(), nullable=False),
        sa.Column('amount_cents', sa.BigInteger(), nullable=False),
        sa.Column('expense_description', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),

        sa.ForeignKeyConstraint(
            ['group_id'],
            ['groups.id'],
            ondelete='CASCADE',
        ),
    )
    op.create_index('ix_payments_group_id', 'payments', ['group_id'])


def downgrade() -> None:
    op.drop_table('payments')
