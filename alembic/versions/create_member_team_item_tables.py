"""create member, team, item tables

Revision ID: 3f9a2c61d0b4
Revises:
Create Date: 2026-10-19 10:12:07

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a2c61d0b4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'team',
        sa.Column('team_no', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('team_no', name='pk_team'),
    )

    op.create_table(
        'member',
        sa.Column('member_id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('username', sa.String(length=255), nullable=True),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('team_no', sa.Integer(), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_modified_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_by', sa.String(length=64), nullable=True),
        sa.Column('last_modified_by', sa.String(length=64), nullable=True),
        sa.ForeignKeyConstraint(['team_no'], ['team.team_no'], name='fk_member_team_no_team'),
        sa.PrimaryKeyConstraint('member_id', name='pk_member'),
    )
    op.create_index('ix_member_username', 'member', ['username'])

    op.create_table(
        'item',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('created_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('last_modified_date', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_item'),
    )


def downgrade() -> None:
    op.drop_table('item')
    op.drop_index('ix_member_username', table_name='member')
    op.drop_table('member')
    op.drop_table('team')
