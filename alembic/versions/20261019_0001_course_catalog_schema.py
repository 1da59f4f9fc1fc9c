"""Course catalog schema: id counter, courses, access control ledger

Revision ID: 0001
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Id counter cell
    op.create_table(
        'id_counters',
        sa.Column('name', sa.String(64), primary_key=True),
        sa.Column('value', sa.BigInteger(), nullable=False, default=0),
    )

    # Course table, keyed by issued id
    op.create_table(
        'courses',
        sa.Column('id', sa.BigInteger(), primary_key=True, autoincrement=False),
        sa.Column('creator_address', sa.String(255), nullable=False),
        sa.Column('creator_name', sa.String(255), nullable=False),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('attachment_url', sa.Text(), nullable=False),
        sa.Column('keyword', sa.String(255), nullable=False),
        sa.Column('category', sa.String(255), nullable=False),
        sa.Column('contact', sa.String(255), nullable=False),
        sa.Column('created_at', sa.BigInteger(), nullable=False),
        sa.Column('updated_at', sa.BigInteger(), nullable=True),
    )
    op.create_index('ix_courses_creator_address', 'courses', ['creator_address'])
    op.create_index('ix_courses_keyword', 'courses', ['keyword'])
    op.create_index('ix_courses_category', 'courses', ['category'])

    # Access control ledger
    op.create_table(
        'ledger_admin',
        sa.Column('slot', sa.Integer(), primary_key=True, autoincrement=False),
        sa.Column('address', sa.String(255), nullable=False),
        sa.Column('assigned_at', sa.BigInteger(), nullable=False),
    )
    op.create_table(
        'ledger_moderators',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('address', sa.String(255), nullable=False, unique=True),
        sa.Column('added_at', sa.BigInteger(), nullable=False),
    )
    op.create_table(
        'ledger_banned',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('address', sa.String(255), nullable=False, unique=True),
        sa.Column('banned_at', sa.BigInteger(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('ledger_banned')
    op.drop_table('ledger_moderators')
    op.drop_table('ledger_admin')
    op.drop_index('ix_courses_category', table_name='courses')
    op.drop_index('ix_courses_keyword', table_name='courses')
    op.drop_index('ix_courses_creator_address', table_name='courses')
    op.drop_table('courses')
    op.drop_table('id_counters')
