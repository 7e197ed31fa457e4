"""add identities and proxies tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('identities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('create_user', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('update_user', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('create_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('kind', sa.String(length=50), nullable=False, server_default=''),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('user', sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_table('proxies',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('create_user', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('update_user', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('create_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('enabled', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('kind', sa.String(length=10), nullable=False),
        sa.Column('host', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('port', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('excluded', sa.LargeBinary(), nullable=True),
        sa.Column('identity_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['identity_id'], ['identities.id'], ondelete='SET NULL'),
        sa.CheckConstraint("kind IN ('http', 'https')", name='ck_proxies_kind'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_proxies_kind', 'proxies', ['kind'])


def downgrade() -> None:
    op.drop_index('ix_proxies_kind', table_name='proxies')
    op.drop_table('proxies')
    op.drop_table('identities')
