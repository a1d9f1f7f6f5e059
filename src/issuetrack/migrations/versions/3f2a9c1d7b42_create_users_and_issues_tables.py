"""Create users and issues tables

Revision ID: 3f2a9c1d7b42
Revises: 
Create Date: 2026-10-19 10:12:41.306118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b42'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

STATUS_ENUM = sa.Enum('PENDING', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED', name='status')


def upgrade() -> None:
    """Upgrade schema."""
    users = op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_table(
        'issues',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('status', STATUS_ENUM, nullable=False),
        sa.Column('assignee_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['assignee_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    # Seed users, kept in step with issuetrack.models.user.SEED_USERS
    op.bulk_insert(
        users,
        [
            {'id': 1, 'name': '김개발'},
            {'id': 2, 'name': '이디자인'},
            {'id': 3, 'name': '박기획'},
        ],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('issues')
    op.drop_table('users')
