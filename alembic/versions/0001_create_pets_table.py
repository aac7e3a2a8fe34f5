"""create pets table

Revision ID: 0001_create_pets
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '0001_create_pets'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # _id / name / breed / gender / weight
    op.create_table(
        'pets',
        sa.Column('_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('breed', sa.Text(), nullable=True),
        sa.Column('gender', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Integer(), nullable=True, server_default='0'),
        sqlite_autoincrement=True,
    )


def downgrade() -> None:
    op.drop_table('pets')
