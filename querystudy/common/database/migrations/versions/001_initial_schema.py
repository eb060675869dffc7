"""Initial schema: Create team and member tables

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "team",
        sa.Column("team_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.PrimaryKeyConstraint("team_id"),
    )

    # member.team_id 가 연관관계의 주인 (team 1 : N member)
    op.create_table(
        "member",
        sa.Column("member_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=255), nullable=True),
        sa.Column("age", sa.Integer(), nullable=False),
        sa.Column("team_id", sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(["team_id"], ["team.team_id"]),
        sa.PrimaryKeyConstraint("member_id"),
    )
    op.create_index("ix_member_team_id", "member", ["team_id"])


def downgrade() -> None:
    op.drop_index("ix_member_team_id", table_name="member")
    op.drop_table("member")
    op.drop_table("team")
