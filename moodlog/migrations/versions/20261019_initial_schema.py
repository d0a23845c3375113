"""users and journal entries

Revision ID: 20261019_initial_schema
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_user_email", "user", ["email"], unique=True)

    op.create_table(
        "journal_entry",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("user.id"), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("mood_score", sa.Integer(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False, server_default=sa.text("'[]'")),
        sa.Column("text_index", sa.Text(), nullable=False, server_default=""),
        sa.Column("tags_index", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("mood_score BETWEEN 1 AND 10", name="ck_journal_entry_mood_score_range"),
    )
    op.create_index("ix_journal_entry_user_id", "journal_entry", ["user_id"])
    op.create_index("ix_journal_entry_user_created_at", "journal_entry", ["user_id", "created_at"])
    op.create_index("ix_journal_entry_user_mood_score", "journal_entry", ["user_id", "mood_score"])


def downgrade():
    op.drop_index("ix_journal_entry_user_mood_score", table_name="journal_entry")
    op.drop_index("ix_journal_entry_user_created_at", table_name="journal_entry")
    op.drop_index("ix_journal_entry_user_id", table_name="journal_entry")
    op.drop_table("journal_entry")
    op.drop_index("ix_user_email", table_name="user")
    op.drop_table("user")
