"""Create catalogue, quote, daily quote and session tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

Timestamps are INTEGER epoch seconds on both SQLite and PostgreSQL (see
meigen/models/types.py). Foreign keys cascade on hard delete; the
application itself only ever soft-deletes.

Rollback: downgrade() drops every table (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.Integer(), nullable=False),
        sa.Column("deleted_at", sa.Integer(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_categories"),
        sa.UniqueConstraint("name", name="uq_categories_name"),
    )

    op.create_table(
        "subcategories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_subcategories"),
        sa.ForeignKeyConstraint(
            ["category_id"], ["categories.id"], ondelete="CASCADE",
        ),
    )
    op.create_index("subcategories_category_idx", "subcategories", ["category_id"])

    op.create_table(
        "authors",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_authors"),
        sa.UniqueConstraint("name", name="uq_authors_name"),
    )

    op.create_table(
        "quotes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("text_ja", sa.Text(), nullable=True),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("subcategory_id", sa.Integer(), nullable=False),
        sa.Column("background", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_quotes"),
        sa.ForeignKeyConstraint(["author_id"], ["authors.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["subcategory_id"], ["subcategories.id"], ondelete="CASCADE",
        ),
    )
    op.create_index("quotes_author_idx", "quotes", ["author_id"])
    op.create_index("quotes_subcategory_idx", "quotes", ["subcategory_id"])
    op.create_index("quotes_created_at_idx", "quotes", ["created_at"])

    op.create_table(
        "daily_quotes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("quote_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_daily_quotes"),
        sa.ForeignKeyConstraint(["quote_id"], ["quotes.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "daily_quotes_date_quote_idx", "daily_quotes", ["date", "quote_id"], unique=True,
    )
    op.create_index("daily_quotes_date_idx", "daily_quotes", ["date"])

    op.create_table(
        "sessions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("token", sa.String(length=128), nullable=False),
        sa.Column("expires_at", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_sessions"),
        sa.UniqueConstraint("token", name="uq_sessions_token"),
    )


def downgrade() -> None:
    op.drop_table("sessions")
    op.drop_index("daily_quotes_date_idx", table_name="daily_quotes")
    op.drop_index("daily_quotes_date_quote_idx", table_name="daily_quotes")
    op.drop_table("daily_quotes")
    op.drop_index("quotes_created_at_idx", table_name="quotes")
    op.drop_index("quotes_subcategory_idx", table_name="quotes")
    op.drop_index("quotes_author_idx", table_name="quotes")
    op.drop_table("quotes")
    op.drop_table("authors")
    op.drop_index("subcategories_category_idx", table_name="subcategories")
    op.drop_table("subcategories")
    op.drop_table("categories")
