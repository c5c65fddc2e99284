"""Catalog schema - authors, genres, books, book_genres, book_instances.

Revision ID: 001_catalog
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_catalog"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "authors",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("family_name", sa.String(100), nullable=False),
        sa.Column("date_of_birth", sa.Date, nullable=True),
        sa.Column("date_of_death", sa.Date, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "genres",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "books",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("summary", sa.Text, nullable=False),
        sa.Column("isbn", sa.String(32), nullable=False),
        sa.Column("author_id", UUID(as_uuid=True), sa.ForeignKey("authors.id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_books_author_id", "books", ["author_id"])

    op.create_table(
        "book_genres",
        sa.Column("book_id", UUID(as_uuid=True), sa.ForeignKey("books.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("genre_id", UUID(as_uuid=True), sa.ForeignKey("genres.id"), primary_key=True),
    )

    op.create_table(
        "book_instances",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("book_id", UUID(as_uuid=True), sa.ForeignKey("books.id"), nullable=False),
        sa.Column("imprint", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Maintenance"),
        sa.Column("due_back", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        *_timestamps(),
    )
    op.create_index("ix_book_instances_book_id", "book_instances", ["book_id"])


def downgrade() -> None:
    op.drop_index("ix_book_instances_book_id", table_name="book_instances")
    op.drop_table("book_instances")
    op.drop_table("book_genres")
    op.drop_index("ix_books_author_id", table_name="books")
    op.drop_table("books")
    op.drop_table("genres")
    op.drop_table("authors")
