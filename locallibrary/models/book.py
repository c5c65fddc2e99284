"""Book ORM - a title written by exactly one Author, tagged with zero or more Genres.

Invariants:
    - author_id is NOT NULL and restricts author deletion
    - book_genres has a composite primary key: a genre is linked at most once
    - book_genres rows are removed together with their book

Design Decisions:
    - author and genres load with selectin: every Book leaving a session is
      fully populated (sessions close before presenters run)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from locallibrary.db.base import Base

book_genres = Table(
    "book_genres",
    Base.metadata,
    Column(
        "book_id", UUID(as_uuid=True),
        ForeignKey("books.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "genre_id", UUID(as_uuid=True),
        ForeignKey("genres.id"), primary_key=True,
    ),
)


class Book(Base):
    """Book entity."""
    __tablename__ = "books"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    isbn: Mapped[str] = mapped_column(String(32), nullable=False)
    author_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("authors.id"), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    author: Mapped["Author"] = relationship("Author", lazy="selectin")
    genres: Mapped[list["Genre"]] = relationship(
        "Genre", secondary=book_genres, lazy="selectin",
        order_by="Genre.name",
    )

    def __repr__(self) -> str:
        return f"<Book id={self.id} title='{self.title}'>"
