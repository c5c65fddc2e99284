"""BookInstance ORM - one physical copy of a Book.

Invariants:
    - book_id is NOT NULL and restricts book deletion
    - status is one of BookInstanceStatus, default Maintenance
    - due_back defaults to the creation timestamp
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from locallibrary.core.domain_types import DEFAULT_BOOK_INSTANCE_STATUS
from locallibrary.db.base import Base


class BookInstance(Base):
    """Book copy entity - a leaf: nothing references it."""
    __tablename__ = "book_instances"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    book_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("books.id"), nullable=False, index=True,
    )
    imprint: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DEFAULT_BOOK_INSTANCE_STATUS.value,
    )
    due_back: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
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
    book: Mapped["Book"] = relationship("Book", lazy="selectin")

    def __repr__(self) -> str:
        return f"<BookInstance id={self.id} imprint='{self.imprint}'>"
