"""Entity Kind Descriptors - per-kind catalog behavior expressed as data.

Invariants:
    - Exactly one descriptor per EntityKind (KINDS covers the enum)
    - order_by names the display field lists sort on, ascending
    - dependents(entity_id) selects the rows shown on detail/delete views;
      the same query drives the delete guard. None means a leaf kind (no guard)
    - references name the foreign rows that must exist before a write
    - eager_loads name the relationships loaded with every list, detail and
      write result; presenters read them after the session has closed

Design Decisions:
    - Descriptors instead of four hand-written flows: CatalogService is generic
      and only the Book genre set and Genre find-or-create are special-cased
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Mapping
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from locallibrary.core.domain_types import EntityKind
from locallibrary.core.validate_catalog import (
    ValidatedForm,
    validate_author,
    validate_book,
    validate_book_instance,
    validate_genre,
)
from locallibrary.db.base import Base
from locallibrary.models import Author, Book, BookInstance, Genre, book_genres


@dataclass(frozen=True)
class Reference:
    """A foreign row a submission points at.

    value_key is the ValidatedForm.values key holding the id (or list of ids
    when many=True); error_field/message form the FieldError when it is missing.
    """
    value_key: str
    model: type[Base]
    error_field: str
    message: str
    many: bool = False


@dataclass(frozen=True)
class KindDescriptor:
    kind: EntityKind
    label: str
    model: type[Base]
    order_by: str
    validate: Callable[[Mapping[str, Any], datetime], ValidatedForm]
    references: tuple[Reference, ...] = ()
    dependents: Callable[[UUID], Select] | None = None
    dependents_key: str | None = None
    eager_loads: tuple[str, ...] = ()
    # values keys that are not plain columns (handled by the service)
    non_column_values: frozenset[str] = field(default_factory=frozenset)

    def load_options(self) -> list:
        return [selectinload(getattr(self.model, name)) for name in self.eager_loads]

    def ordered(self) -> Select:
        return (
            select(self.model)
            .options(*self.load_options())
            .order_by(getattr(self.model, self.order_by).asc())
        )


def _books_by_author(author_id: UUID) -> Select:
    return (
        select(Book).where(Book.author_id == author_id).order_by(Book.title.asc())
    )


def _books_in_genre(genre_id: UUID) -> Select:
    return (
        select(Book)
        .join(book_genres, book_genres.c.book_id == Book.id)
        .where(book_genres.c.genre_id == genre_id)
        .order_by(Book.title.asc())
    )


def _copies_of_book(book_id: UUID) -> Select:
    return (
        select(BookInstance)
        .where(BookInstance.book_id == book_id)
        .order_by(BookInstance.imprint.asc())
    )


AUTHOR = KindDescriptor(
    kind=EntityKind.AUTHOR,
    label="Author",
    model=Author,
    order_by="family_name",
    validate=lambda data, now: validate_author(data),
    dependents=_books_by_author,
    dependents_key="books",
)

GENRE = KindDescriptor(
    kind=EntityKind.GENRE,
    label="Genre",
    model=Genre,
    order_by="name",
    validate=lambda data, now: validate_genre(data),
    dependents=_books_in_genre,
    dependents_key="books",
)

BOOK = KindDescriptor(
    kind=EntityKind.BOOK,
    label="Book",
    model=Book,
    order_by="title",
    validate=lambda data, now: validate_book(data),
    references=(
        Reference("author_id", Author, "author_id", "Author not found."),
        Reference("genre_ids", Genre, "genre", "Invalid genre.", many=True),
    ),
    dependents=_copies_of_book,
    dependents_key="copies",
    eager_loads=("author", "genres"),
    non_column_values=frozenset({"genre_ids"}),
)

BOOK_INSTANCE = KindDescriptor(
    kind=EntityKind.BOOK_INSTANCE,
    label="BookInstance",
    model=BookInstance,
    order_by="imprint",
    validate=validate_book_instance,
    references=(
        Reference("book_id", Book, "book_id", "Book not found."),
    ),
    eager_loads=("book",),
)

KINDS: dict[EntityKind, KindDescriptor] = {
    d.kind: d for d in (AUTHOR, GENRE, BOOK, BOOK_INSTANCE)
}


def descriptor_for(kind: EntityKind | str) -> KindDescriptor:
    return KINDS[EntityKind(kind)]
