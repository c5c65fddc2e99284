"""Presenters - turn catalog entities and service results into JSON view-data.

Invariants:
    - Presenters only read attributes that were loaded before the session closed
      (Book.author/genres and BookInstance.book load eagerly)
    - Every entity payload carries its canonical `url`
    - Derived values come from core/derived_fields.py, never from the models
"""

from typing import Any

from locallibrary.core.derived_fields import (
    author_lifespan,
    author_name,
    canonical_url,
    collection_url,
    format_date_med,
    format_iso_date,
)
from locallibrary.core.domain_types import BookInstanceStatus, EntityKind
from locallibrary.models import Author, Book, BookInstance, Genre
from locallibrary.services.catalog_kinds import descriptor_for
from locallibrary.services.catalog_service import EntityView, FormData

_VIEW_TITLES = {
    EntityKind.AUTHOR: ("Author List", "Author Detail", "Delete Author"),
    EntityKind.GENRE: ("Genre List", "Genre Detail", "Delete Genre"),
    EntityKind.BOOK: ("Book List", None, "Delete Book"),
    EntityKind.BOOK_INSTANCE: ("Book Instance List", "Book:", "Delete Book Instance"),
}


def present_author(author: Author) -> dict:
    return {
        "id": str(author.id),
        "first_name": author.first_name,
        "family_name": author.family_name,
        "name": author_name(author.first_name, author.family_name),
        "date_of_birth": format_iso_date(author.date_of_birth),
        "date_of_death": format_iso_date(author.date_of_death),
        "date_of_birth_formatted": format_date_med(author.date_of_birth),
        "date_of_death_formatted": format_date_med(author.date_of_death),
        "lifespan": author_lifespan(author.date_of_birth, author.date_of_death),
        "url": canonical_url(EntityKind.AUTHOR, author.id),
    }


def present_genre(genre: Genre) -> dict:
    return {
        "id": str(genre.id),
        "name": genre.name,
        "url": canonical_url(EntityKind.GENRE, genre.id),
    }


def present_book(book: Book) -> dict:
    return {
        "id": str(book.id),
        "title": book.title,
        "summary": book.summary,
        "isbn": book.isbn,
        "author_id": str(book.author_id),
        "author": {
            "id": str(book.author.id),
            "name": author_name(book.author.first_name, book.author.family_name),
            "url": canonical_url(EntityKind.AUTHOR, book.author.id),
        },
        "genres": [present_genre(g) for g in book.genres],
        "url": canonical_url(EntityKind.BOOK, book.id),
    }


def present_book_instance(copy: BookInstance) -> dict:
    return {
        "id": str(copy.id),
        "imprint": copy.imprint,
        "status": copy.status,
        "due_back": format_iso_date(copy.due_back),
        "due_back_formatted": format_date_med(copy.due_back),
        "book_id": str(copy.book_id),
        "book": {
            "id": str(copy.book.id),
            "title": copy.book.title,
            "url": canonical_url(EntityKind.BOOK, copy.book.id),
        },
        "url": canonical_url(EntityKind.BOOK_INSTANCE, copy.id),
    }


_PRESENTERS = {
    EntityKind.AUTHOR: present_author,
    EntityKind.GENRE: present_genre,
    EntityKind.BOOK: present_book,
    EntityKind.BOOK_INSTANCE: present_book_instance,
}

_DEPENDENT_KINDS = {
    EntityKind.AUTHOR: EntityKind.BOOK,
    EntityKind.GENRE: EntityKind.BOOK,
    EntityKind.BOOK: EntityKind.BOOK_INSTANCE,
}


def present_entity(kind: EntityKind, entity: Any) -> dict:
    return _PRESENTERS[kind](entity)


def present_list(kind: EntityKind, entities: list) -> dict:
    return {
        "title": _VIEW_TITLES[kind][0],
        "items": [present_entity(kind, e) for e in entities],
        "url": collection_url(kind),
    }


def present_view(view: EntityView) -> dict:
    """Detail view: the entity under its kind key plus its dependents."""
    desc = descriptor_for(view.kind)
    payload = present_entity(view.kind, view.entity)
    title = _VIEW_TITLES[view.kind][1] or payload.get("title")
    body: dict = {"title": title, view.kind.value: payload}
    if desc.dependents_key is not None:
        dep_kind = _DEPENDENT_KINDS[view.kind]
        body[desc.dependents_key] = [
            present_entity(dep_kind, d) for d in view.dependents
        ]
    return body


def present_delete_view(view: EntityView) -> dict:
    """Confirm view: same aggregate as detail, flagged when dependents block deletion."""
    body = present_view(view)
    body["title"] = _VIEW_TITLES[view.kind][2]
    body["blocked"] = bool(view.dependents)
    return body


def present_form(form: FormData) -> dict:
    """Form view-data. Book genre options are marked `checked` when already linked."""
    verb = "Update" if form.entity is not None else "Create"
    desc = descriptor_for(form.kind)
    body: dict = {
        "title": f"{verb} {desc.label}",
        form.kind.value: (
            present_entity(form.kind, form.entity) if form.entity is not None else None
        ),
    }
    if "authors" in form.options:
        body["authors"] = [present_author(a) for a in form.options["authors"]]
    if "genres" in form.options:
        linked = (
            {g.id for g in form.entity.genres} if form.entity is not None else set()
        )
        body["genres"] = [
            {**present_genre(g), "checked": g.id in linked}
            for g in form.options["genres"]
        ]
    if "books" in form.options:
        body["books"] = [present_book(b) for b in form.options["books"]]
    if form.kind == EntityKind.BOOK_INSTANCE:
        body["statuses"] = [s.value for s in BookInstanceStatus]
    return body


def present_rejected_form(
    kind: EntityKind, options: dict[str, list], submitted: dict, updating: bool,
) -> dict:
    """Form view-data re-presented with a failed submission.

    Genre options are checked from the submitted genre ids, not the stored links.
    """
    body = present_form(FormData(kind, None, options))
    if updating:
        body["title"] = f"Update {descriptor_for(kind).label}"
    chosen = {str(g) for g in submitted.get("genre") or ()}
    for genre in body.get("genres", ()):
        genre["checked"] = genre["id"] in chosen
    return body
