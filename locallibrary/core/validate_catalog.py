"""Catalog Field Validation - sanitizes and checks submitted form values per entity kind.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Every violated rule yields its own FieldError (never just the first)
    - Sanitization is whitespace trimming only; escaping belongs to the presentation layer
    - ValidatedForm.values holds parsed, storage-ready values keyed by ORM attribute name
    - ValidatedForm.submitted holds the trimmed strings for re-presenting the form
    - Dates must be ISO-8601 calendar dates; absent optional dates become None

Design Decisions:
    - Return ValidatedForm (not raise): the service decides whether to raise
      CatalogValidationError, keeping these rules testable without mocks
    - Referential existence (author, book, genres) is NOT checked here: it needs the DB
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Mapping
from uuid import UUID

from locallibrary.core.domain_types import (
    BookInstanceStatus, DEFAULT_BOOK_INSTANCE_STATUS,
)
from locallibrary.core.errors import FieldError

NAME_MAX_LENGTH = 100
GENRE_NAME_MIN_LENGTH = 3
GENRE_NAME_MAX_LENGTH = 100


@dataclass
class ValidatedForm:
    """Outcome of validating one submission."""
    values: dict[str, Any] = field(default_factory=dict)
    submitted: dict[str, Any] = field(default_factory=dict)
    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


# ─── Sanitizers / parsers ───────────────────────────────────────

def trim(value: Any) -> str:
    """Coerce a submitted value to a stripped string ('' for None)."""
    if value is None:
        return ""
    return str(value).strip()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 date or date-time. Raises ValueError when invalid."""
    return datetime.fromisoformat(value)


def parse_optional_date(value: str) -> date | None:
    """'' -> None, otherwise the calendar date of the ISO value."""
    if not value:
        return None
    return parse_iso_datetime(value).date()


def parse_identifier(value: str) -> UUID:
    """Parse an entity identifier. Raises ValueError when malformed."""
    return UUID(value)


def is_alphanumeric(value: str) -> bool:
    """ASCII letters and digits only; the empty string is not alphanumeric."""
    return value.isascii() and value.isalnum()


# ─── Per-kind validators ────────────────────────────────────────

def _check_person_name(key: str, label: str, value: str) -> list[FieldError]:
    errors = []
    if len(value) < 1:
        errors.append(FieldError(key, f"{label} must be specified."))
    if len(value) > NAME_MAX_LENGTH:
        errors.append(FieldError(
            key, f"{label} must not exceed {NAME_MAX_LENGTH} characters.",
        ))
    if not is_alphanumeric(value):
        errors.append(FieldError(key, f"{label} has non-alphanumeric characters."))
    return errors


def _check_date(
    form: ValidatedForm, key: str, message: str,
) -> None:
    raw = form.submitted[key]
    try:
        form.values[key] = parse_optional_date(raw)
    except ValueError:
        form.values[key] = None
        form.errors.append(FieldError(key, message))


def validate_author(data: Mapping[str, Any]) -> ValidatedForm:
    """Author: both names 1-100 alphanumeric chars; optional ISO birth/death dates."""
    form = ValidatedForm(submitted={
        "first_name": trim(data.get("first_name")),
        "family_name": trim(data.get("family_name")),
        "date_of_birth": trim(data.get("date_of_birth")) or None,
        "date_of_death": trim(data.get("date_of_death")) or None,
    })
    for key, label in (("first_name", "First name"), ("family_name", "Family name")):
        form.errors.extend(_check_person_name(key, label, form.submitted[key]))
        form.values[key] = form.submitted[key]

    _check_date(form, "date_of_birth", "Invalid date of birth")
    _check_date(form, "date_of_death", "Invalid date of death")
    return form


def validate_genre(data: Mapping[str, Any]) -> ValidatedForm:
    """Genre: name between 3 and 100 characters inclusive."""
    name = trim(data.get("name"))
    form = ValidatedForm(submitted={"name": name}, values={"name": name})
    if len(name) < GENRE_NAME_MIN_LENGTH:
        form.errors.append(FieldError(
            "name",
            f"Genre name must contain at least {GENRE_NAME_MIN_LENGTH} characters",
        ))
    if len(name) > GENRE_NAME_MAX_LENGTH:
        form.errors.append(FieldError(
            "name",
            f"Genre name must not exceed {GENRE_NAME_MAX_LENGTH} characters",
        ))
    return form


def normalize_genre_ids(raw: Any) -> list[str]:
    """Accept a single id or a list of ids; drop blanks and duplicates, keep order."""
    if raw is None:
        return []
    if isinstance(raw, (str, UUID)):
        raw = [raw]
    seen: list[str] = []
    for item in raw:
        value = trim(item)
        if value and value not in seen:
            seen.append(value)
    return seen


def validate_book(data: Mapping[str, Any]) -> ValidatedForm:
    """Book: title, author, summary and ISBN required; genre ids must be identifiers."""
    form = ValidatedForm(submitted={
        "title": trim(data.get("title")),
        "author_id": trim(data.get("author_id")),
        "summary": trim(data.get("summary")),
        "isbn": trim(data.get("isbn")),
        "genre": normalize_genre_ids(data.get("genre")),
    })
    required = (
        ("title", "Title must not be empty."),
        ("author_id", "Author must not be empty."),
        ("summary", "Summary must not be empty."),
        ("isbn", "ISBN must not be empty"),
    )
    for key, message in required:
        if not form.submitted[key]:
            form.errors.append(FieldError(key, message))
        form.values[key] = form.submitted[key]

    if form.submitted["author_id"]:
        try:
            form.values["author_id"] = parse_identifier(form.submitted["author_id"])
        except ValueError:
            form.errors.append(FieldError("author_id", "Invalid author."))

    genre_ids: list[UUID] = []
    for raw in form.submitted["genre"]:
        try:
            genre_ids.append(parse_identifier(raw))
        except ValueError:
            form.errors.append(FieldError("genre", "Invalid genre."))
            break
    form.values["genre_ids"] = genre_ids
    return form


def validate_book_instance(
    data: Mapping[str, Any], now: datetime,
) -> ValidatedForm:
    """BookInstance: book and imprint required; status enumerated; due_back ISO or now."""
    form = ValidatedForm(submitted={
        "book_id": trim(data.get("book_id")),
        "imprint": trim(data.get("imprint")),
        "status": trim(data.get("status")) or DEFAULT_BOOK_INSTANCE_STATUS.value,
        "due_back": trim(data.get("due_back")) or None,
    })
    if not form.submitted["book_id"]:
        form.errors.append(FieldError("book_id", "Book must be specified"))
    else:
        try:
            form.values["book_id"] = parse_identifier(form.submitted["book_id"])
        except ValueError:
            form.errors.append(FieldError("book_id", "Invalid book."))

    if not form.submitted["imprint"]:
        form.errors.append(FieldError("imprint", "Imprint must be specified"))
    form.values["imprint"] = form.submitted["imprint"]

    try:
        form.values["status"] = BookInstanceStatus(form.submitted["status"]).value
    except ValueError:
        form.errors.append(FieldError("status", "Invalid status"))

    due_back = form.submitted["due_back"]
    if due_back is None:
        form.values["due_back"] = now
    else:
        try:
            parsed = parse_iso_datetime(due_back)
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            form.values["due_back"] = parsed
        except ValueError:
            form.errors.append(FieldError("due_back", "Invalid date"))
    return form
