"""Catalog Field Validation - tests for the pure per-kind validators.

Tests cover:
    - Author names: required, <= 100 chars, alphanumeric; every violation reported
    - Author dates: ISO-8601 or blank, field-specific messages
    - Genre name length bounds (3..100 inclusive)
    - Book required fields, identifier parsing, genre normalization
    - BookInstance status default/enumeration and due_back default/parsing
"""

from datetime import date, datetime, timezone
from uuid import uuid4

from locallibrary.core.validate_catalog import (
    normalize_genre_ids,
    validate_author,
    validate_book,
    validate_book_instance,
    validate_genre,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def _messages(form, field):
    return [e.message for e in form.errors if e.field == field]


# ─── validate_author ─────────────────────────────────────────────

def test_author_valid_submission_is_trimmed_and_parsed():
    form = validate_author({
        "first_name": "  Ursula ", "family_name": "LeGuin",
        "date_of_birth": "1929-10-21", "date_of_death": "",
    })
    assert form.is_valid
    assert form.values == {
        "first_name": "Ursula",
        "family_name": "LeGuin",
        "date_of_birth": date(1929, 10, 21),
        "date_of_death": None,
    }
    assert form.submitted["first_name"] == "Ursula"


def test_author_empty_first_name_reports_every_broken_rule():
    form = validate_author({"first_name": "   ", "family_name": "Smith"})
    assert _messages(form, "first_name") == [
        "First name must be specified.",
        "First name has non-alphanumeric characters.",
    ]
    assert _messages(form, "family_name") == []


def test_author_overlong_family_name_rejected():
    form = validate_author({"first_name": "Jo", "family_name": "x" * 101})
    assert not form.is_valid
    assert _messages(form, "family_name") == [
        "Family name must not exceed 100 characters.",
    ]


def test_author_name_of_exactly_100_chars_accepted():
    form = validate_author({"first_name": "a" * 100, "family_name": "b"})
    assert form.is_valid


def test_author_non_alphanumeric_name_rejected():
    form = validate_author({"first_name": "Jean-Luc", "family_name": "O'Brien"})
    assert _messages(form, "first_name") == [
        "First name has non-alphanumeric characters.",
    ]
    assert _messages(form, "family_name") == [
        "Family name has non-alphanumeric characters.",
    ]


def test_author_missing_names_both_reported():
    form = validate_author({})
    assert {e.field for e in form.errors} == {"first_name", "family_name"}


def test_author_invalid_dates_use_field_specific_messages():
    form = validate_author({
        "first_name": "Ann", "family_name": "Leckie",
        "date_of_birth": "1966-02-30", "date_of_death": "yesterday",
    })
    assert _messages(form, "date_of_birth") == ["Invalid date of birth"]
    assert _messages(form, "date_of_death") == ["Invalid date of death"]
    assert form.submitted["date_of_birth"] == "1966-02-30"


def test_author_accepts_iso_datetime_for_dates():
    form = validate_author({
        "first_name": "Ann", "family_name": "Leckie",
        "date_of_birth": "1966-03-02T00:00:00Z",
    })
    assert form.is_valid
    assert form.values["date_of_birth"] == date(1966, 3, 2)


# ─── validate_genre ──────────────────────────────────────────────

def test_genre_name_too_short():
    form = validate_genre({"name": " ab "})
    assert _messages(form, "name") == [
        "Genre name must contain at least 3 characters",
    ]


def test_genre_name_too_long():
    form = validate_genre({"name": "g" * 101})
    assert _messages(form, "name") == [
        "Genre name must not exceed 100 characters",
    ]


def test_genre_name_bounds_inclusive():
    assert validate_genre({"name": "abc"}).is_valid
    assert validate_genre({"name": "g" * 100}).is_valid


# ─── validate_book ───────────────────────────────────────────────

def test_book_required_fields_each_reported():
    form = validate_book({})
    assert [(e.field, e.message) for e in form.errors] == [
        ("title", "Title must not be empty."),
        ("author_id", "Author must not be empty."),
        ("summary", "Summary must not be empty."),
        ("isbn", "ISBN must not be empty"),
    ]


def test_book_valid_submission_parses_ids():
    author_id, g1, g2 = uuid4(), uuid4(), uuid4()
    form = validate_book({
        "title": "Dune", "author_id": str(author_id),
        "summary": "Spice.", "isbn": "9780441013593",
        "genre": [str(g1), str(g2), str(g1)],
    })
    assert form.is_valid
    assert form.values["author_id"] == author_id
    assert form.values["genre_ids"] == [g1, g2]


def test_book_malformed_author_id():
    form = validate_book({
        "title": "Dune", "author_id": "42", "summary": "s", "isbn": "i",
    })
    assert _messages(form, "author_id") == ["Invalid author."]


def test_book_malformed_genre_id():
    form = validate_book({
        "title": "Dune", "author_id": str(uuid4()), "summary": "s",
        "isbn": "i", "genre": ["not-an-id"],
    })
    assert _messages(form, "genre") == ["Invalid genre."]


def test_normalize_genre_ids_accepts_single_value_and_drops_blanks():
    assert normalize_genre_ids("abc") == ["abc"]
    assert normalize_genre_ids(None) == []
    assert normalize_genre_ids(["a", " ", "a", "b "]) == ["a", "b"]


# ─── validate_book_instance ──────────────────────────────────────

def test_book_instance_defaults_status_and_due_back():
    book_id = uuid4()
    form = validate_book_instance(
        {"book_id": str(book_id), "imprint": "Penguin"}, NOW,
    )
    assert form.is_valid
    assert form.values == {
        "book_id": book_id,
        "imprint": "Penguin",
        "status": "Maintenance",
        "due_back": NOW,
    }


def test_book_instance_rejects_unknown_status():
    form = validate_book_instance(
        {"book_id": str(uuid4()), "imprint": "Penguin", "status": "Lost"}, NOW,
    )
    assert _messages(form, "status") == ["Invalid status"]


def test_book_instance_rejects_invalid_due_back():
    form = validate_book_instance(
        {"book_id": str(uuid4()), "imprint": "Penguin", "due_back": "2026-13-01"},
        NOW,
    )
    assert _messages(form, "due_back") == ["Invalid date"]


def test_book_instance_due_back_date_becomes_utc_midnight():
    form = validate_book_instance(
        {"book_id": str(uuid4()), "imprint": "P", "due_back": "2026-11-01"}, NOW,
    )
    assert form.values["due_back"] == datetime(2026, 11, 1, tzinfo=timezone.utc)


def test_book_instance_required_fields():
    form = validate_book_instance({}, NOW)
    assert [(e.field, e.message) for e in form.errors] == [
        ("book_id", "Book must be specified"),
        ("imprint", "Imprint must be specified"),
    ]
