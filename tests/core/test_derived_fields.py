"""Derived Fields - display names, date formats and canonical URLs."""

from datetime import date, datetime, timezone
from uuid import UUID

from locallibrary.core.derived_fields import (
    author_lifespan,
    author_name,
    canonical_url,
    collection_url,
    format_date_med,
    format_iso_date,
)
from locallibrary.core.domain_types import EntityKind

ID = UUID("12345678-1234-5678-1234-567812345678")


def test_author_name_is_family_comma_first():
    assert author_name("Isaac", "Asimov") == "Asimov, Isaac"


def test_author_name_empty_when_part_missing():
    assert author_name("", "Asimov") == ""
    assert author_name("Isaac", None) == ""


def test_format_date_med():
    assert format_date_med(date(1983, 10, 14)) == "Oct 14, 1983"
    assert format_date_med(datetime(2026, 1, 5, 23, 0, tzinfo=timezone.utc)) == "Jan 5, 2026"


def test_format_iso_date():
    assert format_iso_date(date(1983, 10, 14)) == "1983-10-14"
    assert format_iso_date(datetime(2026, 1, 5, 9, 30)) == "2026-01-05"


def test_missing_dates_format_as_empty_string():
    assert format_date_med(None) == ""
    assert format_iso_date(None) == ""
    assert author_lifespan(None, None) == ""


def test_author_lifespan():
    assert author_lifespan(date(1920, 1, 2), date(1992, 4, 6)) == "Jan 2, 1920 - Apr 6, 1992"
    assert author_lifespan(date(1973, 6, 6), None) == "Jun 6, 1973 - "


def test_canonical_urls_per_kind():
    assert canonical_url(EntityKind.AUTHOR, ID) == f"/catalog/author/{ID}"
    assert canonical_url(EntityKind.GENRE, ID) == f"/catalog/genre/{ID}"
    assert canonical_url(EntityKind.BOOK, ID) == f"/catalog/book/{ID}"
    assert canonical_url(EntityKind.BOOK_INSTANCE, ID) == f"/catalog/bookinstance/{ID}"


def test_collection_urls_per_kind():
    assert collection_url(EntityKind.AUTHOR) == "/catalog/authors"
    assert collection_url(EntityKind.BOOK_INSTANCE) == "/catalog/bookinstances"
