"""Derived Fields - display names, formatted dates and canonical URL paths.

Invariants:
    - Pure functions over explicit inputs: never attached to ORM classes
    - Missing dates format as "" (never "None")
    - Canonical paths: /catalog/{kind}/{id}; collections: /catalog/{plural}
"""

from datetime import date, datetime
from uuid import UUID

from locallibrary.core.domain_types import EntityKind

_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

COLLECTION_PATHS: dict[EntityKind, str] = {
    EntityKind.AUTHOR: "/catalog/authors",
    EntityKind.GENRE: "/catalog/genres",
    EntityKind.BOOK: "/catalog/books",
    EntityKind.BOOK_INSTANCE: "/catalog/bookinstances",
}


def canonical_url(kind: EntityKind, entity_id: UUID | str) -> str:
    return f"/catalog/{kind.value}/{entity_id}"


def collection_url(kind: EntityKind) -> str:
    return COLLECTION_PATHS[kind]


def author_name(first_name: str | None, family_name: str | None) -> str:
    """'family_name, first_name', or '' when either part is missing."""
    if first_name and family_name:
        return f"{family_name}, {first_name}"
    return ""


def format_date_med(value: date | datetime | None) -> str:
    """Medium date, e.g. 'Oct 14, 1983'."""
    if value is None:
        return ""
    return f"{_MONTH_ABBR[value.month - 1]} {value.day}, {value.year}"


def format_iso_date(value: date | datetime | None) -> str:
    """Calendar date as YYYY-MM-DD."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def author_lifespan(
    date_of_birth: date | None, date_of_death: date | None,
) -> str:
    """'Oct 14, 1983 - Jan 2, 2020'; open-ended when still alive; '' when unknown."""
    if date_of_birth is None and date_of_death is None:
        return ""
    return f"{format_date_med(date_of_birth)} - {format_date_med(date_of_death)}"
