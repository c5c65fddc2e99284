"""Domain Types - enumerated values for the catalog.

Invariants:
    - BookInstanceStatus holds exactly the four loan states; Maintenance is the default
    - EntityKind values double as URL segments (/catalog/{kind}/{id})
"""

from enum import Enum


class EntityKind(str, Enum):
    """The four catalog entity kinds."""
    AUTHOR = "author"
    GENRE = "genre"
    BOOK = "book"
    BOOK_INSTANCE = "bookinstance"


class BookInstanceStatus(str, Enum):
    """Availability of a physical copy - maps to DB `status` column."""
    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"


DEFAULT_BOOK_INSTANCE_STATUS = BookInstanceStatus.MAINTENANCE
