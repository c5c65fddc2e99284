"""ORM Models - SQLAlchemy declarative models for the catalog entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Book -> Author and BookInstance -> Book are required, restricting foreign keys
    - Book <-> Genre is a set, stored in book_genres with a composite primary key

Design Decisions:
    - One file per entity; all imported here so string-based relationship()
      references resolve before any query runs
    - Models carry no derived accessors: see core/derived_fields.py
"""

from locallibrary.models.author import Author  # noqa: F401
from locallibrary.models.genre import Genre  # noqa: F401
from locallibrary.models.book import Book, book_genres  # noqa: F401
from locallibrary.models.book_instance import BookInstance  # noqa: F401
