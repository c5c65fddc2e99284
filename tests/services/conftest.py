"""Service test fixtures - throwaway SQLite catalog, service and HTTP client.

Invariants:
    - Every test gets a fresh file-backed SQLite database (foreign keys on)
    - get_db_manager dependency overridden so routes hit the test database
    - `library` seeds one small, fully linked catalog in a single session

Design Decisions:
    - File-backed (tmp_path) instead of :memory: so concurrent reads on separate
      sessions see the same data
"""

from datetime import date, datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from locallibrary.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)
from locallibrary.main import app
from locallibrary.models import Author, Book, BookInstance, Genre
from locallibrary.services.catalog_service import CatalogService


@pytest.fixture
async def db_manager(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
    )
    await manager.create_schema()
    yield manager
    await manager.drop_schema()
    await manager.close()


@pytest.fixture
def catalog(db_manager):
    return CatalogService(db_manager)


@pytest.fixture
async def client(db_manager):
    """FastAPI test client with the database manager overridden."""
    app.dependency_overrides[get_db_manager] = lambda: db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def library(db_manager):
    """Three authors (Bova without books), three genres, two books, two copies."""
    rothfuss = Author(
        id=uuid4(), first_name="Patrick", family_name="Rothfuss",
        date_of_birth=date(1973, 6, 6),
    )
    asimov = Author(
        id=uuid4(), first_name="Isaac", family_name="Asimov",
        date_of_birth=date(1920, 1, 2), date_of_death=date(1992, 4, 6),
    )
    bova = Author(id=uuid4(), first_name="Ben", family_name="Bova")
    fantasy = Genre(id=uuid4(), name="Fantasy")
    scifi = Genre(id=uuid4(), name="Science Fiction")
    poetry = Genre(id=uuid4(), name="Poetry")
    wind = Book(
        id=uuid4(), title="The Name of the Wind",
        summary="Kvothe tells his story.", isbn="9780756404741",
        author_id=rothfuss.id, genres=[fantasy],
    )
    robots = Book(
        id=uuid4(), title="I, Robot", summary="Nine robot stories.",
        isbn="9780553382563", author_id=asimov.id, genres=[scifi],
    )
    copy_a = BookInstance(
        id=uuid4(), book_id=wind.id, imprint="Gollancz, 2007",
        status="Available", due_back=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )
    copy_b = BookInstance(
        id=uuid4(), book_id=robots.id, imprint="Bantam, 2004",
        status="Loaned", due_back=datetime(2026, 2, 1, tzinfo=timezone.utc),
    )

    async with db_manager.session() as session:
        session.add_all([rothfuss, asimov, bova, fantasy, scifi, poetry])
        await session.flush()
        session.add_all([wind, robots])
        await session.flush()
        session.add_all([copy_a, copy_b])
        await session.commit()

    return SimpleNamespace(
        rothfuss=rothfuss, asimov=asimov, bova=bova,
        fantasy=fantasy, scifi=scifi, poetry=poetry,
        wind=wind, robots=robots, copy_a=copy_a, copy_b=copy_b,
    )
