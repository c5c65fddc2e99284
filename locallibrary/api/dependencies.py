"""Route dependencies - wire the application's DatabaseSessionManager into a CatalogService."""

from fastapi import Depends

from locallibrary.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)
from locallibrary.services.catalog_service import CatalogService


def get_catalog_service(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
) -> CatalogService:
    """FastAPI dependency: one CatalogService per request."""
    return CatalogService(db_manager)
