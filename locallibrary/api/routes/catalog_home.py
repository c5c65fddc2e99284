"""Catalog Home - record counts shown on the library landing page."""

from fastapi import APIRouter, Depends

from locallibrary.api.dependencies import get_catalog_service
from locallibrary.services.catalog_service import CatalogService

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/")
async def catalog_home(catalog: CatalogService = Depends(get_catalog_service)):
    """Counts of books, copies (all and available), authors and genres."""
    counts = await catalog.summary()
    return {"title": "Local Library Home", **counts}
