"""Catalog Entity Routes - list/detail/create/update/delete endpoints for one entity kind.

Invariants:
    - /catalog/{kind}/create is registered before /catalog/{kind}/{entity_id}
    - Successful create/update answer 303 See Other to the entity's canonical URL
    - Successful delete answers 303 to the kind's collection URL
    - A delete blocked by dependents answers 200 with the confirm view (blocked=true)
    - Validation failures answer 400 with every field error and the sanitized input;
      Book and BookInstance failures also carry the form choice lists

Design Decisions:
    - One router per kind from build_catalog_router(kind); main.py registers
      each explicitly
    - entity_id is a plain string; malformed ids resolve to 404
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from locallibrary.api.dependencies import get_catalog_service
from locallibrary.api.presenters import (
    present_delete_view, present_form, present_list, present_rejected_form,
    present_view,
)
from locallibrary.core.derived_fields import canonical_url, collection_url
from locallibrary.core.domain_types import EntityKind
from locallibrary.core.errors import CatalogValidationError
from locallibrary.schemas.catalog_forms import FORM_SCHEMAS
from locallibrary.services.catalog_service import CatalogService


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


async def _attach_form(
    catalog: CatalogService, kind: EntityKind,
    exc: CatalogValidationError, updating: bool,
) -> None:
    options = await catalog.form_options(kind)
    if options:
        exc.form = present_rejected_form(kind, options, exc.submitted, updating)


def build_catalog_router(kind: EntityKind) -> APIRouter:
    """Routes for one entity kind, mounted under /catalog."""
    form_schema: type[BaseModel] = FORM_SCHEMAS[kind]
    router = APIRouter(prefix="/catalog", tags=[kind.value])
    item = f"/{kind.value}"
    collection = collection_url(kind).removeprefix("/catalog")

    @router.get(collection, name=f"{kind.value}_list")
    async def list_entities(
        catalog: CatalogService = Depends(get_catalog_service),
    ):
        return present_list(kind, await catalog.list_entities(kind))

    @router.get(f"{item}/create", name=f"{kind.value}_create_get")
    async def create_form(
        catalog: CatalogService = Depends(get_catalog_service),
    ):
        return present_form(await catalog.create_form(kind))

    @router.post(f"{item}/create", name=f"{kind.value}_create_post")
    async def create_entity(
        body: form_schema,
        catalog: CatalogService = Depends(get_catalog_service),
    ):
        try:
            entity = await catalog.create(kind, body.model_dump())
        except CatalogValidationError as exc:
            await _attach_form(catalog, kind, exc, updating=False)
            raise
        return _redirect(canonical_url(kind, entity.id))

    @router.get(f"{item}/{{entity_id}}", name=f"{kind.value}_detail")
    async def entity_detail(
        entity_id: str,
        catalog: CatalogService = Depends(get_catalog_service),
    ):
        return present_view(await catalog.get_detail(kind, entity_id))

    @router.get(f"{item}/{{entity_id}}/update", name=f"{kind.value}_update_get")
    async def update_form(
        entity_id: str,
        catalog: CatalogService = Depends(get_catalog_service),
    ):
        return present_form(await catalog.update_form(kind, entity_id))

    @router.post(f"{item}/{{entity_id}}/update", name=f"{kind.value}_update_post")
    async def update_entity(
        entity_id: str,
        body: form_schema,
        catalog: CatalogService = Depends(get_catalog_service),
    ):
        try:
            entity = await catalog.update(kind, entity_id, body.model_dump())
        except CatalogValidationError as exc:
            await _attach_form(catalog, kind, exc, updating=True)
            raise
        return _redirect(canonical_url(kind, entity.id))

    @router.get(f"{item}/{{entity_id}}/delete", name=f"{kind.value}_delete_get")
    async def delete_confirm(
        entity_id: str,
        catalog: CatalogService = Depends(get_catalog_service),
    ):
        return present_delete_view(await catalog.delete_view(kind, entity_id))

    @router.post(f"{item}/{{entity_id}}/delete", name=f"{kind.value}_delete_post")
    async def delete_entity(
        entity_id: str,
        catalog: CatalogService = Depends(get_catalog_service),
    ):
        outcome = await catalog.delete(kind, entity_id)
        if outcome.deleted:
            return _redirect(collection_url(kind))
        return present_delete_view(outcome.view)

    return router
