"""Catalog Service - list, detail, create, update and guarded delete for every entity kind.

Invariants:
    - Validation runs before any write; a failing submission persists nothing
    - Every violated rule is reported (CatalogValidationError.errors)
    - Unknown or malformed identifiers raise ResourceNotFoundError (detail, forms,
      update, delete)
    - Update overwrites every mutable column; the Book genre set is replaced only
      when the submission names at least one genre (create always sets it)
    - Delete refuses while dependents exist and returns the confirm view instead;
      BookInstance has no dependents and is always deleted
    - Independent reads run concurrently, each on its own session

Design Decisions:
    - Generic over KindDescriptor (services/catalog_kinds.py) rather than one
      class per kind
    - Delete guard and delete share one session/transaction; a dependent inserted
      concurrently is still rejected by the restricting foreign key (409)
    - Genre create is find-or-create by name, compared case-insensitively;
      update does not deduplicate
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from locallibrary.core.domain_types import BookInstanceStatus, EntityKind
from locallibrary.core.errors import (
    CatalogValidationError, ErrorContext, FieldError, ResourceNotFoundError,
)
from locallibrary.core.validate_catalog import ValidatedForm
from locallibrary.infrastructure.database import DatabaseSessionManager
from locallibrary.models import Author, Book, BookInstance, Genre
from locallibrary.services.catalog_kinds import KindDescriptor, descriptor_for

logger = logging.getLogger(__name__)


@dataclass
class EntityView:
    """An entity plus the rows that depend on it (detail and delete-confirm views)."""
    kind: EntityKind
    entity: Any
    dependents: list = field(default_factory=list)


@dataclass
class DeleteOutcome:
    """deleted=False means dependents exist; view is then the confirm view."""
    deleted: bool
    view: EntityView | None = None


@dataclass
class FormData:
    """What a create/update form needs: the entity (update only) and choice lists."""
    kind: EntityKind
    entity: Any | None = None
    options: dict[str, list] = field(default_factory=dict)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_id(desc: KindDescriptor, entity_id: UUID | str) -> UUID:
    if isinstance(entity_id, UUID):
        return entity_id
    try:
        return UUID(str(entity_id))
    except ValueError:
        raise ResourceNotFoundError(desc.label, str(entity_id))


class CatalogService:
    """Catalog operations over an explicitly injected DatabaseSessionManager."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    # ─── Reads ──────────────────────────────────────────────────

    async def _fetch_all(self, stmt: Select) -> list:
        async with self.db.session() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def _fetch_scalar(self, stmt: Select) -> Any:
        async with self.db.session() as session:
            result = await session.execute(stmt)
            return result.scalar_one()

    async def _fetch_by_id(self, desc: KindDescriptor, entity_id: UUID) -> Any:
        async with self.db.session() as session:
            return await session.get(
                desc.model, entity_id, options=desc.load_options(),
            )

    async def _fetch_dependents(
        self, desc: KindDescriptor, entity_id: UUID,
    ) -> list:
        if desc.dependents is None:
            return []
        return await self._fetch_all(desc.dependents(entity_id))

    def _not_found(self, desc: KindDescriptor, entity_id: UUID) -> ResourceNotFoundError:
        logger.warning(
            f"{desc.label} {entity_id} not found",
            extra={"entity_kind": desc.kind.value, "entity_id": entity_id},
        )
        return ResourceNotFoundError(desc.label, str(entity_id))

    async def list_entities(self, kind: EntityKind | str) -> list:
        """All entities of a kind, ascending by the kind's display field."""
        desc = descriptor_for(kind)
        return await self._fetch_all(desc.ordered())

    async def get_detail(
        self, kind: EntityKind | str, entity_id: UUID | str,
    ) -> EntityView:
        """Entity plus dependents, fetched concurrently."""
        desc = descriptor_for(kind)
        entity_id = _coerce_id(desc, entity_id)
        entity, dependents = await asyncio.gather(
            self._fetch_by_id(desc, entity_id),
            self._fetch_dependents(desc, entity_id),
        )
        if entity is None:
            raise self._not_found(desc, entity_id)
        return EntityView(desc.kind, entity, dependents)

    async def delete_view(
        self, kind: EntityKind | str, entity_id: UUID | str,
    ) -> EntityView:
        """The delete-confirmation view: the same aggregate as the detail view."""
        return await self.get_detail(kind, entity_id)

    async def form_options(self, kind: EntityKind | str) -> dict[str, list]:
        """Choice lists for the kind's form (authors/genres for books, books for copies)."""
        desc = descriptor_for(kind)
        if desc.kind == EntityKind.BOOK:
            authors, genres = await asyncio.gather(
                self._fetch_all(descriptor_for(EntityKind.AUTHOR).ordered()),
                self._fetch_all(descriptor_for(EntityKind.GENRE).ordered()),
            )
            return {"authors": authors, "genres": genres}
        if desc.kind == EntityKind.BOOK_INSTANCE:
            books = await self._fetch_all(descriptor_for(EntityKind.BOOK).ordered())
            return {"books": books}
        return {}

    async def create_form(self, kind: EntityKind | str) -> FormData:
        desc = descriptor_for(kind)
        return FormData(desc.kind, None, await self.form_options(desc.kind))

    async def update_form(
        self, kind: EntityKind | str, entity_id: UUID | str,
    ) -> FormData:
        """Existing entity plus choice lists, fetched concurrently."""
        desc = descriptor_for(kind)
        entity_id = _coerce_id(desc, entity_id)
        entity, options = await asyncio.gather(
            self._fetch_by_id(desc, entity_id),
            self.form_options(desc.kind),
        )
        if entity is None:
            raise self._not_found(desc, entity_id)
        return FormData(desc.kind, entity, options)

    async def summary(self) -> dict[str, int]:
        """Home page counts, fetched concurrently."""
        counts = await asyncio.gather(
            self._fetch_scalar(select(func.count()).select_from(Book)),
            self._fetch_scalar(select(func.count()).select_from(BookInstance)),
            self._fetch_scalar(
                select(func.count())
                .select_from(BookInstance)
                .where(BookInstance.status == BookInstanceStatus.AVAILABLE.value)
            ),
            self._fetch_scalar(select(func.count()).select_from(Author)),
            self._fetch_scalar(select(func.count()).select_from(Genre)),
        )
        keys = (
            "book_count", "book_instance_count",
            "book_instance_available_count", "author_count", "genre_count",
        )
        return dict(zip(keys, counts))

    # ─── Writes ─────────────────────────────────────────────────

    def _validate(
        self, desc: KindDescriptor, data: Mapping[str, Any],
        entity_id: UUID | None = None,
    ) -> ValidatedForm:
        form = desc.validate(data, _utcnow())
        if not form.is_valid:
            logger.info(
                f"{desc.label} submission rejected: "
                f"{', '.join(sorted({e.field for e in form.errors}))}",
                extra={"entity_kind": desc.kind.value, "entity_id": entity_id},
            )
            raise CatalogValidationError(
                form.errors, form.submitted,
                ErrorContext(
                    entity_kind=desc.kind.value,
                    entity_id=str(entity_id) if entity_id else None,
                ),
            )
        return form

    async def _resolve_references(
        self, session: AsyncSession, desc: KindDescriptor, form: ValidatedForm,
        entity_id: UUID | None = None,
    ) -> dict[str, Any]:
        """Load every referenced row; a missing one is a validation error on its field."""
        resolved: dict[str, Any] = {}
        errors: list[FieldError] = []
        for ref in desc.references:
            value = form.values.get(ref.value_key)
            if ref.many:
                ids = list(value or [])
                rows = []
                if ids:
                    result = await session.execute(
                        select(ref.model).where(ref.model.id.in_(ids)),
                    )
                    rows = list(result.scalars().all())
                if len(rows) != len(ids):
                    errors.append(FieldError(ref.error_field, ref.message))
                resolved[ref.value_key] = rows
            else:
                row = await session.get(ref.model, value)
                if row is None:
                    errors.append(FieldError(ref.error_field, ref.message))
                resolved[ref.value_key] = row
        if errors:
            raise CatalogValidationError(
                errors, form.submitted,
                ErrorContext(
                    entity_kind=desc.kind.value,
                    entity_id=str(entity_id) if entity_id else None,
                ),
            )
        return resolved

    @staticmethod
    async def _reload_relationships(
        session: AsyncSession, desc: KindDescriptor, entity: Any,
    ) -> None:
        if desc.eager_loads:
            await session.refresh(entity, list(desc.eager_loads))

    @staticmethod
    def _column_values(desc: KindDescriptor, form: ValidatedForm) -> dict[str, Any]:
        return {
            k: v for k, v in form.values.items() if k not in desc.non_column_values
        }

    async def create(self, kind: EntityKind | str, data: Mapping[str, Any]) -> Any:
        """Validate and persist a new entity; returns it (its id routes to the detail view)."""
        desc = descriptor_for(kind)
        form = self._validate(desc, data)
        async with self.db.session() as session:
            resolved = await self._resolve_references(session, desc, form)

            if desc.kind == EntityKind.GENRE:
                result = await session.execute(
                    select(Genre)
                    .where(func.lower(Genre.name) == form.values["name"].lower())
                    .limit(1),
                )
                existing = result.scalar_one_or_none()
                if existing is not None:
                    logger.info(
                        f"Genre '{existing.name}' already exists",
                        extra={"entity_kind": desc.kind.value, "entity_id": existing.id},
                    )
                    return existing

            entity = desc.model(**self._column_values(desc, form))
            if desc.kind == EntityKind.BOOK:
                entity.genres = resolved["genre_ids"]
            session.add(entity)
            await session.commit()
            await self._reload_relationships(session, desc, entity)

        logger.info(
            f"Created {desc.label} {entity.id}",
            extra={"entity_kind": desc.kind.value, "entity_id": entity.id},
        )
        return entity

    async def update(
        self, kind: EntityKind | str, entity_id: UUID | str,
        data: Mapping[str, Any],
    ) -> Any:
        """Load, validate, overwrite every mutable field, persist."""
        desc = descriptor_for(kind)
        entity_id = _coerce_id(desc, entity_id)
        async with self.db.session() as session:
            entity = await session.get(desc.model, entity_id)
            if entity is None:
                raise self._not_found(desc, entity_id)

            form = self._validate(desc, data, entity_id)
            resolved = await self._resolve_references(session, desc, form, entity_id)

            for key, value in self._column_values(desc, form).items():
                setattr(entity, key, value)
            if desc.kind == EntityKind.BOOK and resolved["genre_ids"]:
                entity.genres = resolved["genre_ids"]
            await session.commit()
            await self._reload_relationships(session, desc, entity)

        logger.info(
            f"Updated {desc.label} {entity_id}",
            extra={"entity_kind": desc.kind.value, "entity_id": entity_id},
        )
        return entity

    async def delete(
        self, kind: EntityKind | str, entity_id: UUID | str,
    ) -> DeleteOutcome:
        """Delete unless dependents exist; then return the confirm view untouched."""
        desc = descriptor_for(kind)
        entity_id = _coerce_id(desc, entity_id)
        async with self.db.session() as session:
            entity = await session.get(desc.model, entity_id)
            if entity is None:
                raise self._not_found(desc, entity_id)

            if desc.dependents is not None:
                result = await session.execute(desc.dependents(entity_id))
                dependents = list(result.scalars().all())
                if dependents:
                    logger.info(
                        f"Delete of {desc.label} {entity_id} blocked by "
                        f"{len(dependents)} dependent row(s)",
                        extra={"entity_kind": desc.kind.value, "entity_id": entity_id},
                    )
                    return DeleteOutcome(
                        deleted=False,
                        view=EntityView(desc.kind, entity, dependents),
                    )

            await session.delete(entity)
            await session.commit()

        logger.info(
            f"Deleted {desc.label} {entity_id}",
            extra={"entity_kind": desc.kind.value, "entity_id": entity_id},
        )
        return DeleteOutcome(deleted=True)
