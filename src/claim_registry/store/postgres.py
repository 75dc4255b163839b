"""PostgreSQL entity store over JSONB document tables.

Every collection is a table ``(id uuid primary key, data jsonb)`` created by
the ``001`` migration. Criteria use JSONB containment and partial updates use
JSONB concatenation, so queries never interpolate user input.
"""

from collections.abc import Mapping, Sequence
from typing import Any
from uuid import UUID

import asyncpg
from beartype import beartype

from ..core.database import Database
from ..core.logging_utils import get_logger
from ..models import IdentifiableModel
from .base import (
    DuplicateKeyError,
    EntityKind,
    EntityStore,
    StoreError,
    from_document,
    normalize_criteria,
    to_document,
)

logger = get_logger(__name__)


class PostgresEntityStore(EntityStore):
    """Entity store backed by asyncpg."""

    def __init__(self, db: Database) -> None:
        """Initialize store with dependency validation."""
        if not db or not hasattr(db, "fetchrow"):
            raise ValueError("Database connection required and must be active")
        self._db = db

    @staticmethod
    def _row_to_entity(kind: EntityKind, row: Any) -> Any:
        return from_document(kind, row["id"], row["data"])

    @staticmethod
    def _duplicate_from(kind: EntityKind, document: Mapping[str, Any]) -> DuplicateKeyError:
        key = kind.unique_keys[0] if kind.unique_keys else "id"
        return DuplicateKeyError(kind, key, document.get(key))

    # Table names come from EntityKind values, never from callers.

    @beartype
    async def get(self, kind: EntityKind, entity_id: UUID) -> Any:
        query = f"SELECT id, data FROM {kind.value} WHERE id = $1"  # nosec B608
        row = await self._db.fetchrow(query, entity_id)
        return self._row_to_entity(kind, row) if row else None

    @beartype
    async def get_many(self, kind: EntityKind, entity_ids: Sequence[UUID]) -> list[Any]:
        if not entity_ids:
            return []
        query = f"SELECT id, data FROM {kind.value} WHERE id = ANY($1::uuid[])"  # nosec B608
        rows = await self._db.fetch(query, list(entity_ids))
        by_id = {row["id"]: self._row_to_entity(kind, row) for row in rows}
        return [by_id[entity_id] for entity_id in entity_ids if entity_id in by_id]

    @beartype
    async def find_one(self, kind: EntityKind, criteria: Mapping[str, Any]) -> Any:
        query = f"SELECT id, data FROM {kind.value} WHERE data @> $1::jsonb LIMIT 1"  # nosec B608
        row = await self._db.fetchrow(query, normalize_criteria(criteria))
        return self._row_to_entity(kind, row) if row else None

    @beartype
    async def find(
        self, kind: EntityKind, criteria: Mapping[str, Any] | None = None
    ) -> list[Any]:
        query = f"SELECT id, data FROM {kind.value} WHERE data @> $1::jsonb"  # nosec B608
        rows = await self._db.fetch(query, normalize_criteria(criteria))
        return [self._row_to_entity(kind, row) for row in rows]

    @beartype
    async def create(self, kind: EntityKind, entity: IdentifiableModel) -> Any:
        if not isinstance(entity, kind.model):
            raise StoreError(
                f"{type(entity).__name__} cannot be stored in {kind.value}"
            )

        document = to_document(entity)
        query = f"""
            INSERT INTO {kind.value} (id, data)
            VALUES ($1, $2::jsonb)
            RETURNING id, data
        """  # nosec B608
        try:
            row = await self._db.fetchrow(query, entity.id, document)
        except asyncpg.UniqueViolationError as e:
            raise self._duplicate_from(kind, document) from e

        if not row:
            raise StoreError(f"Failed to create {kind.value} {entity.id}")
        return self._row_to_entity(kind, row)

    @beartype
    async def save(self, kind: EntityKind, entity: IdentifiableModel) -> Any:
        document = to_document(entity)
        query = f"""
            UPDATE {kind.value}
            SET data = $2::jsonb, updated_at = NOW()
            WHERE id = $1
            RETURNING id, data
        """  # nosec B608
        try:
            row = await self._db.fetchrow(query, entity.id, document)
        except asyncpg.UniqueViolationError as e:
            raise self._duplicate_from(kind, document) from e

        if not row:
            raise StoreError(f"{kind.value} {entity.id} does not exist")
        return self._row_to_entity(kind, row)

    @beartype
    async def update_one(
        self,
        kind: EntityKind,
        criteria: Mapping[str, Any],
        changes: Mapping[str, Any],
    ) -> Any:
        patch = normalize_criteria(changes)
        query = f"""
            UPDATE {kind.value}
            SET data = data || $2::jsonb, updated_at = NOW()
            WHERE id = (
                SELECT id FROM {kind.value} WHERE data @> $1::jsonb LIMIT 1
            )
            RETURNING id, data
        """  # nosec B608
        try:
            row = await self._db.fetchrow(query, normalize_criteria(criteria), patch)
        except asyncpg.UniqueViolationError as e:
            raise self._duplicate_from(kind, patch) from e
        return self._row_to_entity(kind, row) if row else None

    async def ping(self) -> bool:
        try:
            return await self._db.fetchval("SELECT 1") == 1
        except (asyncpg.PostgresError, OSError, RuntimeError) as e:
            logger.warning("Database ping failed: %s", e)
            return False
