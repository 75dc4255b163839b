"""In-memory entity store.

Documents are kept in their JSON-compatible form, exactly as the PostgreSQL
backend stores them, so callers always receive fresh model instances and
never share state with the store.
"""

from collections.abc import Mapping, Sequence
from typing import Any
from uuid import UUID

from beartype import beartype

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


class InMemoryEntityStore(EntityStore):
    """Dict-backed store enforcing the declared unique natural keys."""

    def __init__(self) -> None:
        self._collections: dict[EntityKind, dict[UUID, dict[str, Any]]] = {
            kind: {} for kind in EntityKind
        }

    @staticmethod
    def _matches(document: Mapping[str, Any], criteria: Mapping[str, Any]) -> bool:
        return all(document.get(key) == value for key, value in criteria.items())

    def _check_unique(
        self, kind: EntityKind, entity_id: UUID, document: Mapping[str, Any]
    ) -> None:
        for key in kind.unique_keys:
            for other_id, other in self._collections[kind].items():
                if other_id != entity_id and other.get(key) == document.get(key):
                    raise DuplicateKeyError(kind, key, document.get(key))

    @beartype
    async def get(self, kind: EntityKind, entity_id: UUID) -> Any:
        document = self._collections[kind].get(entity_id)
        if document is None:
            return None
        return from_document(kind, entity_id, document)

    @beartype
    async def get_many(self, kind: EntityKind, entity_ids: Sequence[UUID]) -> list[Any]:
        collection = self._collections[kind]
        return [
            from_document(kind, entity_id, collection[entity_id])
            for entity_id in entity_ids
            if entity_id in collection
        ]

    @beartype
    async def find_one(self, kind: EntityKind, criteria: Mapping[str, Any]) -> Any:
        wanted = normalize_criteria(criteria)
        for entity_id, document in self._collections[kind].items():
            if self._matches(document, wanted):
                return from_document(kind, entity_id, document)
        return None

    @beartype
    async def find(
        self, kind: EntityKind, criteria: Mapping[str, Any] | None = None
    ) -> list[Any]:
        wanted = normalize_criteria(criteria)
        return [
            from_document(kind, entity_id, document)
            for entity_id, document in self._collections[kind].items()
            if self._matches(document, wanted)
        ]

    @beartype
    async def create(self, kind: EntityKind, entity: IdentifiableModel) -> Any:
        if not isinstance(entity, kind.model):
            raise StoreError(
                f"{type(entity).__name__} cannot be stored in {kind.value}"
            )
        if entity.id in self._collections[kind]:
            raise DuplicateKeyError(kind, "id", str(entity.id))

        document = to_document(entity)
        self._check_unique(kind, entity.id, document)
        self._collections[kind][entity.id] = document
        logger.debug("Created %s %s", kind.value, entity.id)
        return from_document(kind, entity.id, document)

    @beartype
    async def save(self, kind: EntityKind, entity: IdentifiableModel) -> Any:
        if entity.id not in self._collections[kind]:
            raise StoreError(f"{kind.value} {entity.id} does not exist")

        document = to_document(entity)
        self._check_unique(kind, entity.id, document)
        self._collections[kind][entity.id] = document
        return from_document(kind, entity.id, document)

    @beartype
    async def update_one(
        self,
        kind: EntityKind,
        criteria: Mapping[str, Any],
        changes: Mapping[str, Any],
    ) -> Any:
        wanted = normalize_criteria(criteria)
        for entity_id, document in self._collections[kind].items():
            if not self._matches(document, wanted):
                continue
            updated = {**document, **normalize_criteria(changes)}
            entity = from_document(kind, entity_id, updated)
            self._check_unique(kind, entity_id, updated)
            self._collections[kind][entity_id] = to_document(entity)
            return entity
        return None

    def clear(self) -> None:
        """Drop every document (for testing and seeding)."""
        for collection in self._collections.values():
            collection.clear()
