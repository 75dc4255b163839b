# ClaimRegistry - Claims Management Record Service
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Entity store contract shared by every persistence backend.

The claim services only ever talk to an ``EntityStore``. A store keeps one
collection per ``EntityKind``; criteria are plain equality matches on model
field names, and relationships are stored as identifier lists.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any
from uuid import UUID

from attrs import frozen
from pydantic_core import to_jsonable_python

from ..models import (
    AffectedCoverage,
    Agency,
    Claim,
    Coverage,
    IdentifiableModel,
    InvolvedCar,
    InvolvedParty,
    InvolvedPolicy,
)


class StoreError(Exception):
    """Unexpected persistence failure."""


class DuplicateKeyError(StoreError):
    """A unique natural key is already taken."""

    def __init__(self, kind: "EntityKind", key: str, value: Any) -> None:
        super().__init__(f"{kind.value}.{key} {value!r} already exists")
        self.kind = kind
        self.key = key
        self.value = value


class EntityKind(str, Enum):
    """Collections held by the store (values double as table names)."""

    CLAIM = "claims"
    AGENCY = "agencies"
    COVERAGE = "coverages"
    INVOLVED_CAR = "involved_cars"
    INVOLVED_PARTY = "involved_parties"
    INVOLVED_POLICY = "involved_policies"
    AFFECTED_COVERAGE = "affected_coverages"

    @property
    def model(self) -> type[IdentifiableModel]:
        return KIND_SPECS[self].model

    @property
    def unique_keys(self) -> tuple[str, ...]:
        return KIND_SPECS[self].unique_keys


@frozen
class KindSpec:
    """Model class and unique natural keys for one collection."""

    model: type[IdentifiableModel]
    unique_keys: tuple[str, ...] = ()


KIND_SPECS: dict[EntityKind, KindSpec] = {
    EntityKind.CLAIM: KindSpec(Claim, ("claim_number",)),
    EntityKind.AGENCY: KindSpec(Agency, ("code",)),
    EntityKind.COVERAGE: KindSpec(Coverage, ("code",)),
    EntityKind.INVOLVED_CAR: KindSpec(InvolvedCar),
    EntityKind.INVOLVED_PARTY: KindSpec(InvolvedParty),
    EntityKind.INVOLVED_POLICY: KindSpec(InvolvedPolicy),
    EntityKind.AFFECTED_COVERAGE: KindSpec(AffectedCoverage),
}


def to_document(entity: IdentifiableModel) -> dict[str, Any]:
    """Dump an entity to its JSON-compatible document, without the id."""
    return entity.model_dump(mode="json", exclude={"id"})


def from_document(kind: EntityKind, entity_id: Any, data: Mapping[str, Any]) -> Any:
    """Rebuild an entity from a stored document."""
    return kind.model.model_validate({**data, "id": entity_id})


def normalize_criteria(criteria: Mapping[str, Any] | None) -> dict[str, Any]:
    """Convert criteria values to the JSON form documents are stored in."""
    return {key: to_jsonable_python(value) for key, value in (criteria or {}).items()}


class EntityStore(ABC):
    """Asynchronous CRUD contract over the seven entity collections."""

    @abstractmethod
    async def get(self, kind: EntityKind, entity_id: UUID) -> Any:
        """Return the entity with this identifier, or None."""

    @abstractmethod
    async def get_many(self, kind: EntityKind, entity_ids: Sequence[UUID]) -> list[Any]:
        """Return the entities that exist among ``entity_ids``, in that order."""

    @abstractmethod
    async def find_one(self, kind: EntityKind, criteria: Mapping[str, Any]) -> Any:
        """Return the first entity matching every criterion, or None."""

    @abstractmethod
    async def find(
        self, kind: EntityKind, criteria: Mapping[str, Any] | None = None
    ) -> list[Any]:
        """Return every entity matching the criteria (all when omitted)."""

    @abstractmethod
    async def create(self, kind: EntityKind, entity: IdentifiableModel) -> Any:
        """Insert a new entity; raises DuplicateKeyError on a taken natural key."""

    @abstractmethod
    async def save(self, kind: EntityKind, entity: IdentifiableModel) -> Any:
        """Persist the full state of an existing entity."""

    @abstractmethod
    async def update_one(
        self,
        kind: EntityKind,
        criteria: Mapping[str, Any],
        changes: Mapping[str, Any],
    ) -> Any:
        """Apply ``changes`` to the first match and return it, or None."""

    async def ping(self) -> bool:
        """Report whether the backend is reachable."""
        return True
