"""Existence checks for the records a claim links to.

A claim payload can carry identifier lists for four relationships. The
resolver looks every identifier up concurrently and reports, per id, whether
it was found, missing, or (when updating) already linked to the claim.
"""

import asyncio
from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from typing import Any
from uuid import UUID

from attrs import frozen
from beartype import beartype
from pydantic.alias_generators import to_camel

from ..store import EntityKind, EntityStore


class ResolutionOutcome(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    ALREADY_LINKED = "already_linked"


@frozen
class Relationship:
    """One identifier-list field of a claim and the collection it points at."""

    field: str
    kind: EntityKind
    label: str

    @property
    def payload_key(self) -> str:
        return to_camel(self.field)


RELATIONSHIPS: tuple[Relationship, ...] = (
    Relationship("involved_policies", EntityKind.INVOLVED_POLICY, "Involved Policy"),
    Relationship("involved_cars", EntityKind.INVOLVED_CAR, "Involved Car"),
    Relationship("involved_parties", EntityKind.INVOLVED_PARTY, "Involved Party"),
    Relationship(
        "affected_coverages", EntityKind.AFFECTED_COVERAGE, "Affected Coverage"
    ),
)

RELATIONSHIPS_BY_FIELD: dict[str, Relationship] = {
    relationship.field: relationship for relationship in RELATIONSHIPS
}


@frozen
class Resolution:
    """Outcome of resolving a single identifier."""

    relationship: Relationship
    identifier: Any
    outcome: ResolutionOutcome

    @property
    def message(self) -> str | None:
        label = self.relationship.label
        if self.outcome is ResolutionOutcome.NOT_FOUND:
            return f"{label} Object _id {self.identifier} not found."
        if self.outcome is ResolutionOutcome.ALREADY_LINKED:
            return (
                f"{label} Object _id {self.identifier} "
                "is already associated with this claim."
            )
        return None


@beartype
def parse_identifier(value: Any) -> UUID | None:
    """Accept a UUID or its string form; anything else is unresolvable."""
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value.strip())
        except ValueError:
            return None
    return None


class ReferenceResolver:
    """Resolve claim relationship identifiers against the store."""

    def __init__(self, store: EntityStore) -> None:
        if not store or not hasattr(store, "get"):
            raise ValueError("Entity store required")
        self._store = store

    @beartype
    async def exists(self, kind: EntityKind, identifier: Any) -> bool:
        entity_id = parse_identifier(identifier)
        if entity_id is None:
            return False
        return await self._store.get(kind, entity_id) is not None

    async def _resolve_one(
        self,
        relationship: Relationship,
        identifier: Any,
        linked: Iterable[UUID] | None,
        repeated: bool,
    ) -> Resolution:
        found = await self.exists(relationship.kind, identifier)
        if not found:
            outcome = ResolutionOutcome.NOT_FOUND
        elif repeated or (
            linked is not None and parse_identifier(identifier) in set(linked)
        ):
            outcome = ResolutionOutcome.ALREADY_LINKED
        else:
            outcome = ResolutionOutcome.FOUND
        return Resolution(relationship, identifier, outcome)

    @beartype
    async def resolve(
        self,
        references: Mapping[str, Sequence[Any]],
        linked: Mapping[str, Sequence[UUID]] | None = None,
    ) -> list[Resolution]:
        """Look up every referenced identifier at once.

        ``references`` maps relationship field names to identifier lists.
        ``linked`` holds the claim's current lists; passing it switches to
        the update context, where an id already on the claim is rejected.
        An id repeated within one list is rejected after its first copy.
        Results keep the relationship order, then the input order.
        """
        lookups = []
        for relationship in RELATIONSHIPS:
            identifiers = references.get(relationship.field) or ()
            current = None if linked is None else linked.get(relationship.field, ())
            seen: set[UUID] = set()
            for identifier in identifiers:
                entity_id = parse_identifier(identifier)
                repeated = entity_id in seen
                if entity_id is not None:
                    seen.add(entity_id)
                lookups.append(
                    self._resolve_one(relationship, identifier, current, repeated)
                )
        return list(await asyncio.gather(*lookups))
