"""Read side of the claim registry: detail lookup and filtering.

Both queries return claims with their relationships expanded. Expansion
issues one batched lookup per entity kind, concurrently, instead of one
lookup per identifier.
"""

import asyncio
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Any
from uuid import UUID

from beartype import beartype

from ..core.errors import ServiceError, ViolationCollector
from ..core.result_types import Err, Ok, Result
from ..models import (
    RELATIONSHIP_FIELDS,
    AffectedCoverageDetails,
    Claim,
    ClaimDetails,
)
from ..schemas.claim import ClaimFilter
from ..store import EntityKind, EntityStore
from .claim_validation import parse_date
from .operation_monitor import monitored_operation

SCALAR_FILTERS: tuple[str, ...] = (
    "claim_number",
    "reporting_type",
    "responsibility",
    "damage_type",
    "daaq",
    "status",
)

DATE_FILTERS: dict[str, str] = {
    "occurrence_date": "Occurrence Date",
    "reporting_date": "Reporting Date",
}

# filter field -> attribute holding the business identifier
INVOLVED_FILTERS: dict[str, str] = {
    "involved_cars": "good_uid",
    "involved_policies": "good_uid",
    "involved_parties": "party_uid",
}

DateRange = tuple[date | None, date | None]


def _unique(ids: Iterable[UUID]) -> list[UUID]:
    return list(dict.fromkeys(ids))


def _is_set(value: Any) -> bool:
    """Empty strings count as unset."""
    if isinstance(value, str):
        return bool(value.strip())
    return value is not None


def has_constraint(criteria: ClaimFilter) -> bool:
    """True when at least one filter field would restrict the result."""
    if any(_is_set(getattr(criteria, name)) for name in SCALAR_FILTERS):
        return True
    if any(getattr(criteria, name) is not None for name in DATE_FILTERS):
        return True
    for name, uid_field in INVOLVED_FILTERS.items():
        nested = getattr(criteria, name)
        if nested is not None and _is_set(getattr(nested, uid_field)):
            return True
    return False


@beartype
def parse_date_range(
    label: str, bounds: Sequence[Any] | None
) -> tuple[DateRange | None, list[str]]:
    """Parse a ``[min, max]`` filter range; either bound may be empty."""
    if bounds is None:
        return None, []
    if len(bounds) != 2:
        return None, [f"{label} filter must be a [min, max] range"]

    messages: list[str] = []
    parsed: list[date | None] = []
    for bound in bounds:
        if not _is_set(bound):
            parsed.append(None)
            continue
        value = parse_date(bound)
        if value is None:
            messages.append(f"{label} filter bound {bound} is not a valid date")
        parsed.append(value)

    low, high = parsed
    if not messages and low is not None and high is not None and low > high:
        messages.append(f"{label} filter minimum is after maximum")
    return (low, high), messages


def _in_range(value: date, bounds: DateRange) -> bool:
    low, high = bounds
    return (low is None or value >= low) and (high is None or value <= high)


class ClaimQueryService:
    """Queries returning expanded claims."""

    def __init__(self, store: EntityStore) -> None:
        """Initialize query service with dependency validation."""
        if not store or not hasattr(store, "get_many"):
            raise ValueError("Entity store required")
        self._store = store

    async def _expand(self, claims: Sequence[Claim]) -> list[ClaimDetails]:
        """Replace relationship identifiers with their records."""
        if not claims:
            return []

        agencies, policies, cars, parties, affected = await asyncio.gather(
            self._store.get_many(
                EntityKind.AGENCY, _unique(claim.reporting_agency for claim in claims)
            ),
            *(
                self._store.get_many(
                    kind,
                    _unique(
                        entity_id
                        for claim in claims
                        for entity_id in getattr(claim, field)
                    ),
                )
                for kind, field in (
                    (EntityKind.INVOLVED_POLICY, "involved_policies"),
                    (EntityKind.INVOLVED_CAR, "involved_cars"),
                    (EntityKind.INVOLVED_PARTY, "involved_parties"),
                    (EntityKind.AFFECTED_COVERAGE, "affected_coverages"),
                )
            ),
        )
        coverages = await self._store.get_many(
            EntityKind.COVERAGE, _unique(record.coverage for record in affected)
        )

        by_id = {
            entity.id: entity
            for entity in (*agencies, *policies, *cars, *parties, *coverages)
        }
        affected_by_id = {record.id: record for record in affected}

        details = []
        for claim in claims:
            scalars = claim.model_dump(
                exclude={"reporting_agency", *RELATIONSHIP_FIELDS}
            )
            details.append(
                ClaimDetails.model_validate(
                    {
                        **scalars,
                        "reporting_agency": by_id.get(claim.reporting_agency),
                        "involved_policies": [
                            by_id[i] for i in claim.involved_policies if i in by_id
                        ],
                        "involved_cars": [
                            by_id[i] for i in claim.involved_cars if i in by_id
                        ],
                        "involved_parties": [
                            by_id[i] for i in claim.involved_parties if i in by_id
                        ],
                        "affected_coverages": [
                            AffectedCoverageDetails.expand(
                                affected_by_id[i], by_id.get(affected_by_id[i].coverage)
                            )
                            for i in claim.affected_coverages
                            if i in affected_by_id
                        ],
                    }
                )
            )
        return details

    @beartype
    @monitored_operation("get claim details")
    async def get_details(
        self, claim_number: str
    ) -> Result[list[ClaimDetails], ServiceError]:
        """Every claim carrying this number, expanded. No match is not an error."""
        if not claim_number.strip():
            return Err(ServiceError.validation(["Claim Number is required."]))

        claims = await self._store.find(
            EntityKind.CLAIM, {"claim_number": claim_number}
        )
        return Ok(await self._expand(claims))

    @beartype
    @monitored_operation("filter claims")
    async def filter(
        self, criteria: ClaimFilter
    ) -> Result[list[ClaimDetails], ServiceError]:
        """Return the expanded claims matching every supplied criterion."""
        violations = ViolationCollector()
        claims = await self._store.find(EntityKind.CLAIM)

        if not has_constraint(criteria):
            violations.add("At least one filter is required.")
        # Checked against the whole collection, before any filter applies.
        if not claims:
            violations.add("No claims found.")

        ranges: dict[str, DateRange] = {}
        for field, label in DATE_FILTERS.items():
            bounds, messages = parse_date_range(label, getattr(criteria, field))
            violations.extend(messages)
            if bounds is not None:
                ranges[field] = bounds

        if violations:
            return Err(violations.to_error())

        scalars = {
            name: getattr(criteria, name)
            for name in SCALAR_FILTERS
            if _is_set(getattr(criteria, name))
        }
        matching = [
            claim
            for claim in claims
            if self._matches_scalars(claim, scalars)
            and all(
                _in_range(getattr(claim, field), bounds)
                for field, bounds in ranges.items()
            )
        ]

        details = await self._expand(matching)
        return Ok([claim for claim in details if self._matches_involved(claim, criteria)])

    @staticmethod
    def _matches_scalars(claim: Claim, scalars: dict[str, Any]) -> bool:
        document = claim.model_dump(mode="json", include=set(scalars))
        return all(document.get(name) == value for name, value in scalars.items())

    @staticmethod
    def _matches_involved(claim: ClaimDetails, criteria: ClaimFilter) -> bool:
        for name, uid_field in INVOLVED_FILTERS.items():
            wanted = getattr(criteria, name)
            if wanted is None or not _is_set(getattr(wanted, uid_field)):
                continue
            uid = getattr(wanted, uid_field)
            role = wanted.role if _is_set(wanted.role) else None
            if not any(
                getattr(record, uid_field) == uid
                and (role is None or record.role.value == role)
                for record in getattr(claim, name)
            ):
                return False
        return True
