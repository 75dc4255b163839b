# ClaimRegistry - Claims Management Record Service
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Claim business logic service.

Every operation validates first and writes last: all field and reference
checks complete, and their messages are aggregated, before the store is
touched. Failures come back as ``Err(ServiceError)``.
"""

import asyncio
from collections.abc import Mapping
from enum import Enum
from typing import Any
from uuid import UUID

from attrs import frozen
from beartype import beartype
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from ..core.errors import ErrorKind, ServiceError, ViolationCollector
from ..core.logging_utils import get_logger
from ..core.result_types import Err, Ok, Result
from ..models import (
    RELATIONSHIP_FIELDS,
    AffectedCoverage,
    CarRole,
    Claim,
    ClaimStatus,
    Coverage,
    PartyRole,
    PolicyRole,
)
from ..store import DuplicateKeyError, EntityKind, EntityStore
from .claim_validation import (
    enum_violation,
    is_member,
    is_number,
    is_present,
    parse_amount,
    parse_date,
    validate_claim_fields,
)
from .operation_monitor import monitored_operation
from .reference_resolver import RELATIONSHIPS, ReferenceResolver

logger = get_logger(__name__)

DATE_ORDER_MESSAGE = "Occurrence date must be before reporting date"
DUPLICATE_CLAIM_MESSAGE = "claimNumber already exists."

_DATE_FIELDS = frozenset({"occurrence_date", "reporting_date"})
_AMOUNT_FIELDS = frozenset({"claim_amount", "recourse_amount"})


@frozen
class Involvement:
    """How one kind of shared sub-entity is attached to a claim."""

    kind: EntityKind
    field: str
    uid_field: str
    uid_label: str
    role_enum: type[Enum]
    label: str


PARTY = Involvement(
    EntityKind.INVOLVED_PARTY, "involved_parties", "party_uid", "Party Uid",
    PartyRole, "Party",
)
CAR = Involvement(
    EntityKind.INVOLVED_CAR, "involved_cars", "good_uid", "Good Uid",
    CarRole, "Car",
)
POLICY = Involvement(
    EntityKind.INVOLVED_POLICY, "involved_policies", "good_uid", "Good Uid",
    PolicyRole, "Policy",
)


def claim_not_found(claim_number: Any) -> str:
    return f"Claim {claim_number} not found"


def _validation_messages(exc: ValidationError) -> list[str]:
    """Flatten pydantic errors into plain messages."""
    messages = []
    for error in exc.errors():
        message = str(error["msg"]).removeprefix("Value error, ")
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {message}" if location else message)
    return messages


def claim_fields(
    payload: Mapping[str, Any], exclude: frozenset[str] = frozenset()
) -> dict[str, Any]:
    """Pick the claim fields present in a camelCase payload.

    Dates and amounts are normalized with the same parsers the field
    validator used, so a payload that passed validation converts cleanly.
    """
    fields: dict[str, Any] = {}
    for name, info in Claim.model_fields.items():
        key = info.alias or to_camel(name)
        if name == "id" or name in exclude or not is_present(payload, key):
            continue
        value = payload[key]
        if name in _DATE_FIELDS:
            value = parse_date(value)
        elif name in _AMOUNT_FIELDS:
            value = parse_amount(value)
        fields[name] = value
    return fields


def relationship_references(payload: Mapping[str, Any]) -> dict[str, list[Any]]:
    """Identifier lists supplied for each relationship, keyed by field name."""
    references: dict[str, list[Any]] = {}
    for relationship in RELATIONSHIPS:
        value = payload.get(relationship.payload_key)
        if isinstance(value, list):
            references[relationship.field] = value
    return references


class ClaimService:
    """Service for claim lifecycle operations."""

    def __init__(self, store: EntityStore) -> None:
        """Initialize claim service with dependency validation."""
        if not store or not hasattr(store, "find_one"):
            raise ValueError("Entity store required")

        self._store = store
        self._resolver = ReferenceResolver(store)

    # Lookups shared by the operations

    async def _find_claim(self, claim_number: Any) -> Claim | None:
        if not isinstance(claim_number, str) or not claim_number.strip():
            return None
        return await self._store.find_one(
            EntityKind.CLAIM, {"claim_number": claim_number}
        )

    async def _find_coverage(self, code: Any) -> Coverage | None:
        if not isinstance(code, str) or not code:
            return None
        return await self._store.find_one(EntityKind.COVERAGE, {"code": code})

    async def _claim_number_taken(self, claim_number: Any) -> bool:
        return await self._find_claim(claim_number) is not None

    async def _check_agency(self, identifier: Any) -> str | None:
        """Return a violation when a supplied agency does not exist."""
        if identifier is None:
            return None
        if await self._resolver.exists(EntityKind.AGENCY, identifier):
            return None
        return f"Agency Object {identifier} not found."

    # Claim record

    @beartype
    @monitored_operation("create claim")
    async def create(self, payload: Mapping[str, Any]) -> Result[Claim, ServiceError]:
        """Create a new claim from a camelCase payload."""
        violations = ViolationCollector(validate_claim_fields(payload))

        taken, agency_violation, resolutions = await asyncio.gather(
            self._claim_number_taken(payload.get("claimNumber")),
            self._check_agency(payload.get("reportingAgency")),
            self._resolver.resolve(relationship_references(payload)),
        )
        if taken:
            violations.add(DUPLICATE_CLAIM_MESSAGE)
        violations.add(agency_violation)
        violations.extend(resolution.message for resolution in resolutions)

        if violations:
            return Err(violations.to_error())

        try:
            claim = Claim.model_validate(claim_fields(payload))
        except ValidationError as e:
            return Err(ServiceError.validation(_validation_messages(e)))

        try:
            created = await self._store.create(EntityKind.CLAIM, claim)
        except DuplicateKeyError:
            return Err(ServiceError.conflict([DUPLICATE_CLAIM_MESSAGE]))

        return Ok(created)

    @beartype
    @monitored_operation("update claim")
    async def update(
        self, claim_number: str, payload: Mapping[str, Any]
    ) -> Result[Claim, ServiceError]:
        """Merge the supplied fields into an existing claim.

        Relationship identifiers are appended to the claim's lists. The claim
        number itself never changes.
        """
        violations = ViolationCollector(validate_claim_fields(payload, partial=True))

        claim = await self._find_claim(claim_number)
        if claim is None:
            violations.add(claim_not_found(claim_number))
            return Err(violations.to_error(ErrorKind.NOT_FOUND))

        linked = {field: getattr(claim, field) for field in RELATIONSHIP_FIELDS}
        resolutions, agency_violation = await asyncio.gather(
            self._resolver.resolve(relationship_references(payload), linked),
            self._check_agency(payload.get("reportingAgency")),
        )
        violations.add(agency_violation)
        violations.extend(resolution.message for resolution in resolutions)
        violations.add(self._check_single_date(claim, payload))

        if violations:
            return Err(violations.to_error())

        changes = claim_fields(payload, exclude=frozenset({"claim_number"}))
        for field in RELATIONSHIP_FIELDS:
            if field in changes:
                changes[field] = [*getattr(claim, field), *changes[field]]

        try:
            merged = Claim.model_validate({**claim.model_dump(), **changes})
        except ValidationError as e:
            return Err(ServiceError.validation(_validation_messages(e)))

        if not changes:
            return Ok(merged)

        updated = await self._store.update_one(
            EntityKind.CLAIM,
            {"claim_number": claim.claim_number},
            merged.model_dump(mode="json", include=set(changes)),
        )
        if updated is None:
            return Err(ServiceError.not_found([claim_not_found(claim_number)]))
        return Ok(updated)

    @staticmethod
    def _check_single_date(claim: Claim, payload: Mapping[str, Any]) -> str | None:
        """Compare a lone supplied date with the stored counterpart."""
        occurrence = parse_date(payload.get("occurrenceDate"))
        reporting = parse_date(payload.get("reportingDate"))
        if occurrence is not None and not is_present(payload, "reportingDate"):
            reporting = claim.reporting_date
        elif reporting is not None and not is_present(payload, "occurrenceDate"):
            occurrence = claim.occurrence_date
        else:
            # Both supplied: the field validator reports them.
            return None
        return DATE_ORDER_MESSAGE if occurrence >= reporting else None

    @beartype
    @monitored_operation("update claim status")
    async def update_status(
        self, claim_number: str, status: Any
    ) -> Result[Claim, ServiceError]:
        """Move a claim to any status in the set."""
        if not is_member(status, ClaimStatus):
            return Err(ServiceError.validation([enum_violation("Status", ClaimStatus)]))

        updated = await self._store.update_one(
            EntityKind.CLAIM, {"claim_number": claim_number}, {"status": status}
        )
        if updated is None:
            return Err(ServiceError.not_found([claim_not_found(claim_number)]))
        return Ok(updated)

    # Involved parties, cars and policies

    @beartype
    @monitored_operation("add involved party")
    async def add_involved_party(
        self, claim_number: str, party_uid: Any, role: Any
    ) -> Result[Claim, ServiceError]:
        return await self._attach_involved(PARTY, claim_number, party_uid, role)

    @beartype
    @monitored_operation("add involved car")
    async def add_involved_car(
        self, claim_number: str, good_uid: Any, role: Any
    ) -> Result[Claim, ServiceError]:
        return await self._attach_involved(CAR, claim_number, good_uid, role)

    @beartype
    @monitored_operation("add involved policy")
    async def add_involved_policy(
        self, claim_number: str, good_uid: Any, role: Any
    ) -> Result[Claim, ServiceError]:
        return await self._attach_involved(POLICY, claim_number, good_uid, role)

    async def _attach_involved(
        self, involvement: Involvement, claim_number: str, uid: Any, role: Any
    ) -> Result[Claim, ServiceError]:
        """Link a shared record to a claim, creating the record if needed."""
        violations = ViolationCollector()
        uid_ok = isinstance(uid, str) and bool(uid.strip())
        if not uid_ok:
            violations.add(f"{involvement.uid_label} is not provided")
        if not is_member(role, involvement.role_enum):
            violations.add(enum_violation("Role", involvement.role_enum))

        claim = await self._find_claim(claim_number)
        if claim is None:
            violations.add(claim_not_found(claim_number))
            return Err(violations.to_error(ErrorKind.NOT_FOUND))
        if violations:
            return Err(violations.to_error())

        record = await self._store.find_one(
            involvement.kind, {involvement.uid_field: uid}
        )
        linked: list[UUID] = getattr(claim, involvement.field)
        if record is not None and record.id in linked:
            return Err(
                ServiceError.conflict([f"{involvement.label} already exists in the claim"])
            )

        if record is None:
            record = await self._store.create(
                involvement.kind,
                involvement.kind.model.model_validate(
                    {involvement.uid_field: uid, "role": role}
                ),
            )
            logger.info("Created %s %s", involvement.kind.value, record.id)

        updated = claim.model_copy(update={involvement.field: [*linked, record.id]})
        return Ok(await self._store.save(EntityKind.CLAIM, updated))

    # Affected coverages

    @staticmethod
    def _amount_violations(
        evaluation: Any,
        settled_amount: Any,
        *,
        settled_required: bool,
    ) -> list[str]:
        messages = []
        if not is_number(evaluation):
            messages.append("Invalid Evaluation value type")
        if settled_amount is None:
            if settled_required:
                messages.append("Invalid settled amount value type")
        elif not is_number(settled_amount):
            messages.append(
                "Invalid settled amount value type"
                if settled_required
                else "Invalid settledAmount value type"
            )
        settled = 0 if settled_amount is None else settled_amount
        if (
            is_number(evaluation)
            and is_number(settled)
            and parse_amount(settled) > parse_amount(evaluation)
        ):
            messages.append("Settled amount cannot be greater than evaluation")
        return messages

    @beartype
    @monitored_operation("add affected coverage")
    async def add_affected_coverage(
        self,
        claim_number: str,
        coverage_code: Any,
        evaluation: Any,
        settled_amount: Any = None,
    ) -> Result[AffectedCoverage, ServiceError]:
        """Record the evaluation of one coverage for a claim."""
        violations = ViolationCollector()
        if not coverage_code or evaluation is None or not claim_number:
            violations.add("Required claim data is missing")
        violations.extend(
            self._amount_violations(evaluation, settled_amount, settled_required=False)
        )

        claim, coverage = await asyncio.gather(
            self._find_claim(claim_number),
            self._find_coverage(coverage_code),
        )
        if claim is None:
            violations.add(claim_not_found(claim_number))
            return Err(violations.to_error(ErrorKind.NOT_FOUND))

        if coverage is None:
            violations.add(f"Coverage object for code {coverage_code} not found")
            return Err(violations.to_error())

        existing = await self._store.find_one(
            EntityKind.AFFECTED_COVERAGE, {"claim": claim.id, "coverage": coverage.id}
        )
        if violations:
            return Err(violations.to_error())
        if existing is not None:
            return Err(
                ServiceError.conflict(["Affected coverage already exists in the claim"])
            )

        try:
            affected = AffectedCoverage(
                evaluation=parse_amount(evaluation),
                settled_amount=parse_amount(settled_amount) or 0,
                claim=claim.id,
                coverage=coverage.id,
            )
        except ValidationError as e:
            return Err(ServiceError.validation(_validation_messages(e)))

        record = await self._store.create(EntityKind.AFFECTED_COVERAGE, affected)
        await self._store.save(
            EntityKind.CLAIM,
            claim.model_copy(
                update={"affected_coverages": [*claim.affected_coverages, record.id]}
            ),
        )
        return Ok(record)

    @beartype
    @monitored_operation("update affected coverage")
    async def update_affected_coverage(
        self,
        claim_number: str,
        coverage_code: Any,
        evaluation: Any,
        settled_amount: Any,
    ) -> Result[AffectedCoverage, ServiceError]:
        """Replace the evaluation and settled amount of a claim's coverage."""
        violations = ViolationCollector(
            self._amount_violations(evaluation, settled_amount, settled_required=True)
        )

        claim = await self._find_claim(claim_number)
        if claim is None:
            violations.add(claim_not_found(claim_number))
            return Err(violations.to_error(ErrorKind.NOT_FOUND))

        coverage = await self._find_coverage(coverage_code)
        if coverage is None:
            violations.add(f"Coverage object for code {coverage_code} not found")
            return Err(violations.to_error())

        records = await self._store.get_many(
            EntityKind.AFFECTED_COVERAGE, claim.affected_coverages
        )
        affected = next(
            (record for record in records if record.coverage == coverage.id), None
        )
        if affected is None:
            violations.add("Affected coverage not found")
        if violations:
            return Err(violations.to_error())

        try:
            updated = AffectedCoverage.model_validate(
                {
                    **affected.model_dump(),
                    "evaluation": parse_amount(evaluation),
                    "settled_amount": parse_amount(settled_amount),
                }
            )
        except ValidationError as e:
            return Err(ServiceError.validation(_validation_messages(e)))

        return Ok(await self._store.save(EntityKind.AFFECTED_COVERAGE, updated))
