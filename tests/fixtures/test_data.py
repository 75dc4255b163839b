"""Test data factories for claim payloads and reference records."""

from typing import Any
from uuid import UUID

from claim_registry.models import Agency, Coverage

ALL_STATUSES = (
    "OPEN, AWAITING_ASSIGNMENT, AWAITING_INSPECTION, AWAITING_DOCUMENTATION, "
    "UNDER_REVIEW, AWAITING_EXPERT_ASSESSMENT, AWAITING_GARAGE_ASSESSMENT, "
    "AWAITING_PHOTO_EVIDENCE, AWAITING_EXPERT_REPORT, PENDING_APPROVAL, "
    "SETTLED, CLOSED"
)


def make_agency(code: str = "AG-MTL") -> Agency:
    return Agency(code=code, label="Montreal Downtown Agency")


def make_coverage(code: str = "COLL") -> Coverage:
    return Coverage(code=code, uid="CV-001", label="Collision")


def claim_payload(agency_id: UUID, **overrides: Any) -> dict[str, Any]:
    """Valid camelCase create payload; keyword overrides replace fields.

    Pass a value of ``...`` to drop a field entirely.
    """
    payload: dict[str, Any] = {
        "claimNumber": "C-100",
        "occurrenceDate": "2024-03-01",
        "reportingDate": "2024-03-05",
        "reportingType": "FirstPartyClaim",
        "responsibility": "FullResponsibility",
        "damageType": "MaterialDamage",
        "claimAmount": 2500,
        "reportingAgency": str(agency_id),
    }
    for key, value in overrides.items():
        if value is ...:
            payload.pop(key, None)
        else:
            payload[key] = value
    return payload
