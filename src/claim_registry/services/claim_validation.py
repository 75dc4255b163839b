# ClaimRegistry - Claims Management Record Service
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Field-level validation of claim payloads.

Payloads arrive as raw JSON mappings with camelCase keys. Each check below
looks at one rule and returns a message or ``None``; ``validate_claim_fields``
runs them all in declaration order so the caller always receives every
violation, never only the first.

On a partial payload (update) a check only looks at keys that are present,
and a key holding ``null`` counts as absent.
"""

import math
from collections.abc import Callable, Mapping
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from beartype import beartype

from ..models import ClaimStatus, DamageType, ReportingType, Responsibility

Check = Callable[[Mapping[str, Any], bool], str | None]

LIST_FIELDS: dict[str, str] = {
    "inspectionMissions": "Inspection Missions",
    "involvedCars": "Involved Cars",
    "involvedPolicies": "Involved Policies",
    "involvedParties": "Involved Parties",
    "affectedCoverages": "Affected Coverages",
}


@beartype
def is_present(payload: Mapping[str, Any], key: str) -> bool:
    """A key counts as supplied when it exists and is not null."""
    return payload.get(key) is not None


@beartype
def is_number(value: Any) -> bool:
    """True only for real numeric types; numeric strings and booleans fail."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, Decimal):
        return value.is_finite()
    return True


@beartype
def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


@beartype
def parse_date(value: Any) -> date | None:
    """Parse an ISO date or datetime; anything else yields None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip()).date()
    except ValueError:
        return None


@beartype
def parse_amount(value: Any) -> Decimal | None:
    """Parse a number or numeric string into a finite Decimal."""
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, float):
            amount = Decimal(str(value))
        elif isinstance(value, (int, Decimal)):
            amount = Decimal(value)
        elif isinstance(value, str) and value.strip():
            amount = Decimal(value.strip())
        else:
            return None
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


@beartype
def enum_options(enum_cls: type[Enum]) -> str:
    return ", ".join(str(member.value) for member in enum_cls)


@beartype
def is_member(value: Any, enum_cls: type[Enum]) -> bool:
    return isinstance(value, str) and value in {member.value for member in enum_cls}


@beartype
def enum_violation(label: str, enum_cls: type[Enum]) -> str:
    return f"{label} should be one of these options: {enum_options(enum_cls)}"


def _check_claim_number(payload: Mapping[str, Any], partial: bool) -> str | None:
    if partial:
        return None
    value = payload.get("claimNumber")
    if not isinstance(value, str) or not value.strip():
        return "Claim Number is not provided"
    return None


def _date_check(key: str, label: str) -> Check:
    def check(payload: Mapping[str, Any], partial: bool) -> str | None:
        if partial:
            if is_present(payload, key) and parse_date(payload[key]) is None:
                return f"{label} is invalid"
            return None
        if parse_date(payload.get(key)) is None:
            return f"{label} is invalid or not provided"
        return None

    return check


def _enum_check(key: str, label: str, enum_cls: type[Enum]) -> Check:
    def check(payload: Mapping[str, Any], partial: bool) -> str | None:
        if not is_present(payload, key):
            return None if partial else f"{label} is not provided"
        if not is_member(payload[key], enum_cls):
            return enum_violation(label, enum_cls)
        return None

    return check


def _check_claim_amount(payload: Mapping[str, Any], partial: bool) -> str | None:
    if partial and not is_present(payload, "claimAmount"):
        return None
    amount = parse_amount(payload.get("claimAmount"))
    if amount is None or amount < 0:
        return "Claim Amount is invalid" if partial else (
            "Claim Amount is invalid or not provided"
        )
    return None


def _check_reporting_agency(payload: Mapping[str, Any], partial: bool) -> str | None:
    if partial or is_present(payload, "reportingAgency"):
        return None
    return "Reporting Agency is not provided"


def _check_recourse_amount(payload: Mapping[str, Any], partial: bool) -> str | None:
    if is_present(payload, "recourseAmount") and not is_number(
        payload["recourseAmount"]
    ):
        return "Invalid Recourse Amount value type"
    return None


def _check_flag_fraud(payload: Mapping[str, Any], partial: bool) -> str | None:
    if is_present(payload, "flagFraud") and not is_boolean(payload["flagFraud"]):
        return "Flag Fraud must be a boolean"
    return None


def _check_date_order(payload: Mapping[str, Any], partial: bool) -> str | None:
    occurrence = parse_date(payload.get("occurrenceDate"))
    reporting = parse_date(payload.get("reportingDate"))
    if occurrence is not None and reporting is not None and occurrence >= reporting:
        return "Occurrence date must be before reporting date"
    return None


def _check_status(payload: Mapping[str, Any], partial: bool) -> str | None:
    # Status is optional on create too: it defaults to OPEN.
    if is_present(payload, "status") and not is_member(payload["status"], ClaimStatus):
        return enum_violation("Status", ClaimStatus)
    return None


def _check_daaq(payload: Mapping[str, Any], partial: bool) -> str | None:
    if is_present(payload, "daaq") and not isinstance(payload["daaq"], str):
        return "Daaq must be a string"
    return None


def _list_check(key: str, label: str) -> Check:
    def check(payload: Mapping[str, Any], partial: bool) -> str | None:
        if is_present(payload, key) and not isinstance(payload[key], list):
            return f"{label} must be a list"
        return None

    return check


CLAIM_CHECKS: tuple[Check, ...] = (
    _check_claim_number,
    _date_check("occurrenceDate", "Occurrence Date"),
    _date_check("reportingDate", "Reporting Date"),
    _enum_check("reportingType", "Reporting Type", ReportingType),
    _enum_check("responsibility", "Responsibility", Responsibility),
    _enum_check("damageType", "Damage Type", DamageType),
    _check_claim_amount,
    _check_reporting_agency,
    _check_recourse_amount,
    _check_flag_fraud,
    _check_date_order,
    _check_status,
    _check_daaq,
    *(_list_check(key, label) for key, label in LIST_FIELDS.items()),
)


@beartype
def validate_claim_fields(
    payload: Mapping[str, Any], *, partial: bool = False
) -> list[str]:
    """Run every field check and return the violation messages, in order.

    An empty list means the payload is well-formed. Cross-entity rules
    (uniqueness, references) are checked separately by the claim service.
    """
    messages: list[str] = []
    for check in CLAIM_CHECKS:
        message = check(payload, partial)
        if message is not None:
            messages.append(message)
    return messages
