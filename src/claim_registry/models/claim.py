"""Claim domain models with strict validation.

This module defines the claim aggregate as it is stored (relationships as
lists of identifiers) and the expanded read-side projection returned by
detail and filter queries.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from beartype import beartype
from pydantic import Field, model_validator

from .affected_coverage import AffectedCoverage
from .base import BaseModelConfig, IdentifiableModel
from .involved import InvolvedCar, InvolvedParty, InvolvedPolicy
from .reference import Agency, Coverage


class ReportingType(str, Enum):
    """Who reported the claim."""

    FIRST_PARTY = "FirstPartyClaim"
    THIRD_PARTY = "ThirdPartyClaim"


class Responsibility(str, Enum):
    """Share of responsibility attributed to the insured."""

    FULL = "FullResponsibility"
    PARTIAL = "PartialResponsibility"
    NONE = "NoResponsibility"
    UNDER_INVESTIGATION = "UnderInvestigation"


class DamageType(str, Enum):
    """Nature of the damage."""

    MATERIAL = "MaterialDamage"
    BODILY_INJURY = "BodilyInjury"


class ClaimStatus(str, Enum):
    """Claim processing states.

    Listed in usual workflow order, but any state may follow any other.
    """

    OPEN = "OPEN"
    AWAITING_ASSIGNMENT = "AWAITING_ASSIGNMENT"
    AWAITING_INSPECTION = "AWAITING_INSPECTION"
    AWAITING_DOCUMENTATION = "AWAITING_DOCUMENTATION"
    UNDER_REVIEW = "UNDER_REVIEW"
    AWAITING_EXPERT_ASSESSMENT = "AWAITING_EXPERT_ASSESSMENT"
    AWAITING_GARAGE_ASSESSMENT = "AWAITING_GARAGE_ASSESSMENT"
    AWAITING_PHOTO_EVIDENCE = "AWAITING_PHOTO_EVIDENCE"
    AWAITING_EXPERT_REPORT = "AWAITING_EXPERT_REPORT"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    SETTLED = "SETTLED"
    CLOSED = "CLOSED"


@beartype
class ClaimBase(BaseModelConfig):
    """Scalar claim attributes shared by the stored and expanded forms."""

    claim_number: str = Field(
        ..., min_length=1, max_length=100, description="Unique claim number"
    )

    occurrence_date: date = Field(..., description="Date the incident occurred")

    reporting_date: date = Field(..., description="Date the incident was reported")

    reporting_type: ReportingType = Field(..., description="Who reported the claim")

    responsibility: Responsibility = Field(
        ..., description="Responsibility attributed to the insured"
    )

    damage_type: DamageType = Field(..., description="Nature of the damage")

    claim_amount: Decimal = Field(..., ge=Decimal("0"), description="Amount claimed")

    recourse_amount: Decimal = Field(
        default=Decimal("0"), description="Amount recoverable from third parties"
    )

    daaq: str | None = Field(None, description="DAAQ code")

    flag_fraud: bool | None = Field(None, description="Suspected fraud marker")

    status: ClaimStatus = Field(
        default=ClaimStatus.OPEN, description="Current claim status"
    )

    inspection_missions: list[str] = Field(
        default_factory=list, description="Inspection mission references"
    )

    @model_validator(mode="after")
    @beartype
    def validate_dates(self) -> "ClaimBase":
        """Ensure the incident happened strictly before it was reported."""
        if self.occurrence_date >= self.reporting_date:
            raise ValueError("Occurrence date must be before reporting date")
        return self


@beartype
class Claim(ClaimBase, IdentifiableModel):
    """Claim as persisted: relationships are identifier lists."""

    reporting_agency: UUID = Field(..., description="Reporting agency")

    involved_cars: list[UUID] = Field(default_factory=list)
    involved_policies: list[UUID] = Field(default_factory=list)
    involved_parties: list[UUID] = Field(default_factory=list)
    affected_coverages: list[UUID] = Field(default_factory=list)


@beartype
class AffectedCoverageDetails(BaseModelConfig):
    """Affected coverage with its coverage record expanded."""

    id: UUID
    evaluation: Decimal
    settled_amount: Decimal
    claim: UUID
    coverage: Coverage | None = None

    @classmethod
    def expand(
        cls, record: AffectedCoverage, coverage: Coverage | None
    ) -> "AffectedCoverageDetails":
        return cls(
            id=record.id,
            evaluation=record.evaluation,
            settled_amount=record.settled_amount,
            claim=record.claim,
            coverage=coverage,
        )


@beartype
class ClaimDetails(ClaimBase, IdentifiableModel):
    """Claim with every relationship resolved to its record."""

    reporting_agency: Agency | None = None

    involved_cars: list[InvolvedCar] = Field(default_factory=list)
    involved_policies: list[InvolvedPolicy] = Field(default_factory=list)
    involved_parties: list[InvolvedParty] = Field(default_factory=list)
    affected_coverages: list[AffectedCoverageDetails] = Field(default_factory=list)


RELATIONSHIP_FIELDS: tuple[str, ...] = (
    "involved_policies",
    "involved_cars",
    "involved_parties",
    "affected_coverages",
)
