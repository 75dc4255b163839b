"""Domain models package for the Claim Registry.

This package exports all Pydantic domain models with strict validation
and immutability.
"""

from .affected_coverage import AffectedCoverage
from .base import BaseModelConfig, IdentifiableModel
from .claim import (
    RELATIONSHIP_FIELDS,
    AffectedCoverageDetails,
    Claim,
    ClaimBase,
    ClaimDetails,
    ClaimStatus,
    DamageType,
    ReportingType,
    Responsibility,
)
from .involved import (
    CarRole,
    InvolvedCar,
    InvolvedParty,
    InvolvedPolicy,
    PartyRole,
    PolicyRole,
)
from .reference import Agency, Coverage

__all__ = [
    # Base models
    "BaseModelConfig",
    "IdentifiableModel",
    # Claim models
    "ClaimBase",
    "Claim",
    "ClaimDetails",
    "AffectedCoverageDetails",
    "ClaimStatus",
    "RELATIONSHIP_FIELDS",
    "DamageType",
    "ReportingType",
    "Responsibility",
    # Sub-entities
    "AffectedCoverage",
    "InvolvedCar",
    "InvolvedParty",
    "InvolvedPolicy",
    "CarRole",
    "PartyRole",
    "PolicyRole",
    # Reference data
    "Agency",
    "Coverage",
]
