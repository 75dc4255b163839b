"""API request and response schemas."""

from .claim import (
    AffectedCoverageRequest,
    ClaimFilter,
    FilterRequest,
    InvolvedCarFilter,
    InvolvedGoodRequest,
    InvolvedPartyFilter,
    InvolvedPartyRequest,
    InvolvedPolicyFilter,
    StatusUpdateRequest,
)
from .common import APIInfo, HealthResponse

__all__ = [
    "AffectedCoverageRequest",
    "ClaimFilter",
    "FilterRequest",
    "InvolvedCarFilter",
    "InvolvedGoodRequest",
    "InvolvedPartyFilter",
    "InvolvedPartyRequest",
    "InvolvedPolicyFilter",
    "StatusUpdateRequest",
    "APIInfo",
    "HealthResponse",
]
