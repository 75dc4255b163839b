"""Business logic services."""

from .claim_query_service import ClaimQueryService
from .claim_service import ClaimService
from .claim_validation import validate_claim_fields
from .operation_monitor import monitored_operation
from .reference_resolver import ReferenceResolver, Resolution, ResolutionOutcome

__all__ = [
    "ClaimQueryService",
    "ClaimService",
    "ReferenceResolver",
    "Resolution",
    "ResolutionOutcome",
    "monitored_operation",
    "validate_claim_fields",
]
