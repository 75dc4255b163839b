"""Claim endpoints.

Thin adapters from HTTP to the claim services: bodies are passed through
as-is so the services can report every violation at once, and results are
mapped onto status codes by ``handle_result``.
"""

from typing import Any

from beartype import beartype
from fastapi import APIRouter, Body, Depends, Response, status

from ...models import AffectedCoverage, Claim, ClaimDetails
from ...schemas.claim import (
    AffectedCoverageRequest,
    FilterRequest,
    InvolvedGoodRequest,
    InvolvedPartyRequest,
    StatusUpdateRequest,
)
from ...services.claim_query_service import ClaimQueryService
from ...services.claim_service import ClaimService
from ..dependencies import get_claim_service, get_query_service
from ..response_patterns import ErrorResponse, handle_result

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
@beartype
async def create_claim(
    response: Response,
    payload: dict[str, Any] = Body(...),
    service: ClaimService = Depends(get_claim_service),
) -> Claim | ErrorResponse:
    """Create a new claim.

    Args:
        payload: Claim fields in camelCase
        service: Claim lifecycle service

    Returns:
        Claim: Created claim, with status OPEN unless another was given
    """
    result = await service.create(payload)
    return handle_result(result, response, success_status=status.HTTP_201_CREATED)


@router.post("/filter")
@beartype
async def filter_claims(
    request: FilterRequest,
    response: Response,
    service: ClaimQueryService = Depends(get_query_service),
) -> list[ClaimDetails] | ErrorResponse:
    """Find claims matching every supplied filter, relationships expanded."""
    result = await service.filter(request.filters)
    return handle_result(result, response)


@router.get("/{claim_number}")
@beartype
async def get_claim_details(
    claim_number: str,
    response: Response,
    service: ClaimQueryService = Depends(get_query_service),
) -> list[ClaimDetails] | ErrorResponse:
    """Get every claim with this number, relationships expanded."""
    result = await service.get_details(claim_number)
    return handle_result(result, response)


@router.put("/{claim_number}")
@beartype
async def update_claim(
    claim_number: str,
    response: Response,
    payload: dict[str, Any] = Body(...),
    service: ClaimService = Depends(get_claim_service),
) -> Claim | ErrorResponse:
    """Update the supplied fields of a claim.

    Relationship identifiers are appended to the claim's current lists.
    """
    result = await service.update(claim_number, payload)
    return handle_result(result, response)


@router.put("/{claim_number}/status")
@beartype
async def update_claim_status(
    claim_number: str,
    request: StatusUpdateRequest,
    response: Response,
    service: ClaimService = Depends(get_claim_service),
) -> Claim | ErrorResponse:
    """Move a claim to another status."""
    result = await service.update_status(claim_number, request.status)
    return handle_result(result, response)


@router.post("/{claim_number}/parties", status_code=status.HTTP_201_CREATED)
@beartype
async def add_involved_party(
    claim_number: str,
    request: InvolvedPartyRequest,
    response: Response,
    service: ClaimService = Depends(get_claim_service),
) -> Claim | ErrorResponse:
    """Link a party to a claim, registering the party if it is new."""
    result = await service.add_involved_party(
        claim_number, request.party_uid, request.role
    )
    return handle_result(result, response, success_status=status.HTTP_201_CREATED)


@router.post("/{claim_number}/cars", status_code=status.HTTP_201_CREATED)
@beartype
async def add_involved_car(
    claim_number: str,
    request: InvolvedGoodRequest,
    response: Response,
    service: ClaimService = Depends(get_claim_service),
) -> Claim | ErrorResponse:
    """Link a car to a claim, registering the car if it is new."""
    result = await service.add_involved_car(
        claim_number, request.good_uid, request.role
    )
    return handle_result(result, response, success_status=status.HTTP_201_CREATED)


@router.post("/{claim_number}/policies", status_code=status.HTTP_201_CREATED)
@beartype
async def add_involved_policy(
    claim_number: str,
    request: InvolvedGoodRequest,
    response: Response,
    service: ClaimService = Depends(get_claim_service),
) -> Claim | ErrorResponse:
    """Link a policy to a claim, registering the policy if it is new."""
    result = await service.add_involved_policy(
        claim_number, request.good_uid, request.role
    )
    return handle_result(result, response, success_status=status.HTTP_201_CREATED)


@router.post("/{claim_number}/coverages", status_code=status.HTTP_201_CREATED)
@beartype
async def add_affected_coverage(
    claim_number: str,
    request: AffectedCoverageRequest,
    response: Response,
    service: ClaimService = Depends(get_claim_service),
) -> AffectedCoverage | ErrorResponse:
    """Record a coverage evaluation for a claim."""
    result = await service.add_affected_coverage(
        claim_number,
        request.coverage_code,
        request.evaluation,
        request.settled_amount,
    )
    return handle_result(result, response, success_status=status.HTTP_201_CREATED)


@router.put("/{claim_number}/coverages")
@beartype
async def update_affected_coverage(
    claim_number: str,
    request: AffectedCoverageRequest,
    response: Response,
    service: ClaimService = Depends(get_claim_service),
) -> AffectedCoverage | ErrorResponse:
    """Replace the evaluation and settled amount of a claim's coverage."""
    result = await service.update_affected_coverage(
        claim_number,
        request.coverage_code,
        request.evaluation,
        request.settled_amount,
    )
    return handle_result(result, response)
