"""Request schemas for the claim endpoints.

Values whose validity is a business rule (roles, amounts) are accepted as
``Any`` here and checked by the claim service, so clients get the same
aggregated messages whatever went wrong.
"""

from typing import Any

from pydantic import Field

from ..models.base import BaseModelConfig


class InvolvedCarFilter(BaseModelConfig):
    """Match claims linked to a car, optionally in a given role."""

    good_uid: str | None = Field(None, description="Vehicle identifier")
    role: str | None = Field(None, description="Car role to refine on")


class InvolvedPolicyFilter(BaseModelConfig):
    """Match claims linked to a policy, optionally in a given role."""

    good_uid: str | None = Field(None, description="Policy identifier")
    role: str | None = Field(None, description="Policy role to refine on")


class InvolvedPartyFilter(BaseModelConfig):
    """Match claims linked to a party, optionally in a given role."""

    party_uid: str | None = Field(None, description="Party identifier")
    role: str | None = Field(None, description="Party role to refine on")


class ClaimFilter(BaseModelConfig):
    """Filter criteria; every supplied field must match.

    Date fields take a ``[min, max]`` range where either bound may be empty.
    """

    claim_number: str | None = None
    occurrence_date: list[Any] | None = Field(None, description="[min, max] range")
    reporting_date: list[Any] | None = Field(None, description="[min, max] range")
    reporting_type: str | None = None
    responsibility: str | None = None
    damage_type: str | None = None
    daaq: str | None = None
    status: str | None = None
    involved_cars: InvolvedCarFilter | None = None
    involved_policies: InvolvedPolicyFilter | None = None
    involved_parties: InvolvedPartyFilter | None = None


class FilterRequest(BaseModelConfig):
    """Body of the filter endpoint."""

    filters: ClaimFilter = Field(default_factory=ClaimFilter)


class StatusUpdateRequest(BaseModelConfig):
    """New status for a claim."""

    status: Any = Field(None, description="Target claim status")


class InvolvedPartyRequest(BaseModelConfig):
    """Party to attach to a claim."""

    party_uid: Any = Field(None, description="Party identifier")
    role: Any = Field(None, description="Party role")


class InvolvedGoodRequest(BaseModelConfig):
    """Car or policy to attach to a claim."""

    good_uid: Any = Field(None, description="Car or policy identifier")
    role: Any = Field(None, description="Car or policy role")


class AffectedCoverageRequest(BaseModelConfig):
    """Coverage evaluation for a claim."""

    coverage_code: Any = Field(None, description="Coverage code")
    evaluation: Any = Field(None, description="Evaluated amount")
    settled_amount: Any = Field(None, description="Settled amount")
