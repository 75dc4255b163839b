"""Shared sub-entities a claim links to: cars, parties and policies.

These records are keyed by a business identifier (``good_uid`` or
``party_uid``) and may be linked from many claims at once.
"""

from enum import Enum

from beartype import beartype
from pydantic import Field

from .base import IdentifiableModel


class CarRole(str, Enum):
    """Role a car plays in a claim."""

    INSURED_CAR = "INSURED_CAR"
    ADVERSE_CAR = "ADVERSE_CAR"


class PolicyRole(str, Enum):
    """Role a policy plays in a claim."""

    INSURED_POLICY = "InsuredPolicy"
    ADVERSE_POLICY = "AdversePolicy"


class PartyRole(str, Enum):
    """Role a person or organisation plays in a claim."""

    PEDESTRIAN = "Pedestrian"
    INSURED_DRIVER = "InsuredDriver"
    ADVERSE_DRIVER = "AdverseDriver"
    PASSENGER = "Passenger"
    WITNESS = "Witness"
    GARAGE = "Garage"
    INSPECTOR = "Inspector"
    AGENT = "Agent"


@beartype
class InvolvedCar(IdentifiableModel):
    """Vehicle involved in one or more claims."""

    good_uid: str = Field(..., min_length=1, description="Vehicle identifier")
    role: CarRole = Field(..., description="Insured or adverse vehicle")


@beartype
class InvolvedPolicy(IdentifiableModel):
    """Insurance policy involved in one or more claims."""

    good_uid: str = Field(..., min_length=1, description="Policy identifier")
    role: PolicyRole = Field(..., description="Insured or adverse policy")


@beartype
class InvolvedParty(IdentifiableModel):
    """Person or organisation involved in one or more claims."""

    party_uid: str = Field(..., min_length=1, description="Party identifier")
    role: PartyRole = Field(..., description="Part played in the incident")
