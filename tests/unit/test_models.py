"""Unit tests for the claim domain models."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest
from pydantic import ValidationError

from claim_registry.models import (
    AffectedCoverage,
    AffectedCoverageDetails,
    Claim,
    ClaimStatus,
    Coverage,
    InvolvedCar,
    InvolvedParty,
    PartyRole,
)


def _claim(**overrides):
    data = {
        "claim_number": "C-100",
        "occurrence_date": date(2024, 3, 1),
        "reporting_date": date(2024, 3, 5),
        "reporting_type": "FirstPartyClaim",
        "responsibility": "FullResponsibility",
        "damage_type": "MaterialDamage",
        "claim_amount": Decimal("2500"),
        "reporting_agency": uuid4(),
    }
    data.update(overrides)
    return Claim(**data)


class TestClaim:
    """Test claim model validation."""

    def test_defaults(self) -> None:
        claim = _claim()

        assert claim.status is ClaimStatus.OPEN
        assert claim.recourse_amount == Decimal("0")
        assert claim.involved_cars == []
        assert claim.affected_coverages == []
        assert claim.flag_fraud is None

    def test_occurrence_one_day_before_reporting_is_accepted(self) -> None:
        claim = _claim(occurrence_date=date(2024, 3, 4))

        assert claim.occurrence_date == date(2024, 3, 4)

    def test_same_day_occurrence_and_reporting_is_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            _claim(occurrence_date=date(2024, 3, 5))

        assert "Occurrence date must be before reporting date" in str(exc_info.value)

    def test_negative_claim_amount_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _claim(claim_amount=Decimal("-1"))

    def test_claim_is_immutable(self) -> None:
        claim = _claim()

        with pytest.raises(ValidationError):
            claim.status = ClaimStatus.CLOSED  # type: ignore[misc]

    def test_camel_case_serialization(self) -> None:
        claim = _claim()

        data = claim.model_dump(mode="json", by_alias=True)

        assert data["claimNumber"] == "C-100"
        assert data["occurrenceDate"] == "2024-03-01"
        assert data["reportingType"] == "FirstPartyClaim"
        assert "involvedParties" in data

    def test_accepts_camel_case_input(self) -> None:
        claim = Claim.model_validate(
            {
                "claimNumber": "C-200",
                "occurrenceDate": "2024-01-01",
                "reportingDate": "2024-01-02",
                "reportingType": "ThirdPartyClaim",
                "responsibility": "NoResponsibility",
                "damageType": "BodilyInjury",
                "claimAmount": "10.50",
                "reportingAgency": str(uuid4()),
            }
        )

        assert claim.claim_amount == Decimal("10.50")


class TestAffectedCoverage:
    """Test the settlement invariant."""

    def test_settled_equal_to_evaluation_is_accepted(self) -> None:
        record = AffectedCoverage(
            evaluation=Decimal("1000"),
            settled_amount=Decimal("1000"),
            claim=uuid4(),
            coverage=uuid4(),
        )

        assert record.settled_amount == record.evaluation

    def test_settled_above_evaluation_is_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            AffectedCoverage(
                evaluation=Decimal("1000"),
                settled_amount=Decimal("1000.01"),
                claim=uuid4(),
                coverage=uuid4(),
            )

        assert "Settled amount cannot be greater than evaluation" in str(exc_info.value)

    def test_expand_embeds_coverage(self) -> None:
        coverage = Coverage(code="COLL", label="Collision")
        record = AffectedCoverage(
            evaluation=Decimal("500"), claim=uuid4(), coverage=coverage.id
        )

        details = AffectedCoverageDetails.expand(record, coverage)

        assert details.id == record.id
        assert details.coverage == coverage
        assert details.settled_amount == Decimal("0")


class TestInvolvedRecords:
    """Test shared sub-entity models."""

    def test_party_role_must_be_known(self) -> None:
        with pytest.raises(ValidationError):
            InvolvedParty(party_uid="P-1", role="Bystander")

    def test_party(self) -> None:
        party = InvolvedParty(party_uid="P-1", role="Witness")

        assert party.role is PartyRole.WITNESS

    def test_car_requires_uid(self) -> None:
        with pytest.raises(ValidationError):
            InvolvedCar(good_uid="", role="INSURED_CAR")
