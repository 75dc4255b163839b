"""Unit tests for claim field validation."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from claim_registry.services.claim_validation import (
    is_number,
    parse_amount,
    parse_date,
    validate_claim_fields,
)
from tests.fixtures.test_data import ALL_STATUSES, claim_payload


@pytest.fixture
def valid_payload():
    return claim_payload(uuid4())


class TestHelpers:
    @pytest.mark.parametrize("value", [1, 2.5, Decimal("3.10"), 0])
    def test_numbers(self, value) -> None:
        assert is_number(value)

    @pytest.mark.parametrize("value", ["123", True, None, float("nan"), [1]])
    def test_not_numbers(self, value) -> None:
        assert not is_number(value)

    def test_parse_date_accepts_iso_datetime(self) -> None:
        assert parse_date("2024-03-01T10:30:00") == date(2024, 3, 1)
        assert parse_date("2024-03-01") == date(2024, 3, 1)

    @pytest.mark.parametrize("value", ["", "yesterday", "2024-13-01", 20240301, None])
    def test_parse_date_rejects(self, value) -> None:
        assert parse_date(value) is None

    def test_parse_amount(self) -> None:
        assert parse_amount("12.50") == Decimal("12.50")
        assert parse_amount(0.1) == Decimal("0.1")
        assert parse_amount(False) is None
        assert parse_amount("abc") is None
        assert parse_amount("Infinity") is None


class TestCreateValidation:
    def test_valid_payload_has_no_violations(self, valid_payload) -> None:
        assert validate_claim_fields(valid_payload) == []

    def test_missing_claim_number(self, valid_payload) -> None:
        del valid_payload["claimNumber"]

        assert validate_claim_fields(valid_payload) == ["Claim Number is not provided"]

    def test_every_violation_is_reported_in_order(self) -> None:
        messages = validate_claim_fields({})

        assert messages == [
            "Claim Number is not provided",
            "Occurrence Date is invalid or not provided",
            "Reporting Date is invalid or not provided",
            "Reporting Type is not provided",
            "Responsibility is not provided",
            "Damage Type is not provided",
            "Claim Amount is invalid or not provided",
            "Reporting Agency is not provided",
        ]

    def test_invalid_enum_lists_allowed_values(self, valid_payload) -> None:
        valid_payload["damageType"] = "Scratch"

        assert validate_claim_fields(valid_payload) == [
            "Damage Type should be one of these options: MaterialDamage, BodilyInjury"
        ]

    def test_numeric_string_claim_amount_passes(self, valid_payload) -> None:
        valid_payload["claimAmount"] = "2500.00"

        assert validate_claim_fields(valid_payload) == []

    def test_negative_claim_amount(self, valid_payload) -> None:
        valid_payload["claimAmount"] = -5

        assert validate_claim_fields(valid_payload) == [
            "Claim Amount is invalid or not provided"
        ]

    @pytest.mark.parametrize("value", ["123", True])
    def test_recourse_amount_must_be_numeric_type(self, valid_payload, value) -> None:
        valid_payload["recourseAmount"] = value

        assert validate_claim_fields(valid_payload) == [
            "Invalid Recourse Amount value type"
        ]

    def test_flag_fraud_must_be_boolean(self, valid_payload) -> None:
        valid_payload["flagFraud"] = "yes"

        assert validate_claim_fields(valid_payload) == ["Flag Fraud must be a boolean"]

    def test_same_day_dates_rejected(self, valid_payload) -> None:
        valid_payload["occurrenceDate"] = valid_payload["reportingDate"]

        assert validate_claim_fields(valid_payload) == [
            "Occurrence date must be before reporting date"
        ]

    def test_one_day_before_accepted(self, valid_payload) -> None:
        valid_payload["occurrenceDate"] = "2024-03-04"

        assert validate_claim_fields(valid_payload) == []

    def test_invalid_status_lists_all_twelve(self, valid_payload) -> None:
        valid_payload["status"] = "BOGUS"

        assert validate_claim_fields(valid_payload) == [
            f"Status should be one of these options: {ALL_STATUSES}"
        ]

    def test_lists_and_daaq_types(self, valid_payload) -> None:
        valid_payload["daaq"] = 12
        valid_payload["involvedCars"] = "not-a-list"
        valid_payload["inspectionMissions"] = {}

        assert validate_claim_fields(valid_payload) == [
            "Daaq must be a string",
            "Inspection Missions must be a list",
            "Involved Cars must be a list",
        ]


class TestPartialValidation:
    def test_empty_update_is_valid(self) -> None:
        assert validate_claim_fields({}, partial=True) == []

    def test_null_fields_are_ignored(self) -> None:
        assert validate_claim_fields(
            {"reportingType": None, "claimAmount": None}, partial=True
        ) == []

    def test_only_present_fields_are_checked(self) -> None:
        messages = validate_claim_fields(
            {"occurrenceDate": "not-a-date", "responsibility": "Mostly"},
            partial=True,
        )

        assert messages == [
            "Occurrence Date is invalid",
            "Responsibility should be one of these options: FullResponsibility, "
            "PartialResponsibility, NoResponsibility, UnderInvestigation",
        ]

    def test_claim_number_not_required(self) -> None:
        assert validate_claim_fields({"daaq": "X1"}, partial=True) == []
