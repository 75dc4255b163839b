"""Unit tests for service errors and result types."""

import pytest

from claim_registry.core.errors import ErrorKind, ServiceError, ViolationCollector
from claim_registry.core.result_types import Err, Ok


class TestErrorKind:
    @pytest.mark.parametrize(
        ("kind", "status_code"),
        [
            (ErrorKind.VALIDATION, 400),
            (ErrorKind.NOT_FOUND, 404),
            (ErrorKind.CONFLICT, 400),
            (ErrorKind.INTERNAL, 500),
        ],
    )
    def test_status_codes(self, kind: ErrorKind, status_code: int) -> None:
        assert kind.status_code == status_code


class TestServiceError:
    def test_messages_are_stored_as_tuple(self) -> None:
        error = ServiceError.validation(["a", "b"])

        assert error.kind is ErrorKind.VALIDATION
        assert error.messages == ("a", "b")
        assert error.message == "a; b"

    def test_internal_carries_single_message(self) -> None:
        error = ServiceError.internal("Failed to create claim")

        assert error.messages == ("Failed to create claim",)
        assert error.status_code == 500


class TestViolationCollector:
    def test_none_means_passed(self) -> None:
        violations = ViolationCollector()
        violations.add(None)

        assert not violations
        assert len(violations) == 0

    def test_keeps_every_message_in_order(self) -> None:
        violations = ViolationCollector(["first"])
        violations.add("second")
        violations.extend([None, "third"])

        assert violations.messages == ["first", "second", "third"]

    def test_to_error_uses_requested_kind(self) -> None:
        violations = ViolationCollector(["Claim C-1 not found"])

        error = violations.to_error(ErrorKind.NOT_FOUND)

        assert error.kind is ErrorKind.NOT_FOUND
        assert error.messages == ("Claim C-1 not found",)


class TestResult:
    def test_ok(self) -> None:
        result = Ok(3)

        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == 3

    def test_err(self) -> None:
        error = ServiceError.conflict(["Car already exists in the claim"])
        result = Err(error)

        assert result.is_err()
        assert result.unwrap_err() is error
        with pytest.raises(ValueError):
            result.unwrap()
