"""API response patterns following Result[T,E] + HTTP semantics."""

from typing import Any, TypeVar

from beartype import beartype
from fastapi import Response
from pydantic import Field

from ..core.errors import ErrorKind, ServiceError
from ..core.result_types import Result
from ..models.base import BaseModelConfig

T = TypeVar("T")


@beartype
class ErrorResponse(BaseModelConfig):
    """Standardized error response for business logic failures.

    Rule violations are listed in ``errors``; internal failures carry a
    single non-specific ``error`` message instead.
    """

    success: bool = Field(default=False, description="Always false for error responses")
    error_code: str = Field(..., description="Machine-readable error kind")
    errors: list[str] | None = Field(default=None, description="Violation messages")
    error: str | None = Field(default=None, description="Internal failure message")

    @classmethod
    @beartype
    def from_error(cls, error: ServiceError) -> "ErrorResponse":
        if error.kind is ErrorKind.INTERNAL:
            return cls(error_code=error.kind.value, error=error.message)
        return cls(error_code=error.kind.value, errors=list(error.messages))


class APIResponseHandler:
    """Map service results onto HTTP responses."""

    @staticmethod
    @beartype
    def map_error_to_status(error: ServiceError) -> int:
        """HTTP status for a service failure, decided by its kind."""
        return error.kind.status_code

    @staticmethod
    @beartype
    def from_result(
        result: Result[Any, ServiceError],
        response: Response,
        success_status: int = 200,
    ) -> Any:
        """Convert Result[T,E] to HTTP response with proper status codes.

        Args:
            result: Service layer Result
            response: FastAPI Response object to set status code
            success_status: HTTP status for successful operations (default 200)

        Returns:
            Either the unwrapped success value or ErrorResponse
        """
        if result.is_err():
            error = result.unwrap_err()
            response.status_code = APIResponseHandler.map_error_to_status(error)
            return ErrorResponse.from_error(error)

        response.status_code = success_status
        return result.unwrap()


@beartype
def handle_result(
    result: Result[Any, ServiceError],
    response: Response,
    success_status: int = 200,
) -> Any:
    """Convenience function for standard result handling."""
    return APIResponseHandler.from_result(result, response, success_status)
