"""Coverage evaluations owned by a single claim."""

from decimal import Decimal
from uuid import UUID

from beartype import beartype
from pydantic import Field, model_validator

from .base import IdentifiableModel


@beartype
class AffectedCoverage(IdentifiableModel):
    """Evaluation and settlement of one coverage within one claim."""

    evaluation: Decimal = Field(..., description="Evaluated damage amount")
    settled_amount: Decimal = Field(
        default=Decimal("0"), description="Amount settled so far"
    )
    claim: UUID = Field(..., description="Owning claim")
    coverage: UUID = Field(..., description="Referenced coverage")

    @model_validator(mode="after")
    @beartype
    def validate_settlement(self) -> "AffectedCoverage":
        """Settled amount can never exceed the evaluation."""
        if self.settled_amount > self.evaluation:
            raise ValueError("Settled amount cannot be greater than evaluation")
        return self
