"""Reference data the claim service reads but never writes.

Agencies and coverages are managed by other systems; claims only point at
them by identifier.
"""

from beartype import beartype
from pydantic import Field

from .base import IdentifiableModel


@beartype
class Agency(IdentifiableModel):
    """Agency that reported a claim."""

    code: str = Field(..., min_length=1, max_length=50, description="Agency code")
    label: str | None = Field(None, max_length=200, description="Display name")


@beartype
class Coverage(IdentifiableModel):
    """Coverage line a claim can be settled against."""

    code: str = Field(..., min_length=1, max_length=50, description="Coverage code")
    uid: str | None = Field(None, max_length=100, description="External identifier")
    label: str | None = Field(None, max_length=200, description="Display name")
