# ClaimRegistry - Claims Management Record Service
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Base Pydantic model configuration for all domain models.

This module provides the foundation for all domain models in the system,
enforcing immutability, strict validation, and the camelCase wire format
used by API clients.
"""

from uuid import UUID, uuid4

from beartype import beartype
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


@beartype
class BaseModelConfig(BaseModel):
    """Base model with strict configuration for all domain entities.

    Enforces:
    - Immutability (frozen=True)
    - No extra fields allowed (extra="forbid")
    - Validation on assignment
    - Automatic whitespace stripping
    - camelCase aliases on the wire, snake_case in Python
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


@beartype
class IdentifiableModel(BaseModelConfig):
    """Base model carrying the store-assigned identifier."""

    id: UUID = Field(
        default_factory=uuid4, description="Unique identifier for the entity"
    )
