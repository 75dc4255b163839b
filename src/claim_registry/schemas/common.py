"""Common schemas used across the API."""

from datetime import datetime

from pydantic import Field

from ..models.base import BaseModelConfig


class APIInfo(BaseModelConfig):
    """Root endpoint payload."""

    name: str = Field(..., description="Application name")
    version: str = Field(..., description="API version")
    status: str = Field(..., description="Service status")
    environment: str = Field(..., description="Deployment environment")
    docs_url: str | None = Field(None, description="OpenAPI documentation path")


class HealthResponse(BaseModelConfig):
    """Liveness of the service and its entity store."""

    status: str = Field(..., pattern=r"^(healthy|unhealthy)$")
    store_backend: str = Field(..., description="Configured entity store")
    store_reachable: bool = Field(..., description="Whether the store answered")
    latency_ms: float = Field(..., ge=0, description="Store ping latency")
    timestamp: datetime = Field(..., description="Check time (UTC)")
