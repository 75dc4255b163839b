"""Health check endpoint reporting entity store reachability."""

import time
from datetime import datetime, timezone

from beartype import beartype
from fastapi import APIRouter, Depends, Response, status

from ...core.config import Settings
from ...core.logging_utils import get_logger
from ...schemas.common import HealthResponse
from ...store import EntityStore
from ..dependencies import get_app_settings, get_store

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
@beartype
async def health_check(
    response: Response,
    store: EntityStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> HealthResponse:
    """Ping the entity store; answers 503 when it is unreachable."""
    start_time = time.perf_counter()
    reachable = await store.ping()
    latency_ms = (time.perf_counter() - start_time) * 1000

    if not reachable:
        logger.warning("Health check failed: %s store unreachable", settings.store_backend)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if reachable else "unhealthy",
        store_backend=settings.store_backend,
        store_reachable=reachable,
        latency_ms=round(latency_ms, 3),
        timestamp=datetime.now(timezone.utc),
    )
