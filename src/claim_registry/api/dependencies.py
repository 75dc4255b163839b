# ClaimRegistry - Claims Management Record Service
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""FastAPI dependencies for the entity store and claim services.

The store is built once by the application lifespan and kept on
``app.state``; services are cheap wrappers created per request.
"""

from beartype import beartype
from fastapi import Depends, HTTPException, Request, status

from ..core.config import Settings, get_settings
from ..services.claim_query_service import ClaimQueryService
from ..services.claim_service import ClaimService
from ..store import EntityStore


@beartype
def get_app_settings() -> Settings:
    """Provide application settings."""
    return get_settings()


@beartype
def get_store(request: Request) -> EntityStore:
    """Provide the entity store created at startup."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Entity store not initialized",
        )
    return store


@beartype
def get_claim_service(store: EntityStore = Depends(get_store)) -> ClaimService:
    """Provide the claim lifecycle service."""
    return ClaimService(store)


@beartype
def get_query_service(store: EntityStore = Depends(get_store)) -> ClaimQueryService:
    """Provide the claim query service."""
    return ClaimQueryService(store)
