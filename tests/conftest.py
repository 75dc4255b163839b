"""Test configuration and fixtures.

The in-memory entity store backs every service and API test; it is seeded
with one agency and one coverage, which is all a claim needs to exist.
"""

from collections.abc import Generator
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from claim_registry.core.config import clear_settings_cache
from claim_registry.core.database import Database
from claim_registry.models import Agency, Claim, Coverage
from claim_registry.services.claim_query_service import ClaimQueryService
from claim_registry.services.claim_service import ClaimService
from claim_registry.store import EntityKind, InMemoryEntityStore
from tests.fixtures.test_data import claim_payload, make_agency, make_coverage


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate every test from the caller's environment."""
    for name in ("API_ENV", "STORE_BACKEND", "LOG_LEVEL", "SLOW_OPERATION_MS"):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def agency() -> Agency:
    return make_agency()


@pytest.fixture
def coverage() -> Coverage:
    return make_coverage()


@pytest_asyncio.fixture
async def store(agency: Agency, coverage: Coverage) -> InMemoryEntityStore:
    """In-memory store holding the reference data."""
    entity_store = InMemoryEntityStore()
    await entity_store.create(EntityKind.AGENCY, agency)
    await entity_store.create(EntityKind.COVERAGE, coverage)
    return entity_store


@pytest.fixture
def claim_service(store: InMemoryEntityStore) -> ClaimService:
    return ClaimService(store)


@pytest.fixture
def query_service(store: InMemoryEntityStore) -> ClaimQueryService:
    return ClaimQueryService(store)


@pytest.fixture
def payload(agency: Agency) -> dict[str, Any]:
    """Valid create payload for claim C-100."""
    return claim_payload(agency.id)


@pytest_asyncio.fixture
async def claim(claim_service: ClaimService, payload: dict[str, Any]) -> Claim:
    """Claim C-100, already created."""
    result = await claim_service.create(payload)
    return result.unwrap()


@pytest.fixture
def mock_db() -> MagicMock:
    """Database double with awaitable query methods."""
    db = MagicMock(spec=Database)
    db.fetch = AsyncMock(return_value=[])
    db.fetchrow = AsyncMock(return_value=None)
    db.fetchval = AsyncMock(return_value=1)
    return db
