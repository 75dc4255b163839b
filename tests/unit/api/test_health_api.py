"""Unit tests for the health and root endpoints."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from claim_registry import __version__
from claim_registry.api.dependencies import get_store
from claim_registry.main import create_app
from claim_registry.store import InMemoryEntityStore


@pytest.fixture
def memory_store() -> InMemoryEntityStore:
    return InMemoryEntityStore()


@pytest.fixture
def app(memory_store):
    application = create_app()
    application.dependency_overrides[get_store] = lambda: memory_store
    return application


class TestHealth:
    def test_healthy(self, app) -> None:
        response = TestClient(app).get("/api/v1/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["storeBackend"] == "memory"
        assert body["storeReachable"] is True

    def test_unreachable_store(self, app, memory_store) -> None:
        memory_store.ping = AsyncMock(return_value=False)

        response = TestClient(app).get("/api/v1/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_store_missing_before_startup(self) -> None:
        response = TestClient(create_app()).get("/api/v1/health")

        assert response.status_code == 503


class TestRoot:
    def test_api_info(self, app) -> None:
        response = TestClient(app).get("/")

        assert response.status_code == 200
        body = response.json()
        assert body["version"] == __version__
        assert body["status"] == "operational"
        assert body["docsUrl"] == "/docs"

    def test_lifespan_builds_memory_store(self) -> None:
        app = create_app()

        with TestClient(app) as client:
            assert isinstance(app.state.store, InMemoryEntityStore)
            assert client.get("/api/v1/health").status_code == 200

        assert app.state.store is None
