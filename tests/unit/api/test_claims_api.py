"""Unit tests for the claim HTTP endpoints."""

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from claim_registry.api.dependencies import get_store
from claim_registry.main import create_app
from claim_registry.store import EntityKind, InMemoryEntityStore, StoreError
from tests.fixtures.test_data import (
    ALL_STATUSES,
    claim_payload,
    make_agency,
    make_coverage,
)

CLAIMS = "/api/v1/claims"


@pytest.fixture
def api_store() -> InMemoryEntityStore:
    """Seeded store built outside any running event loop."""
    entity_store = InMemoryEntityStore()

    async def seed() -> None:
        await entity_store.create(EntityKind.AGENCY, make_agency())
        await entity_store.create(EntityKind.COVERAGE, make_coverage())

    asyncio.run(seed())
    return entity_store


@pytest.fixture
def agency_id(api_store: InMemoryEntityStore) -> str:
    [agency] = asyncio.run(api_store.find(EntityKind.AGENCY))
    return str(agency.id)


@pytest.fixture
def client(api_store: InMemoryEntityStore) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_store] = lambda: api_store
    return TestClient(app)


@pytest.fixture
def created(client: TestClient, agency_id: str) -> dict[str, Any]:
    response = client.post(CLAIMS, json=claim_payload(agency_id))
    assert response.status_code == 201
    return response.json()


class TestCreateClaim:
    def test_create_returns_claim(self, created) -> None:
        assert created["claimNumber"] == "C-100"
        assert created["status"] == "OPEN"
        assert created["occurrenceDate"] == "2024-03-01"
        assert created["involvedCars"] == []

    def test_duplicate_rejected(self, client, created, agency_id) -> None:
        response = client.post(CLAIMS, json=claim_payload(agency_id))

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["errorCode"] == "validation_error"
        assert body["errors"] == ["claimNumber already exists."]

    def test_all_violations_returned(self, client) -> None:
        response = client.post(CLAIMS, json={})

        assert response.status_code == 400
        assert len(response.json()["errors"]) == 8

    def test_internal_failure_is_opaque(self, client, api_store, agency_id) -> None:
        api_store.create = AsyncMock(side_effect=StoreError("boom"))

        response = client.post(CLAIMS, json=claim_payload(agency_id))

        assert response.status_code == 500
        body = response.json()
        assert body["errorCode"] == "internal_error"
        assert body["error"] == "Failed to create claim"
        assert body["errors"] is None


class TestReadClaims:
    def test_get_details(self, client, created) -> None:
        response = client.get(f"{CLAIMS}/C-100")

        assert response.status_code == 200
        [details] = response.json()
        assert details["id"] == created["id"]
        assert details["reportingAgency"]["code"] == "AG-MTL"

    def test_get_unknown_number_is_empty(self, client) -> None:
        response = client.get(f"{CLAIMS}/C-404")

        assert response.status_code == 200
        assert response.json() == []

    def test_filter_requires_a_field(self, client, created) -> None:
        response = client.post(f"{CLAIMS}/filter", json={"filters": {}})

        assert response.status_code == 400
        assert response.json()["errors"] == ["At least one filter is required."]

    def test_filter_by_nested_party(self, client, created) -> None:
        client.post(
            f"{CLAIMS}/C-100/parties", json={"partyUid": "P-1", "role": "Witness"}
        )

        response = client.post(
            f"{CLAIMS}/filter",
            json={"filters": {"involvedParties": {"partyUid": "P-1"}}},
        )

        assert response.status_code == 200
        [claim] = response.json()
        assert claim["involvedParties"][0]["partyUid"] == "P-1"


class TestUpdateClaim:
    def test_update(self, client, created) -> None:
        response = client.put(f"{CLAIMS}/C-100", json={"daaq": "D-1"})

        assert response.status_code == 200
        assert response.json()["daaq"] == "D-1"

    def test_update_unknown_claim(self, client) -> None:
        response = client.put(f"{CLAIMS}/C-404", json={})

        assert response.status_code == 404
        assert response.json()["errors"] == ["Claim C-404 not found"]

    def test_bogus_status(self, client, created) -> None:
        response = client.put(f"{CLAIMS}/C-100/status", json={"status": "BOGUS"})

        assert response.status_code == 400
        assert response.json()["errors"] == [
            f"Status should be one of these options: {ALL_STATUSES}"
        ]

    def test_close_claim(self, client, created) -> None:
        response = client.put(f"{CLAIMS}/C-100/status", json={"status": "CLOSED"})

        assert response.status_code == 200
        assert response.json()["status"] == "CLOSED"


class TestInvolvedRecords:
    @pytest.mark.parametrize(
        ("path", "body", "field"),
        [
            ("parties", {"partyUid": "P-1", "role": "Witness"}, "involvedParties"),
            ("cars", {"goodUid": "VIN-1", "role": "INSURED_CAR"}, "involvedCars"),
            ("policies", {"goodUid": "POL-1", "role": "InsuredPolicy"}, "involvedPolicies"),
        ],
    )
    def test_attach_then_reject_duplicate(self, client, created, path, body, field) -> None:
        first = client.post(f"{CLAIMS}/C-100/{path}", json=body)
        second = client.post(f"{CLAIMS}/C-100/{path}", json=body)

        assert first.status_code == 201
        assert len(first.json()[field]) == 1
        assert second.status_code == 400
        assert second.json()["errorCode"] == "conflict"

    def test_attach_to_unknown_claim(self, client) -> None:
        response = client.post(
            f"{CLAIMS}/C-404/cars", json={"goodUid": "VIN-1", "role": "INSURED_CAR"}
        )

        assert response.status_code == 404


class TestAffectedCoverages:
    def test_add_and_update(self, client, created) -> None:
        added = client.post(
            f"{CLAIMS}/C-100/coverages",
            json={"coverageCode": "COLL", "evaluation": 1000, "settledAmount": 1000},
        )
        updated = client.put(
            f"{CLAIMS}/C-100/coverages",
            json={"coverageCode": "COLL", "evaluation": 1200, "settledAmount": 300},
        )

        assert added.status_code == 201
        assert added.json()["claim"] == created["id"]
        assert updated.status_code == 200
        assert updated.json()["id"] == added.json()["id"]
        assert updated.json()["settledAmount"] == "300"

    def test_settled_above_evaluation(self, client, created) -> None:
        response = client.post(
            f"{CLAIMS}/C-100/coverages",
            json={"coverageCode": "COLL", "evaluation": 100, "settledAmount": 100.01},
        )

        assert response.status_code == 400
        assert response.json()["errors"] == [
            "Settled amount cannot be greater than evaluation"
        ]
