"""API tests for the /users endpoints with an in-memory document store."""

import pytest
from httpx import ASGITransport, AsyncClient

from user_directory.infrastructure.dependencies import get_document_store
from user_directory.main import app


@pytest.fixture
def api_store(store):
    app.dependency_overrides[get_document_store] = lambda: store
    yield store
    app.dependency_overrides.clear()


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


async def _create(client: AsyncClient, name: str, age: int, address: str = "X", **extra) -> dict:
    response = await client.post(
        "/api/v1/users", json={"name": name, "age": age, "address": address, **extra}
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_crud_round_trip(api_store):
    async with _client() as client:
        created = await _create(client, "Ann", 30, email="a@b.co")
        assert created["created_at"] == created["updated_at"]
        assert created["phone"] is None

        response = await client.put(
            f"/api/v1/users/{created['id']}",
            json={"name": "Ann", "age": "31", "address": "X"},
        )
        assert response.status_code == 200
        updated = response.json()
        assert updated["age"] == 31
        assert updated["email"] is None
        assert updated["created_at"] == created["created_at"]

        response = await client.delete(f"/api/v1/users/{created['id']}")
        assert response.status_code == 204

        listing = (await client.get("/api/v1/users")).json()
        assert listing["items"] == []
        assert listing["total_records"] == 0


@pytest.mark.asyncio
async def test_list_filters_sorts_and_paginates(api_store):
    async with _client() as client:
        for i in range(12):
            await _create(client, f"User {i:02d}", 20 + i, address="Jakarta")
        await _create(client, "Kid", 12, address="Bogor")

        response = await client.get(
            "/api/v1/users",
            params={"age_bucket": "20to40", "sort": "age-desc", "page": 3},
        )

    assert response.status_code == 200
    data = response.json()
    assert data["total_records"] == 13
    assert data["total_matches"] == 12
    assert data["total_pages"] == 3
    assert data["page"] == 3
    assert [item["age"] for item in data["items"]] == [21, 20]
    assert data["view"] == {"search": "", "age_bucket": "20to40", "sort_key": "age-desc", "page": 3}


@pytest.mark.asyncio
async def test_list_clamps_page_and_searches(api_store):
    async with _client() as client:
        await _create(client, "Ann", 30, address="Bandung")
        await _create(client, "Bob", 41, address="Medan", email="bob@bandung.id")
        await _create(client, "Cita", 19, address="Bali")

        response = await client.get("/api/v1/users", params={"search": "BANDUNG", "page": 9})

    data = response.json()
    assert data["page"] == 1
    assert [item["name"] for item in data["items"]] == ["Ann", "Bob"]


@pytest.mark.asyncio
async def test_invalid_drafts_return_422(api_store):
    async with _client() as client:
        missing = await client.post("/api/v1/users", json={"name": "", "age": 30, "address": "X"})
        bad_email = await client.post(
            "/api/v1/users", json={"name": "Ann", "age": 30, "address": "X", "email": "not-an-email"}
        )
        listing = (await client.get("/api/v1/users")).json()

    assert missing.status_code == 422
    assert missing.json()["detail"] == "required fields missing"
    assert bad_email.status_code == 422
    assert bad_email.json()["detail"] == "invalid email"
    assert listing["total_records"] == 0


@pytest.mark.asyncio
async def test_update_unknown_id_returns_404(api_store):
    async with _client() as client:
        response = await client.put(
            "/api/v1/users/missing", json={"name": "Ann", "age": 30, "address": "X"}
        )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_store_outage_returns_503(api_store):
    api_store.fail_on.update({"list_all", "insert"})

    async with _client() as client:
        listing = await client.get("/api/v1/users")
        create = await client.post("/api/v1/users", json={"name": "Ann", "age": 30, "address": "X"})

    assert listing.status_code == 503
    assert create.status_code == 503
