"""Asset type endpoint tests — listing, lookup and manager-only writes."""
import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_and_get_asset_type(async_client: AsyncClient, manager):
    resp = await async_client.post(
        "/api/v1/asset-types", json={"description": "Image"}, headers=manager
    )
    assert resp.status_code == 201
    created = resp.json()
    assert created["description"] == "Image"

    resp = await async_client.get(f"/api/v1/asset-types/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == created


@pytest.mark.asyncio
async def test_list_asset_types_alphabetical(async_client: AsyncClient, manager):
    for description in ("Video", "Archive", "Image"):
        await async_client.post(
            "/api/v1/asset-types", json={"description": description}, headers=manager
        )

    resp = await async_client.get("/api/v1/asset-types?page_size=2")
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 3
    assert data["pages"] == 2
    assert [a["description"] for a in data["items"]] == ["Archive", "Image"]


@pytest.mark.asyncio
async def test_get_missing_asset_type_is_404(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/asset-types/99999")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_asset_type(async_client: AsyncClient, manager):
    resp = await async_client.post(
        "/api/v1/asset-types", json={"description": "Audio"}, headers=manager
    )
    asset_type_id = resp.json()["id"]

    resp = await async_client.delete(f"/api/v1/asset-types/{asset_type_id}", headers=manager)
    assert resp.status_code == 204

    resp = await async_client.get(f"/api/v1/asset-types/{asset_type_id}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_asset_type_is_404(async_client: AsyncClient, auth_headers):
    resp = await async_client.delete(
        "/api/v1/asset-types/99999", headers=auth_headers("SystemAdministrator")
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_asset_type_writes_require_manager(async_client: AsyncClient, news_editor):
    resp = await async_client.post(
        "/api/v1/asset-types", json={"description": "Installer"}, headers=news_editor
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_blank_description_is_invalid(async_client: AsyncClient, manager):
    resp = await async_client.post("/api/v1/asset-types", json={"description": ""}, headers=manager)
    assert resp.status_code == 422
