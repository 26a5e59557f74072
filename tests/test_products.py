"""
Product endpoint tests — catalog CRUD, short assignment, tag
de-duplication, product news and release history.
"""
import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.models import ProductRelease, Tag


async def _create_product(client: AsyncClient, headers: dict, **fields) -> dict:
    payload = {"name": "Content Server", "summary": "Headless CMS"}
    payload.update(fields)
    resp = await client.post("/api/v1/products", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def _add_release(client: AsyncClient, headers: dict, product: str, **fields) -> dict:
    payload = {"title": "First release", "version": "1.0.0"}
    payload.update(fields)
    resp = await client.post(f"/api/v1/products/{product}/history", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


# ---------------------------------------------------------------------------
# Create / short assignment
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_derives_short_from_name(async_client: AsyncClient, product_editor):
    product = await _create_product(async_client, product_editor, name="Content Server")
    assert product["short"] == "Content_Server"
    assert product["created"] == product["updated"]


@pytest.mark.asyncio
async def test_create_uses_requested_short(async_client: AsyncClient, product_editor):
    product = await _create_product(async_client, product_editor, short="cms")
    assert product["short"] == "cms"

    resp = await async_client.get("/api/v1/products/cms")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Content Server"


@pytest.mark.asyncio
async def test_duplicate_tags_collapse(
    async_client: AsyncClient, product_editor, db_session: AsyncSession
):
    product = await _create_product(async_client, product_editor, tags=["go", "go", "storage"])
    assert sorted(t["name"] for t in product["tags"]) == ["go", "storage"]

    tag_count = (await db_session.execute(select(func.count()).select_from(Tag))).scalar_one()
    assert tag_count == 2


@pytest.mark.asyncio
async def test_duplicate_short_is_rejected(async_client: AsyncClient, product_editor):
    await _create_product(async_client, product_editor, short="cms")
    resp = await async_client.post(
        "/api/v1/products", json={"name": "Other", "short": "cms"}, headers=product_editor
    )
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Short cannot duplicate an existing short"


@pytest.mark.asyncio
async def test_product_writes_require_product_role(async_client: AsyncClient, news_editor):
    resp = await async_client.post("/api/v1/products", json={"name": "Nope"}, headers=news_editor)
    assert resp.status_code == 403


# ---------------------------------------------------------------------------
# Update / delete
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_update_product(async_client: AsyncClient, product_editor):
    product = await _create_product(async_client, product_editor, short="cms", tags=["go"])

    resp = await async_client.put(
        "/api/v1/products/cms",
        json={"name": "Content Server 2", "short": "cms", "license": "MIT", "tags": ["rust"]},
        headers=product_editor,
    )
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["id"] == product["id"]
    assert updated["name"] == "Content Server 2"
    assert updated["license"] == "MIT"
    assert updated["created"] == product["created"]
    assert [t["name"] for t in updated["tags"]] == ["rust"]


@pytest.mark.asyncio
async def test_update_short_onto_other_product_is_duplicate(
    async_client: AsyncClient, product_editor
):
    await _create_product(async_client, product_editor, name="Alpha", short="alpha")
    await _create_product(async_client, product_editor, name="Beta", short="beta")

    resp = await async_client.put(
        "/api/v1/products/beta", json={"name": "Beta", "short": "alpha"}, headers=product_editor
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_list_products_by_name(async_client: AsyncClient, product_editor):
    for name in ("Zeta", "Alpha", "Mu"):
        await _create_product(async_client, product_editor, name=name)

    resp = await async_client.get("/api/v1/products")
    assert resp.status_code == 200
    assert [p["name"] for p in resp.json()["items"]] == ["Alpha", "Mu", "Zeta"]


@pytest.mark.asyncio
async def test_delete_product_removes_releases(
    async_client: AsyncClient, product_editor, db_session: AsyncSession
):
    product = await _create_product(async_client, product_editor, short="cms", tags=["go"])
    await _add_release(async_client, product_editor, "cms")

    resp = await async_client.delete("/api/v1/products/cms", headers=product_editor)
    assert resp.status_code == 204

    resp = await async_client.get(f"/api/v1/products/{product['id']}")
    assert resp.status_code == 404

    releases = (
        await db_session.execute(select(func.count()).select_from(ProductRelease))
    ).scalar_one()
    assert releases == 0


@pytest.mark.asyncio
async def test_authors_cannot_delete_products(async_client: AsyncClient, auth_headers, product_editor):
    await _create_product(async_client, product_editor, short="cms")
    resp = await async_client.delete("/api/v1/products/cms", headers=auth_headers("ProductAuthor"))
    assert resp.status_code == 403


# ---------------------------------------------------------------------------
# Product news
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_product_news_lists_articles_tagged_with_short(
    async_client: AsyncClient, product_editor, news_author
):
    await _create_product(async_client, product_editor, short="cms")
    for title, tags in (("Launch", ["cms"]), ("Unrelated", ["other"]), ("Patch", ["cms", "fix"])):
        resp = await async_client.post(
            "/api/v1/news", json={"title": title, "tags": tags}, headers=news_author
        )
        assert resp.status_code == 201

    resp = await async_client.get("/api/v1/products/cms/news")
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    assert [a["title"] for a in data["items"]] == ["Patch", "Launch"]


@pytest.mark.asyncio
async def test_product_news_without_matching_tag_is_empty(
    async_client: AsyncClient, product_editor, db_session: AsyncSession
):
    await _create_product(async_client, product_editor, short="cms")

    resp = await async_client.get("/api/v1/products/cms/news")
    assert resp.status_code == 200
    assert resp.json()["items"] == []

    # Reading news never creates the product's tag.
    tags = (await db_session.execute(select(func.count()).select_from(Tag))).scalar_one()
    assert tags == 0


@pytest.mark.asyncio
async def test_product_news_unknown_product_is_404(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/products/ghost/news")
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Release history
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_release_history_lifecycle(async_client: AsyncClient, product_editor):
    product = await _create_product(async_client, product_editor, short="cms")

    first = await _add_release(async_client, product_editor, "cms", title="1.0", version="1.0.0")
    second = await _add_release(async_client, product_editor, str(product["id"]), title="1.1")
    assert first["product_id"] == product["id"]

    resp = await async_client.get("/api/v1/products/cms/history")
    assert resp.status_code == 200
    history = resp.json()
    assert history["total"] == 2
    assert [r["title"] for r in history["items"]] == ["1.1", "1.0"]

    resp = await async_client.put(
        f"/api/v1/products/cms/history/{first['id']}",
        json={"title": "1.0 final", "body": "Notes", "download_url": "https://example.com/1.0"},
        headers=product_editor,
    )
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["title"] == "1.0 final"
    assert updated["posted"] == first["posted"]
    assert updated["version"] is None

    resp = await async_client.delete(
        f"/api/v1/products/cms/history/{second['id']}", headers=product_editor
    )
    assert resp.status_code == 204

    resp = await async_client.get("/api/v1/products/cms/history")
    assert [r["id"] for r in resp.json()["items"]] == [first["id"]]


@pytest.mark.asyncio
async def test_release_of_other_product_is_404(async_client: AsyncClient, product_editor):
    await _create_product(async_client, product_editor, name="Alpha", short="alpha")
    await _create_product(async_client, product_editor, name="Beta", short="beta")
    release = await _add_release(async_client, product_editor, "alpha")

    resp = await async_client.put(
        f"/api/v1/products/beta/history/{release['id']}",
        json={"title": "Hijack"},
        headers=product_editor,
    )
    assert resp.status_code == 404

    resp = await async_client.delete(
        f"/api/v1/products/beta/history/{release['id']}", headers=product_editor
    )
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_history_of_unknown_product_is_404(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/products/ghost/history")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_release_requires_editor(async_client: AsyncClient, product_editor, auth_headers):
    await _create_product(async_client, product_editor, short="cms")
    resp = await async_client.post(
        "/api/v1/products/cms/history",
        json={"title": "1.0"},
        headers=auth_headers("ProductAuthor"),
    )
    assert resp.status_code == 403
