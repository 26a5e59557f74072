"""
Product service — the product catalog, its release history, and the news
feed scoped to a product.

Products share the slug and tag logic with articles: the ``short`` is the
product's slug and its tags are replaced wholesale on every update.

A product's news is every article tagged with a tag named after the
product's ``short``. It is computed per request and never creates that tag.
"""
import logging
import math
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from content_api.cache import cache
from content_api.config import settings
from content_api.errors import NotFoundError
from content_api.models import Article, Product, ProductRelease, Tag, article_tags
from content_api.schemas import (
    PaginatedResponse,
    ProductCreate,
    ProductUpdate,
    ReleaseCreate,
    ReleaseUpdate,
)
from content_api.services import store
from content_api.services.news_service import article_to_dict
from content_api.services.serialization import isoformat, tags_to_list
from content_api.services.slugs import assign_slug
from content_api.services.tagging import reconcile_tags

logger = logging.getLogger(__name__)

# Columns copied from the payload on create and update.
_PRODUCT_FIELDS = (
    "name",
    "summary",
    "description",
    "license",
    "documentation_url",
    "download_url",
    "icon_url",
)


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def _product_to_dict(product: Product) -> dict:
    data = {field: getattr(product, field) for field in _PRODUCT_FIELDS}
    data.update(
        id=product.id,
        short=product.short,
        created=isoformat(product.created),
        updated=isoformat(product.updated),
        tags=tags_to_list(product.tags),
    )
    return data


def _release_to_dict(release: ProductRelease) -> dict:
    return {
        "id": release.id,
        "product_id": release.product_id,
        "title": release.title,
        "version": release.version,
        "body": release.body,
        "download_url": release.download_url,
        "posted": isoformat(release.posted),
        "modified": isoformat(release.modified),
    }


def _paginate(items: list[dict], total: int, page: int, page_size: int) -> PaginatedResponse:
    return PaginatedResponse(
        items=items,
        total=total,
        page=page,
        page_size=page_size,
        pages=math.ceil(total / page_size) if total > 0 else 0,
    )


async def _get_or_404(db: AsyncSession, value: str, *options) -> Product:
    product = await store.find_by_slug_or_id(db, Product, value, *options)
    if product is None:
        raise NotFoundError("Product not found")
    return product


async def _release_or_404(db: AsyncSession, product: Product, release_id: int) -> ProductRelease:
    release = await db.get(ProductRelease, release_id)
    if release is None or release.product_id != product.id:
        raise NotFoundError("Release not found")
    return release


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

async def get_products(db: AsyncSession, page: int = 1, page_size: int = 10) -> PaginatedResponse:
    """Return one page of the catalog ordered by name."""
    cache_key = f"products:list:{page}:{page_size}"
    cached = await cache.get(cache_key)
    if cached:
        return PaginatedResponse(**cached)

    total: int = (await db.execute(select(func.count()).select_from(Product))).scalar_one()
    q = (
        select(Product)
        .options(selectinload(Product.tags))
        .order_by(Product.name, Product.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    products = (await db.execute(q)).scalars().all()

    response = _paginate([_product_to_dict(p) for p in products], total, page, page_size)
    await cache.set(cache_key, response.model_dump(), ttl=settings.CACHE_TTL_LIST)
    return response


async def get_product(db: AsyncSession, value: str) -> dict:
    return _product_to_dict(await _get_or_404(db, value, selectinload(Product.tags)))


async def create_product(db: AsyncSession, data: ProductCreate) -> dict:
    short = await assign_slug(db, Product, data.name, requested=data.short)

    now = datetime.now(timezone.utc)
    product = Product(short=short, created=now, updated=now)
    for field in _PRODUCT_FIELDS:
        setattr(product, field, getattr(data, field))

    await reconcile_tags(db, product, data.tags)
    await store.save_atomic(db, product)

    logger.info("Created product %s (%r)", product.id, product.short)
    await cache.invalidate_products()
    return _product_to_dict(product)


async def update_product(db: AsyncSession, value: str, data: ProductUpdate) -> dict:
    product = await _get_or_404(db, value, selectinload(Product.tags))

    short = await assign_slug(
        db,
        Product,
        data.name,
        requested=data.short,
        current=product.short,
        entity_id=product.id,
    )
    await reconcile_tags(db, product, data.tags)

    for field in _PRODUCT_FIELDS:
        setattr(product, field, getattr(data, field))
    product.short = short
    product.updated = datetime.now(timezone.utc)

    await store.save_atomic(db, product)

    logger.info("Updated product %s (%r)", product.id, product.short)
    await cache.invalidate_products()
    return _product_to_dict(product)


async def delete_product(db: AsyncSession, value: str) -> None:
    """Delete a product together with its releases and tag associations."""
    product = await _get_or_404(
        db, value, selectinload(Product.tags), selectinload(Product.releases)
    )
    await db.delete(product)
    await db.flush()

    logger.info("Deleted product %s (%r)", product.id, product.short)
    await cache.invalidate_products()


# ---------------------------------------------------------------------------
# Product news
# ---------------------------------------------------------------------------

async def get_product_news(
    db: AsyncSession, value: str, page: int = 1, page_size: int = 10
) -> PaginatedResponse:
    """
    Return one page of the articles tagged with the product's ``short``,
    most recently modified first.
    """
    product = await _get_or_404(db, value)

    cache_key = f"products:news:{product.id}:{page}:{page_size}"
    cached = await cache.get(cache_key)
    if cached:
        return PaginatedResponse(**cached)

    tagged = (
        select(article_tags.c.article_id)
        .join(Tag, Tag.id == article_tags.c.tag_id)
        .where(Tag.name == product.short)
    )
    total: int = (
        await db.execute(select(func.count()).select_from(Article).where(Article.id.in_(tagged)))
    ).scalar_one()

    q = (
        select(Article)
        .where(Article.id.in_(tagged))
        .options(selectinload(Article.tags))
        .order_by(Article.modified.desc(), Article.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    articles = (await db.execute(q)).scalars().all()

    response = _paginate([article_to_dict(a) for a in articles], total, page, page_size)
    await cache.set(cache_key, response.model_dump(), ttl=settings.CACHE_TTL_LIST)
    return response


# ---------------------------------------------------------------------------
# Release history
# ---------------------------------------------------------------------------

async def get_releases(db: AsyncSession, value: str) -> PaginatedResponse:
    """Return the product's full release history, newest first."""
    product = await _get_or_404(db, value)
    q = (
        select(ProductRelease)
        .where(ProductRelease.product_id == product.id)
        .order_by(ProductRelease.posted.desc(), ProductRelease.id.desc())
    )
    releases = (await db.execute(q)).scalars().all()
    count = len(releases)
    return PaginatedResponse(
        items=[_release_to_dict(r) for r in releases],
        total=count,
        page=1,
        page_size=count,
        pages=1 if count else 0,
    )


async def add_release(db: AsyncSession, value: str, data: ReleaseCreate) -> dict:
    product = await _get_or_404(db, value)

    now = datetime.now(timezone.utc)
    release = ProductRelease(
        product_id=product.id,
        title=data.title,
        version=data.version,
        body=data.body,
        download_url=data.download_url,
        posted=now,
        modified=now,
    )
    db.add(release)
    await db.flush()

    logger.info("Added release %s to product %s", release.id, product.id)
    return _release_to_dict(release)


async def update_release(
    db: AsyncSession, value: str, release_id: int, data: ReleaseUpdate
) -> dict:
    product = await _get_or_404(db, value)
    release = await _release_or_404(db, product, release_id)

    release.title = data.title
    release.version = data.version
    release.body = data.body
    release.download_url = data.download_url
    release.modified = datetime.now(timezone.utc)
    await db.flush()

    logger.info("Updated release %s of product %s", release.id, product.id)
    return _release_to_dict(release)


async def delete_release(db: AsyncSession, value: str, release_id: int) -> None:
    product = await _get_or_404(db, value)
    release = await _release_or_404(db, product, release_id)
    await db.delete(release)
    await db.flush()

    logger.info("Deleted release %s of product %s", release_id, product.id)
