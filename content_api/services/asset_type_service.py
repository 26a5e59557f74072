"""
Asset type service — the shared taxonomy of asset types.

Asset types carry only a description; they are listed alphabetically and
managed by managers and system administrators.
"""
import logging
import math

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.cache import cache
from content_api.config import settings
from content_api.errors import NotFoundError
from content_api.models import AssetType
from content_api.schemas import AssetTypeCreate, PaginatedResponse

logger = logging.getLogger(__name__)


def _asset_type_to_dict(asset_type: AssetType) -> dict:
    return {"id": asset_type.id, "description": asset_type.description}


async def _get_or_404(db: AsyncSession, asset_type_id: int) -> AssetType:
    asset_type = await db.get(AssetType, asset_type_id)
    if asset_type is None:
        raise NotFoundError("Asset type not found")
    return asset_type


async def get_asset_types(
    db: AsyncSession, page: int = 1, page_size: int = 10
) -> PaginatedResponse:
    cache_key = f"asset-types:list:{page}:{page_size}"
    cached = await cache.get(cache_key)
    if cached:
        return PaginatedResponse(**cached)

    total: int = (await db.execute(select(func.count()).select_from(AssetType))).scalar_one()
    q = (
        select(AssetType)
        .order_by(AssetType.description, AssetType.id)
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    asset_types = (await db.execute(q)).scalars().all()

    response = PaginatedResponse(
        items=[_asset_type_to_dict(a) for a in asset_types],
        total=total,
        page=page,
        page_size=page_size,
        pages=math.ceil(total / page_size) if total > 0 else 0,
    )
    await cache.set(cache_key, response.model_dump(), ttl=settings.CACHE_TTL_LIST)
    return response


async def get_asset_type(db: AsyncSession, asset_type_id: int) -> dict:
    return _asset_type_to_dict(await _get_or_404(db, asset_type_id))


async def create_asset_type(db: AsyncSession, data: AssetTypeCreate) -> dict:
    asset_type = AssetType(description=data.description)
    db.add(asset_type)
    await db.flush()

    logger.info("Created asset type %s (%r)", asset_type.id, asset_type.description)
    await cache.invalidate_asset_types()
    return _asset_type_to_dict(asset_type)


async def delete_asset_type(db: AsyncSession, asset_type_id: int) -> None:
    asset_type = await _get_or_404(db, asset_type_id)
    await db.delete(asset_type)
    await db.flush()

    logger.info("Deleted asset type %s", asset_type_id)
    await cache.invalidate_asset_types()
