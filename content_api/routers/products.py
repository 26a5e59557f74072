from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from content_api.database import get_db
from content_api.dependencies import PaginationParams, RowId
from content_api.schemas import (
    PaginatedResponse,
    ProductCreate,
    ProductUpdate,
    ReleaseCreate,
    ReleaseUpdate,
)
from content_api.security import PRODUCT_EDITORS, PRODUCT_WRITERS, require_roles
from content_api.services import product_service

router = APIRouter(prefix="/api/v1/products", tags=["products"])

writers = [Depends(require_roles(*PRODUCT_WRITERS))]
editors = [Depends(require_roles(*PRODUCT_EDITORS))]

@router.get("", response_model=PaginatedResponse)
async def list_products(
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    return await product_service.get_products(db, pagination.page, pagination.page_size)

@router.get("/{value}")
async def get_product(value: str, db: AsyncSession = Depends(get_db)):
    return await product_service.get_product(db, value)

@router.get("/{value}/news", response_model=PaginatedResponse)
async def get_product_news(
    value: str,
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    return await product_service.get_product_news(
        db, value, pagination.page, pagination.page_size
    )

@router.post("", status_code=201, dependencies=writers)
async def create_product(data: ProductCreate, db: AsyncSession = Depends(get_db)):
    return await product_service.create_product(db, data)

@router.put("/{value}", dependencies=writers)
async def update_product(value: str, data: ProductUpdate, db: AsyncSession = Depends(get_db)):
    return await product_service.update_product(db, value, data)

@router.delete("/{value}", status_code=204, dependencies=editors)
async def delete_product(value: str, db: AsyncSession = Depends(get_db)):
    await product_service.delete_product(db, value)

# --- Release history ---

@router.get("/{value}/history", response_model=PaginatedResponse)
async def get_history(value: str, db: AsyncSession = Depends(get_db)):
    return await product_service.get_releases(db, value)

@router.post("/{value}/history", status_code=201, dependencies=editors)
async def add_release(value: str, data: ReleaseCreate, db: AsyncSession = Depends(get_db)):
    return await product_service.add_release(db, value, data)

@router.put("/{value}/history/{release_id}", dependencies=editors)
async def update_release(
    value: str, release_id: RowId, data: ReleaseUpdate, db: AsyncSession = Depends(get_db)
):
    return await product_service.update_release(db, value, release_id, data)

@router.delete("/{value}/history/{release_id}", status_code=204, dependencies=editors)
async def delete_release(value: str, release_id: RowId, db: AsyncSession = Depends(get_db)):
    await product_service.delete_release(db, value, release_id)
