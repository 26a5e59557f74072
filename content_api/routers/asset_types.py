from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from content_api.database import get_db
from content_api.dependencies import PaginationParams, RowId
from content_api.schemas import AssetTypeCreate, PaginatedResponse
from content_api.security import MANAGER_OR_ADMIN, require_roles
from content_api.services import asset_type_service

router = APIRouter(prefix="/api/v1/asset-types", tags=["asset-types"])

@router.get("", response_model=PaginatedResponse)
async def list_asset_types(
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    return await asset_type_service.get_asset_types(db, pagination.page, pagination.page_size)

@router.get("/{asset_type_id}")
async def get_asset_type(asset_type_id: RowId, db: AsyncSession = Depends(get_db)):
    return await asset_type_service.get_asset_type(db, asset_type_id)

@router.post("", status_code=201, dependencies=[Depends(require_roles(*MANAGER_OR_ADMIN))])
async def create_asset_type(data: AssetTypeCreate, db: AsyncSession = Depends(get_db)):
    return await asset_type_service.create_asset_type(db, data)

@router.delete(
    "/{asset_type_id}", status_code=204, dependencies=[Depends(require_roles(*MANAGER_OR_ADMIN))]
)
async def delete_asset_type(asset_type_id: RowId, db: AsyncSession = Depends(get_db)):
    await asset_type_service.delete_asset_type(db, asset_type_id)
