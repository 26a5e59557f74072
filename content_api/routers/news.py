from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from content_api.database import get_db
from content_api.dependencies import PaginationParams
from content_api.schemas import ArticleCreate, ArticleUpdate, PaginatedResponse
from content_api.security import NEWS_EDITORS, NEWS_WRITERS, CurrentUser, require_roles
from content_api.services import news_service

router = APIRouter(prefix="/api/v1/news", tags=["news"])

@router.get("", response_model=PaginatedResponse)
async def list_articles(
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    return await news_service.get_articles(db, pagination.page, pagination.page_size)

@router.get("/{value}")
async def get_article(value: str, db: AsyncSession = Depends(get_db)):
    return await news_service.get_article(db, value)

@router.post("", status_code=201)
async def create_article(
    data: ArticleCreate,
    user: CurrentUser = Depends(require_roles(*NEWS_WRITERS)),
    db: AsyncSession = Depends(get_db),
):
    return await news_service.create_article(db, data, user)

@router.put("/{value}", dependencies=[Depends(require_roles(*NEWS_WRITERS))])
async def update_article(value: str, data: ArticleUpdate, db: AsyncSession = Depends(get_db)):
    return await news_service.update_article(db, value, data)

@router.delete("/{value}", status_code=204, dependencies=[Depends(require_roles(*NEWS_EDITORS))])
async def delete_article(value: str, db: AsyncSession = Depends(get_db)):
    await news_service.delete_article(db, value)
