"""
News service — business logic for the Article aggregate.

Design notes
------------
- Create and update run the same sequence: assign the permalink, resolve
  and replace the tags, apply fields, stamp timestamps, then
  ``store.save_atomic``. Nothing is committed here; the ``get_db``
  dependency commits or rolls back the whole request.
- Update is a full replacement (PUT). ``id``, ``posted``, ``author_id`` and
  ``by_line`` always keep their stored values, and a payload without
  ``tags`` leaves the article with no tags.
- The feed list goes through the cache-aside layer; every write purges the
  news and product-news keys.
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
from content_api.models import Article
from content_api.schemas import ArticleCreate, ArticleUpdate, PaginatedResponse
from content_api.security import CurrentUser
from content_api.services import store
from content_api.services.serialization import isoformat, tags_to_list
from content_api.services.slugs import assign_slug
from content_api.services.tagging import reconcile_tags

logger = logging.getLogger(__name__)


def article_to_dict(article: Article) -> dict:
    return {
        "id": article.id,
        "title": article.title,
        "summary": article.summary,
        "body": article.body,
        "permalink": article.permalink,
        "author_id": article.author_id,
        "by_line": article.by_line,
        "pinned": article.pinned,
        "expires": isoformat(article.expires),
        "posted": isoformat(article.posted),
        "modified": isoformat(article.modified),
        "tags": tags_to_list(article.tags),
    }


async def _get_or_404(db: AsyncSession, value: str) -> Article:
    article = await store.find_by_slug_or_id(db, Article, value, selectinload(Article.tags))
    if article is None:
        raise NotFoundError("Article not found")
    return article


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def get_articles(db: AsyncSession, page: int = 1, page_size: int = 10) -> PaginatedResponse:
    """Return one page of the news feed, most recently modified first."""
    cache_key = f"news:list:{page}:{page_size}"
    cached = await cache.get(cache_key)
    if cached:
        return PaginatedResponse(**cached)

    total: int = (await db.execute(select(func.count()).select_from(Article))).scalar_one()

    q = (
        select(Article)
        .options(selectinload(Article.tags))
        .order_by(Article.modified.desc(), Article.id.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    articles = (await db.execute(q)).scalars().all()

    response = PaginatedResponse(
        items=[article_to_dict(a) for a in articles],
        total=total,
        page=page,
        page_size=page_size,
        pages=math.ceil(total / page_size) if total > 0 else 0,
    )
    await cache.set(cache_key, response.model_dump(), ttl=settings.CACHE_TTL_LIST)
    return response


async def get_article(db: AsyncSession, value: str) -> dict:
    """Return the article whose id or permalink is *value*."""
    return article_to_dict(await _get_or_404(db, value))


async def create_article(db: AsyncSession, data: ArticleCreate, user: CurrentUser) -> dict:
    permalink = await assign_slug(db, Article, data.title, requested=data.permalink)

    now = datetime.now(timezone.utc)
    article = Article(
        title=data.title,
        summary=data.summary,
        body=data.body,
        permalink=permalink,
        pinned=data.pinned,
        expires=data.expires,
        author_id=user.id,
        by_line=user.by_line,
        posted=now,
        modified=now,
    )
    await reconcile_tags(db, article, data.tags)
    await store.save_atomic(db, article)

    logger.info("Created article %s (%r) by %s", article.id, article.permalink, user.id)
    await cache.invalidate_news()
    return article_to_dict(article)


async def update_article(db: AsyncSession, value: str, data: ArticleUpdate) -> dict:
    article = await _get_or_404(db, value)

    permalink = await assign_slug(
        db,
        Article,
        data.title,
        requested=data.permalink,
        current=article.permalink,
        entity_id=article.id,
    )
    await reconcile_tags(db, article, data.tags)

    article.title = data.title
    article.summary = data.summary
    article.body = data.body
    article.pinned = data.pinned
    article.expires = data.expires
    article.permalink = permalink
    article.modified = datetime.now(timezone.utc)

    await store.save_atomic(db, article)

    logger.info("Updated article %s (%r)", article.id, article.permalink)
    await cache.invalidate_news()
    return article_to_dict(article)


async def delete_article(db: AsyncSession, value: str) -> None:
    article = await _get_or_404(db, value)
    await db.delete(article)
    await db.flush()

    logger.info("Deleted article %s (%r)", article.id, article.permalink)
    await cache.invalidate_news()
