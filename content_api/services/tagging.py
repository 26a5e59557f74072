"""
Tag reconciliation for taggable models.

An entity's tag set is always replaced wholesale with the requested set;
it is never merged with what was there before.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.models import Tag
from content_api.services import store


async def resolve_tags(db: AsyncSession, requested: list[str] | None) -> list[Tag]:
    """
    Resolve each tag reference in *requested* against the tag pool.

    Missing tags are created. References that resolve to the same tag
    (repeated names, or a name and its id) collapse to one entry, keeping
    first-seen order.
    """
    tags: list[Tag] = []
    seen: set[int] = set()
    for reference in requested or []:
        tag = await store.find_or_create_tag(db, reference)
        if tag.id in seen:
            continue
        seen.add(tag.id)
        tags.append(tag)
    return tags


async def reconcile_tags(db: AsyncSession, entity, requested: list[str] | None) -> list[Tag]:
    """
    Replace *entity*'s tags with exactly the tags *requested* names.

    ``None`` and ``[]`` both clear the set. On update the entity must have
    been loaded with ``selectinload(<model>.tags)`` so the association rows
    that disappear are deleted. Resolution queries run before the entity's
    collection is touched.
    """
    tags = await resolve_tags(db, requested)
    entity.tags = tags
    return tags
