"""
Persistence operations shared by every sluggable, taggable model.

Functions take the model class as a parameter; ``Article`` and ``Product``
both expose ``id``, a ``slug`` synonym and a ``tags`` collection, so the
same queries serve both kinds.
"""
import logging
import re

from sqlalchemy import insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.errors import DuplicateSlugError, StoreError
from content_api.models import Tag

logger = logging.getLogger(__name__)

# Integer primary keys are 32-bit on PostgreSQL.
MAX_ID = 2_147_483_647

_ID_PATTERN = re.compile(r"[0-9]{1,10}")

# Dialects with INSERT ... ON CONFLICT DO NOTHING.
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def as_id(value: str) -> int | None:
    """Return *value* as a row id when it is a plain ASCII number in range."""
    if not _ID_PATTERN.fullmatch(value):
        return None
    number = int(value)
    return number if number <= MAX_ID else None


async def find_by_slug_or_id(db: AsyncSession, model, value: str, *options):
    """
    Return the *model* row whose id or slug equals *value*, or None.

    A numeric *value* within the id range is tried as an id first and then
    as a slug. Loader *options* (e.g. ``selectinload(model.tags)``) are
    applied to the query.
    """
    entity_id = as_id(value)
    if entity_id is not None:
        result = await db.execute(
            select(model).where(model.id == entity_id).options(*options)
        )
        entity = result.scalar_one_or_none()
        if entity is not None:
            return entity

    result = await db.execute(select(model).where(model.slug == value).options(*options))
    return result.scalar_one_or_none()


async def exists_with_slug(
    db: AsyncSession, model, slug: str, exclude_id: int | None = None
) -> bool:
    """True when another *model* row already uses *slug*."""
    q = select(model.id).where(model.slug == slug)
    if exclude_id is not None:
        q = q.where(model.id != exclude_id)
    result = await db.execute(q.limit(1))
    return result.first() is not None


async def _tag_by_name(db: AsyncSession, name: str) -> Tag | None:
    result = await db.execute(select(Tag).where(Tag.name == name))
    return result.scalar_one_or_none()


async def find_or_create_tag(db: AsyncSession, name_or_id: str) -> Tag:
    """
    Resolve a tag reference, creating the tag when it does not exist.

    Digits naming an existing tag id resolve to that tag; anything else is
    an exact name match. Creation uses ``ON CONFLICT DO NOTHING`` followed
    by a re-read, so two requests creating the same name end up with the
    same row instead of a unique-constraint failure.
    """
    tag_id = as_id(name_or_id)
    if tag_id is not None:
        tag = await db.get(Tag, tag_id)
        if tag is not None:
            return tag

    tag = await _tag_by_name(db, name_or_id)
    if tag is not None:
        return tag

    make_insert = _UPSERT_INSERTS.get(db.get_bind().dialect.name)
    if make_insert is None:
        await db.execute(insert(Tag).values(name=name_or_id))
    else:
        await db.execute(
            make_insert(Tag)
            .values(name=name_or_id)
            .on_conflict_do_nothing(index_elements=["name"])
        )

    tag = await _tag_by_name(db, name_or_id)
    if tag is None:
        raise StoreError(f"Tag {name_or_id!r} could not be created")
    logger.info("Created tag %r (id=%s)", tag.name, tag.id)
    return tag


def _is_slug_violation(model, exc: IntegrityError) -> bool:
    message = str(exc.orig)
    column = model.__slug_column__
    table = model.__tablename__
    # SQLite names the column, PostgreSQL names the constraint.
    return f"{table}.{column}" in message or f"uq_{table}_{column}" in message


async def save_atomic(db: AsyncSession, entity):
    """
    Add *entity* (with its tag associations) to the session and flush.

    Nothing is committed here. A unique-constraint hit on the slug column,
    which happens when a concurrent request claimed the same slug after our
    availability check, is raised as ``DuplicateSlugError``; every other
    database failure becomes ``StoreError``.
    """
    model = type(entity)
    db.add(entity)
    try:
        await db.flush()
    except IntegrityError as exc:
        if _is_slug_violation(model, exc):
            raise DuplicateSlugError(model.__slug_label__, entity.slug) from exc
        logger.error("Integrity error saving %s: %s", model.__name__, exc.orig)
        raise StoreError("Save Failed") from exc
    except SQLAlchemyError as exc:
        logger.error("Database error saving %s: %s", model.__name__, exc)
        raise StoreError("Save Failed") from exc
    return entity
