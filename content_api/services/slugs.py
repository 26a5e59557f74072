"""
Slug assignment for sluggable models (article permalinks, product shorts).

A slug is either supplied by the caller, used verbatim, or derived from the
entity's title/name. Derivation never looks at existing slugs: a collision
is a validation failure for the caller to fix, not something resolved by
suffixing.
"""
import logging
import re
from urllib.parse import quote

from sqlalchemy.ext.asyncio import AsyncSession

from content_api.errors import DuplicateSlugError, InvalidSlugError
from content_api.services import store

logger = logging.getLogger(__name__)

_STRIPPED_CHARACTERS = re.compile(r'[!,"?=]')


def derive_slug(title: str) -> str:
    """
    Build a slug from *title*.

    Spaces become underscores, the characters ``! , " ? =`` are dropped and
    whatever is left that is unsafe in a URL path segment is
    percent-encoded. Case is preserved.
    """
    candidate = _STRIPPED_CHARACTERS.sub("", title.replace(" ", "_"))
    return quote(candidate, safe="")


async def assign_slug(
    db: AsyncSession,
    model,
    title: str,
    requested: str | None = None,
    current: str | None = None,
    entity_id: int | None = None,
) -> str:
    """
    Return the slug an entity of *model* should be saved with.

    *current* and *entity_id* are only given on update. Keeping the current
    slug skips the uniqueness query; any other candidate must not be used by
    another row of the same model.

    Raises ``InvalidSlugError`` when no usable slug can be derived from
    *title* and ``DuplicateSlugError`` when the candidate is taken.
    """
    if requested:
        candidate = requested
    else:
        candidate = derive_slug(title)
        if not candidate.strip("_"):
            raise InvalidSlugError(
                f"Cannot derive a {model.__slug_label__.lower()} from {title!r}"
            )

    if current is not None and candidate == current:
        return candidate

    if await store.exists_with_slug(db, model, candidate, exclude_id=entity_id):
        logger.info("Rejected duplicate %s %r", model.__slug_column__, candidate)
        raise DuplicateSlugError(model.__slug_label__, candidate)

    return candidate
