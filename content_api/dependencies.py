from typing import Annotated

from fastapi import Path, Query

from content_api.config import settings
from content_api.services.store import MAX_ID

# Integer path parameter bounded to the primary-key range.
RowId = Annotated[int, Path(ge=1, le=MAX_ID)]


class PaginationParams:
    """
    Reusable FastAPI dependency that parses and validates pagination query
    parameters.

    Usage in a router::

        @router.get("")
        async def list_things(pagination: PaginationParams = Depends()):
            ...

    Attributes
    ----------
    page:
        1-based page number (minimum 1).
    page_size:
        Number of items per page, clamped to ``settings.MAX_PAGE_SIZE``
        regardless of the value supplied by the caller.
    """

    def __init__(
        self,
        page: int = Query(
            1,
            ge=1,
            description="Page number (1-based).",
        ),
        page_size: int = Query(
            settings.DEFAULT_PAGE_SIZE,
            ge=1,
            le=100,
            description="Number of items returned per page (max 100).",
        ),
    ) -> None:
        self.page = page
        self.page_size = min(page_size, settings.MAX_PAGE_SIZE)
