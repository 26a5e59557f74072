from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field

# A tag reference is either a tag name or a numeric tag id sent as a string.
TagReference = Annotated[str, Field(min_length=1, max_length=100)]


# --- Asset type ---

class AssetTypeCreate(BaseModel):
    description: str = Field(min_length=1, max_length=255)


# --- Article ---

class ArticleBase(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    summary: str | None = None
    body: str | None = None
    permalink: str | None = Field(None, max_length=350)
    pinned: bool = False
    expires: datetime | None = None
    tags: list[TagReference] | None = None


class ArticleCreate(ArticleBase):
    pass


class ArticleUpdate(ArticleBase):
    """
    Full replacement payload for PUT.

    ``id``, ``posted``, ``author_id`` and ``by_line`` are not part of the
    model; if a client sends them they are dropped during parsing.
    """


# --- Product ---

class ProductBase(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    short: str | None = Field(None, max_length=100)
    summary: str | None = None
    description: str | None = None
    license: str | None = Field(None, max_length=200)
    documentation_url: str | None = Field(None, max_length=500)
    download_url: str | None = Field(None, max_length=500)
    icon_url: str | None = Field(None, max_length=500)
    tags: list[TagReference] | None = None


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    pass


# --- Product release ---

class ReleaseBase(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    version: str | None = Field(None, max_length=50)
    body: str | None = None
    download_url: str | None = Field(None, max_length=500)


class ReleaseCreate(ReleaseBase):
    pass


class ReleaseUpdate(ReleaseBase):
    pass


# --- Pagination ---

class PaginatedResponse(BaseModel):
    items: list
    total: int
    page: int
    page_size: int
    pages: int
