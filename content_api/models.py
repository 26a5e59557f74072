from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, synonym

from content_api.database import Base

# ---------------------------------------------------------------------------
# Association tables: Article <-> Tag, Product <-> Tag (many-to-many)
# ---------------------------------------------------------------------------
article_tags = Table(
    "article_tags",
    Base.metadata,
    Column("article_id", Integer, ForeignKey("articles.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)

product_tags = Table(
    "product_tags",
    Base.metadata,
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


# ---------------------------------------------------------------------------
# Tag (shared pool)
# ---------------------------------------------------------------------------
class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)

    articles: Mapped[List["Article"]] = relationship(
        "Article", secondary=article_tags, back_populates="tags", lazy="noload"
    )
    products: Mapped[List["Product"]] = relationship(
        "Product", secondary=product_tags, back_populates="tags", lazy="noload"
    )


# ---------------------------------------------------------------------------
# AssetType
# ---------------------------------------------------------------------------
class AssetType(Base):
    __tablename__ = "asset_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    description: Mapped[str] = mapped_column(String(255), nullable=False, index=True)


# ---------------------------------------------------------------------------
# Article (news)
# ---------------------------------------------------------------------------
class Article(Base):
    __tablename__ = "articles"

    # Sluggable models name their slug column and the label used in errors.
    __slug_column__ = "permalink"
    __slug_label__ = "Permalink"

    __table_args__ = (
        UniqueConstraint("permalink", name="uq_articles_permalink"),
        # News feed, newest first
        Index("ix_articles_modified", "modified"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    body: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    permalink: Mapped[str] = mapped_column(String(350), nullable=False)
    author_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    by_line: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    pinned: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    expires: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    posted: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    modified: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    slug = synonym("permalink")

    tags: Mapped[List["Tag"]] = relationship(
        "Tag", secondary=article_tags, back_populates="articles", lazy="noload"
    )


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------
class Product(Base):
    __tablename__ = "products"

    __slug_column__ = "short"
    __slug_label__ = "Short"

    __table_args__ = (
        UniqueConstraint("short", name="uq_products_short"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    short: Mapped[str] = mapped_column(String(100), nullable=False)
    summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    license: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    documentation_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    download_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    icon_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    created: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    slug = synonym("short")

    tags: Mapped[List["Tag"]] = relationship(
        "Tag", secondary=product_tags, back_populates="products", lazy="noload"
    )
    releases: Mapped[List["ProductRelease"]] = relationship(
        "ProductRelease",
        back_populates="product",
        cascade="all, delete-orphan",
        lazy="noload",
    )


# ---------------------------------------------------------------------------
# ProductRelease (history)
# ---------------------------------------------------------------------------
class ProductRelease(Base):
    __tablename__ = "product_releases"

    __table_args__ = (
        Index("ix_product_releases_product_id_posted", "product_id", "posted"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    version: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    body: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    download_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    posted: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    modified: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    product_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )

    product: Mapped["Product"] = relationship("Product", back_populates="releases", lazy="noload")
