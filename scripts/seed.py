"""Database seeder for local development of the content API."""
import asyncio
import argparse
import random
import time
from datetime import datetime, timezone, timedelta

from content_api.database import engine, async_session, Base
from content_api.models import Article, AssetType, Product, ProductRelease, Tag
from content_api.services.slugs import derive_slug

ASSET_TYPES = ["Document", "Image", "Video", "Audio", "Archive", "Installer"]

PRODUCTS = [
    ("Content Server", "Headless content management for small teams"),
    ("Release Tracker", "Changelogs and download pages for every version"),
    ("Asset Vault", "Versioned storage for images and documents"),
    ("Feed Builder", "RSS and Atom feeds from any article set"),
]

TOPICS = ["announcement", "tutorial", "security", "performance", "roadmap", "community"]


async def seed(small: bool = False):
    num_articles = 20 if small else 500
    releases_per_product = 2 if small else 8

    print(f"Seeding: {len(PRODUCTS)} products, {num_articles} articles")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        session.add_all(AssetType(description=d) for d in ASSET_TYPES)

        topic_tags = [Tag(name=name) for name in TOPICS]
        session.add_all(topic_tags)

        now = datetime.now(timezone.utc)
        product_tags = []
        for name, summary in PRODUCTS:
            short = derive_slug(name)
            product_tag = Tag(name=short)
            product_tags.append(product_tag)
            product = Product(
                name=name,
                short=short,
                summary=summary,
                license="GPL-3.0-or-later",
                created=now,
                updated=now,
                tags=[product_tag],
            )
            for i in range(releases_per_product):
                posted = now - timedelta(days=30 * (releases_per_product - i))
                product.releases.append(ProductRelease(
                    title=f"{name} 1.{i}",
                    version=f"1.{i}.0",
                    body=f"Fixes and improvements in {name} 1.{i}.",
                    posted=posted,
                    modified=posted,
                ))
            session.add(product)
        await session.flush()
        print(f"  Created {len(ASSET_TYPES)} asset types, {len(PRODUCTS)} products")

        for i in range(num_articles):
            posted = now - timedelta(days=random.randint(0, 365))
            title = f"Update {i}: {random.choice(TOPICS).title()} notes"
            tags = random.sample(topic_tags, k=random.randint(0, 2))
            tags.append(random.choice(product_tags))
            session.add(Article(
                title=title,
                permalink=derive_slug(title),
                summary=f"Summary of update {i}.",
                body=f"This is the full body of update {i}. " * 10,
                author_id="seed",
                by_line="Seeder, Content",
                pinned=i < 2,
                posted=posted,
                modified=posted,
                tags=tags,
            ))
        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")


def main():
    parser = argparse.ArgumentParser(description="Seed the content database")
    parser.add_argument("--small", action="store_true", help="Use a small dataset (20 articles)")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
