"""initial_content_schema

Revision ID: 5f2c9a1d7e30
Revises:
Create Date: 2026-10-16

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5f2c9a1d7e30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=100), nullable=False),
    )
    op.create_index('ix_tags_name', 'tags', ['name'], unique=True)

    op.create_table(
        'asset_types',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('description', sa.String(length=255), nullable=False),
    )
    op.create_index('ix_asset_types_description', 'asset_types', ['description'])

    op.create_table(
        'articles',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('body', sa.Text(), nullable=True),
        sa.Column('permalink', sa.String(length=350), nullable=False),
        sa.Column('author_id', sa.String(length=64), nullable=False),
        sa.Column('by_line', sa.String(length=200), nullable=True),
        sa.Column('pinned', sa.Boolean(), nullable=False),
        sa.Column('expires', sa.DateTime(timezone=True), nullable=True),
        sa.Column('posted', sa.DateTime(timezone=True), nullable=False),
        sa.Column('modified', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('permalink', name='uq_articles_permalink'),
    )
    op.create_index('ix_articles_author_id', 'articles', ['author_id'])
    op.create_index('ix_articles_modified', 'articles', ['modified'])

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('short', sa.String(length=100), nullable=False),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('license', sa.String(length=200), nullable=True),
        sa.Column('documentation_url', sa.String(length=500), nullable=True),
        sa.Column('download_url', sa.String(length=500), nullable=True),
        sa.Column('icon_url', sa.String(length=500), nullable=True),
        sa.Column('created', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('short', name='uq_products_short'),
    )
    op.create_index('ix_products_name', 'products', ['name'])

    op.create_table(
        'product_releases',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('version', sa.String(length=50), nullable=True),
        sa.Column('body', sa.Text(), nullable=True),
        sa.Column('download_url', sa.String(length=500), nullable=True),
        sa.Column('posted', sa.DateTime(timezone=True), nullable=False),
        sa.Column('modified', sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            'product_id', sa.Integer(),
            sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False,
        ),
    )
    op.create_index(
        'ix_product_releases_product_id_posted', 'product_releases', ['product_id', 'posted']
    )

    op.create_table(
        'article_tags',
        sa.Column(
            'article_id', sa.Integer(),
            sa.ForeignKey('articles.id', ondelete='CASCADE'), primary_key=True,
        ),
        sa.Column(
            'tag_id', sa.Integer(),
            sa.ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True,
        ),
    )

    op.create_table(
        'product_tags',
        sa.Column(
            'product_id', sa.Integer(),
            sa.ForeignKey('products.id', ondelete='CASCADE'), primary_key=True,
        ),
        sa.Column(
            'tag_id', sa.Integer(),
            sa.ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True,
        ),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('product_tags')
    op.drop_table('article_tags')
    op.drop_index('ix_product_releases_product_id_posted', table_name='product_releases')
    op.drop_table('product_releases')
    op.drop_index('ix_products_name', table_name='products')
    op.drop_table('products')
    op.drop_index('ix_articles_modified', table_name='articles')
    op.drop_index('ix_articles_author_id', table_name='articles')
    op.drop_table('articles')
    op.drop_index('ix_asset_types_description', table_name='asset_types')
    op.drop_table('asset_types')
    op.drop_index('ix_tags_name', table_name='tags')
    op.drop_table('tags')
