# Services package.
#
# Each module exposes a focused set of async functions:
#
#   store               — lookups and the atomic save shared by every kind
#   slugs               — permalink / short assignment and uniqueness check
#   tagging             — tag-pool resolution and full-replace reconciliation
#   news_service        — CRUD + pagination for Article
#   product_service     — CRUD, product news and release history for Product
#   asset_type_service  — list / get / add / delete for AssetType
#
# All service functions accept an AsyncSession as their first argument and
# flush without committing, so the ``get_db`` dependency owns the
# transaction boundary.
