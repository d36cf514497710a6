"""
Asset management module for the Digital Asset Desk.

Provides the owner-scoped asset store, field validation and read-only
collection queries.
"""

from asset_desk.assets.store import AssetStore
from asset_desk.assets.validation import (
    ALLOWED_TYPES,
    AssetNotFoundError,
    ValidationError,
    validate_asset_fields,
)
from asset_desk.assets.queries import (
    already_expired,
    cost_by_type,
    expiring_within,
    group_by_type,
    search_assets,
    sorted_status_counts,
    status_counts,
    total_cost,
)

__all__ = [
    "AssetStore",
    "ALLOWED_TYPES",
    "AssetNotFoundError",
    "ValidationError",
    "validate_asset_fields",
    "already_expired",
    "cost_by_type",
    "expiring_within",
    "group_by_type",
    "search_assets",
    "sorted_status_counts",
    "status_counts",
    "total_cost",
]
