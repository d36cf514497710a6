"""
Read-only views over an asset collection.

Search, folder grouping by type, status counts, cost totals and expiration
windows. All functions are pure and recompute from the list they are given.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Optional

from asset_desk.formatters import days_until_expiration
from asset_desk.models import Asset, AssetStatus, AssetType


def search_assets(
    assets: Iterable[Asset],
    term: str = "",
    asset_type: Optional[AssetType] = None,
) -> list[Asset]:
    """
    Filter assets by a case-insensitive search term and optional type.

    The term matches when it is contained in the name or in any tag.

    Args:
        assets: Collection to filter
        term: Search text; empty matches everything
        asset_type: Restrict to one folder

    Returns:
        Matching assets in their original order
    """
    needle = term.strip().lower()
    results = []
    for asset in assets:
        if asset_type is not None and asset.type != asset_type:
            continue
        if needle and needle not in asset.name.lower() and not any(
            needle in tag.lower() for tag in asset.tags
        ):
            continue
        results.append(asset)
    return results


def group_by_type(assets: Iterable[Asset]) -> dict[AssetType, list[Asset]]:
    """
    Group assets into one folder per type.

    Every AssetType has an entry, empty folders included, in enumeration order.
    """
    groups: dict[AssetType, list[Asset]] = {t: [] for t in AssetType}
    for asset in assets:
        groups[asset.type].append(asset)
    return groups


def status_counts(assets: Iterable[Asset]) -> dict[AssetStatus, int]:
    """Count assets per status; every status is present, zero if unused."""
    counts = {s: 0 for s in AssetStatus}
    for asset in assets:
        counts[asset.status] += 1
    return counts


def sorted_status_counts(assets: Iterable[Asset]) -> list[tuple[AssetStatus, int]]:
    """Non-zero status counts, most frequent first (folder badge order)."""
    counts = [(s, n) for s, n in status_counts(assets).items() if n > 0]
    counts.sort(key=lambda item: item[1], reverse=True)
    return counts


def total_cost(assets: Iterable[Asset]) -> Decimal:
    return sum((a.cost for a in assets), Decimal("0"))


def cost_by_type(assets: Iterable[Asset]) -> dict[AssetType, Decimal]:
    """Total recurring cost per type, every type present."""
    return {t: total_cost(group) for t, group in group_by_type(assets).items()}


def expiring_within(
    assets: Iterable[Asset],
    days: int,
    today: Optional[date] = None,
) -> list[Asset]:
    """
    Assets that expire between today and today + days, inclusive.

    Returns:
        Matching assets sorted soonest first
    """
    window = []
    for asset in assets:
        remaining = days_until_expiration(asset.expiration_date, today)
        if remaining is not None and 0 <= remaining <= days:
            window.append((remaining, asset))
    window.sort(key=lambda item: item[0])
    return [asset for _, asset in window]


def already_expired(assets: Iterable[Asset], today: Optional[date] = None) -> list[Asset]:
    """Assets whose expiration date has passed, most overdue first."""
    overdue = []
    for asset in assets:
        remaining = days_until_expiration(asset.expiration_date, today)
        if remaining is not None and remaining < 0:
            overdue.append((remaining, asset))
    overdue.sort(key=lambda item: item[0])
    return [asset for _, asset in overdue]
