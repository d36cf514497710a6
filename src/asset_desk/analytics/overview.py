"""
Dashboard overview of an asset collection.

Combines the status counts, total recurring cost, readiness and
expiration windows shown on the home screen.
"""

from datetime import date
from typing import Optional

from asset_desk.analytics.readiness import evaluate_readiness
from asset_desk.assets.queries import (
    already_expired,
    expiring_within,
    status_counts,
    total_cost,
)
from asset_desk.models import Asset, PortfolioOverview


def build_overview(
    assets: list[Asset],
    expiring_window_days: int = 30,
    today: Optional[date] = None,
) -> PortfolioOverview:
    """
    Summarize a collection for the dashboard.

    Args:
        assets: Asset collection
        expiring_window_days: Window for the "expiring soon" list
        today: Reference day (defaults to the current date)

    Returns:
        PortfolioOverview
    """
    return PortfolioOverview(
        total_assets=len(assets),
        status_counts=status_counts(assets),
        total_cost=total_cost(assets),
        readiness=evaluate_readiness(assets),
        expiring_soon=expiring_within(assets, expiring_window_days, today),
        expired=already_expired(assets, today),
    )
