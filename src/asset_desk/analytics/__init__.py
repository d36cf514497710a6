"""
Analytics module for the Digital Asset Desk.

Provides structure readiness evaluation and the dashboard overview.
"""

from asset_desk.analytics.readiness import (
    REQUIRED_ASSETS,
    evaluate_readiness,
)
from asset_desk.analytics.overview import build_overview

__all__ = [
    "REQUIRED_ASSETS",
    "evaluate_readiness",
    "build_overview",
]
