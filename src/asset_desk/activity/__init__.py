"""
Activity logging module for the Digital Asset Desk.

Provides append-only activity logging for audit.
"""

from asset_desk.activity.activity_log import ActivityLogger

__all__ = [
    "ActivityLogger",
]
