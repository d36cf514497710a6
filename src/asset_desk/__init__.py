"""
Digital Asset Desk (asset-desk)

A single-user inventory tracker for recurring digital assets: domains,
hosting, business managers, ad accounts, social profiles and pages. Tracks
status, recurring cost, expiration dates and tags, and derives expiration
urgency and structure readiness from the collection.

This is a local tool. The identity layer is a stub and is not a security
boundary.
"""

__version__ = "0.1.0"
__author__ = "Asset Desk Team"
