"""
Structure readiness for the required asset checklist.

A portfolio is ready when every required category has at least one asset
that is online. The checklist order is fixed and is the order in which
missing categories are reported.
"""

from collections.abc import Iterable

from asset_desk.models import Asset, AssetStatus, AssetType, ReadinessReport


REQUIRED_ASSETS: list[tuple[AssetType, str]] = [
    (AssetType.BUSINESS_MANAGER, "Business Manager"),
    (AssetType.AD_ACCOUNT, "Ad Account"),
    (AssetType.DOMAIN, "Domain"),
    (AssetType.FACEBOOK_PAGE, "Facebook Page"),
    (AssetType.FACEBOOK_PROFILE, "Facebook Profile"),
    (AssetType.HOSTING, "Hosting"),
]


def online_types(assets: Iterable[Asset]) -> set[AssetType]:
    """Asset types with at least one online asset."""
    return {a.type for a in assets if a.status == AssetStatus.ONLINE}


def evaluate_readiness(assets: Iterable[Asset]) -> ReadinessReport:
    """
    Evaluate the required structure against an asset collection.

    Args:
        assets: Asset collection (typically the current account's)

    Returns:
        ReadinessReport with missing labels in checklist order
    """
    satisfied = online_types(assets)

    missing = [label for asset_type, label in REQUIRED_ASSETS if asset_type not in satisfied]

    return ReadinessReport(
        missing=missing,
        active_count=len(REQUIRED_ASSETS) - len(missing),
        total=len(REQUIRED_ASSETS),
    )
