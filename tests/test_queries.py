"""
Tests for collection queries and the dashboard overview.
"""

from datetime import date
from decimal import Decimal

from asset_desk.analytics import build_overview
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
from asset_desk.models import AssetStatus, AssetType


TODAY = date(2025, 6, 1)


def names(assets):
    return [a.name for a in assets]


class TestSearch:
    """Tests for search_assets."""

    def test_empty_term_matches_everything(self, sample_assets):
        assert search_assets(sample_assets) == sample_assets

    def test_case_insensitive_name_match(self, sample_assets):
        assert names(search_assets(sample_assets, "SHOP")) == ["shop.com", "Shop Page"]

    def test_matches_tags(self, sample_assets):
        assert names(search_assets(sample_assets, "marketing")) == ["Shop Page"]
        assert names(search_assets(sample_assets, "infra")) == ["VPS Pro"]

    def test_type_filter(self, sample_assets):
        result = search_assets(sample_assets, "shop", AssetType.DOMAIN)
        assert names(result) == ["shop.com"]

    def test_no_match(self, sample_assets):
        assert search_assets(sample_assets, "nothing-here") == []


class TestGrouping:
    """Tests for folder grouping and status counts."""

    def test_every_type_has_a_folder(self, sample_assets):
        groups = group_by_type(sample_assets)
        assert list(groups) == list(AssetType)
        assert names(groups[AssetType.DOMAIN]) == ["shop.com", "blog.com"]
        assert groups[AssetType.OTHER] == []

    def test_status_counts(self, sample_assets):
        counts = status_counts(sample_assets)
        assert counts == {
            AssetStatus.ONLINE: 3,
            AssetStatus.EXPIRED: 1,
            AssetStatus.PENDING: 1,
            AssetStatus.INACTIVE: 1,
        }

    def test_status_counts_empty(self):
        assert set(status_counts([]).values()) == {0}

    def test_sorted_status_counts_most_frequent_first(self, sample_assets):
        ordered = sorted_status_counts(sample_assets)
        assert ordered[0] == (AssetStatus.ONLINE, 3)
        assert len(ordered) == 4

    def test_sorted_status_counts_drops_zero(self, sample_assets):
        domains = group_by_type(sample_assets)[AssetType.DOMAIN]
        assert sorted_status_counts(domains) == [
            (AssetStatus.ONLINE, 1),
            (AssetStatus.PENDING, 1),
        ]


class TestCosts:
    """Tests for cost totals."""

    def test_total_cost(self, sample_assets):
        assert total_cost(sample_assets) == Decimal("152.48")

    def test_total_cost_empty(self):
        assert total_cost([]) == Decimal("0")

    def test_cost_by_type(self, sample_assets):
        costs = cost_by_type(sample_assets)
        assert costs[AssetType.DOMAIN] == Decimal("22.49")
        assert costs[AssetType.AD_ACCOUNT] == Decimal("100")
        assert costs[AssetType.INSTAGRAM_PROFILE] == Decimal("0")


class TestExpirationWindows:
    """Tests for expiring_within and already_expired."""

    def test_expiring_within_default_window(self, sample_assets):
        assert names(expiring_within(sample_assets, 30, TODAY)) == ["shop.com"]

    def test_expiring_within_sorted_soonest_first(self, sample_assets):
        result = expiring_within(sample_assets, 120, TODAY)
        assert names(result) == ["shop.com", "VPS Pro"]

    def test_window_is_inclusive(self, sample_assets):
        assert names(expiring_within(sample_assets, 5, TODAY)) == ["shop.com"]
        assert expiring_within(sample_assets, 4, TODAY) == []

    def test_already_expired(self, sample_assets):
        assert names(already_expired(sample_assets, TODAY)) == ["blog.com"]


class TestOverview:
    """Tests for build_overview."""

    def test_overview(self, sample_assets):
        overview = build_overview(sample_assets, expiring_window_days=30, today=TODAY)

        assert overview.total_assets == 6
        assert overview.total_cost == Decimal("152.48")
        assert overview.status_counts[AssetStatus.ONLINE] == 3
        assert overview.readiness.missing == ["Ad Account", "Facebook Page", "Facebook Profile"]
        assert overview.readiness.active_count == 3
        assert names(overview.expiring_soon) == ["shop.com"]
        assert names(overview.expired) == ["blog.com"]

    def test_empty_overview(self):
        overview = build_overview([], today=TODAY)
        assert overview.total_assets == 0
        assert overview.total_cost == Decimal("0")
        assert len(overview.readiness.missing) == 6
        assert overview.expiring_soon == []
