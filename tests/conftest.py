"""
Pytest fixtures for the Digital Asset Desk tests.

Provides common test data and utilities used across test modules.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal
from pathlib import Path

import pytest

from asset_desk.activity import ActivityLogger
from asset_desk.assets import AssetStore
from asset_desk.identity import LocalIdentityProvider
from asset_desk.models import Asset, AssetInput, AssetStatus, AssetType
from asset_desk.state import AppState
from asset_desk.storage import MemoryStore, PersistenceError, StorageSlots


class FakeClock:
    """Controllable clock; advances only when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class FailingStore(MemoryStore):
    """MemoryStore whose writes can be switched off."""

    def __init__(self):
        super().__init__()
        self.fail_writes = False

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise PersistenceError("quota exceeded")
        super().set(key, value)

    def remove(self, key: str) -> None:
        if self.fail_writes:
            raise PersistenceError("quota exceeded")
        super().remove(key)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 6, 1, 9, 30, 0))


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def slots(memory_store: MemoryStore) -> StorageSlots:
    return StorageSlots(memory_store)


@pytest.fixture
def state() -> AppState:
    return AppState()


@pytest.fixture
def activity_log(tmp_path: Path) -> ActivityLogger:
    return ActivityLogger(tmp_path / "activity_log.jsonl")


@pytest.fixture
def identity(state: AppState, slots: StorageSlots, activity_log: ActivityLogger, clock: FakeClock) -> LocalIdentityProvider:
    return LocalIdentityProvider(state, slots, activity_log=activity_log, clock=clock)


@pytest.fixture
def store(state: AppState, slots: StorageSlots, activity_log: ActivityLogger, clock: FakeClock) -> AssetStore:
    return AssetStore(state, slots, activity_log=activity_log, clock=clock)


@pytest.fixture
def signed_in(identity: LocalIdentityProvider):
    """Active session for owner@example.com."""
    return identity.sign_in("owner@example.com", "secret")


@pytest.fixture
def shop_input() -> AssetInput:
    """The shop.com domain used throughout the scenarios."""
    return AssetInput(
        name="shop.com",
        type="dominio",
        status="online",
        cost=12.5,
        expiration_date="2030-01-01",
        tags=["main", "shop"],
    )


def make_asset(
    name: str,
    asset_type: AssetType,
    status: AssetStatus = AssetStatus.ONLINE,
    cost: str = "0",
    expiration_date: date | None = None,
    tags: tuple[str, ...] = (),
    owner_id: str = "owner-1",
) -> Asset:
    """Build an Asset directly, bypassing the store."""
    stamp = datetime(2025, 1, 1, 12, 0, 0)
    return Asset.create(
        name=name,
        type=asset_type,
        status=status,
        cost=Decimal(cost),
        expiration_date=expiration_date,
        tags=tags,
        owner_id=owner_id,
        now=stamp,
    )


@pytest.fixture
def sample_assets() -> list[Asset]:
    """A small mixed portfolio."""
    return [
        make_asset("shop.com", AssetType.DOMAIN, cost="12.50",
                   expiration_date=date(2025, 6, 6), tags=("main", "shop")),
        make_asset("blog.com", AssetType.DOMAIN, AssetStatus.PENDING, cost="9.99",
                   expiration_date=date(2025, 5, 29), tags=("blog",)),
        make_asset("VPS Pro", AssetType.HOSTING, cost="29.99",
                   expiration_date=date(2025, 9, 1), tags=("infra",)),
        make_asset("Main BM", AssetType.BUSINESS_MANAGER),
        make_asset("Ads 01", AssetType.AD_ACCOUNT, AssetStatus.EXPIRED, cost="100"),
        make_asset("Shop Page", AssetType.FACEBOOK_PAGE, AssetStatus.INACTIVE,
                   tags=("Marketing",)),
    ]
