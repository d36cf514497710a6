"""
Application wiring.

Builds one AppState and hands it, together with the storage slots and the
activity log, to the identity provider and the asset store.
"""

from dataclasses import dataclass
from typing import Optional

from asset_desk.activity import ActivityLogger
from asset_desk.analytics import build_overview
from asset_desk.assets import AssetStore
from asset_desk.identity import LocalIdentityProvider
from asset_desk.models import AppConfig, PortfolioOverview
from asset_desk.state import AppState
from asset_desk.storage import FileStore, KeyValueStore, StorageSlots


@dataclass
class AssetDeskApp:
    """The wired application: shared state plus the services built on it."""
    config: AppConfig
    state: AppState
    slots: StorageSlots
    identity: LocalIdentityProvider
    assets: AssetStore
    activity_log: ActivityLogger

    def overview(self) -> PortfolioOverview:
        """Dashboard overview of the current account's assets."""
        return build_overview(self.assets.list(), self.config.expiring_window_days)


def create_app(
    config: Optional[AppConfig] = None,
    store: Optional[KeyValueStore] = None,
) -> AssetDeskApp:
    """
    Build the application.

    Args:
        config: Application configuration (defaults apply when omitted)
        store: Storage backend; a FileStore under config.data_dir by default

    Returns:
        AssetDeskApp with any persisted session restored
    """
    config = config or AppConfig()
    backend = store if store is not None else FileStore(config.data_dir)

    state = AppState()
    slots = StorageSlots(backend)
    activity_log = ActivityLogger(config.activity_log_path)

    identity = LocalIdentityProvider(state, slots, activity_log=activity_log)
    assets = AssetStore(state, slots, activity_log=activity_log)

    return AssetDeskApp(
        config=config,
        state=state,
        slots=slots,
        identity=identity,
        assets=assets,
        activity_log=activity_log,
    )
