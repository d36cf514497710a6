"""
Asset store: CRUD over the signed-in account's asset collection.

The store keeps the account's assets in memory, in insertion order, and
mirrors every successful mutation to the user_assets slot before it
returns. A mutation builds the new collection, persists it, and only then
replaces the in-memory copy, so a failed write leaves the store exactly as
it was after the last successful one.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from asset_desk.activity import ActivityLogger
from asset_desk.assets.validation import AssetNotFoundError, validate_asset_fields
from asset_desk.models import Asset, Session
from asset_desk.state import AppState
from asset_desk.storage import PersistenceError, StorageSlots


logger = logging.getLogger(__name__)


class AssetStore:
    """
    Owner-scoped asset collection with write-through persistence.

    Every operation requires an active session on the shared AppState and
    raises NotAuthenticatedError otherwise. Every new session, including a
    sign-in to the same account after a sign-out, reloads the collection
    from storage on next access.
    """

    def __init__(
        self,
        state: AppState,
        slots: StorageSlots,
        activity_log: Optional[ActivityLogger] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the asset store.

        Args:
            state: Shared application state holding the session
            slots: Durable storage slots
            activity_log: Optional activity logger for mutations
            clock: Source of timestamps
        """
        self.state = state
        self.slots = slots
        self.activity_log = activity_log
        self.clock = clock
        self._assets: list[Asset] = []
        # Session the collection was loaded for; a new sign-in forces a reload
        self._loaded_for: Optional[Session] = None

    def _collection(self) -> list[Asset]:
        session = self.state.require_session()
        if self._loaded_for is not session:
            self._load(session)
        return self._assets

    def _load(self, session: Session) -> None:
        self._assets = self.slots.get_owner_assets(session.account_id)
        self._loaded_for = session
        logger.debug("Loaded %d assets for account %s", len(self._assets), session.account_id)

    def _persist(self, account_id: str, assets: list[Asset]) -> None:
        try:
            self.slots.set_owner_assets(account_id, assets)
        except PersistenceError:
            logger.error("Failed to save assets for account %s; changes were not applied", account_id)
            raise
        self._assets = assets

    def _next_timestamp(self, previous: datetime) -> datetime:
        now = self.clock()
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    def list(self) -> list[Asset]:
        """
        All assets of the current account, in insertion order.

        Returns:
            A new list of copies; mutating it does not affect the store
        """
        return [replace(a) for a in self._collection()]

    def get(self, asset_id: str) -> Optional[Asset]:
        """Find one of the current account's assets by id."""
        for asset in self._collection():
            if asset.id == asset_id:
                return replace(asset)
        return None

    def refresh(self) -> list[Asset]:
        """Reload the current account's assets from storage."""
        session = self.state.require_session()
        self._load(session)
        return self.list()

    def create(self, data: Any) -> Asset:
        """
        Validate and store a new asset.

        Args:
            data: AssetInput or mapping with name, type, status, cost,
                  expiration_date and tags

        Returns:
            The stored asset with generated id and timestamps

        Raises:
            NotAuthenticatedError: If nobody is signed in
            ValidationError: If any field is invalid
            PersistenceError: If the collection cannot be saved
        """
        collection = self._collection()
        account_id = self.state.require_session().account_id
        fields = validate_asset_fields(data)

        asset = Asset.create(owner_id=account_id, now=self.clock(), **fields)
        existing_ids = {a.id for a in collection}
        while asset.id in existing_ids:
            asset = Asset.create(owner_id=account_id, now=asset.created_at, **fields)

        self._persist(account_id, collection + [asset])
        logger.info("Created asset %s (%s)", asset.id, asset.name)

        if self.activity_log:
            self.activity_log.log_asset_created(asset)

        return replace(asset)

    def update(self, asset: Asset) -> Asset:
        """
        Replace a stored asset with new field values.

        id, created_at and owner_id are taken from the stored record;
        updated_at always moves forward.

        Args:
            asset: Asset carrying the id to update and the new field values

        Returns:
            The updated record

        Raises:
            NotAuthenticatedError: If nobody is signed in
            AssetNotFoundError: If the id is not in the current collection
            ValidationError: If any field is invalid
            PersistenceError: If the collection cannot be saved
        """
        collection = self._collection()
        account_id = self.state.require_session().account_id

        index = next((i for i, a in enumerate(collection) if a.id == asset.id), None)
        if index is None:
            raise AssetNotFoundError(asset.id)

        fields = validate_asset_fields(asset)
        previous = collection[index]
        updated = Asset(
            id=previous.id,
            created_at=previous.created_at,
            updated_at=self._next_timestamp(previous.updated_at),
            owner_id=previous.owner_id,
            **fields,
        )

        new_collection = list(collection)
        new_collection[index] = updated
        self._persist(account_id, new_collection)
        logger.info("Updated asset %s", updated.id)

        if self.activity_log:
            self.activity_log.log_asset_updated(previous, updated)

        return replace(updated)

    def delete(self, asset_id: str) -> bool:
        """
        Permanently remove an asset.

        Args:
            asset_id: Id of the asset to remove

        Returns:
            True if an asset was removed, False if the id was unknown
            (nothing is written in that case)

        Raises:
            NotAuthenticatedError: If nobody is signed in
            PersistenceError: If the collection cannot be saved
        """
        collection = self._collection()
        account_id = self.state.require_session().account_id

        removed = next((a for a in collection if a.id == asset_id), None)
        if removed is None:
            logger.debug("Delete of unknown asset %s ignored", asset_id)
            return False

        self._persist(account_id, [a for a in collection if a.id != asset_id])
        logger.info("Deleted asset %s (%s)", removed.id, removed.name)

        if self.activity_log:
            self.activity_log.log_asset_deleted(removed)

        return True
