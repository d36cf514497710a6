"""
Named storage slots for the signed-in user, their profile and the assets.

Layout:
    auth_user    -> current User record (absent when signed out)
    user_profile -> current Profile record
    user_assets  -> flat array of every Asset seen on this device, all owners

Reads never raise: a missing, unreadable or corrupt value degrades to None
(or an empty list) and is logged, and single undecodable asset records are
skipped. Writes raise PersistenceError so callers can report that changes
may not have been saved; a merge into an unreadable assets slot is refused
rather than overwriting it.
"""

import json
import logging
from typing import Any, Callable, Optional, TypeVar

from asset_desk.models import Asset, Profile, User
from asset_desk.storage.backend import KeyValueStore, PersistenceError
from asset_desk.storage.serialization import (
    asset_from_record,
    asset_to_record,
    dumps,
    profile_from_record,
    profile_to_record,
    user_from_record,
    user_to_record,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")

USER_KEY = "auth_user"
PROFILE_KEY = "user_profile"
ASSETS_KEY = "user_assets"


class StorageSlots:
    """Typed access to the three storage slots over any KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _read(self, key: str, decode: Callable[[Any], T]) -> Optional[T]:
        try:
            raw = self.store.get(key)
        except PersistenceError as e:
            logger.warning("Could not read slot %s, treating as empty: %s", key, e)
            return None

        if raw is None or not raw.strip():
            return None

        try:
            return decode(json.loads(raw))
        except (ValueError, KeyError, TypeError, AttributeError, ArithmeticError) as e:
            logger.warning("Corrupt value in slot %s, treating as empty: %s", key, e)
            return None

    def _write(self, key: str, value: Any) -> None:
        self.store.set(key, dumps(value))

    # User

    def get_user(self) -> Optional[User]:
        return self._read(USER_KEY, user_from_record)

    def set_user(self, user: User) -> None:
        self._write(USER_KEY, user_to_record(user))

    def remove_user(self) -> None:
        self.store.remove(USER_KEY)

    # Profile

    def get_profile(self) -> Optional[Profile]:
        return self._read(PROFILE_KEY, profile_from_record)

    def set_profile(self, profile: Profile) -> None:
        self._write(PROFILE_KEY, profile_to_record(profile))

    def remove_profile(self) -> None:
        self.store.remove(PROFILE_KEY)

    # Assets

    def _asset_records(self) -> list[Any]:
        """
        Raw records of the assets slot, in stored order.

        Raises:
            PersistenceError: If the slot cannot be read or does not hold a JSON array
        """
        raw = self.store.get(ASSETS_KEY)
        if raw is None or not raw.strip():
            return []

        try:
            records = json.loads(raw)
        except ValueError as e:
            raise PersistenceError(f"Slot {ASSETS_KEY} is not valid JSON: {e}")

        if not isinstance(records, list):
            raise PersistenceError(
                f"Slot {ASSETS_KEY} must hold a JSON array, got {type(records).__name__}"
            )
        return records

    @staticmethod
    def _decode_asset(record: Any) -> Optional[Asset]:
        if not isinstance(record, dict):
            return None
        try:
            return asset_from_record(record)
        except (ValueError, KeyError, TypeError, AttributeError, ArithmeticError):
            return None

    def get_assets(self) -> list[Asset]:
        """
        All stored assets, every owner, in stored order.

        Records that cannot be decoded are skipped; an unreadable slot
        yields an empty list.
        """
        try:
            records = self._asset_records()
        except PersistenceError as e:
            logger.warning("Could not read slot %s, treating as empty: %s", ASSETS_KEY, e)
            return []

        assets = []
        for index, record in enumerate(records):
            asset = self._decode_asset(record)
            if asset is None:
                logger.warning("Skipping unreadable record %d in slot %s", index, ASSETS_KEY)
                continue
            assets.append(asset)
        return assets

    def set_assets(self, assets: list[Asset]) -> None:
        self._write(ASSETS_KEY, [asset_to_record(a) for a in assets])

    def remove_assets(self) -> None:
        self.store.remove(ASSETS_KEY)

    def get_owner_assets(self, owner_id: str) -> list[Asset]:
        return [a for a in self.get_assets() if a.owner_id == owner_id]

    def set_owner_assets(self, owner_id: str, assets: list[Asset]) -> None:
        """
        Replace one owner's assets while keeping every other stored record.

        Other owners' records, and any record that cannot be decoded, are
        written back exactly as stored and keep their position; the owner's
        records are appended in the given order.

        Raises:
            PersistenceError: If the slot cannot be read (it is not
                overwritten) or the new value cannot be written
        """
        kept = []
        for record in self._asset_records():
            asset = self._decode_asset(record)
            if asset is not None and asset.owner_id == owner_id:
                continue
            kept.append(record)
        self._write(ASSETS_KEY, kept + [asset_to_record(a) for a in assets])

    def clear(self) -> None:
        """Remove all three slots."""
        self.remove_user()
        self.remove_profile()
        self.remove_assets()
