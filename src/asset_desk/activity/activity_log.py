"""
Append-only activity logging for the Digital Asset Desk.

Sign-ins, profile edits and every asset mutation are recorded with a
timestamp and enough detail to reconstruct what changed.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Optional

from asset_desk.models import (
    ActionType,
    ActivityLogEntry,
    Asset,
    Profile,
    Session,
)
from asset_desk.storage.serialization import DecimalEncoder


class ActivityLogger:
    """
    Append-only activity logger.

    Writes all actions to a JSONL file for audit purposes.
    Each line is a complete JSON object representing one action.
    """

    def __init__(self, log_path: str | Path):
        """
        Initialize the activity logger.

        Args:
            log_path: Path to the log file (will be created if not exists)
        """
        self.log_path = Path(log_path)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def log(self, entry: ActivityLogEntry) -> None:
        """
        Write an activity log entry.

        Args:
            entry: ActivityLogEntry to write
        """
        record = {
            "timestamp": entry.timestamp.isoformat(),
            "action_type": entry.action_type.value,
            "account_id": entry.account_id,
            "details": entry.details,
        }

        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record, cls=DecimalEncoder) + "\n")

    def _log_action(self, action_type: ActionType, account_id: Optional[str], details: dict) -> None:
        self.log(
            ActivityLogEntry.create(
                action_type=action_type,
                account_id=account_id,
                details=details,
            )
        )

    def log_session_started(self, session: Session, action_type: ActionType) -> None:
        """
        Log a sign-in or sign-up.

        Args:
            session: The new session
            action_type: SIGNED_IN or SIGNED_UP
        """
        self._log_action(action_type, session.account_id, {"email": session.user.email})

    def log_signed_out(self, account_id: str, assets_removed: int) -> None:
        self._log_action(
            ActionType.SIGNED_OUT,
            account_id,
            {"assets_removed": assets_removed},
        )

    def log_magic_link_requested(self, email: str) -> None:
        self._log_action(ActionType.MAGIC_LINK_REQUESTED, None, {"email": email})

    def log_profile_updated(self, profile: Profile, changed_fields: list[str]) -> None:
        self._log_action(
            ActionType.PROFILE_UPDATED,
            profile.id,
            {"changed_fields": changed_fields, "structure_name": profile.structure_name},
        )

    def log_asset_created(self, asset: Asset) -> None:
        """
        Log asset creation.

        Args:
            asset: The stored asset
        """
        details = {
            "asset_id": asset.id,
            "name": asset.name,
            "type": asset.type.value,
            "status": asset.status.value,
            "cost": asset.cost,
            "expiration_date": asset.expiration_date,
            "tags": list(asset.tags),
        }
        self._log_action(ActionType.ASSET_CREATED, asset.owner_id, details)

    def log_asset_updated(self, before: Asset, after: Asset) -> None:
        """
        Log an asset update with the fields that changed.

        Args:
            before: Stored record prior to the update
            after: Stored record after the update
        """
        changes = {}
        for name in ("name", "type", "status", "cost", "expiration_date", "tags"):
            old, new = getattr(before, name), getattr(after, name)
            if old != new:
                changes[name] = {"from": _plain(old), "to": _plain(new)}

        details = {
            "asset_id": after.id,
            "changes": changes,
        }
        self._log_action(ActionType.ASSET_UPDATED, after.owner_id, details)

    def log_asset_deleted(self, asset: Asset) -> None:
        self._log_action(
            ActionType.ASSET_DELETED,
            asset.owner_id,
            {"asset_id": asset.id, "name": asset.name},
        )

    def log_assets_exported(self, account_id: str, count: int, path: str) -> None:
        self._log_action(ActionType.ASSETS_EXPORTED, account_id, {"count": count, "path": path})

    def log_assets_imported(self, account_id: str, count: int, path: str) -> None:
        self._log_action(ActionType.ASSETS_IMPORTED, account_id, {"count": count, "path": path})

    def read_log(self) -> list[ActivityLogEntry]:
        """
        Read all entries from the log file.

        Returns:
            List of ActivityLogEntry objects
        """
        if not self.log_path.exists():
            return []

        entries = []
        with open(self.log_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                record = json.loads(line)
                entries.append(
                    ActivityLogEntry(
                        timestamp=datetime.fromisoformat(record["timestamp"]),
                        action_type=ActionType(record["action_type"]),
                        account_id=record.get("account_id"),
                        details=record.get("details", {}),
                    )
                )

        return entries

    def filter_by_account(self, account_id: str) -> list[ActivityLogEntry]:
        """
        Get log entries for a specific account.

        Args:
            account_id: Account to filter by

        Returns:
            Filtered list of entries
        """
        return [e for e in self.read_log() if e.account_id == account_id]

    def filter_by_action_type(self, action_type: ActionType) -> list[ActivityLogEntry]:
        """
        Get log entries of a specific action type.

        Args:
            action_type: Action type to filter by

        Returns:
            Filtered list of entries
        """
        return [e for e in self.read_log() if e.action_type == action_type]


def _plain(value):
    if hasattr(value, "value"):
        return value.value
    if isinstance(value, tuple):
        return list(value)
    return value
