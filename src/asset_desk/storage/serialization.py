"""
JSON record conversion for persisted values.

Assets are stored with camelCase keys (expirationDate, createdAt, updatedAt)
plus user_id for the owner. Costs are written as decimal strings so the
round trip is lossless.
"""

import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from asset_desk.models import Asset, AssetStatus, AssetType, Profile, User


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal and date types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            return str(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, date):
            return obj.isoformat()
        return super().default(obj)


def dumps(value: Any) -> str:
    return json.dumps(value, cls=DecimalEncoder, ensure_ascii=False)


def asset_to_record(asset: Asset) -> dict[str, Any]:
    """Convert an Asset into its JSON-ready record."""
    return {
        "id": asset.id,
        "name": asset.name,
        "type": asset.type.value,
        "status": asset.status.value,
        "cost": str(asset.cost),
        "expirationDate": asset.expiration_date.isoformat() if asset.expiration_date else "",
        "tags": list(asset.tags),
        "createdAt": asset.created_at.isoformat(),
        "updatedAt": asset.updated_at.isoformat(),
        "user_id": asset.owner_id,
    }


def asset_from_record(record: dict[str, Any]) -> Asset:
    """
    Rebuild an Asset from a stored record.

    Raises:
        KeyError, ValueError: If the record is missing fields or malformed
    """
    expiration = record.get("expirationDate") or None
    return Asset(
        id=str(record["id"]),
        name=str(record["name"]),
        type=AssetType(record["type"]),
        status=AssetStatus(record["status"]),
        cost=Decimal(str(record["cost"])),
        expiration_date=date.fromisoformat(expiration[:10]) if expiration else None,
        tags=tuple(str(t) for t in record.get("tags") or ()),
        created_at=datetime.fromisoformat(record["createdAt"]),
        updated_at=datetime.fromisoformat(record["updatedAt"]),
        owner_id=str(record["user_id"]),
    )


def user_to_record(user: User) -> dict[str, Any]:
    return {
        "id": user.id,
        "email": user.email,
        "created_at": user.created_at.isoformat(),
    }


def user_from_record(record: dict[str, Any]) -> User:
    return User(
        id=str(record["id"]),
        email=str(record["email"]),
        created_at=datetime.fromisoformat(record["created_at"]),
    )


def profile_to_record(profile: Profile) -> dict[str, Any]:
    return {
        "id": profile.id,
        "email": profile.email,
        "name": profile.name,
        "avatar_url": profile.avatar_url,
        "structure_name": profile.structure_name,
        "created_at": profile.created_at.isoformat(),
        "updated_at": profile.updated_at.isoformat(),
    }


def profile_from_record(record: dict[str, Any]) -> Profile:
    return Profile(
        id=str(record["id"]),
        email=str(record.get("email", "")),
        name=record.get("name"),
        avatar_url=record.get("avatar_url"),
        structure_name=str(record["structure_name"]),
        created_at=datetime.fromisoformat(record["created_at"]),
        updated_at=datetime.fromisoformat(record["updated_at"]),
    )
