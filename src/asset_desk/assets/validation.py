"""
Field validation and coercion for asset writes.

Every create and update passes through validate_asset_fields, which checks
all fields at once and reports every problem in a single ValidationError so
a form can show field-level messages.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import asdict, is_dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from asset_desk.formatters import to_date
from asset_desk.models import AssetStatus, AssetType


ALLOWED_TYPES = [t.value for t in AssetType]
ALLOWED_STATUSES = [s.value for s in AssetStatus]

# Accepted spellings for the expiration field in mapping input
_EXPIRATION_KEYS = ("expiration_date", "expirationDate")


class ValidationError(Exception):
    """
    Raised when one or more asset fields are invalid.

    Attributes:
        errors: Field name -> human-readable message
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        summary = "; ".join(f"{k}: {v}" for k, v in self.errors.items())
        super().__init__(summary or "Invalid input")


class AssetNotFoundError(ValidationError):
    """Raised when an update targets an id the current account does not own."""

    def __init__(self, asset_id: str):
        self.asset_id = asset_id
        super().__init__({"id": f"Asset {asset_id} not found"})


def _field(data: Mapping[str, Any], name: str, default: Any = None) -> Any:
    if name == "expiration_date":
        for key in _EXPIRATION_KEYS:
            if key in data:
                return data[key]
        return default
    return data.get(name, default)


def parse_asset_type(value: Any) -> AssetType:
    """
    Resolve an AssetType from an enum member or its wire string.

    Raises:
        ValueError: If the value is not in the fixed enumeration
    """
    if isinstance(value, AssetType):
        return value
    return AssetType(str(value).strip())


def parse_asset_status(value: Any) -> AssetStatus:
    if isinstance(value, AssetStatus):
        return value
    return AssetStatus(str(value).strip())


def parse_cost(value: Any) -> Decimal:
    """
    Convert a cost value to Decimal.

    Raises:
        ValueError: If the value is missing, non-numeric, not finite or negative
    """
    if value is None or isinstance(value, bool):
        raise ValueError("Cost is required")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("Cost must be a finite number")
    try:
        cost = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Cost must be a number, got {value!r}")
    if not cost.is_finite():
        raise ValueError("Cost must be a finite number")
    if cost < 0:
        raise ValueError("Cost cannot be negative")
    return cost


def parse_expiration_date(value: Any) -> Optional[date]:
    """
    Parse an optional expiration date; empty means "does not expire".

    Raises:
        ValueError: If a non-empty value is not a valid date
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    parsed = to_date(value)
    if parsed is None:
        raise ValueError(f"Invalid date format: {value!r}")
    return parsed


def normalize_tags(value: Any) -> tuple[str, ...]:
    """
    Strip tags, drop blanks and duplicates, keep first-seen order.

    A plain string is split on commas.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        items: Iterable[Any] = value.split(",")
    else:
        items = value

    tags: list[str] = []
    for item in items:
        tag = str(item).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


def validate_asset_fields(data: Any) -> dict[str, Any]:
    """
    Validate and coerce the writable fields of an asset.

    Args:
        data: AssetInput, Asset, or a mapping with the same field names
              (expirationDate is accepted as an alias)

    Returns:
        Dict with name, type, status, cost, expiration_date and tags coerced
        to their model types

    Raises:
        ValidationError: With one message per invalid field
    """
    if is_dataclass(data) and not isinstance(data, type):
        data = asdict(data)
    if not isinstance(data, Mapping):
        raise ValidationError({"input": f"Expected asset fields, got {type(data).__name__}"})

    errors: dict[str, str] = {}
    fields: dict[str, Any] = {}

    name = _field(data, "name")
    name = str(name).strip() if name is not None else ""
    if not name:
        errors["name"] = "Name is required"
    fields["name"] = name

    try:
        fields["type"] = parse_asset_type(_field(data, "type"))
    except ValueError:
        errors["type"] = (
            f"Invalid asset type {_field(data, 'type')!r}. "
            f"Allowed types: {', '.join(ALLOWED_TYPES)}"
        )

    try:
        fields["status"] = parse_asset_status(_field(data, "status", AssetStatus.ONLINE))
    except ValueError:
        errors["status"] = (
            f"Invalid status {_field(data, 'status')!r}. "
            f"Allowed statuses: {', '.join(ALLOWED_STATUSES)}"
        )

    try:
        fields["cost"] = parse_cost(_field(data, "cost", Decimal("0")))
    except ValueError as e:
        errors["cost"] = str(e)

    try:
        fields["expiration_date"] = parse_expiration_date(_field(data, "expiration_date"))
    except ValueError as e:
        errors["expiration_date"] = str(e)

    fields["tags"] = normalize_tags(_field(data, "tags", ()))

    if errors:
        raise ValidationError(errors)

    return fields
