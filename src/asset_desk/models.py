"""
Core data models for the Digital Asset Desk.

This module defines the fundamental data structures used throughout the
system: the closed asset type and status enumerations, the asset record
itself, the account records issued by the identity stub, and the derived
views (expiration status, readiness report, overview) computed from a
collection. Monetary amounts use Decimal for precision.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Optional
import uuid


class AssetType(Enum):
    """Category of a tracked digital asset. Values are the persisted strings."""
    DOMAIN = "dominio"
    HOSTING = "hospedagem"
    BUSINESS_MANAGER = "bm"
    AD_ACCOUNT = "conta_de_anuncio"
    FACEBOOK_PROFILE = "perfil_do_facebook"
    FACEBOOK_PAGE = "pagina_do_facebook"
    INSTAGRAM_PROFILE = "perfil_do_instagram"
    OTHER = "outros"


class AssetStatus(Enum):
    """Operational status of an asset."""
    ONLINE = "online"
    EXPIRED = "expired"
    PENDING = "pending"
    INACTIVE = "inactive"


class Severity(Enum):
    """Urgency tier derived from days until expiration."""
    NEUTRAL = "neutral"
    CRITICAL = "critical"
    CRITICAL_EMPHASIS = "critical-emphasis"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ActionType(Enum):
    """Types of logged actions for the activity log."""
    SIGNED_IN = "SIGNED_IN"
    SIGNED_UP = "SIGNED_UP"
    SIGNED_OUT = "SIGNED_OUT"
    MAGIC_LINK_REQUESTED = "MAGIC_LINK_REQUESTED"
    PROFILE_UPDATED = "PROFILE_UPDATED"
    ASSET_CREATED = "ASSET_CREATED"
    ASSET_UPDATED = "ASSET_UPDATED"
    ASSET_DELETED = "ASSET_DELETED"
    ASSETS_EXPORTED = "ASSETS_EXPORTED"
    ASSETS_IMPORTED = "ASSETS_IMPORTED"


@dataclass
class AssetInput:
    """
    Caller-supplied fields for creating an asset.

    Values may be raw (strings for type, status, cost and dates); they are
    coerced and checked by asset_desk.assets.validation before anything is
    stored.

    Attributes:
        name: Display name
        type: AssetType or its wire string
        status: AssetStatus or its wire string
        cost: Recurring cost (Decimal, int, float or numeric string)
        expiration_date: date, ISO string, or None/"" for "does not expire"
        tags: Free-form tags
    """
    name: Any
    type: Any
    status: Any = AssetStatus.ONLINE
    cost: Any = Decimal("0")
    expiration_date: Any = None
    tags: Any = ()


@dataclass
class Asset:
    """
    One tracked digital resource.

    Attributes:
        id: Opaque unique identifier, assigned at creation
        name: Non-empty display name
        type: Asset category
        status: Operational status
        cost: Non-negative recurring cost
        expiration_date: Expiration date, None if the asset does not expire
        tags: Ordered, de-duplicated tags
        created_at: Creation timestamp, never changed
        updated_at: Refreshed on every mutation
        owner_id: Account that owns the asset
    """
    id: str
    name: str
    type: AssetType
    status: AssetStatus
    cost: Decimal
    expiration_date: Optional[date]
    tags: tuple[str, ...]
    created_at: datetime
    updated_at: datetime
    owner_id: str

    @classmethod
    def create(
        cls,
        name: str,
        type: AssetType,
        status: AssetStatus,
        cost: Decimal,
        expiration_date: Optional[date],
        tags: tuple[str, ...],
        owner_id: str,
        now: datetime,
    ) -> "Asset":
        """Factory method to create a new Asset with auto-generated ID."""
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            type=type,
            status=status,
            cost=cost,
            expiration_date=expiration_date,
            tags=tags,
            created_at=now,
            updated_at=now,
            owner_id=owner_id,
        )

    @property
    def is_online(self) -> bool:
        return self.status == AssetStatus.ONLINE


@dataclass
class User:
    """Signed-in account as issued by the identity stub."""
    id: str
    email: str
    created_at: datetime


@dataclass
class Profile:
    """
    Display profile for the signed-in account.

    Attributes:
        id: Same identifier as the owning User
        email: Account e-mail
        name: Optional display name
        avatar_url: Optional avatar URL
        structure_name: Label for the user's asset portfolio
        created_at: Creation timestamp
        updated_at: Last modification timestamp
    """
    id: str
    email: str
    name: Optional[str]
    avatar_url: Optional[str]
    structure_name: str
    created_at: datetime
    updated_at: datetime


@dataclass
class Session:
    """An active sign-in: the user plus their profile."""
    user: User
    profile: Profile

    @property
    def account_id(self) -> str:
        """Identifier used to scope the asset collection."""
        return self.user.id


@dataclass
class ExpirationStatus:
    """Banded expiration label and its severity tier."""
    label: str
    severity: Severity
    days: Optional[int] = None


@dataclass
class ReadinessReport:
    """
    Readiness of the required asset structure.

    Attributes:
        missing: Labels of unsatisfied categories, in checklist order
        active_count: Number of satisfied categories
        total: Size of the checklist
    """
    missing: list[str]
    active_count: int
    total: int

    @property
    def is_ready(self) -> bool:
        return not self.missing


@dataclass
class PortfolioOverview:
    """
    Dashboard summary of an asset collection.

    Attributes:
        total_assets: Number of assets
        status_counts: Count per status (every status present)
        total_cost: Sum of recurring costs
        readiness: Structure readiness report
        expiring_soon: Assets expiring within the configured window, soonest first
        expired: Assets whose expiration date has passed
    """
    total_assets: int
    status_counts: dict[AssetStatus, int]
    total_cost: Decimal
    readiness: ReadinessReport
    expiring_soon: list[Asset] = field(default_factory=list)
    expired: list[Asset] = field(default_factory=list)


@dataclass
class ActivityLogEntry:
    """
    Entry for the append-only activity log.

    Attributes:
        timestamp: When the action occurred
        action_type: Type of action
        account_id: Account involved (if applicable)
        details: JSON-serializable details dictionary
    """
    timestamp: datetime
    action_type: ActionType
    account_id: Optional[str]
    details: dict

    @classmethod
    def create(
        cls,
        action_type: ActionType,
        account_id: Optional[str],
        details: dict,
    ) -> "ActivityLogEntry":
        """Factory method with auto-generated timestamp."""
        return cls(
            timestamp=datetime.now(),
            action_type=action_type,
            account_id=account_id,
            details=details,
        )


@dataclass
class AppConfig:
    """
    Application configuration loaded from YAML and the environment.

    Attributes:
        data_dir: Directory holding the storage slots
        locale: Formatting locale ("pt_BR" or "en_US")
        currency_symbol: Symbol prepended to formatted amounts
        expiring_window_days: Window for "expiring soon" listings
        activity_log: Path of the JSONL activity log (defaults inside data_dir)
    """
    data_dir: Path = Path(".asset_desk")
    locale: str = "pt_BR"
    currency_symbol: str = "R$"
    expiring_window_days: int = 30
    activity_log: Optional[Path] = None

    @property
    def activity_log_path(self) -> Path:
        if self.activity_log is not None:
            return self.activity_log
        return self.data_dir / "activity_log.jsonl"
