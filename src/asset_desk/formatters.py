"""
Display formatting and derived expiration status.

Pure, stateless helpers used by the CLI and dashboard: locale-aware date and
amount formatting, day-granular expiration arithmetic, urgency banding, and
label/colour lookups for the asset enumerations.
"""

from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional, Union

from asset_desk.models import AssetStatus, AssetType, ExpirationStatus, Severity


NOT_AVAILABLE = "N/A"
DEFAULT_LOCALE = "pt_BR"

# Month abbreviations follow the "short" month style for each locale
LOCALES: dict[str, dict[str, Any]] = {
    "pt_BR": {
        "decimal": ",",
        "group": ".",
        "months": [
            "jan.", "fev.", "mar.", "abr.", "mai.", "jun.",
            "jul.", "ago.", "set.", "out.", "nov.", "dez.",
        ],
        "date_pattern": "{day} de {month} de {year}",
    },
    "en_US": {
        "decimal": ".",
        "group": ",",
        "months": [
            "Jan", "Feb", "Mar", "Apr", "May", "Jun",
            "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
        ],
        "date_pattern": "{month} {day}, {year}",
    },
}

STATUS_LABELS: dict[AssetStatus, str] = {
    AssetStatus.ONLINE: "Online",
    AssetStatus.EXPIRED: "Expired",
    AssetStatus.PENDING: "Pending",
    AssetStatus.INACTIVE: "Inactive",
}

STATUS_COLORS: dict[AssetStatus, str] = {
    AssetStatus.ONLINE: "emerald",
    AssetStatus.EXPIRED: "red",
    AssetStatus.PENDING: "amber",
    AssetStatus.INACTIVE: "gray",
}
DEFAULT_STATUS_COLOR = "blue"

TYPE_LABELS: dict[AssetType, str] = {
    AssetType.DOMAIN: "Domain",
    AssetType.HOSTING: "Hosting",
    AssetType.BUSINESS_MANAGER: "Business Manager",
    AssetType.AD_ACCOUNT: "Ad Account",
    AssetType.FACEBOOK_PROFILE: "Facebook Profile",
    AssetType.FACEBOOK_PAGE: "Facebook Page",
    AssetType.INSTAGRAM_PROFILE: "Instagram Profile",
    AssetType.OTHER: "Other",
}

TYPE_COLORS: dict[AssetType, str] = {
    AssetType.DOMAIN: "blue",
    AssetType.HOSTING: "emerald",
    AssetType.BUSINESS_MANAGER: "purple",
    AssetType.AD_ACCOUNT: "amber",
    AssetType.FACEBOOK_PROFILE: "indigo",
    AssetType.FACEBOOK_PAGE: "sky",
    AssetType.INSTAGRAM_PROFILE: "pink",
    AssetType.OTHER: "zinc",
}
DEFAULT_TYPE_COLOR = "zinc"

SEVERITY_COLORS: dict[Severity, str] = {
    Severity.NEUTRAL: "gray",
    Severity.CRITICAL: "red",
    Severity.CRITICAL_EMPHASIS: "orange",
    Severity.HIGH: "orange",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "green",
}
DEFAULT_SEVERITY_COLOR = "gray"

DateLike = Union[date, datetime, str, None]


def _locale_settings(locale: str) -> dict[str, Any]:
    return LOCALES.get(locale, LOCALES[DEFAULT_LOCALE])


def to_date(value: DateLike) -> Optional[date]:
    """
    Coerce a date-like value to a calendar date, dropping any time of day.

    Args:
        value: date, datetime, ISO-8601 string, or None/""

    Returns:
        The calendar date, or None when the value is empty or unparseable
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            return None

    return None


def format_date(value: DateLike, locale: str = DEFAULT_LOCALE) -> str:
    """
    Format a date as a short, locale-style string.

    Args:
        value: Date to format
        locale: "pt_BR" (default) or "en_US"

    Returns:
        e.g. "1 de jan. de 2030" (pt_BR) or "Jan 1, 2030" (en_US);
        "N/A" when the date is absent or unparseable
    """
    parsed = to_date(value)
    if parsed is None:
        return NOT_AVAILABLE

    settings = _locale_settings(locale)
    return settings["date_pattern"].format(
        day=parsed.day,
        month=settings["months"][parsed.month - 1],
        year=parsed.year,
    )


def format_currency(amount: Union[Decimal, int, float, str], locale: str = DEFAULT_LOCALE) -> str:
    """
    Format an amount with two fraction digits and locale separators.

    No currency symbol is included; callers prepend their own.

    Args:
        amount: Amount to format
        locale: "pt_BR" (default) or "en_US"

    Returns:
        Formatted amount, e.g. "1.234,50" for pt_BR
    """
    quantized = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    text = f"{quantized:,.2f}"

    settings = _locale_settings(locale)
    if settings["group"] == "," and settings["decimal"] == ".":
        return text

    return (
        text.replace(",", "\0")
        .replace(".", settings["decimal"])
        .replace("\0", settings["group"])
    )


def days_until_expiration(value: DateLike, today: DateLike = None) -> Optional[int]:
    """
    Whole days between today and the expiration date, ignoring time of day.

    Args:
        value: Expiration date
        today: Reference day (defaults to the current date)

    Returns:
        Days remaining (negative when already expired), or None without a date
    """
    expiration = to_date(value)
    if expiration is None:
        return None

    reference = to_date(today) if today is not None else date.today()
    if reference is None:
        reference = date.today()

    return (expiration - reference).days


def expiration_status(value: DateLike, today: DateLike = None) -> ExpirationStatus:
    """
    Band the days until expiration into a label and severity tier.

    Args:
        value: Expiration date
        today: Reference day (defaults to the current date)

    Returns:
        ExpirationStatus with label, severity and the raw day count
    """
    days = days_until_expiration(value, today)

    if days is None:
        return ExpirationStatus(label="no expiration", severity=Severity.NEUTRAL)

    if days < 0:
        return ExpirationStatus(
            label=f"expired {abs(days)} days ago",
            severity=Severity.CRITICAL,
            days=days,
        )

    if days == 0:
        return ExpirationStatus(
            label="expires today",
            severity=Severity.CRITICAL_EMPHASIS,
            days=days,
        )

    if days <= 7:
        severity = Severity.HIGH
    elif days <= 30:
        severity = Severity.MEDIUM
    else:
        severity = Severity.LOW

    return ExpirationStatus(label=f"expires in {days} days", severity=severity, days=days)


def _capitalize(raw: str) -> str:
    return raw[:1].upper() + raw[1:]


def _as_status(value: Union[AssetStatus, str]) -> Optional[AssetStatus]:
    if isinstance(value, AssetStatus):
        return value
    try:
        return AssetStatus(value)
    except ValueError:
        return None


def _as_type(value: Union[AssetType, str]) -> Optional[AssetType]:
    if isinstance(value, AssetType):
        return value
    try:
        return AssetType(value)
    except ValueError:
        return None


def status_label(status: Union[AssetStatus, str]) -> str:
    """Display label for a status; unknown raw strings are capitalized."""
    member = _as_status(status)
    if member is None:
        return _capitalize(str(status))
    return STATUS_LABELS[member]


def status_color(status: Union[AssetStatus, str]) -> str:
    """Badge colour name for a status."""
    member = _as_status(status)
    if member is None:
        return DEFAULT_STATUS_COLOR
    return STATUS_COLORS[member]


def type_label(asset_type: Union[AssetType, str]) -> str:
    """Display label for an asset type; unknown raw strings are capitalized."""
    member = _as_type(asset_type)
    if member is None:
        return _capitalize(str(asset_type))
    return TYPE_LABELS[member]


def type_color(asset_type: Union[AssetType, str]) -> str:
    """Accent colour name for an asset type."""
    member = _as_type(asset_type)
    if member is None:
        return DEFAULT_TYPE_COLOR
    return TYPE_COLORS[member]


def _as_severity(value: Union[Severity, str]) -> Optional[Severity]:
    if isinstance(value, Severity):
        return value
    try:
        return Severity(value)
    except ValueError:
        return None


def severity_color(severity: Union[Severity, str]) -> str:
    """Text colour name for an expiration severity tier."""
    member = _as_severity(severity)
    if member is None:
        return DEFAULT_SEVERITY_COLOR
    return SEVERITY_COLORS[member]
