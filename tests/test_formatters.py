"""
Tests for display formatting and expiration banding.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from asset_desk.formatters import (
    STATUS_COLORS,
    STATUS_LABELS,
    TYPE_COLORS,
    TYPE_LABELS,
    SEVERITY_COLORS,
    days_until_expiration,
    expiration_status,
    format_currency,
    format_date,
    severity_color,
    status_color,
    status_label,
    to_date,
    type_color,
    type_label,
)
from asset_desk.models import AssetStatus, AssetType, Severity


TODAY = date(2025, 6, 1)


class TestFormatDate:
    """Tests for format_date."""

    def test_pt_br_short_date(self):
        assert format_date("2030-01-01") == "1 de jan. de 2030"

    def test_en_us_short_date(self):
        assert format_date(date(2030, 12, 25), locale="en_US") == "Dec 25, 2030"

    def test_datetime_drops_time(self):
        assert format_date(datetime(2025, 3, 9, 23, 59)) == "9 de mar. de 2025"

    @pytest.mark.parametrize("value", [None, "", "   ", "not-a-date"])
    def test_missing_or_invalid_is_not_available(self, value):
        assert format_date(value) == "N/A"

    def test_unknown_locale_falls_back_to_default(self):
        assert format_date("2030-01-01", locale="xx_XX") == "1 de jan. de 2030"


class TestFormatCurrency:
    """Tests for format_currency."""

    def test_pt_br_decimal_comma(self):
        assert format_currency(12.5) == "12,50"

    def test_pt_br_grouping(self):
        assert format_currency(Decimal("1234567.891")) == "1.234.567,89"

    def test_en_us_grouping(self):
        assert format_currency(Decimal("1234.5"), locale="en_US") == "1,234.50"

    def test_no_currency_symbol(self):
        assert "R$" not in format_currency(10)

    def test_rounds_half_up(self):
        assert format_currency(Decimal("0.125")) == "0,13"

    def test_zero(self):
        assert format_currency(0) == "0,00"


class TestDaysUntilExpiration:
    """Tests for days_until_expiration."""

    def test_ignores_time_of_day(self):
        result = days_until_expiration("2025-06-01T23:59:00", today=datetime(2025, 6, 1, 0, 0, 1))
        assert result == 0

    def test_future_date(self):
        assert days_until_expiration(date(2025, 6, 11), today=TODAY) == 10

    def test_past_date_is_negative(self):
        assert days_until_expiration("2025-05-29", today=TODAY) == -3

    def test_no_date(self):
        assert days_until_expiration(None, today=TODAY) is None
        assert days_until_expiration("", today=TODAY) is None

    def test_utc_suffix_is_accepted(self):
        assert days_until_expiration("2025-06-03T00:00:00.000Z", today=TODAY) == 2

    def test_defaults_to_current_date(self):
        assert days_until_expiration(date.today()) == 0


class TestExpirationStatus:
    """Tests for the expiration band table."""

    def test_no_expiration(self):
        status = expiration_status("", today=TODAY)
        assert status.label == "no expiration"
        assert status.severity == Severity.NEUTRAL
        assert status.days is None

    def test_expired(self):
        status = expiration_status(date(2025, 5, 29), today=TODAY)
        assert status.label == "expired 3 days ago"
        assert status.severity == Severity.CRITICAL

    def test_expires_today(self):
        status = expiration_status(TODAY, today=TODAY)
        assert status.label == "expires today"
        assert status.severity == Severity.CRITICAL_EMPHASIS

    def test_five_days_is_high(self):
        status = expiration_status(date(2025, 6, 6), today=TODAY)
        assert status.label == "expires in 5 days"
        assert status.severity == Severity.HIGH

    @pytest.mark.parametrize(
        "days, severity",
        [
            (1, Severity.HIGH),
            (7, Severity.HIGH),
            (8, Severity.MEDIUM),
            (30, Severity.MEDIUM),
            (31, Severity.LOW),
            (40, Severity.LOW),
        ],
    )
    def test_band_boundaries(self, days, severity):
        target = date.fromordinal(TODAY.toordinal() + days)
        status = expiration_status(target, today=TODAY)
        assert status.severity == severity
        assert status.label == f"expires in {days} days"
        assert status.days == days


class TestLookups:
    """Tests for label and colour lookups."""

    def test_tables_cover_every_member(self):
        assert set(STATUS_LABELS) == set(AssetStatus)
        assert set(STATUS_COLORS) == set(AssetStatus)
        assert set(TYPE_LABELS) == set(AssetType)
        assert set(TYPE_COLORS) == set(AssetType)
        assert set(SEVERITY_COLORS) == set(Severity)

    def test_status_label_accepts_member_and_wire_value(self):
        assert status_label(AssetStatus.EXPIRED) == "Expired"
        assert status_label("pending") == "Pending"

    def test_type_label(self):
        assert type_label(AssetType.BUSINESS_MANAGER) == "Business Manager"
        assert type_label("perfil_do_instagram") == "Instagram Profile"

    def test_unknown_values_are_capitalized(self):
        assert type_label("newsletter") == "Newsletter"
        assert status_label("archived") == "Archived"

    def test_unknown_values_get_default_colors(self):
        assert status_color("archived") == "blue"
        assert type_color("newsletter") == "zinc"

    def test_known_colors(self):
        assert status_color(AssetStatus.ONLINE) == "emerald"
        assert type_color("dominio") == "blue"
        assert severity_color(Severity.CRITICAL) == "red"

    def test_severity_color_accepts_wire_value(self):
        assert severity_color("high") == "orange"
        assert severity_color("critical-emphasis") == "orange"

    def test_unknown_severity_gets_default_color(self):
        assert severity_color("unknown") == "gray"
        assert severity_color("") == "gray"


class TestToDate:
    """Tests for to_date coercion."""

    def test_datetime_string(self):
        assert to_date("2025-06-01T23:59:00") == date(2025, 6, 1)

    def test_garbage(self):
        assert to_date("31/12/2025") is None
        assert to_date(12345) is None
