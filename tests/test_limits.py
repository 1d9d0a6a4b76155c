"""Tests for monthly transfer limit checks."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from moneyflow.services.limit_service import (
    check_monthly_limit,
    month_window,
    monthly_stats,
)


LIMIT = Decimal("2000000")


class TestCheckMonthlyLimit:

    def test_under_limit(self):
        result = check_monthly_limit([Decimal("500000"), Decimal("250000")], Decimal("100000"))
        assert result.can_transfer is True
        assert result.remaining == Decimal("1150000")
        assert result.message is None

    def test_exactly_at_limit_allowed(self):
        """Sending up to the limit itself is allowed."""
        result = check_monthly_limit([Decimal("1500000")], Decimal("500000"))
        assert result.can_transfer is True
        assert result.remaining == Decimal("0")

    def test_over_limit_refused(self):
        """Over the limit: refused, remaining reflects what is left before the transfer."""
        result = check_monthly_limit([Decimal("1500000")], Decimal("500001"))
        assert result.can_transfer is False
        assert result.remaining == Decimal("500000")
        assert "Monthly limit exceeded" in result.message
        assert "1\u202f500\u202f000 XAF" in result.message
        assert "2\u202f000\u202f000 XAF" in result.message

    def test_no_history(self):
        result = check_monthly_limit([], Decimal("2000000"))
        assert result.can_transfer is True

    def test_custom_limit(self):
        result = check_monthly_limit([100], 50, limit=120)
        assert result.can_transfer is False
        assert result.remaining == Decimal("20")

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-500")])
    def test_non_positive_amount_rejected(self, amount):
        with pytest.raises(ValueError, match="positive"):
            check_monthly_limit([Decimal("1000")], amount)


class TestMonthlyStats:

    def test_percent_used(self):
        stats = monthly_stats([Decimal("500000")])
        assert stats.total_sent == Decimal("500000")
        assert stats.remaining == Decimal("1500000")
        assert stats.percent_used == Decimal("25.00")

    def test_empty_month(self):
        stats = monthly_stats([])
        assert stats.total_sent == 0
        assert stats.remaining == LIMIT
        assert stats.percent_used == 0

    def test_zero_limit(self):
        stats = monthly_stats([Decimal("10")], limit=0)
        assert stats.percent_used == 0


class TestMonthWindow:

    def test_mid_month(self):
        start, end = month_window(datetime(2025, 3, 17, 14, 30, tzinfo=timezone.utc))
        assert start == datetime(2025, 3, 1, tzinfo=timezone.utc)
        assert end == datetime(2025, 4, 1, tzinfo=timezone.utc)

    def test_december_rolls_over(self):
        start, end = month_window(datetime(2025, 12, 31, 23, 59, tzinfo=timezone.utc))
        assert start == datetime(2025, 12, 1, tzinfo=timezone.utc)
        assert end == datetime(2026, 1, 1, tzinfo=timezone.utc)

    def test_aware_datetime_converted_to_utc(self):
        """00:30 on April 1st at UTC+1 is still March in UTC."""
        local = datetime(2025, 4, 1, 0, 30, tzinfo=timezone(timedelta(hours=1)))
        start, end = month_window(local)
        assert start == datetime(2025, 3, 1, tzinfo=timezone.utc)
        assert end == datetime(2025, 4, 1, tzinfo=timezone.utc)

    def test_naive_datetime_taken_as_utc(self):
        start, _ = month_window(datetime(2025, 6, 30, 23, 59))
        assert start == datetime(2025, 6, 1, tzinfo=timezone.utc)


class TestLimitEndpoints:

    @pytest.mark.asyncio
    async def test_check(self, client):
        response = await client.post(
            "/api/v1/limits/check",
            json={"completed_amounts": ["1500000"], "amount": "600000"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["can_transfer"] is False
        assert Decimal(data["remaining"]) == Decimal("500000")

    @pytest.mark.asyncio
    async def test_check_requires_positive_amount(self, client):
        response = await client.post(
            "/api/v1/limits/check",
            json={"completed_amounts": [], "amount": "0"},
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_stats(self, client):
        response = await client.post(
            "/api/v1/limits/stats",
            json={"completed_amounts": ["200000", "300000"]},
        )
        assert response.status_code == 200
        assert Decimal(response.json()["percent_used"]) == Decimal("25")
