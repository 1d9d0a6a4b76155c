"""
Monthly transfer limit checks.

The caller supplies the amounts of the sender's completed transfers for
the current calendar month (see ``month_window``); this module only
does the arithmetic against ``settings.MONTHLY_TRANSFER_LIMIT``.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from moneyflow.config import settings
from moneyflow.core.formatting import format_currency


@dataclass(frozen=True)
class LimitCheck:
    """Outcome of a monthly limit check."""
    can_transfer: bool
    remaining: Decimal
    message: str | None = None


@dataclass(frozen=True)
class MonthlyStats:
    total_sent: Decimal
    remaining: Decimal
    percent_used: Decimal


def month_window(now: datetime | None = None) -> tuple[datetime, datetime]:
    """
    Return ``(start, end)`` of the calendar month containing ``now``.

    ``start`` is inclusive, ``end`` exclusive, both in UTC. Aware
    datetimes are converted to UTC first; naive ones are taken as UTC.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    start = datetime(now.year, now.month, 1, tzinfo=timezone.utc)
    if now.month == 12:
        end = datetime(now.year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        end = datetime(now.year, now.month + 1, 1, tzinfo=timezone.utc)
    return start, end


def _total(completed_amounts: Iterable) -> Decimal:
    return sum((Decimal(str(a)) for a in completed_amounts), Decimal("0"))


def check_monthly_limit(
    completed_amounts: Iterable,
    amount,
    limit: Decimal | None = None,
) -> LimitCheck:
    """
    Check whether ``amount`` fits under the monthly limit.

    Refused when ``sent + amount > limit``; sending exactly up to the
    limit is allowed. Raises ``ValueError`` unless ``amount`` is positive.
    """
    limit = settings.MONTHLY_TRANSFER_LIMIT if limit is None else Decimal(str(limit))
    amount = Decimal(str(amount))
    if amount <= 0:
        raise ValueError(f"Transfer amount must be positive: {amount}")
    total_sent = _total(completed_amounts)
    remaining = limit - total_sent

    if total_sent + amount > limit:
        code = settings.CURRENCY_CODE
        return LimitCheck(
            can_transfer=False,
            remaining=remaining,
            message=(
                f"Monthly limit exceeded. You have sent "
                f"{format_currency(total_sent, code)} this month. "
                f"Limit: {format_currency(limit, code)}"
            ),
        )

    return LimitCheck(can_transfer=True, remaining=remaining - amount)


def monthly_stats(completed_amounts: Iterable, limit: Decimal | None = None) -> MonthlyStats:
    """Totals for the month: amount sent, what is left, percent of limit used."""
    limit = settings.MONTHLY_TRANSFER_LIMIT if limit is None else Decimal(str(limit))
    total_sent = _total(completed_amounts)
    percent_used = (
        (total_sent / limit * 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        if limit > 0
        else Decimal("0")
    )
    return MonthlyStats(
        total_sent=total_sent,
        remaining=limit - total_sent,
        percent_used=percent_used,
    )
