"""
Fee engine: deposit/withdrawal fees, commission splits, transfer fee
tiers, and balance validation.

All money is handled as ``Decimal``. The platform share of a withdrawal
fee is always the remainder ``total_fee - agent_commission`` so the
commission split sums back to the total fee exactly.

Withdrawal rate tables are configuration: two presets are shipped
("standard" 1.5% and "extended" 6%, one third to the agent in both) and
the caller picks one by name.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from fractions import Fraction

from moneyflow.config import settings
from moneyflow.core.formatting import format_currency

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ZERO = Decimal("0")

# Precision kept on the agent share when the caller does not round.
COMMISSION_PRECISION = Decimal("0.0001")

# Largest accepted amount; keeps fee arithmetic inside the default
# 28-digit decimal context.
MAX_AMOUNT = Decimal("1000000000000000")

# Transfer fees (client side)
NATIONAL_TRANSFER_RATE = Decimal("0.01")
INTERNATIONAL_SMALL_CEILING = Decimal("350000")    # exclusive
INTERNATIONAL_MEDIUM_CEILING = Decimal("750000")   # inclusive
INTERNATIONAL_SMALL_RATE = Decimal("0.065")
INTERNATIONAL_MEDIUM_RATE = Decimal("0.045")
INTERNATIONAL_LARGE_RATE = Decimal("0.035")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class InsufficientBalanceError(Exception):
    """Raised when a balance cannot cover the requested amount."""

    def __init__(self, available: Decimal, requested: Decimal):
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient balance. Current balance: "
            f"{format_currency(available, settings.CURRENCY_CODE)}, "
            f"requested amount: {format_currency(requested, settings.CURRENCY_CODE)}"
        )


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RateConfig:
    """Withdrawal rate table: total fee rate and the agent's share of it."""
    total_fee_rate: Decimal
    agent_share: Fraction

    def __post_init__(self):
        object.__setattr__(self, "total_fee_rate", Decimal(str(self.total_fee_rate)))
        object.__setattr__(self, "agent_share", Fraction(self.agent_share))
        if not 0 <= self.total_fee_rate <= 1:
            raise ValueError(f"Fee rate must be between 0 and 1: {self.total_fee_rate}")
        if not 0 <= self.agent_share <= 1:
            raise ValueError(f"Agent share must be between 0 and 1: {self.agent_share}")


@dataclass(frozen=True)
class FeeBreakdown:
    """Fee and its split between agent and platform."""
    total_fee: Decimal
    agent_commission: Decimal
    platform_commission: Decimal


@dataclass(frozen=True)
class TransferFee:
    """Fee charged on a client transfer."""
    tier: str
    rate: Decimal
    fee: Decimal


def build_withdrawal_rates() -> dict[str, RateConfig]:
    """Build the named withdrawal presets from settings."""
    share = Fraction(settings.AGENT_COMMISSION_SHARE)
    return {
        "standard": RateConfig(settings.WITHDRAWAL_FEE_RATE_STANDARD, share),
        "extended": RateConfig(settings.WITHDRAWAL_FEE_RATE_EXTENDED, share),
    }


WITHDRAWAL_RATES = build_withdrawal_rates()


def get_withdrawal_rates(name: str = "standard") -> RateConfig:
    """Look up a named withdrawal rate preset."""
    try:
        return WITHDRAWAL_RATES[name]
    except KeyError:
        raise ValueError(
            f"Unknown withdrawal rate tier: {name}. "
            f"Available: {', '.join(sorted(WITHDRAWAL_RATES))}"
        ) from None


# ---------------------------------------------------------------------------
# Fee calculation
# ---------------------------------------------------------------------------


def _check_amount(amount) -> Decimal:
    amount = Decimal(str(amount))
    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number: {amount}")
    if amount < 0:
        raise ValueError(f"Amount must be non-negative: {amount}")
    if amount > MAX_AMOUNT:
        raise ValueError(f"Amount exceeds the maximum of {MAX_AMOUNT}: {amount}")
    return amount


def calculate_deposit_fees(amount) -> FeeBreakdown:
    """Deposits are free: always an all-zero breakdown."""
    _check_amount(amount)
    return FeeBreakdown(total_fee=ZERO, agent_commission=ZERO, platform_commission=ZERO)


def calculate_withdrawal_fees(
    amount,
    rate_config: RateConfig,
    quantum: Decimal | None = None,
) -> FeeBreakdown:
    """
    Compute the withdrawal fee and its commission split.

    ``total_fee = amount * total_fee_rate``, the agent gets
    ``total_fee * agent_share`` and the platform gets the remainder.

    When ``quantum`` is given (``Decimal("1")`` for whole XAF) the total
    fee and the agent commission are rounded half-up to it before the
    remainder is taken.
    """
    amount = _check_amount(amount)

    total_fee = amount * rate_config.total_fee_rate
    if quantum is not None:
        total_fee = total_fee.quantize(quantum, rounding=ROUND_HALF_UP)

    share = rate_config.agent_share
    agent_commission = (
        total_fee * Decimal(share.numerator) / Decimal(share.denominator)
    ).quantize(quantum if quantum is not None else COMMISSION_PRECISION,
               rounding=ROUND_HALF_UP)

    platform_commission = total_fee - agent_commission

    return FeeBreakdown(
        total_fee=total_fee,
        agent_commission=agent_commission,
        platform_commission=platform_commission,
    )


def calculate_transfer_fee(amount, is_national: bool = False) -> TransferFee:
    """
    Client-side fee on a transfer.

    National: flat 1%. International, progressive by amount:
        < 350,000          -> 6.5%
        350,000 - 750,000  -> 4.5%
        > 750,000          -> 3.5%
    """
    amount = _check_amount(amount)

    if is_national:
        return TransferFee("national", NATIONAL_TRANSFER_RATE, amount * NATIONAL_TRANSFER_RATE)

    if amount < INTERNATIONAL_SMALL_CEILING:
        name, rate = "international_small", INTERNATIONAL_SMALL_RATE
    elif amount <= INTERNATIONAL_MEDIUM_CEILING:
        name, rate = "international_medium", INTERNATIONAL_MEDIUM_RATE
    else:
        name, rate = "international_large", INTERNATIONAL_LARGE_RATE

    return TransferFee(name, rate, amount * rate)


# ---------------------------------------------------------------------------
# Balance validation
# ---------------------------------------------------------------------------


def validate_sufficient_balance(current_balance, amount) -> None:
    """
    Raise ``InsufficientBalanceError`` if ``current_balance < amount``.

    Only validates; moving funds is the caller's job.
    """
    current_balance = Decimal(str(current_balance))
    amount = Decimal(str(amount))
    if current_balance < amount:
        logger.info(
            "Balance check failed: available=%s requested=%s",
            current_balance, amount,
        )
        raise InsufficientBalanceError(current_balance, amount)
