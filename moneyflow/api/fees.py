"""
Fee quote and balance check endpoints.

Withdrawal fees are rounded to ``settings.CURRENCY_QUANTUM`` (whole XAF by
default). The rate tier is chosen by the caller.
"""

import logging
from decimal import Decimal

from fastapi import APIRouter, HTTPException, Query, status

from moneyflow.config import settings
from moneyflow.core.formatting import format_currency
from moneyflow.schemas.fee import (
    BalanceCheckRequest,
    BalanceCheckResponse,
    FeeBreakdownResponse,
    TransferFeeResponse,
)
from moneyflow.services.fee_service import (
    FeeBreakdown,
    InsufficientBalanceError,
    calculate_deposit_fees,
    calculate_transfer_fee,
    calculate_withdrawal_fees,
    get_withdrawal_rates,
    validate_sufficient_balance,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _breakdown_response(
    operation: str, amount: Decimal, fees: FeeBreakdown, tier: str | None = None,
) -> FeeBreakdownResponse:
    return FeeBreakdownResponse(
        operation=operation,
        tier=tier,
        amount=amount,
        total_fee=fees.total_fee,
        agent_commission=fees.agent_commission,
        platform_commission=fees.platform_commission,
        total_debit=amount + fees.total_fee,
        currency=settings.CURRENCY_CODE,
        display_total_fee=format_currency(fees.total_fee, settings.CURRENCY_CODE),
    )


@router.get("/fees/deposit", response_model=FeeBreakdownResponse)
async def deposit_fees(
    amount: Decimal = Query(..., ge=0, description="Deposit amount", examples=[50000]),
):
    """Deposits are free; returns an all-zero breakdown."""
    try:
        fees = calculate_deposit_fees(amount)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        )
    return _breakdown_response("deposit", amount, fees)


@router.get("/fees/withdrawal", response_model=FeeBreakdownResponse)
async def withdrawal_fees(
    amount: Decimal = Query(..., ge=0, description="Withdrawal amount", examples=[100000]),
    tier: str = Query("standard", description="Rate preset (standard or extended)"),
):
    """
    Withdrawal fee with the agent / platform commission split.

    ``total_debit`` is what leaves the client's balance (amount + fee).
    """
    try:
        rates = get_withdrawal_rates(tier)
        fees = calculate_withdrawal_fees(amount, rates, quantum=settings.CURRENCY_QUANTUM)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        )

    return _breakdown_response("withdrawal", amount, fees, tier=tier)


@router.get("/fees/transfer", response_model=TransferFeeResponse)
async def transfer_fees(
    amount: Decimal = Query(..., ge=0, description="Transfer amount", examples=[200000]),
    national: bool = Query(False, description="Sender and recipient in the same country"),
):
    """Client-side transfer fee: flat national rate or progressive international tiers."""
    try:
        fee = calculate_transfer_fee(amount, is_national=national)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        )
    return TransferFeeResponse(
        amount=amount,
        national=national,
        tier=fee.tier,
        rate=fee.rate,
        fee=fee.fee,
        total_debit=amount + fee.fee,
        currency=settings.CURRENCY_CODE,
    )


@router.post("/balances/validate", response_model=BalanceCheckResponse)
async def validate_balance(payload: BalanceCheckRequest):
    """Return 200 if the balance covers the amount, 400 otherwise."""
    try:
        validate_sufficient_balance(payload.current_balance, payload.amount)
    except InsufficientBalanceError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": str(exc),
                "available": str(exc.available),
                "requested": str(exc.requested),
            },
        )

    return BalanceCheckResponse(
        available=payload.current_balance,
        requested=payload.amount,
    )
