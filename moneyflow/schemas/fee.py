"""
Pydantic schemas for fee breakdowns and balance checks.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class FeeBreakdownResponse(BaseModel):
    """Fee on a deposit or withdrawal and its commission split."""
    operation: str = Field(..., examples=["withdrawal"])
    tier: str | None = None
    amount: Decimal
    total_fee: Decimal
    agent_commission: Decimal
    platform_commission: Decimal
    total_debit: Decimal
    currency: str = "XAF"
    display_total_fee: str


class TransferFeeResponse(BaseModel):
    """Client-side fee on a national or international transfer."""
    amount: Decimal
    national: bool
    tier: str
    rate: Decimal
    fee: Decimal
    total_debit: Decimal
    currency: str = "XAF"


class BalanceCheckRequest(BaseModel):
    """Schema for validating that a balance covers an amount."""
    current_balance: Decimal = Field(..., ge=0)
    amount: Decimal = Field(..., ge=0)


class BalanceCheckResponse(BaseModel):
    sufficient: bool = True
    available: Decimal
    requested: Decimal
