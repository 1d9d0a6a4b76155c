"""
Pydantic schemas for monthly transfer limit checks.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class LimitCheckRequest(BaseModel):
    """Completed transfers of the current month plus the amount to send."""
    completed_amounts: list[Decimal] = Field(default_factory=list)
    amount: Decimal = Field(..., gt=0)


class LimitCheckResponse(BaseModel):
    can_transfer: bool
    remaining: Decimal
    message: str | None = None


class MonthlyStatsResponse(BaseModel):
    total_sent: Decimal
    remaining: Decimal
    percent_used: Decimal


class MonthlyStatsRequest(BaseModel):
    completed_amounts: list[Decimal] = Field(default_factory=list)
