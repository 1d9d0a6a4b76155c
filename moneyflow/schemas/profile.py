"""
Pydantic schemas for profiles and role capabilities.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


class ProfileRead(BaseModel):
    """Profile row as served by the profile store."""
    id: str
    full_name: str | None = None
    phone: str
    role: str
    balance: Decimal = Decimal("0")
    country: str | None = None
    is_verified: bool | None = None
    avatar_url: str | None = None
    created_at: datetime | None = None

    model_config = {"extra": "ignore"}


class RoleCapabilities(BaseModel):
    role: str
    capabilities: list[str]
