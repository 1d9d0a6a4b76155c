"""
Role capability lookups.
"""

from fastapi import APIRouter

from moneyflow.schemas.profile import RoleCapabilities
from moneyflow.services.role_service import capabilities_for

router = APIRouter()


@router.get("/{role}/capabilities", response_model=RoleCapabilities)
async def role_capabilities(role: str):
    """Capabilities granted to a role. Unknown roles get an empty list."""
    return RoleCapabilities(
        role=role,
        capabilities=sorted(c.value for c in capabilities_for(role)),
    )
