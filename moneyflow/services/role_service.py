"""
Role capability table.

Permissions are data: each role maps to the set of capabilities it
grants. The main admin is not a stored role; it is the profile whose
phone matches ``settings.MAIN_ADMIN_PHONE``.
"""

import enum

from moneyflow.config import settings


class Role(str, enum.Enum):
    USER = "user"
    AGENT = "agent"
    SUB_ADMIN = "sub_admin"
    ADMIN = "admin"
    MAIN_ADMIN = "main_admin"


class Capability(str, enum.Enum):
    VIEW_USERS = "view_users"
    MANAGE_USERS = "manage_users"       # edit, ban, delete, change role
    RECHARGE = "recharge"
    DEPOSIT_TO_AGENT = "deposit_to_agent"
    AGENT_OPERATIONS = "agent_operations"  # client deposits/withdrawals


CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.USER: frozenset(),
    Role.AGENT: frozenset({Capability.AGENT_OPERATIONS}),
    Role.SUB_ADMIN: frozenset({
        Capability.VIEW_USERS,
        Capability.DEPOSIT_TO_AGENT,
    }),
    Role.ADMIN: frozenset({
        Capability.VIEW_USERS,
        Capability.MANAGE_USERS,
        Capability.RECHARGE,
        Capability.DEPOSIT_TO_AGENT,
        Capability.AGENT_OPERATIONS,
    }),
    Role.MAIN_ADMIN: frozenset(Capability),
}


def _as_role(role) -> Role | None:
    try:
        return Role(role)
    except ValueError:
        return None


def capabilities_for(role) -> frozenset[Capability]:
    """Capabilities granted to ``role``; unknown roles get none."""
    resolved = _as_role(role)
    if resolved is None:
        return frozenset()
    return CAPABILITIES[resolved]


def has_capability(role, capability) -> bool:
    """True if ``role`` grants ``capability``; unknown names of either kind grant nothing."""
    try:
        capability = Capability(capability)
    except ValueError:
        return False
    return capability in capabilities_for(role)


def is_main_admin(profile: dict | None) -> bool:
    return bool(profile) and profile.get("phone") == settings.MAIN_ADMIN_PHONE


def role_for_profile(profile: dict | None) -> Role | None:
    """Effective role of a profile, promoting the main admin phone."""
    if not profile:
        return None
    if is_main_admin(profile):
        return Role.MAIN_ADMIN
    return _as_role(profile.get("role"))
