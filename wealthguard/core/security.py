"""Role hierarchy used as the base gate for hierarchy-sensitive decisions."""

from typing import Any

from wealthguard.schemas.schemas import UserRole


ROLE_LEVELS = {
    UserRole.SUPER_ADMIN: 4,
    UserRole.ADMIN: 3,
    UserRole.ASSOCIATE: 2,
    UserRole.CUSTOMER: 1,
}

# Anything not in ROLE_LEVELS ranks below every real role.
UNKNOWN_ROLE_LEVEL = 0


def role_level(role: Any) -> int:
    """Return the rank of ``role``; unrecognized values rank 0."""
    try:
        return ROLE_LEVELS.get(UserRole(role), UNKNOWN_ROLE_LEVEL)
    except ValueError:
        return UNKNOWN_ROLE_LEVEL


def outranks(actor_role: Any, target_role: Any) -> bool:
    """True when ``actor_role`` sits strictly above ``target_role``."""
    return role_level(actor_role) > role_level(target_role)
