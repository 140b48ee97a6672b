"""Seed baseline grants derived from the role hierarchy."""

import logging

from wealthguard.schemas.schemas import ALL_ACTIONS, Action, UserRole
from wealthguard.stores.base import AccountStore, PermissionStore

logger = logging.getLogger("wealthguard.seeds")

ADMIN_DEFAULT_ACTIONS = frozenset({Action.VIEW, Action.EDIT, Action.IMPERSONATE})
ASSOCIATE_DEFAULT_ACTIONS = frozenset({Action.VIEW, Action.IMPERSONATE})


def seed_default_grants(accounts: AccountStore, permissions: PermissionStore) -> int:
    """Write the default grant for every actor/target pair the hierarchy implies.

    - super admins: every action on every other account
    - admins: view, edit, impersonate on associates and family accounts
    - associates: view, impersonate on the family accounts assigned to them

    Existing grants for those pairs are overwritten. Returns the number written.
    """
    roster = accounts.list_accounts()
    written = 0
    for user in roster:
        if user.role == UserRole.SUPER_ADMIN:
            pairs = [(t, ALL_ACTIONS) for t in roster if t.id != user.id]
        elif user.role == UserRole.ADMIN:
            pairs = [
                (t, ADMIN_DEFAULT_ACTIONS) for t in roster
                if t.role in (UserRole.ASSOCIATE, UserRole.CUSTOMER)
            ]
        elif user.role == UserRole.ASSOCIATE:
            pairs = [(t, ASSOCIATE_DEFAULT_ACTIONS) for t in roster if t.assigned_to == user.id]
        else:
            pairs = []

        for target, actions in pairs:
            permissions.upsert_grant(user.id, target.id, actions)
            written += 1

    logger.info("Seeded %d default grants", written)
    return written
