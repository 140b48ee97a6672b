"""Seed the demo roster of staff and family accounts."""

import logging

from wealthguard.schemas.schemas import Account, UserRole
from wealthguard.stores.base import AccountStore

logger = logging.getLogger("wealthguard.seeds")


DEMO_ACCOUNTS = [
    {"id": "a", "name": "Alice", "role": UserRole.SUPER_ADMIN, "email": "alice@wealthguard.com"},
    {"id": "b", "name": "Bob", "role": UserRole.ADMIN, "email": "bob@wealthguard.com"},
    {"id": "c", "name": "Charlie", "role": UserRole.ADMIN, "email": "charlie@wealthguard.com"},
    {"id": "d", "name": "David", "role": UserRole.ASSOCIATE, "email": "david@wealthguard.com"},
    {"id": "e", "name": "Eve", "role": UserRole.ASSOCIATE, "email": "eve@wealthguard.com"},
    # Family accounts
    {"id": "f_acc", "name": "Frank Family", "role": UserRole.CUSTOMER,
     "email": "frank@client.com", "assigned_to": "d"},
    {"id": "g_acc", "name": "Grace Family", "role": UserRole.CUSTOMER,
     "email": "grace@client.com", "assigned_to": "d"},
    {"id": "h_acc", "name": "Henry Family", "role": UserRole.CUSTOMER,
     "email": "henry@client.com", "assigned_to": "e"},
    {"id": "i_acc", "name": "Isabella Family", "role": UserRole.CUSTOMER,
     "email": "isabella@client.com", "assigned_to": "e"},
    {"id": "j_acc", "name": "Jack Family", "role": UserRole.CUSTOMER,
     "email": "jack@client.com", "assigned_to": "e"},
]


def seed_accounts(store: AccountStore) -> int:
    """Insert demo accounts that don't already exist. Returns how many were added."""
    added = 0
    for data in DEMO_ACCOUNTS:
        if store.get_account(data["id"]) is None:
            store.add_account(Account(**data))
            added += 1
    logger.info("Seeded %d of %d demo accounts", added, len(DEMO_ACCOUNTS))
    return added
