"""Repository interfaces and their in-memory and SQL backings."""

from wealthguard.stores.base import AccountStore, AuditStore, PermissionStore
from wealthguard.stores.memory import (
    InMemoryAccountStore, InMemoryAuditStore, InMemoryPermissionStore,
)
from wealthguard.stores.sql import SqlAccountStore, SqlAuditStore, SqlPermissionStore

__all__ = [
    "AccountStore", "AuditStore", "PermissionStore",
    "InMemoryAccountStore", "InMemoryAuditStore", "InMemoryPermissionStore",
    "SqlAccountStore", "SqlAuditStore", "SqlPermissionStore",
]
