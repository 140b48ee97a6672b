"""In-memory stores, one independent state per instance."""

import logging
from typing import Iterable, List, Optional

from wealthguard.core.exceptions import ValidationError
from wealthguard.schemas.schemas import Account, AuditLogEntry, PermissionGrant, new_audit_id
from wealthguard.stores.base import AccountStore, AuditStore, PermissionStore

logger = logging.getLogger("wealthguard.stores")


class InMemoryAccountStore(AccountStore):
    def __init__(self, accounts: Iterable[Account] = ()):
        self._accounts: List[Account] = []
        for account in accounts:
            self.add_account(account)

    def list_accounts(self) -> List[Account]:
        return list(self._accounts)

    def get_account(self, account_id: str) -> Optional[Account]:
        return next((a for a in self._accounts if a.id == account_id), None)

    def add_account(self, account: Account) -> Account:
        if self.get_account(account.id) is not None:
            raise ValidationError(f"Account {account.id} already exists")
        self._accounts.append(account)
        return account


class InMemoryPermissionStore(PermissionStore):
    def __init__(self):
        self._grants: List[PermissionGrant] = []

    def get_grant(self, actor_id: str, target_id: str) -> Optional[PermissionGrant]:
        return next(
            (g for g in self._grants if g.actor_id == actor_id and g.target_id == target_id),
            None,
        )

    def list_grants(self) -> List[PermissionGrant]:
        return list(self._grants)

    def upsert_grant(self, actor_id: str, target_id: str, actions: Iterable) -> PermissionGrant:
        grant = PermissionGrant.build(actor_id, target_id, actions)
        for idx, existing in enumerate(self._grants):
            if existing.actor_id == actor_id and existing.target_id == target_id:
                self._grants[idx] = grant
                break
        else:
            self._grants.append(grant)
        logger.debug("Grant %s set to %s", grant.id, sorted(a.value for a in grant.actions))
        return grant


class InMemoryAuditStore(AuditStore):
    def __init__(self):
        self._entries: List[AuditLogEntry] = []

    def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        stored = entry.model_copy(update={"id": new_audit_id()})
        self._entries.append(stored)
        return stored

    def list_entries(self) -> List[AuditLogEntry]:
        return sorted(self._entries, key=lambda e: e.timestamp, reverse=True)
