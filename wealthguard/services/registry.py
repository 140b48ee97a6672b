"""Wire the services over a chosen set of stores."""

from dataclasses import dataclass

from sqlalchemy.orm import Session

from wealthguard.services.audit_service import AuditService
from wealthguard.services.auth_service import AuthService
from wealthguard.services.impersonation_service import ImpersonationService
from wealthguard.services.permission_service import PermissionService
from wealthguard.stores.base import AccountStore, AuditStore, PermissionStore
from wealthguard.stores.memory import (
    InMemoryAccountStore, InMemoryAuditStore, InMemoryPermissionStore,
)
from wealthguard.stores.sql import SqlAccountStore, SqlAuditStore, SqlPermissionStore


@dataclass
class Services:
    accounts: AccountStore
    permissions: PermissionStore
    audit: AuditService
    auth: AuthService
    permission_admin: PermissionService
    impersonation: ImpersonationService


def build_services(
    accounts: AccountStore, permissions: PermissionStore, audit_store: AuditStore
) -> Services:
    audit = AuditService(audit_store)
    auth = AuthService(accounts, permissions, audit)
    return Services(
        accounts=accounts,
        permissions=permissions,
        audit=audit,
        auth=auth,
        permission_admin=PermissionService(auth, accounts, permissions),
        impersonation=ImpersonationService(auth),
    )


def in_memory_services() -> Services:
    """Fresh, empty in-memory state."""
    return build_services(InMemoryAccountStore(), InMemoryPermissionStore(), InMemoryAuditStore())


def sql_services(db: Session) -> Services:
    return build_services(SqlAccountStore(db), SqlPermissionStore(db), SqlAuditStore(db))
