"""Abstract repository interfaces consumed by the services.

Reads return point-in-time copies; callers never hold a live reference
to store internals. Writes go through ``add_account``, ``upsert_grant``
and ``append`` only.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from wealthguard.schemas.schemas import Account, AuditLogEntry, PermissionGrant


class AccountStore(ABC):
    """Source of account records."""

    @abstractmethod
    def list_accounts(self) -> List[Account]:
        """Return every account in insertion order."""
        ...

    @abstractmethod
    def get_account(self, account_id: str) -> Optional[Account]:
        """Return the account with ``account_id`` or None."""
        ...

    @abstractmethod
    def add_account(self, account: Account) -> Account:
        """Provision a new account.

        Raises:
            ValidationError: If an account with the same id exists.
        """
        ...


class PermissionStore(ABC):
    """Holds directed grants, at most one per (actor, target) pair."""

    @abstractmethod
    def get_grant(self, actor_id: str, target_id: str) -> Optional[PermissionGrant]:
        ...

    @abstractmethod
    def list_grants(self) -> List[PermissionGrant]:
        ...

    @abstractmethod
    def upsert_grant(self, actor_id: str, target_id: str, actions: Iterable) -> PermissionGrant:
        """Replace the action set for the pair, or create the grant."""
        ...


class AuditStore(ABC):
    """Append-only sink for audit entries."""

    @abstractmethod
    def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        """Store ``entry`` under a fresh unique id and return the stored copy."""
        ...

    @abstractmethod
    def list_entries(self) -> List[AuditLogEntry]:
        """Return every entry, most recent first."""
        ...
