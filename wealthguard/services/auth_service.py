"""Auth service — role hierarchy, grants and impersonation rules.

Every decision here is a pure read over the account and permission
stores and fails closed: a missing grant, unknown account or unknown
role resolves to denial. Nothing in this module writes grants.
"""

import logging
from typing import List, Optional

from wealthguard.core.exceptions import AuthorizationError
from wealthguard.core.security import role_level
from wealthguard.schemas.schemas import Account, Action, AuditLogEntry, Severity, UserRole
from wealthguard.services.audit_service import AuditService
from wealthguard.stores.base import AccountStore, PermissionStore

logger = logging.getLogger("wealthguard.auth")


class AuthService:
    """Answers "may this actor do this to that account?"."""

    def __init__(self, accounts: AccountStore, permissions: PermissionStore, audit: AuditService):
        self.accounts = accounts
        self.permissions = permissions
        self.audit = audit

    @staticmethod
    def role_level(role) -> int:
        return role_level(role)

    def login(self, account_id: str) -> Optional[Account]:
        """Look up an already-identified account and record the login.

        Unknown ids return None and are not recorded.
        """
        account = self.accounts.get_account(account_id)
        if account is None:
            return None

        self.audit.log(
            actor_id=account.id,
            action="LOGIN",
            details=f"{account.name} logged into the system",
            severity=Severity.INFO,
        )
        logger.info("Login: %s (%s)", account.id, account.role.value)
        return account

    def has_permission(self, actor: Account, target_id: str, action: Action) -> bool:
        """Lowest-level check: self access, else an explicit grant. No hierarchy."""
        if actor.id == target_id:
            return True

        grant = self.permissions.get_grant(actor.id, target_id)
        return grant is not None and action in grant.actions

    def can_manage_permissions(self, actor: Account, target: Account) -> bool:
        """Rank gate plus an explicit MANAGE_PERMISSIONS grant; both required."""
        is_higher_rank = role_level(actor.role) > role_level(target.role)
        # super admins may manage other super admins, never themselves
        can_manage_same_rank_super = (
            actor.role == UserRole.SUPER_ADMIN
            and target.role == UserRole.SUPER_ADMIN
            and actor.id != target.id
        )
        if not is_higher_rank and not can_manage_same_rank_super:
            logger.debug("Manage denied by hierarchy: %s -> %s", actor.id, target.id)
            return False

        return self.has_permission(actor, target.id, Action.MANAGE_PERMISSIONS)

    def can_impersonate(self, actor: Account, target: Account) -> bool:
        """Strictly downward impersonation with an explicit IMPERSONATE grant.

        Self-impersonation is always denied, unlike ``has_permission``'s
        self access.
        """
        if actor.id == target.id:
            return False

        is_higher_rank = role_level(actor.role) > role_level(target.role)
        is_super_admin_targeting_super_admin = (
            actor.role == UserRole.SUPER_ADMIN and target.role == UserRole.SUPER_ADMIN
        )
        if not is_higher_rank and not is_super_admin_targeting_super_admin:
            logger.debug("Impersonation denied by hierarchy: %s -> %s", actor.id, target.id)
            return False

        return self.has_permission(actor, target.id, Action.IMPERSONATE)

    def can_view_logs(self, actor: Account) -> bool:
        if actor.role == UserRole.SUPER_ADMIN:
            return True
        return any(
            g.actor_id == actor.id and Action.VIEW_LOGS in g.actions
            for g in self.permissions.list_grants()
        )

    def get_visible_users(self, actor: Account) -> List[Account]:
        """Accounts the actor may see, in account-listing order."""
        accounts = self.accounts.list_accounts()
        if actor.role == UserRole.SUPER_ADMIN:
            return [a for a in accounts if a.id != actor.id]

        allowed_target_ids = {
            g.target_id
            for g in self.permissions.list_grants()
            if g.actor_id == actor.id and Action.VIEW in g.actions
        }
        return [a for a in accounts if a.id in allowed_target_ids]

    def list_audit_logs(self, actor: Account) -> List[AuditLogEntry]:
        """Audit entries, most recent first, for an actor with log access.

        Raises:
            AuthorizationError: If the actor may not view logs.
        """
        if not self.can_view_logs(actor):
            raise AuthorizationError(f"{actor.name} may not view audit logs")
        return self.audit.list_logs()
