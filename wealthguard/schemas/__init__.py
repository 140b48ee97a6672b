"""Domain records shared by stores and services."""

from wealthguard.schemas.schemas import (
    Account, Action, AuditLogEntry, PermissionGrant, Severity, UserRole,
    ALL_ACTIONS, grant_id_for, new_audit_id, ordered_actions,
)

__all__ = [
    "Account", "Action", "AuditLogEntry", "PermissionGrant", "Severity",
    "UserRole", "ALL_ACTIONS", "grant_id_for", "new_audit_id", "ordered_actions",
]
