"""Models package — import all models so metadata.create_all can find them."""

from wealthguard.models.account import AccountRecord
from wealthguard.models.permission import PermissionGrantRecord
from wealthguard.models.audit_log import AuditLog

__all__ = ["AccountRecord", "PermissionGrantRecord", "AuditLog"]
