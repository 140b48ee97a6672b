"""Audit service — append-only trail of security-relevant actions."""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from wealthguard.schemas.schemas import AuditLogEntry, Severity
from wealthguard.stores.base import AuditStore

logger = logging.getLogger("wealthguard.audit")


class AuditService:
    """Records immutable audit log entries for system events."""

    def __init__(self, store: AuditStore):
        self.store = store

    def log(
        self,
        actor_id: str,
        action: str,
        details: str = "",
        severity: Severity = Severity.INFO,
        target_id: Optional[str] = None,
        acting_as_id: Optional[str] = None,
        timestamp: Optional[datetime] = None,
    ) -> AuditLogEntry:
        """Write a single audit log record.

        Args:
            action: free-form tag, e.g. "LOGIN", "PERMISSION_UPDATE".
            acting_as_id: the impersonated account, when acting on its behalf.

        The entry is appended immediately; callers decide what is sensitive
        before recording.
        """
        entry = AuditLogEntry(
            actor_id=actor_id,
            acting_as_id=acting_as_id,
            target_id=target_id,
            action=action,
            details=details,
            severity=Severity(severity),
            timestamp=timestamp or datetime.now(timezone.utc),
        )
        stored = self.store.append(entry)
        logger.debug("audit %s %s by %s", stored.severity.value, stored.action, stored.actor_id)
        return stored

    def list_logs(self) -> List[AuditLogEntry]:
        """All entries, most recent first."""
        return self.store.list_entries()

