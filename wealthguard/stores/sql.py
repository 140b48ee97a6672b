"""SQLAlchemy-backed stores.

Every write commits immediately, so a sequence of writes is a sequence of
independent commits with no enclosing transaction.
"""

import json
import logging
from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from wealthguard.core.exceptions import ValidationError
from wealthguard.models.account import AccountRecord
from wealthguard.models.audit_log import AuditLog
from wealthguard.models.permission import PermissionGrantRecord
from wealthguard.schemas.schemas import (
    Account, AuditLogEntry, PermissionGrant, grant_id_for, new_audit_id, ordered_actions,
)
from wealthguard.stores.base import AccountStore, AuditStore, PermissionStore

logger = logging.getLogger("wealthguard.stores")


def _commit_or_rollback(db: Session) -> None:
    """Commit, leaving the session usable for the next write if it fails."""
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def _grant_from_row(row: PermissionGrantRecord) -> PermissionGrant:
    return PermissionGrant(
        id=row.id,
        actor_id=row.actor_id,
        target_id=row.target_id,
        actions=frozenset(json.loads(row.actions_json or "[]")),
    )


class SqlAccountStore(AccountStore):
    def __init__(self, db: Session):
        self.db = db

    def list_accounts(self) -> List[Account]:
        rows = self.db.query(AccountRecord).order_by(AccountRecord.seq).all()
        return [Account.model_validate(r) for r in rows]

    def get_account(self, account_id: str) -> Optional[Account]:
        row = self.db.query(AccountRecord).filter(AccountRecord.id == account_id).first()
        return Account.model_validate(row) if row else None

    def add_account(self, account: Account) -> Account:
        self.db.add(AccountRecord(
            id=account.id,
            name=account.name,
            role=account.role,
            email=account.email,
            assigned_to=account.assigned_to,
        ))
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ValidationError(f"Account {account.id} already exists")
        return account


class SqlPermissionStore(PermissionStore):
    def __init__(self, db: Session):
        self.db = db

    def get_grant(self, actor_id: str, target_id: str) -> Optional[PermissionGrant]:
        row = self.db.query(PermissionGrantRecord).filter(
            PermissionGrantRecord.actor_id == actor_id,
            PermissionGrantRecord.target_id == target_id,
        ).first()
        return _grant_from_row(row) if row else None

    def list_grants(self) -> List[PermissionGrant]:
        rows = self.db.query(PermissionGrantRecord).order_by(PermissionGrantRecord.seq).all()
        return [_grant_from_row(r) for r in rows]

    def upsert_grant(self, actor_id: str, target_id: str, actions: Iterable) -> PermissionGrant:
        grant = PermissionGrant.build(actor_id, target_id, actions)
        actions_json = json.dumps([a.value for a in ordered_actions(grant.actions)])

        row = self.db.query(PermissionGrantRecord).filter(
            PermissionGrantRecord.actor_id == actor_id,
            PermissionGrantRecord.target_id == target_id,
        ).first()
        if row:
            row.actions_json = actions_json
        else:
            self.db.add(PermissionGrantRecord(
                id=grant_id_for(actor_id, target_id),
                actor_id=actor_id,
                target_id=target_id,
                actions_json=actions_json,
            ))
        _commit_or_rollback(self.db)
        logger.debug("Grant %s set to %s", grant.id, actions_json)
        return grant


class SqlAuditStore(AuditStore):
    def __init__(self, db: Session):
        self.db = db

    def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        stored = entry.model_copy(update={"id": new_audit_id()})
        self.db.add(AuditLog(
            id=stored.id,
            actor_id=stored.actor_id,
            acting_as_id=stored.acting_as_id,
            target_id=stored.target_id,
            action=stored.action,
            details=stored.details,
            severity=stored.severity,
            timestamp=stored.timestamp,
        ))
        # commit immediately so an audit record is never lost
        _commit_or_rollback(self.db)
        return stored

    def list_entries(self) -> List[AuditLogEntry]:
        rows = (
            self.db.query(AuditLog)
            .order_by(AuditLog.timestamp.desc(), AuditLog.seq)
            .all()
        )
        return [AuditLogEntry.model_validate(r) for r in rows]
