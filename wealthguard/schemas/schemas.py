"""Pydantic records for accounts, permission grants and audit entries."""

import enum
import secrets
from datetime import datetime, timezone
from typing import FrozenSet, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator


class UserRole(str, enum.Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    ASSOCIATE = "ASSOCIATE"
    CUSTOMER = "CUSTOMER"  # a family account


class Action(str, enum.Enum):
    VIEW = "VIEW"
    EDIT = "EDIT"
    DELETE = "DELETE"
    MANAGE_PERMISSIONS = "MANAGE_PERMISSIONS"
    IMPERSONATE = "IMPERSONATE"
    VIEW_LOGS = "VIEW_LOGS"


class Severity(str, enum.Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


ALL_ACTIONS: FrozenSet[Action] = frozenset(Action)


def grant_id_for(actor_id: str, target_id: str) -> str:
    return f"p-{actor_id}-{target_id}"


def new_audit_id() -> str:
    return secrets.token_hex(8)


def ordered_actions(actions: Iterable[Action]) -> list[Action]:
    """Actions in declaration order, for stable display and storage."""
    wanted = set(actions)
    return [a for a in Action if a in wanted]


# ---- Account ----
class Account(BaseModel):
    """Identity record. ``assigned_to`` links a family account to its associate."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str = Field(..., min_length=1)
    name: str
    role: UserRole
    email: Optional[str] = None
    assigned_to: Optional[str] = None

    @model_validator(mode="after")
    def _assigned_only_for_customers(self) -> "Account":
        if self.assigned_to is not None and self.role != UserRole.CUSTOMER:
            raise ValueError("assigned_to is only valid for CUSTOMER accounts")
        return self


# ---- Permission ----
class PermissionGrant(BaseModel):
    """Directed grant of actions from one actor onto one target."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    actor_id: str
    target_id: str
    actions: FrozenSet[Action] = frozenset()

    @classmethod
    def build(cls, actor_id: str, target_id: str, actions: Iterable) -> "PermissionGrant":
        return cls(
            id=grant_id_for(actor_id, target_id),
            actor_id=actor_id,
            target_id=target_id,
            actions=frozenset(actions),
        )

    def allows(self, action: Action) -> bool:
        return action in self.actions

    @field_serializer("actions")
    def _serialize_actions(self, actions: FrozenSet[Action]) -> list[str]:
        return [a.value for a in ordered_actions(actions)]


# ---- Audit ----
class AuditLogEntry(BaseModel):
    """Immutable audit record. ``acting_as_id`` is set while impersonating.

    ``id`` stays None until the entry is appended to an audit store.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: Optional[str] = None
    actor_id: str
    acting_as_id: Optional[str] = None
    target_id: Optional[str] = None
    action: str
    details: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    severity: Severity = Severity.INFO

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands naive datetimes back
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @field_serializer("timestamp")
    def _serialize_timestamp(self, value: datetime) -> str:
        return value.isoformat()
