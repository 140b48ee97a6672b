"""Audit log model — append-only."""

from sqlalchemy import Column, Integer, String, Text, DateTime, Enum

from wealthguard.db.base import Base
from wealthguard.schemas.schemas import Severity


class AuditLog(Base):
    """Immutable audit trail for security-relevant actions.

    This table is APPEND-ONLY: no UPDATE or DELETE operations should ever
    be performed on it (enforced at application level).
    """
    __tablename__ = "audit_logs"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(32), unique=True, nullable=False)
    actor_id = Column(String(64), nullable=False, index=True)
    acting_as_id = Column(String(64), nullable=True)
    target_id = Column(String(64), nullable=True)
    action = Column(String(100), nullable=False, index=True)  # e.g. "LOGIN"
    details = Column(Text, nullable=False, default="")
    severity = Column(Enum(Severity), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)
