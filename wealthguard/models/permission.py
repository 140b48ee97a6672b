"""Permission grant model."""

from sqlalchemy import Column, Integer, String, Text, DateTime, UniqueConstraint, func

from wealthguard.db.base import Base


class PermissionGrantRecord(Base):
    """One row per (actor, target) pair; writes replace the action list."""
    __tablename__ = "permission_grants"
    __table_args__ = (
        UniqueConstraint("actor_id", "target_id", name="uq_grant_actor_target"),
    )

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(140), nullable=False)  # display id; uq_grant_actor_target keys the row
    actor_id = Column(String(64), nullable=False, index=True)
    target_id = Column(String(64), nullable=False, index=True)  # account id or SYSTEM
    actions_json = Column(Text, nullable=False, default="[]")  # JSON list of action names
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)
