"""Account model."""

from sqlalchemy import Column, Integer, String, DateTime, Enum, func

from wealthguard.db.base import Base
from wealthguard.schemas.schemas import UserRole


class AccountRecord(Base):
    """Platform account with a fixed role."""
    __tablename__ = "accounts"

    # surrogate key keeps listing order equal to insertion order
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(64), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    role = Column(Enum(UserRole), nullable=False)
    email = Column(String(255), nullable=True)
    assigned_to = Column(String(64), nullable=True)  # associate id, customers only
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
