"""Database engine, session factory and schema setup."""

from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from wealthguard.core.config import settings
from wealthguard.db.base import Base


def make_engine(url: Optional[str] = None) -> Engine:
    """Create an engine for ``url`` (defaults to settings.DATABASE_URL)."""
    url = url or settings.DATABASE_URL
    kwargs = {"echo": settings.DEBUG}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url == "sqlite://":
            # one shared connection, or every session sees an empty database
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    import wealthguard.models  # noqa: F401  registers the tables

    Base.metadata.create_all(bind=engine)


def get_db(factory: sessionmaker) -> Generator[Session, None, None]:
    """Yield a session from ``factory`` and close it afterwards."""
    db = factory()
    try:
        yield db
    finally:
        db.close()
