"""
Shared pytest fixtures for WealthGuard tests.

Provides:
- Seeded in-memory services (demo roster + default grants)
- Empty in-memory services
- In-memory SQLite session and SQL-backed services
"""

from typing import Generator

import pytest
from sqlalchemy.orm import Session

from wealthguard.db.seeds.seed_accounts import seed_accounts
from wealthguard.db.seeds.seed_grants import seed_default_grants
from wealthguard.db.session import init_db, make_engine, make_session_factory
from wealthguard.schemas.schemas import Account
from wealthguard.services.registry import Services, in_memory_services, sql_services


def seed(services: Services) -> Services:
    seed_accounts(services.accounts)
    seed_default_grants(services.accounts, services.permissions)
    return services


# ============================================================================
# In-memory fixtures
# ============================================================================

@pytest.fixture
def services() -> Services:
    """Demo roster with its default grants, fresh per test."""
    return seed(in_memory_services())


@pytest.fixture
def empty_services() -> Services:
    return in_memory_services()


@pytest.fixture
def account(services: Services):
    """Look up a seeded account by id."""
    def _get(account_id: str) -> Account:
        found = services.accounts.get_account(account_id)
        assert found is not None, f"no seeded account {account_id}"
        return found
    return _get


# ============================================================================
# SQL fixtures
# ============================================================================

@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """In-memory SQLite session with the schema created."""
    engine = make_engine("sqlite://")
    init_db(engine)
    db = make_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def sql_seeded(db_session: Session) -> Services:
    return seed(sql_services(db_session))
