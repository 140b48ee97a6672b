"""WealthGuard CLI tool (wealthctl)."""

import logging
from contextlib import contextmanager
from typing import Iterator, List, NoReturn, Optional

import typer

from wealthguard.core.config import settings
from wealthguard.core.exceptions import (
    PartialGrantUpdateError, ResourceNotFoundError, WealthGuardError,
)
from wealthguard.schemas.schemas import Account, Action
from wealthguard.services.registry import Services, sql_services

app = typer.Typer(name="wealthctl", help="WealthGuard authorization CLI")
db_app = typer.Typer(help="Database management commands")
app.add_typer(db_app, name="db")

logger = logging.getLogger("wealthguard")

DatabaseUrl = typer.Option(None, "--database-url", help="Defaults to DATABASE_URL")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    """Configure logging once for every command."""
    level = logging.DEBUG if (verbose or settings.DEBUG) else getattr(
        logging, settings.LOG_LEVEL.upper(), logging.INFO
    )
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@contextmanager
def open_services(database_url: Optional[str] = None) -> Iterator[Services]:
    from wealthguard.db.session import init_db, make_engine, make_session_factory

    engine = make_engine(database_url)
    init_db(engine)
    db = make_session_factory(engine)()
    try:
        yield sql_services(db)
    finally:
        db.close()
        engine.dispose()


def _account(services: Services, account_id: str) -> Account:
    account = services.accounts.get_account(account_id)
    if account is None:
        raise ResourceNotFoundError(f"Account {account_id} not found")
    return account


def _fail(message: str) -> NoReturn:
    typer.echo(f"❌ {message}", err=True)
    raise typer.Exit(code=1)


@db_app.command("init")
def db_init(database_url: Optional[str] = DatabaseUrl):
    """Create the tables if they don't exist."""
    with open_services(database_url):
        pass
    typer.echo("✅ Tables created (or already exist)")


@db_app.command("seed")
def db_seed(database_url: Optional[str] = DatabaseUrl):
    """Seed the demo roster and its default grants."""
    from wealthguard.db.seeds.seed_accounts import seed_accounts
    from wealthguard.db.seeds.seed_grants import seed_default_grants

    if not settings.SEED_DEMO_DATA:
        typer.echo("ℹ️  SEED_DEMO_DATA is off, skipping.")
        return

    with open_services(database_url) as services:
        added = seed_accounts(services.accounts)
        written = seed_default_grants(services.accounts, services.permissions)
    typer.echo(f"✅ Seeded {added} accounts and {written} grants")


@app.command("login")
def login(
    account_id: str = typer.Argument(..., help="Account ID"),
    database_url: Optional[str] = DatabaseUrl,
):
    """Log an account in and record it in the audit trail."""
    with open_services(database_url) as services:
        account = services.auth.login(account_id)
    if account is None:
        _fail(f"No account with id {account_id}")
    typer.echo(f"✅ {account.name} ({account.role.value})")


@app.command("check")
def check(
    actor_id: str = typer.Argument(..., help="Acting account ID"),
    target_id: str = typer.Argument(..., help="Target account ID"),
    action: Action = typer.Argument(..., help="Action to check"),
    database_url: Optional[str] = DatabaseUrl,
):
    """Check a permission, the same way the dashboards do.

    MANAGE_PERMISSIONS and IMPERSONATE go through the hierarchy gate as well.
    """
    with open_services(database_url) as services:
        try:
            actor = _account(services, actor_id)
            if action == Action.MANAGE_PERMISSIONS:
                allowed = services.auth.can_manage_permissions(actor, _account(services, target_id))
            elif action == Action.IMPERSONATE:
                allowed = services.auth.can_impersonate(actor, _account(services, target_id))
            elif action == Action.VIEW_LOGS:
                allowed = services.auth.can_view_logs(actor)
            else:
                allowed = services.auth.has_permission(actor, target_id, action)
        except ResourceNotFoundError as e:
            _fail(e.message)

    if not allowed:
        _fail(f"DENIED {actor_id} {action.value} {target_id}")
    typer.echo(f"✅ ALLOWED {actor_id} {action.value} {target_id}")


@app.command("visible")
def visible(
    actor_id: str = typer.Argument(..., help="Acting account ID"),
    database_url: Optional[str] = DatabaseUrl,
):
    """List the accounts an actor can see."""
    with open_services(database_url) as services:
        try:
            accounts = services.auth.get_visible_users(_account(services, actor_id))
        except ResourceNotFoundError as e:
            _fail(e.message)
    for a in accounts:
        typer.echo(f"  [{a.id}] {a.name} ({a.role.value})")


@app.command("audit")
def audit(
    actor_id: str = typer.Argument(..., help="Account requesting the logs"),
    limit: int = typer.Option(50, help="Maximum entries to show"),
    database_url: Optional[str] = DatabaseUrl,
):
    """Show the audit trail, most recent first."""
    with open_services(database_url) as services:
        try:
            entries = services.auth.list_audit_logs(_account(services, actor_id))
        except WealthGuardError as e:
            _fail(e.message)
    for entry in entries[:limit]:
        acting = f" as {entry.acting_as_id}" if entry.acting_as_id else ""
        typer.echo(
            f"  {entry.timestamp.isoformat()} [{entry.severity.value}] "
            f"{entry.actor_id}{acting} {entry.action}: {entry.details}"
        )


@app.command("grant")
def grant(
    admin_id: str = typer.Argument(..., help="Administrator making the change"),
    account_id: str = typer.Argument(..., help="Account whose permissions change"),
    actions: Optional[List[Action]] = typer.Argument(None, help="Actions to grant; none clears"),
    database_url: Optional[str] = DatabaseUrl,
):
    """Apply one action set for an account across SYSTEM and every other account."""
    with open_services(database_url) as services:
        try:
            written = services.permission_admin.apply_grant_to_all_targets(
                _account(services, admin_id), _account(services, account_id), actions or [],
            )
        except PartialGrantUpdateError as e:
            _fail(f"{e.message} (written: {', '.join(e.applied) or 'none'})")
        except WealthGuardError as e:
            _fail(e.message)
    typer.echo(f"✅ Updated {len(written)} grants for {account_id}")


if __name__ == "__main__":
    app()
