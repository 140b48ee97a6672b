"""Permission administration, grant writes made on behalf of an admin."""

import logging
from typing import Iterable, List, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from wealthguard.core.config import settings
from wealthguard.core.exceptions import (
    AuthorizationError, PartialGrantUpdateError, ValidationError,
)
from wealthguard.schemas.schemas import (
    Account, Action, PermissionGrant, Severity, ordered_actions,
)
from wealthguard.services.auth_service import AuthService
from wealthguard.stores.base import AccountStore, PermissionStore

logger = logging.getLogger("wealthguard.permissions")

_actions_adapter = TypeAdapter(List[Action])


def parse_actions(actions: Iterable) -> frozenset:
    """Coerce action names into a closed set of Action values.

    Raises:
        ValidationError: If any name is not a known action.
    """
    if isinstance(actions, str):
        actions = [actions]
    names = list(actions)
    try:
        return frozenset(_actions_adapter.validate_python(names))
    except PydanticValidationError as e:
        raise ValidationError(f"Unknown action in {names!r}: {e.errors()[0]['msg']}")


def _format_actions(actions: Iterable[Action]) -> str:
    return ", ".join(a.value for a in ordered_actions(actions))


class PermissionService:
    """Writes grants after checking the admin may manage the account."""

    def __init__(
        self,
        auth: AuthService,
        accounts: AccountStore,
        permissions: PermissionStore,
        system_target_id: Optional[str] = None,
    ):
        self.auth = auth
        self.accounts = accounts
        self.permissions = permissions
        self.system_target_id = system_target_id or settings.SYSTEM_TARGET_ID

    def get_grant(self, actor_id: str, target_id: str) -> Optional[PermissionGrant]:
        return self.permissions.get_grant(actor_id, target_id)

    def list_grants(self) -> List[PermissionGrant]:
        return self.permissions.list_grants()

    def hydrate_actions(self, account_id: str) -> frozenset:
        """The action set on the account's SYSTEM grant, used to pre-fill an edit view."""
        grant = self.permissions.get_grant(account_id, self.system_target_id)
        return grant.actions if grant else frozenset()

    def _require_manage(self, admin: Account, account: Account) -> None:
        if not self.auth.can_manage_permissions(admin, account):
            logger.warning("Permission edit refused: %s -> %s", admin.id, account.id)
            raise AuthorizationError(
                f"{admin.name} may not manage permissions for {account.name}"
            )

    def set_grant(
        self, admin: Account, account: Account, target_id: str, actions: Iterable
    ) -> PermissionGrant:
        """Replace a single (account, target) grant.

        Raises:
            AuthorizationError: If the admin may not manage the account.
            ValidationError: If an action name is unknown.
        """
        selected = parse_actions(actions)
        self._require_manage(admin, account)

        grant = self.permissions.upsert_grant(account.id, target_id, selected)
        self.auth.audit.log(
            actor_id=admin.id,
            action="PERMISSION_UPDATE",
            target_id=account.id,
            details=f"Updated permissions for {account.name} on {target_id} to [{_format_actions(selected)}]",
            severity=Severity.CRITICAL,
        )
        logger.info("Grant %s set by %s", grant.id, admin.id)
        return grant

    def apply_grant_to_all_targets(
        self, admin: Account, account: Account, actions: Iterable
    ) -> List[str]:
        """Write one action set for ``account`` onto SYSTEM and every other account.

        Each target is an independent write; there is no enclosing
        transaction. If a write fails, targets already written keep the new
        action set and the rest keep their old one. The partial state is
        audited and reported through ``PartialGrantUpdateError``.

        Returns:
            Target ids written, SYSTEM first, then accounts in listing order.

        Raises:
            AuthorizationError: If the admin may not manage the account.
            ValidationError: If an action name is unknown.
            PartialGrantUpdateError: If a write failed part way through.
        """
        selected = parse_actions(actions)
        self._require_manage(admin, account)

        targets = [self.system_target_id] + [
            a.id for a in self.accounts.list_accounts() if a.id != account.id
        ]
        applied: List[str] = []
        for target_id in targets:
            try:
                self.permissions.upsert_grant(account.id, target_id, selected)
            except Exception as e:
                pending = targets[len(applied):]
                logger.error(
                    "Bulk grant update for %s stopped at %s after %d of %d writes: %s",
                    account.id, target_id, len(applied), len(targets), e,
                )
                self.auth.audit.log(
                    actor_id=admin.id,
                    action="PERMISSION_UPDATE_PARTIAL",
                    target_id=account.id,
                    details=(
                        f"Partially updated permissions for {account.name} to "
                        f"[{_format_actions(selected)}]: {len(applied)} of {len(targets)} "
                        f"targets written, failed at {target_id}"
                    ),
                    severity=Severity.CRITICAL,
                )
                raise PartialGrantUpdateError(
                    f"Grant update for {account.id} failed at {target_id}: {e}",
                    applied=applied,
                    pending=pending,
                ) from e
            applied.append(target_id)

        self.auth.audit.log(
            actor_id=admin.id,
            action="PERMISSION_UPDATE",
            target_id=account.id,
            details=(
                f"Updated permissions for {account.name} across target families "
                f"to [{_format_actions(selected)}]"
            ),
            severity=Severity.CRITICAL,
        )
        logger.info("Bulk grant update for %s by %s: %d targets", account.id, admin.id, len(applied))
        return applied
