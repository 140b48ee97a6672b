"""Impersonation sessions: an actor operating under a target's identity."""

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict

from wealthguard.core.exceptions import AuthorizationError
from wealthguard.schemas.schemas import Account, AuditLogEntry, Severity
from wealthguard.services.auth_service import AuthService

logger = logging.getLogger("wealthguard.impersonation")


class SessionContext(BaseModel):
    """Who is logged in and, while impersonating, whom they act as."""

    model_config = ConfigDict(frozen=True)

    user: Account
    acting_as: Optional[Account] = None

    @property
    def is_impersonating(self) -> bool:
        return self.acting_as is not None

    @property
    def effective_user(self) -> Account:
        return self.acting_as or self.user


class ImpersonationService:
    """Starts and stops impersonation and audits actions taken meanwhile."""

    def __init__(self, auth: AuthService):
        self.auth = auth

    def start(self, session: SessionContext, target: Account) -> SessionContext:
        """Begin acting as ``target``.

        The decision is always taken for the logged-in user, never for an
        account already being impersonated.

        Raises:
            AuthorizationError: If the user may not impersonate the target.
        """
        actor = session.user
        if not self.auth.can_impersonate(actor, target):
            logger.warning("Impersonation refused: %s -> %s", actor.id, target.id)
            raise AuthorizationError(f"{actor.name} may not impersonate {target.name}")

        self.auth.audit.log(
            actor_id=actor.id,
            acting_as_id=target.id,
            target_id=target.id,
            action="IMPERSONATION_START",
            details=f"{actor.name} started acting as {target.name}",
            severity=Severity.WARNING,
        )
        logger.info("Impersonation started: %s as %s", actor.id, target.id)
        return SessionContext(user=actor, acting_as=target)

    def stop(self, session: SessionContext) -> SessionContext:
        if not session.is_impersonating:
            return session

        actor, target = session.user, session.acting_as
        self.auth.audit.log(
            actor_id=actor.id,
            acting_as_id=target.id,
            target_id=target.id,
            action="IMPERSONATION_END",
            details=f"{actor.name} stopped acting as {target.name}",
            severity=Severity.INFO,
        )
        logger.info("Impersonation ended: %s as %s", actor.id, target.id)
        return SessionContext(user=actor)

    def record(
        self,
        session: SessionContext,
        action: str,
        details: str = "",
        severity: Severity = Severity.INFO,
        target_id: Optional[str] = None,
    ) -> AuditLogEntry:
        """Audit an action taken in ``session``, tagged with the impersonated account."""
        return self.auth.audit.log(
            actor_id=session.user.id,
            acting_as_id=session.acting_as.id if session.is_impersonating else None,
            target_id=target_id,
            action=action,
            details=details,
            severity=severity,
        )
