"""Impersonation session tests."""

import pytest

from wealthguard.core.exceptions import AuthorizationError
from wealthguard.schemas.schemas import Severity
from wealthguard.services.impersonation_service import SessionContext


def test_start_switches_effective_user_and_audits(services, account):
    session = SessionContext(user=account("d"))
    acting = services.impersonation.start(session, account("f_acc"))

    assert acting.is_impersonating
    assert acting.user.id == "d"
    assert acting.effective_user.id == "f_acc"
    assert not session.is_impersonating

    [entry] = services.audit.list_logs()
    assert entry.action == "IMPERSONATION_START"
    assert entry.severity == Severity.WARNING
    assert entry.actor_id == "d"
    assert entry.acting_as_id == "f_acc"


def test_start_refused_without_rights(services, account):
    session = SessionContext(user=account("d"))
    with pytest.raises(AuthorizationError):
        services.impersonation.start(session, account("h_acc"))
    with pytest.raises(AuthorizationError):
        services.impersonation.start(session, account("d"))
    assert services.audit.list_logs() == []


def test_decision_uses_logged_in_user_not_impersonated_one(services, account):
    # Frank Family has no rights of its own; David's rights apply
    acting = services.impersonation.start(SessionContext(user=account("d")), account("f_acc"))
    switched = services.impersonation.start(acting, account("g_acc"))
    assert switched.user.id == "d"
    assert switched.acting_as.id == "g_acc"


def test_actions_while_impersonating_are_tagged(services, account):
    acting = services.impersonation.start(SessionContext(user=account("d")), account("f_acc"))
    entry = services.impersonation.record(
        acting, "DOC_UPLOAD", "Uploaded statement_march.pdf", target_id="f_acc"
    )
    assert entry.actor_id == "d"
    assert entry.acting_as_id == "f_acc"

    plain = services.impersonation.record(SessionContext(user=account("d")), "DOC_UPLOAD")
    assert plain.acting_as_id is None


def test_stop_returns_plain_session(services, account):
    acting = services.impersonation.start(SessionContext(user=account("b")), account("e"))
    plain = services.impersonation.stop(acting)

    assert not plain.is_impersonating
    assert plain.effective_user.id == "b"
    actions = sorted(e.action for e in services.audit.list_logs())
    assert actions == ["IMPERSONATION_END", "IMPERSONATION_START"]


def test_stop_without_impersonation_is_a_noop(services, account):
    session = SessionContext(user=account("b"))
    assert services.impersonation.stop(session) is session
    assert services.audit.list_logs() == []
