"""Authorization decision tests over the seeded demo roster.

Roster: a (super admin), b/c (admins), d/e (associates),
f_acc/g_acc assigned to d, h_acc/i_acc/j_acc assigned to e.
"""

import pytest

from wealthguard.core.exceptions import AuthorizationError
from wealthguard.schemas.schemas import Account, Action, Severity, UserRole


def _add(services, account_id, role, **kwargs):
    return services.accounts.add_account(
        Account(id=account_id, name=account_id.title(), role=role, **kwargs)
    )


def _unknown_role(account_id):
    # bypass validation to model a role this build does not know about
    return Account.model_construct(id=account_id, name="Ghost", role="AUDITOR")


# ==================== has_permission ====================

@pytest.mark.parametrize("action", list(Action))
@pytest.mark.parametrize("account_id", ["a", "b", "d", "f_acc"])
def test_self_access_always_allowed(services, account, account_id, action):
    assert services.auth.has_permission(account(account_id), account_id, action)


def test_self_access_needs_no_grant(empty_services):
    customer = _add(empty_services, "f", UserRole.CUSTOMER)
    assert empty_services.auth.has_permission(customer, "f", Action.DELETE)


def test_has_permission_requires_matching_grant(services, account):
    david = account("d")
    assert services.auth.has_permission(david, "f_acc", Action.VIEW)
    assert services.auth.has_permission(david, "f_acc", Action.IMPERSONATE)
    assert not services.auth.has_permission(david, "f_acc", Action.EDIT)
    assert not services.auth.has_permission(david, "h_acc", Action.VIEW)


def test_has_permission_ignores_hierarchy(services, account):
    frank = account("f_acc")
    services.permissions.upsert_grant("f_acc", "a", [Action.VIEW])
    assert services.auth.has_permission(frank, "a", Action.VIEW)


def test_has_permission_with_empty_grant_denies(services, account):
    services.permissions.upsert_grant("d", "f_acc", [])
    assert not services.auth.has_permission(account("d"), "f_acc", Action.VIEW)


def test_has_permission_unknown_target_denies(services, account):
    assert not services.auth.has_permission(account("b"), "nobody", Action.VIEW)


# ==================== can_manage_permissions ====================

def test_rank_without_grant_is_not_enough(services, account):
    # Bob holds VIEW, EDIT, IMPERSONATE on Eve but not MANAGE_PERMISSIONS
    bob, eve = account("b"), account("e")
    assert services.auth.has_permission(bob, "e", Action.EDIT)
    assert not services.auth.can_manage_permissions(bob, eve)


def test_rank_plus_grant_allows(services, account):
    services.permissions.upsert_grant("b", "e", [Action.MANAGE_PERMISSIONS])
    assert services.auth.can_manage_permissions(account("b"), account("e"))


def test_super_admin_manages_seeded_accounts(services, account):
    alice = account("a")
    for target_id in ["b", "c", "d", "e", "f_acc", "j_acc"]:
        assert services.auth.can_manage_permissions(alice, account(target_id))


def test_grant_without_rank_is_not_enough(services, account):
    services.permissions.upsert_grant("e", "b", [Action.MANAGE_PERMISSIONS])
    services.permissions.upsert_grant("c", "b", [Action.MANAGE_PERMISSIONS])
    assert not services.auth.can_manage_permissions(account("e"), account("b"))
    assert not services.auth.can_manage_permissions(account("c"), account("b"))


def test_super_admin_may_manage_another_super_admin(services, account):
    alice2 = _add(services, "a2", UserRole.SUPER_ADMIN)
    alice = account("a")
    assert not services.auth.can_manage_permissions(alice, alice2)

    services.permissions.upsert_grant("a", "a2", [Action.MANAGE_PERMISSIONS])
    assert services.auth.can_manage_permissions(alice, alice2)


def test_super_admin_may_not_manage_herself(services, account):
    alice = account("a")
    services.permissions.upsert_grant("a", "a", list(Action))
    assert services.auth.has_permission(alice, "a", Action.MANAGE_PERMISSIONS)
    assert not services.auth.can_manage_permissions(alice, alice)


def test_unknown_role_actor_cannot_manage(services, account):
    ghost = _unknown_role("ghost")
    services.permissions.upsert_grant("ghost", "f_acc", list(Action))
    assert not services.auth.can_manage_permissions(ghost, account("f_acc"))


# ==================== can_impersonate ====================

def test_no_self_impersonation_even_with_grant(services, account):
    alice = account("a")
    services.permissions.upsert_grant("a", "a", [Action.IMPERSONATE])
    assert not services.auth.can_impersonate(alice, alice)


def test_associate_impersonates_assigned_family(services, account):
    david = account("d")
    assert services.auth.can_impersonate(david, account("f_acc"))
    assert services.auth.can_impersonate(david, account("g_acc"))
    assert not services.auth.can_impersonate(david, account("h_acc"))


def test_impersonation_is_strictly_downward(services, account):
    services.permissions.upsert_grant("d", "b", [Action.IMPERSONATE])
    services.permissions.upsert_grant("b", "c", [Action.IMPERSONATE])
    assert not services.auth.can_impersonate(account("d"), account("b"))
    assert not services.auth.can_impersonate(account("b"), account("c"))


def test_impersonation_requires_grant(services, account):
    services.permissions.upsert_grant("b", "e", [Action.VIEW])
    assert not services.auth.can_impersonate(account("b"), account("e"))


def test_super_admin_impersonates_another_super_admin_with_grant(services, account):
    alice2 = _add(services, "a2", UserRole.SUPER_ADMIN)
    alice = account("a")
    assert not services.auth.can_impersonate(alice, alice2)

    services.permissions.upsert_grant("a", "a2", [Action.IMPERSONATE])
    assert services.auth.can_impersonate(alice, alice2)


def test_unknown_role_cannot_impersonate(services, account):
    ghost = _unknown_role("ghost")
    services.permissions.upsert_grant("ghost", "f_acc", [Action.IMPERSONATE])
    assert not services.auth.can_impersonate(ghost, account("f_acc"))


# ==================== can_view_logs ====================

def test_super_admin_always_views_logs(empty_services):
    alice = _add(empty_services, "a", UserRole.SUPER_ADMIN)
    assert empty_services.auth.can_view_logs(alice)


def test_view_logs_needs_a_grant_for_others(services, account):
    bob = account("b")
    assert not services.auth.can_view_logs(bob)

    services.permissions.upsert_grant("b", "SYSTEM", [Action.VIEW_LOGS])
    assert services.auth.can_view_logs(bob)


def test_view_logs_grant_must_belong_to_actor(services, account):
    services.permissions.upsert_grant("c", "b", [Action.VIEW_LOGS])
    assert not services.auth.can_view_logs(account("b"))


def test_list_audit_logs_gated(services, account):
    services.auth.login("b")
    with pytest.raises(AuthorizationError):
        services.auth.list_audit_logs(account("b"))
    assert [e.action for e in services.auth.list_audit_logs(account("a"))] == ["LOGIN"]


# ==================== get_visible_users ====================

def test_super_admin_sees_everyone_else_once(services, account):
    visible = services.auth.get_visible_users(account("a"))
    ids = [a.id for a in visible]
    assert ids == ["b", "c", "d", "e", "f_acc", "g_acc", "h_acc", "i_acc", "j_acc"]
    assert len(ids) == len(set(ids))


def test_visibility_follows_view_grants_in_listing_order(services, account):
    services.permissions.upsert_grant("d", "c", [Action.VIEW])
    ids = [a.id for a in services.auth.get_visible_users(account("d"))]
    assert ids == ["c", "f_acc", "g_acc"]


def test_grant_without_view_does_not_reveal(services, account):
    services.permissions.upsert_grant("d", "h_acc", [Action.EDIT])
    ids = [a.id for a in services.auth.get_visible_users(account("d"))]
    assert "h_acc" not in ids


def test_no_grants_means_nothing_visible(empty_services):
    eve = _add(empty_services, "e", UserRole.ASSOCIATE)
    _add(empty_services, "h", UserRole.CUSTOMER, assigned_to="e")
    assert empty_services.auth.get_visible_users(eve) == []


def test_visibility_ignores_non_account_targets(services, account):
    services.permissions.upsert_grant("b", "SYSTEM", [Action.VIEW])
    ids = [a.id for a in services.auth.get_visible_users(account("b"))]
    assert ids == ["d", "e", "f_acc", "g_acc", "h_acc", "i_acc", "j_acc"]


# ==================== login ====================

def test_login_records_info_entry(services):
    alice = services.auth.login("a")
    assert alice is not None and alice.name == "Alice"

    logs = services.audit.list_logs()
    assert len(logs) == 1
    assert logs[0].actor_id == "a"
    assert logs[0].action == "LOGIN"
    assert logs[0].severity == Severity.INFO
    assert logs[0].details == "Alice logged into the system"


def test_login_unknown_id_returns_none_and_logs_nothing(services):
    assert services.auth.login("zzz") is None
    assert services.audit.list_logs() == []


def test_role_level_exposed_on_service(services):
    assert services.auth.role_level(UserRole.ADMIN) == 3
    assert services.auth.role_level("nope") == 0
