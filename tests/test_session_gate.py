from datetime import timedelta

import pytest

from core import session_gate
from core.session_gate import (
    AuthStatus,
    SessionChange,
    SessionEvent,
    SessionGate,
    is_protected,
)


def _record(auth):
    seen = []
    subscription = auth.on_session_change(seen.append)
    return seen, subscription


def test_unsubscribe_is_idempotent(standalone_auth):
    seen, subscription = _record(standalone_auth)
    assert subscription.active

    subscription.unsubscribe()
    subscription.unsubscribe()
    assert not subscription.active

    session = standalone_auth._issue(1, "a@test.com")
    standalone_auth.sign_out(session.access_token)
    assert seen == []


def test_subscription_as_context_manager(standalone_auth):
    with standalone_auth.on_session_change(lambda change: None) as subscription:
        assert subscription.active
    assert not subscription.active


def test_sign_out_notifies_listeners(standalone_auth):
    seen, subscription = _record(standalone_auth)
    session = standalone_auth._issue(5, "five@test.com")

    standalone_auth.sign_out(session.access_token)

    assert seen == [SessionChange(SessionEvent.SIGNED_OUT, session.session_id, 5, None)]
    assert standalone_auth.get_session(session.access_token) is None
    subscription.unsubscribe()


def test_expired_revocations_are_dropped(standalone_auth, monkeypatch):
    monkeypatch.setattr(session_gate, "REVOCATION_TTL", timedelta(seconds=-1))
    for n in range(50):
        standalone_auth.sign_out(standalone_auth._issue(n, f"u{n}@test.com").access_token)
    # Each sign-out prunes what came before it
    assert len(standalone_auth._revoked) == 1

    monkeypatch.setattr(session_gate, "REVOCATION_TTL", timedelta(days=7))
    live = standalone_auth._issue(99, "live@test.com")
    standalone_auth.sign_out(live.access_token)
    assert set(standalone_auth._revoked) == {live.session_id}
    assert standalone_auth.get_session(live.access_token) is None


def test_failing_listener_does_not_stop_others(standalone_auth):
    def broken(change):
        raise RuntimeError("listener bug")

    standalone_auth.on_session_change(broken)
    seen, _ = _record(standalone_auth)

    session = standalone_auth._issue(2, "two@test.com")
    standalone_auth.sign_out(session.access_token)

    assert len(seen) == 1


def test_sign_out_with_bad_token_is_ignored(standalone_auth):
    seen, _ = _record(standalone_auth)
    standalone_auth.sign_out("not-a-jwt")
    standalone_auth.sign_out(None)
    assert seen == []


def test_refresh_token_is_not_an_access_token(standalone_auth):
    session = standalone_auth._issue(3, "three@test.com")
    assert standalone_auth.get_session(session.refresh_token) is None
    assert standalone_auth.get_session(session.access_token).user_id == 3


def test_gate_starts_unknown(standalone_auth):
    gate = SessionGate(standalone_auth)
    assert gate.status is AuthStatus.UNKNOWN
    assert gate.is_loading
    assert gate.resolve_route("/login") is None
    assert gate.resolve_route("/dashboard") is None
    assert gate.resolve_route("/") == "/login"


def test_mount_with_session_is_authenticated(standalone_auth):
    session = standalone_auth._issue(10, "ten@test.com")
    with SessionGate(standalone_auth).mount(session.access_token) as gate:
        assert gate.status is AuthStatus.AUTHENTICATED
        assert gate.session.user_id == 10
        assert gate.resolve_route("/login") == "/dashboard"
        assert gate.resolve_route("/dashboard") is None
        assert gate.resolve_route("/assets") is None


@pytest.mark.parametrize("token", [None, "", "garbage"])
def test_mount_without_session_is_unauthenticated(standalone_auth, token):
    with SessionGate(standalone_auth).mount(token) as gate:
        assert gate.status is AuthStatus.UNAUTHENTICATED
        assert gate.session is None
        assert gate.resolve_route("/dashboard") == "/login"
        assert gate.resolve_route("/assets") == "/login"
        assert gate.resolve_route("/assets/12") == "/login"
        assert gate.resolve_route("/login") is None


def test_root_always_goes_to_login(standalone_auth):
    session = standalone_auth._issue(11, "eleven@test.com")
    with SessionGate(standalone_auth).mount(session.access_token) as gate:
        assert gate.resolve_route("/") == "/login"


def test_sign_out_flips_mounted_gate(standalone_auth):
    session = standalone_auth._issue(12, "twelve@test.com")
    with SessionGate(standalone_auth).mount(session.access_token) as gate:
        assert gate.is_authenticated

        standalone_auth.sign_out(session.access_token)

        assert gate.status is AuthStatus.UNAUTHENTICATED
        assert gate.session is None
        assert gate.resolve_route("/dashboard") == "/login"


def test_other_session_sign_out_is_ignored(standalone_auth):
    mine = standalone_auth._issue(13, "thirteen@test.com")
    theirs = standalone_auth._issue(13, "thirteen@test.com")

    with SessionGate(standalone_auth).mount(mine.access_token) as gate:
        standalone_auth.sign_out(theirs.access_token)
        assert gate.is_authenticated
        assert gate.session.session_id == mine.session_id


def test_teardown_unsubscribes(standalone_auth):
    session = standalone_auth._issue(14, "fourteen@test.com")
    gate = SessionGate(standalone_auth).mount(session.access_token)
    assert len(standalone_auth._listeners) == 1

    gate.teardown()
    gate.teardown()
    assert standalone_auth._listeners == []

    # No longer observed: the gate keeps its last state
    standalone_auth.sign_out(session.access_token)
    assert gate.is_authenticated


def test_remount_does_not_subscribe_twice(standalone_auth):
    gate = SessionGate(standalone_auth)
    gate.mount(None)
    gate.mount(None)
    assert len(standalone_auth._listeners) == 1
    gate.teardown()


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/dashboard", True),
        ("/assets", True),
        ("/assets/new", True),
        ("/assets-archive", False),
        ("/login", False),
        ("/", False),
    ],
)
def test_is_protected(path, expected):
    assert is_protected(path) is expected
