"""Tests for per-user session context storage."""

from datetime import datetime, timedelta

import pytest

from models.wellness_models import Gender, HealthContext
from services.session_store import SessionStore


@pytest.fixture
def store() -> SessionStore:
    return SessionStore(timeout=timedelta(minutes=30))


def _backdate(store: SessionStore, user_id: str, minutes: int) -> None:
    context, _ = store._sessions[user_id]
    store._sessions[user_id] = (context, datetime.now() - timedelta(minutes=minutes))


def test_save_and_get(store):
    context = HealthContext(age=40, gender=Gender.MALE)
    store.save("user-1", context)
    assert store.get("user-1") == context
    assert store.get("user-2") is None


def test_contexts_are_isolated_per_user(store):
    store.save("alice", HealthContext(age=30))
    store.save("bob", HealthContext(age=60))
    assert store.get("alice").age == 30
    assert store.get("bob").age == 60


def test_expired_session_is_dropped(store):
    store.save("user-1", HealthContext(age=40))
    _backdate(store, "user-1", minutes=31)
    assert store.get("user-1") is None
    assert len(store) == 0


def test_clear_session(store):
    store.save("user-1", HealthContext())
    assert store.clear_session("user-1") is True
    assert store.clear_session("user-1") is False
    assert store.get("user-1") is None


def test_cleanup_expired(store):
    store.save("old", HealthContext())
    store.save("fresh", HealthContext())
    _backdate(store, "old", minutes=45)

    assert store.cleanup_expired() == 1
    assert len(store) == 1
    assert store.get("fresh") is not None


def test_default_timeout_from_settings():
    assert SessionStore().session_timeout > timedelta(0)


def test_save_sweeps_users_who_never_return():
    store = SessionStore(timeout=timedelta(minutes=30), cleanup_interval=10)
    for i in range(50):
        store.save(f"old-{i}", HealthContext())
    for i in range(50):
        _backdate(store, f"old-{i}", minutes=31)

    for i in range(9):
        store.save(f"new-{i}", HealthContext())
    assert len(store) == 59

    store.save("new-9", HealthContext())
    assert len(store) == 10
    assert store.get("new-0") is not None
