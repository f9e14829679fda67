from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import delete

from textdesk.application.services.credential_store import CredentialStore
from textdesk.application.services.password_hashing import WerkzeugPasswordHasher
from textdesk.application.services.session_store import SessionStore
from textdesk.domain.users.entities import Session
from textdesk.domain.users.exceptions import DuplicateUserError
from textdesk.infrastructure.db import (
    SessionFactory,
    build_engine,
    build_session_factory,
    init_db,
    session_scope,
)
from textdesk.infrastructure.db.models import User
from textdesk.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
)
from textdesk.shared.config import DatabaseConfig
from textdesk.tests.conftest import FakeClock


@pytest.fixture()
def session_factory() -> SessionFactory:
    engine = build_engine(DatabaseConfig(url="sqlite://"))
    init_db(engine)
    return build_session_factory(engine)


@pytest.fixture()
def sql_users(session_factory: SessionFactory) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(session_factory)


@pytest.fixture()
def sql_sessions(session_factory: SessionFactory) -> SqlAlchemySessionRepository:
    return SqlAlchemySessionRepository(session_factory)


@pytest.fixture()
def sql_credentials(
    sql_users: SqlAlchemyUserRepository, hasher: WerkzeugPasswordHasher, clock: FakeClock
) -> CredentialStore:
    return CredentialStore(users=sql_users, password_hasher=hasher, clock=clock)


@pytest.fixture()
def sql_store(
    sql_sessions: SqlAlchemySessionRepository,
    sql_users: SqlAlchemyUserRepository,
    clock: FakeClock,
) -> SessionStore:
    return SessionStore(sessions=sql_sessions, users=sql_users, clock=clock)


def test_user_round_trip(sql_credentials: CredentialStore, clock: FakeClock) -> None:
    user = sql_credentials.create("alice", "secret1")

    assert user.id == 1
    assert user.created_at == clock.now
    assert sql_credentials.get_by_username("alice") == user
    assert sql_credentials.get_by_id(user.id) == user
    assert sql_credentials.validate("alice", "secret1") == user
    assert sql_credentials.get_by_username("ALICE") is None


def test_duplicate_username_is_rejected(
    sql_credentials: CredentialStore, sql_users: SqlAlchemyUserRepository, clock: FakeClock
) -> None:
    sql_credentials.create("carol", "longenough")

    with pytest.raises(DuplicateUserError):
        sql_credentials.create("carol", "other123")
    # Unique index still holds when the pre-check is bypassed
    with pytest.raises(DuplicateUserError):
        sql_users.add("carol", "hash", clock.now)

    assert sql_credentials.count() == 1


def test_session_lifecycle(
    sql_credentials: CredentialStore, sql_store: SessionStore, clock: FakeClock
) -> None:
    user = sql_credentials.create("alice", "secret1")
    token = sql_store.create(user.id)

    found = sql_store.get(token)
    assert found is not None
    assert found.user == user
    assert found.session.expires_at == clock.now + timedelta(days=7)

    sql_store.delete(token)
    assert sql_store.get(token) is None
    sql_store.delete(token)


def test_expired_session_is_purged_on_read(
    sql_credentials: CredentialStore, sql_store: SessionStore, clock: FakeClock
) -> None:
    user = sql_credentials.create("alice", "secret1")
    token = sql_store.create(user.id)

    clock.advance(timedelta(days=7))

    assert sql_store.get(token) is None
    assert sql_store.count() == 0


def test_delete_expired_uses_boundary_inclusive_rule(
    sql_credentials: CredentialStore,
    sql_sessions: SqlAlchemySessionRepository,
    clock: FakeClock,
) -> None:
    user = sql_credentials.create("alice", "secret1")
    now = clock.now
    for name, expires_at in [
        ("past", now - timedelta(hours=1)),
        ("boundary", now),
        ("future", now + timedelta(seconds=1)),
    ]:
        sql_sessions.add(
            Session(id=name, user_id=user.id, expires_at=expires_at, created_at=now)
        )

    assert sql_sessions.delete_expired(now) == 2
    assert sql_sessions.get("future") is not None
    assert sql_sessions.count() == 1


def test_deleting_user_removes_sessions(
    sql_credentials: CredentialStore,
    sql_store: SessionStore,
    session_factory: SessionFactory,
) -> None:
    user = sql_credentials.create("alice", "secret1")
    token = sql_store.create(user.id)

    with session_scope(session_factory) as session:
        session.execute(delete(User).where(User.id == user.id))

    assert sql_store.get(token) is None
    assert sql_store.count() == 0


def test_user_ids_are_not_reused_after_delete(
    sql_users: SqlAlchemyUserRepository,
    session_factory: SessionFactory,
    clock: FakeClock,
) -> None:
    sql_users.add("a", "hash", clock.now)
    newest = sql_users.add("b", "hash", clock.now)

    with session_scope(session_factory) as session:
        session.execute(delete(User).where(User.id == newest.id))

    assert sql_users.add("c", "hash", clock.now).id > newest.id


def test_file_database_uses_wal(tmp_path) -> None:
    engine = build_engine(DatabaseConfig(url=f"sqlite:///{tmp_path / 'auth.db'}"))
    try:
        with engine.connect() as conn:
            assert conn.exec_driver_sql("PRAGMA journal_mode").scalar() == "wal"
            assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1
    finally:
        engine.dispose()
