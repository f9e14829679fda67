from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest

from textdesk.application.services.credential_store import CredentialStore
from textdesk.application.services.password_hashing import WerkzeugPasswordHasher
from textdesk.application.services.session_store import SessionStore
from textdesk.infrastructure.repositories.users.memory_user_repository import (
    InMemorySessionRepository,
    InMemoryUserRepository,
)
from textdesk.shared.config import AppConfig, AuthConfig, SessionConfig

# Cheap work factor so the suite stays fast; production uses scrypt
FAST_HASH_METHOD = "pbkdf2:sha256:1000"


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(method=FAST_HASH_METHOD)


@pytest.fixture()
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def session_repo() -> InMemorySessionRepository:
    return InMemorySessionRepository()


@pytest.fixture()
def credentials(
    user_repo: InMemoryUserRepository, hasher: WerkzeugPasswordHasher, clock: FakeClock
) -> CredentialStore:
    return CredentialStore(users=user_repo, password_hasher=hasher, clock=clock)


@pytest.fixture()
def sessions(
    session_repo: InMemorySessionRepository,
    user_repo: InMemoryUserRepository,
    clock: FakeClock,
) -> SessionStore:
    return SessionStore(sessions=session_repo, users=user_repo, clock=clock)


def make_config(**overrides: object) -> AppConfig:
    values: dict[str, object] = {
        "storage_backend": "memory",
        "auth": AuthConfig(password_hash_method=FAST_HASH_METHOD),
        "session": SessionConfig(sweeper_enabled=False),
    }
    values.update(overrides)
    return AppConfig(**values)  # type: ignore[arg-type]


@pytest.fixture()
def config() -> Iterator[AppConfig]:
    yield make_config()
