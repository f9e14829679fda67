from __future__ import annotations

import pytest

from textdesk.application.services.credential_store import CredentialStore
from textdesk.domain.users.exceptions import DuplicateUserError


def test_create_hashes_password_and_assigns_ids(
    credentials: CredentialStore, clock
) -> None:
    alice = credentials.create("alice", "secret1")
    bob = credentials.create("bob", "secret2")

    assert (alice.id, bob.id) == (1, 2)
    assert alice.password_hash != "secret1"
    assert alice.created_at == clock.now
    assert credentials.get_by_id(1) == alice
    assert credentials.get_by_username("bob") == bob


def test_create_duplicate_fails_without_mutating(credentials: CredentialStore) -> None:
    original = credentials.create("carol", "longenough")

    with pytest.raises(DuplicateUserError):
        credentials.create("carol", "other123")

    assert credentials.count() == 1
    assert credentials.get_by_username("carol") == original
    assert credentials.validate("carol", "longenough") == original
    assert credentials.validate("carol", "other123") is None


def test_usernames_match_exactly(credentials: CredentialStore) -> None:
    credentials.create("alice", "secret1")

    assert credentials.get_by_username("Alice") is None
    assert credentials.get_by_username("alice ") is None
    # Case variants are distinct accounts
    assert credentials.create("Alice", "secret1").id == 2


def test_validate(credentials: CredentialStore) -> None:
    user = credentials.create("alice", "secret1")

    assert credentials.validate("alice", "secret1") == user
    assert credentials.validate("alice", "wrongpass") is None
    assert credentials.validate("nobody", "secret1") is None


def test_ids_are_never_reused_after_failed_create(credentials: CredentialStore) -> None:
    credentials.create("alice", "secret1")
    with pytest.raises(DuplicateUserError):
        credentials.create("alice", "secret1")

    assert credentials.create("bob", "secret1").id == 2
