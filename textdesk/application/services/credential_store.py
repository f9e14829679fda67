# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from textdesk.domain.users.entities import User
from textdesk.domain.users.exceptions import DuplicateUserError
from textdesk.domain.users.repositories import PasswordHasher, UserRepository
from textdesk.shared.logging import logger
from textdesk.shared.utils.clock import Clock, utcnow


class CredentialStore:
    """Registry of users keyed by id and by exact username."""

    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        clock: Clock = utcnow,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._clock = clock

    def get_by_id(self, user_id: int) -> User | None:
        return self._users.find_by_id(user_id)

    def get_by_username(self, username: str) -> User | None:
        return self._users.find_by_username(username)

    def create(self, username: str, password: str) -> User:
        if self._users.find_by_username(username) is not None:
            raise DuplicateUserError()
        hashed = self._password_hasher.hash(password)
        user = self._users.add(username, hashed, self._clock())
        logger.info(f"credentials.create: user_id={user.id}")
        return user

    def validate(self, username: str, password: str) -> User | None:
        user = self._users.find_by_username(username)
        # No hash comparison for unknown users
        if user is None:
            return None
        if not self._password_hasher.verify(password, user.password_hash):
            return None
        return user

    def count(self) -> int:
        return self._users.count()
