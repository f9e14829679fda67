# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from textdesk.application.services.credential_store import CredentialStore
from textdesk.application.services.session_store import SessionStore
from textdesk.domain.users.entities import AuthResult
from textdesk.domain.users.exceptions import WeakPasswordError
from textdesk.shared.errors.base import ValidationError

DEFAULT_MIN_PASSWORD_LENGTH = 6


def require_credentials(username: str | None, password: str | None) -> tuple[str, str]:
    if not username or not password:
        raise ValidationError(context={"fields": ["password", "username"]})
    invalid = [
        name
        for name, value in (("password", password), ("username", username))
        if not _encodable(value)
    ]
    if invalid:
        # Lone surrogates cannot be hashed or stored
        raise ValidationError(context={"fields": invalid})
    return username, password


def _encodable(value: str) -> bool:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        credentials: CredentialStore,
        sessions: SessionStore,
        min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
    ) -> None:
        self._credentials = credentials
        self._sessions = sessions
        self._min_password_length = min_password_length

    def execute(self, username: str | None, password: str | None) -> AuthResult:
        username, password = require_credentials(username, password)
        if len(password) < self._min_password_length:
            raise WeakPasswordError(self._min_password_length)

        user = self._credentials.create(username, password)
        token = self._sessions.create(user.id)
        return AuthResult(user=user.public(), session_id=token)
