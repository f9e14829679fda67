# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from textdesk.application.services.credential_store import CredentialStore
from textdesk.application.services.session_store import SessionStore
from textdesk.application.use_cases.users.register_user import require_credentials
from textdesk.domain.users.entities import AuthResult
from textdesk.domain.users.exceptions import InvalidCredentialsError
from textdesk.shared.logging import logger


class LoginUserUseCase:
    def __init__(
        self,
        *,
        credentials: CredentialStore,
        sessions: SessionStore,
    ) -> None:
        self._credentials = credentials
        self._sessions = sessions

    def execute(self, username: str | None, password: str | None) -> AuthResult:
        username, password = require_credentials(username, password)

        user = self._credentials.validate(username, password)
        if user is None:
            logger.warning("auth.login: invalid credentials")
            raise InvalidCredentialsError()

        # Every login gets its own session; existing ones stay valid.
        token = self._sessions.create(user.id)
        return AuthResult(user=user.public(), session_id=token)
