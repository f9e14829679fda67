# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from textdesk.application.use_cases.users.login_user import LoginUserUseCase
from textdesk.application.use_cases.users.logout_user import LogoutUserUseCase
from textdesk.application.use_cases.users.register_user import RegisterUserUseCase
from textdesk.application.use_cases.users.who_am_i import WhoAmIUseCase
from textdesk.domain.users.entities import AuthResult, PublicUser, SessionLookup


class AuthService:
    """Entry point of the auth core for the HTTP layer.

    Every user value it returns is a :class:`PublicUser`. Expected failures
    are raised as domain errors (``ValidationError``, ``WeakPasswordError``,
    ``DuplicateUserError``, ``InvalidCredentialsError``); missing or invalid
    sessions come back as ``None``.
    """

    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        who_am_i_use_case: WhoAmIUseCase,
    ) -> None:
        self._register = register_use_case
        self._login = login_use_case
        self._logout = logout_use_case
        self._who_am_i = who_am_i_use_case

    def register(self, username: str | None, password: str | None) -> AuthResult:
        return self._register.execute(username, password)

    def login(self, username: str | None, password: str | None) -> AuthResult:
        return self._login.execute(username, password)

    def logout(self, session_id: str | None) -> None:
        self._logout.execute(session_id)

    def who_am_i(self, session_id: str | None) -> PublicUser | None:
        return self._who_am_i.execute(session_id)

    def current_session(self, session_id: str | None) -> SessionLookup | None:
        return self._who_am_i.lookup(session_id)
