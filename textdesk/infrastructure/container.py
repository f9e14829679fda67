# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine

from textdesk.application.services.auth_service import AuthService
from textdesk.application.services.credential_store import CredentialStore
from textdesk.application.services.password_hashing import WerkzeugPasswordHasher
from textdesk.application.services.session_store import SessionStore
from textdesk.application.services.session_sweeper import SessionSweeper
from textdesk.application.use_cases.users.login_user import LoginUserUseCase
from textdesk.application.use_cases.users.logout_user import LogoutUserUseCase
from textdesk.application.use_cases.users.register_user import RegisterUserUseCase
from textdesk.application.use_cases.users.who_am_i import WhoAmIUseCase
from textdesk.domain.users.repositories import SessionRepository, UserRepository
from textdesk.infrastructure.db import (
    SessionFactory,
    build_engine,
    build_session_factory,
    init_db,
)
from textdesk.infrastructure.repositories.users.memory_user_repository import (
    InMemorySessionRepository,
    InMemoryUserRepository,
)
from textdesk.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
)
from textdesk.interfaces.http.controllers.auth_controller import AuthController
from textdesk.interfaces.http.controllers.protected_controller import ProtectedController
from textdesk.interfaces.http.cookies import SessionCookie
from textdesk.shared.config import AppConfig, load_config
from textdesk.shared.utils.clock import Clock, utcnow


class Container:
    def __init__(self, config: AppConfig | None = None, *, clock: Clock = utcnow) -> None:
        self.config = config or load_config()
        self.clock = clock

    @property
    def uses_database(self) -> bool:
        return self.config.storage_backend == "sqlalchemy"

    # Persistence

    @cached_property
    def engine(self) -> Engine:
        engine = build_engine(self.config.database)
        init_db(engine)
        return engine

    @cached_property
    def session_factory(self) -> SessionFactory:
        return build_session_factory(self.engine)

    @cached_property
    def user_repository(self) -> UserRepository:
        if self.uses_database:
            return SqlAlchemyUserRepository(self.session_factory)
        return InMemoryUserRepository()

    @cached_property
    def session_repository(self) -> SessionRepository:
        if self.uses_database:
            return SqlAlchemySessionRepository(self.session_factory)
        return InMemorySessionRepository()

    # Auth core

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(
            method=self.config.auth.password_hash_method,
            salt_length=self.config.auth.password_salt_length,
        )

    @cached_property
    def credential_store(self) -> CredentialStore:
        return CredentialStore(
            users=self.user_repository,
            password_hasher=self.password_hasher,
            clock=self.clock,
        )

    @cached_property
    def session_store(self) -> SessionStore:
        return SessionStore(
            sessions=self.session_repository,
            users=self.user_repository,
            ttl=timedelta(seconds=self.config.session.ttl_seconds),
            clock=self.clock,
        )

    @cached_property
    def session_sweeper(self) -> SessionSweeper:
        return SessionSweeper(
            self.session_store, interval_seconds=self.config.session.sweep_interval
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            credentials=self.credential_store,
            sessions=self.session_store,
            min_password_length=self.config.auth.min_password_length,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            credentials=self.credential_store,
            sessions=self.session_store,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_store)

    @cached_property
    def who_am_i_use_case(self) -> WhoAmIUseCase:
        return WhoAmIUseCase(sessions=self.session_store)

    @cached_property
    def auth_service(self) -> AuthService:
        return AuthService(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            who_am_i_use_case=self.who_am_i_use_case,
        )

    # HTTP

    @cached_property
    def session_cookie(self) -> SessionCookie:
        return SessionCookie.from_config(self.config)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(auth=self.auth_service, cookie=self.session_cookie)

    @cached_property
    def protected_controller(self) -> ProtectedController:
        return ProtectedController(auth=self.auth_service, cookie=self.session_cookie)
