# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from textdesk.domain.users.entities import Session as DomainSession
from textdesk.domain.users.entities import User as DomainUser
from textdesk.domain.users.exceptions import DuplicateUserError
from textdesk.domain.users.repositories import SessionRepository, UserRepository
from textdesk.infrastructure.db.models import SessionRecord, User
from textdesk.infrastructure.db.session import SessionFactory, session_scope
from textdesk.shared.utils.clock import as_utc


def _to_domain_user(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
    )


def _to_domain_session(row: SessionRecord) -> DomainSession:
    return DomainSession(
        id=row.id,
        user_id=row.user_id,
        expires_at=as_utc(row.expires_at),
        created_at=as_utc(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def find_by_username(self, username: str) -> DomainUser | None:
        with session_scope(self._session_factory) as session:
            row = session.scalars(select(User).where(User.username == username)).first()
            return _to_domain_user(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with session_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain_user(row) if row else None

    def add(self, username: str, password_hash: str, created_at: datetime) -> DomainUser:
        try:
            with session_scope(self._session_factory) as session:
                row = User(username=username, password_hash=password_hash, created_at=created_at)
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain_user(row)
        except IntegrityError as exc:
            # Lost a registration race on the unique username index
            raise DuplicateUserError() from exc

    def count(self) -> int:
        with session_scope(self._session_factory) as session:
            return int(session.scalar(select(func.count()).select_from(User)) or 0)


class SqlAlchemySessionRepository(SessionRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def add(self, session_record: DomainSession) -> None:
        with session_scope(self._session_factory) as session:
            session.add(
                SessionRecord(
                    id=session_record.id,
                    user_id=session_record.user_id,
                    expires_at=session_record.expires_at,
                    created_at=session_record.created_at,
                )
            )

    def get(self, session_id: str) -> DomainSession | None:
        with session_scope(self._session_factory) as session:
            row = session.get(SessionRecord, session_id)
            return _to_domain_session(row) if row else None

    def delete(self, session_id: str) -> None:
        with session_scope(self._session_factory) as session:
            session.execute(delete(SessionRecord).where(SessionRecord.id == session_id))

    def delete_expired(self, now: datetime) -> int:
        # Same rule as Session.is_expired: expires_at <= now
        with session_scope(self._session_factory) as session:
            result = session.execute(
                delete(SessionRecord).where(SessionRecord.expires_at <= now)
            )
            return int(result.rowcount or 0)

    def count(self) -> int:
        with session_scope(self._session_factory) as session:
            return int(session.scalar(select(func.count()).select_from(SessionRecord)) or 0)
