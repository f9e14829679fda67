# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from threading import Lock

from textdesk.domain.users.entities import Session, User
from textdesk.domain.users.exceptions import DuplicateUserError
from textdesk.domain.users.repositories import SessionRepository, UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._by_id: dict[int, User] = {}
        self._id_by_username: dict[str, int] = {}
        self._next_id = 1
        self._lock = Lock()

    def find_by_username(self, username: str) -> User | None:
        with self._lock:
            user_id = self._id_by_username.get(username)
            return self._by_id.get(user_id) if user_id is not None else None

    def find_by_id(self, user_id: int) -> User | None:
        with self._lock:
            return self._by_id.get(user_id)

    def add(self, username: str, password_hash: str, created_at: datetime) -> User:
        with self._lock:
            if username in self._id_by_username:
                raise DuplicateUserError()
            user = User(
                id=self._next_id,
                username=username,
                password_hash=password_hash,
                created_at=created_at,
            )
            self._next_id += 1
            self._by_id[user.id] = user
            self._id_by_username[username] = user.id
            return user

    def count(self) -> int:
        with self._lock:
            return len(self._by_id)


class InMemorySessionRepository(SessionRepository):
    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._lock = Lock()

    def add(self, session: Session) -> None:
        with self._lock:
            self._sessions[session.id] = session

    def get(self, session_id: str) -> Session | None:
        with self._lock:
            return self._sessions.get(session_id)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def delete_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [sid for sid, s in self._sessions.items() if s.is_expired(now)]
            for sid in expired:
                del self._sessions[sid]
            return len(expired)

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)
