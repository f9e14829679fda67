# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from datetime import timedelta

from textdesk.domain.users.entities import Session, SessionLookup
from textdesk.domain.users.repositories import SessionRepository, UserRepository
from textdesk.shared.logging import logger
from textdesk.shared.utils.clock import Clock, utcnow

SESSION_TOKEN_BYTES = 32
DEFAULT_SESSION_TTL = timedelta(days=7)


def generate_session_token() -> str:
    return secrets.token_hex(SESSION_TOKEN_BYTES)


class SessionStore:
    """Owns session records; validity is ``now < expires_at`` and a live owner.

    Expired and orphaned sessions are purged the moment they are read, so a
    lookup never returns one. ``sweep_expired`` only bounds storage growth.
    """

    def __init__(
        self,
        *,
        sessions: SessionRepository,
        users: UserRepository,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Clock = utcnow,
    ) -> None:
        self._sessions = sessions
        self._users = users
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def create(self, user_id: int) -> str:
        now = self._clock()
        token = generate_session_token()
        self._sessions.add(
            Session(id=token, user_id=user_id, expires_at=now + self._ttl, created_at=now)
        )
        logger.info(
            f"sessions.create: user={user_id} exp={(now + self._ttl).isoformat()} "
            f"tok={token[:8]}…"
        )
        return token

    def get(self, session_id: str) -> SessionLookup | None:
        session = self._sessions.get(session_id)
        if session is None:
            return None

        if session.is_expired(self._clock()):
            self._sessions.delete(session_id)
            logger.debug(f"sessions.get: purged expired tok={session_id[:8]}…")
            return None

        user = self._users.find_by_id(session.user_id)
        if user is None:
            self._sessions.delete(session_id)
            logger.warning(
                f"sessions.get: purged orphaned session user={session.user_id} "
                f"tok={session_id[:8]}…"
            )
            return None

        return SessionLookup(user=user, session=session)

    def delete(self, session_id: str) -> None:
        self._sessions.delete(session_id)

    def sweep_expired(self) -> int:
        removed = self._sessions.delete_expired(self._clock())
        if removed:
            logger.info(f"sessions.sweep: removed {removed} expired sessions")
        return removed

    def count(self) -> int:
        return self._sessions.count()
