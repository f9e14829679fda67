"""Use-case for resolving the caller behind a session token."""

from __future__ import annotations

from textdesk.application.services.session_store import SessionStore
from textdesk.domain.users.entities import PublicUser, SessionLookup


class WhoAmIUseCase:
    def __init__(self, *, sessions: SessionStore) -> None:
        self._sessions = sessions

    def lookup(self, session_id: str | None) -> SessionLookup | None:
        if not session_id:
            return None
        return self._sessions.get(session_id)

    def execute(self, session_id: str | None) -> PublicUser | None:
        found = self.lookup(session_id)
        if found is None:
            return None
        return found.user.public()
