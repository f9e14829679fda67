"""Use-case for revoking sessions."""

from __future__ import annotations

from textdesk.application.services.session_store import SessionStore


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionStore) -> None:
        self._sessions = sessions

    def execute(self, session_id: str | None) -> None:
        if session_id:
            self._sessions.delete(session_id)
