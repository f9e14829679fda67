# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify

from textdesk.application.services.auth_service import AuthService
from textdesk.interfaces.http.auth_guard import auth_required, current_session
from textdesk.interfaces.http.cookies import SessionCookie
from textdesk.interfaces.http.dto.auth import PublicUserDTO, SessionInfoDTO, dump


class ProtectedController:
    """Routes under ``/api/protected`` that require a valid session cookie."""

    def __init__(self, *, auth: AuthService, cookie: SessionCookie) -> None:
        self._auth = auth
        self._cookie = cookie

    def session_info(self) -> tuple[Response, int]:
        found = current_session()
        payload = SessionInfoDTO(
            user=PublicUserDTO.from_domain(found.user.public()),
            expires_at=found.session.expires_at,
        )
        return jsonify(dump(payload)), 200

    def as_blueprint(self) -> Blueprint:
        guard = auth_required(self._auth, self._cookie)
        bp = Blueprint("protected", __name__, url_prefix="/api/protected")
        bp.add_url_rule(
            "/session",
            endpoint="session_info",
            view_func=guard(self.session_info),
            methods=["GET"],
        )
        return bp
