# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g, jsonify, request

from textdesk.application.services.auth_service import AuthService
from textdesk.domain.users.entities import SessionLookup
from textdesk.domain.users.exceptions import SessionInvalidError
from textdesk.interfaces.http.cookies import SessionCookie
from textdesk.shared.logging import logger


def current_session() -> SessionLookup:
    """Session resolved by :func:`auth_required` for the current request."""
    return g.auth_session


def auth_required(auth: AuthService, cookie: SessionCookie) -> Callable:
    """Hard gate: 401 and a cleared cookie unless the session cookie is valid."""

    def decorator(f: Callable) -> Callable:
        @wraps(f)
        def inner(*args: Any, **kwargs: Any):
            token = cookie.read(request)
            found = auth.current_session(token)
            if found is None:
                logger.warning(
                    f"Auth failed (session missing/expired) on {request.method} {request.path}"
                )
                error = SessionInvalidError()
                response = jsonify(error.to_dict())
                cookie.clear(response)
                return response, error.status

            g.user_id = found.user.id
            g.auth_session = found
            logger.debug(f"Auth OK: user={found.user.id} {request.method} {request.path}")
            return f(*args, **kwargs)

        return inner

    return decorator


__all__ = ["auth_required", "current_session"]
