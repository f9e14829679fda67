# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from textdesk.application.services.auth_service import AuthService
from textdesk.infrastructure.audit import AuditAction, audit_log
from textdesk.interfaces.http.cookies import SessionCookie
from textdesk.interfaces.http.dto.auth import (
    AuthSuccessDTO,
    CurrentUserDTO,
    LoginRequestDTO,
    LogoutDTO,
    PublicUserDTO,
    RegisterRequestDTO,
    dump,
)
from textdesk.shared.errors.base import AppError
from textdesk.shared.errors.validation import raise_validation_error
from textdesk.shared.logging import logger


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


class AuthController:
    def __init__(self, *, auth: AuthService, cookie: SessionCookie) -> None:
        self._auth = auth
        self._cookie = cookie

    def me(self) -> tuple[Response, int]:
        token = self._cookie.read(request)
        user = self._auth.who_am_i(token)

        if user is None:
            response = jsonify(dump(CurrentUserDTO()))
            if token:
                self._cookie.clear(response)
            return response, 200

        g.user_id = user.id
        payload = CurrentUserDTO(user=PublicUserDTO.from_domain(user), authenticated=True)
        return jsonify(dump(payload)), 200

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            result = self._auth.register(dto.username, dto.password)
        except AppError as exc:
            audit_log(
                AuditAction.REGISTER_FAILED,
                ip_address=_get_client_ip(),
                details={"username": dto.username, "error": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.REGISTER,
            user_id=result.user.id,
            ip_address=_get_client_ip(),
            details={"username": result.user.username},
            success=True,
        )

        payload = AuthSuccessDTO(user=PublicUserDTO.from_domain(result.user))
        response = jsonify(dump(payload))
        self._cookie.set(response, result.session_id)
        logger.info(f"auth.register: ok user_id={result.user.id}")
        return response, 200

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()

        try:
            result = self._auth.login(dto.username, dto.password)
        except AppError as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"username": dto.username, "error": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=result.user.id,
            ip_address=ip_address,
            details={"username": result.user.username},
            success=True,
        )

        payload = AuthSuccessDTO(user=PublicUserDTO.from_domain(result.user))
        response = jsonify(dump(payload))
        self._cookie.set(response, result.session_id)
        logger.info(f"auth.login: ok user_id={result.user.id}")
        return response, 200

    def logout(self) -> tuple[Response, int]:
        self._auth.logout(self._cookie.read(request))

        audit_log(
            AuditAction.LOGOUT,
            ip_address=_get_client_ip(),
            success=True,
        )

        response = jsonify(dump(LogoutDTO()))
        self._cookie.clear(response)
        logger.info("auth.logout: ok")
        return response, 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        return bp
