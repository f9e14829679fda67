# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from textdesk.shared.errors.base import DomainError


class WeakPasswordError(DomainError):
    code = "weak_password"
    status = HTTPStatus.BAD_REQUEST

    def __init__(self, min_length: int) -> None:
        super().__init__(context={"min_length": min_length})


class DuplicateUserError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED


class SessionInvalidError(DomainError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED
