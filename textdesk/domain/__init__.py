# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Domain layer for the textdesk auth backend."""

from .users.entities import AuthResult, PublicUser, Session, SessionLookup, User
from .users.exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    SessionInvalidError,
    WeakPasswordError,
)

__all__ = [
    "AuthResult",
    "PublicUser",
    "Session",
    "SessionLookup",
    "User",
    "DuplicateUserError",
    "InvalidCredentialsError",
    "SessionInvalidError",
    "WeakPasswordError",
]
