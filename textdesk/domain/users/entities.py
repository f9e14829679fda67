# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class PublicUser:
    """User as exposed outside the auth core; never carries the password hash."""

    id: int
    username: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class User:
    id: int
    username: str
    password_hash: str
    created_at: datetime

    def public(self) -> PublicUser:
        return PublicUser(id=self.id, username=self.username, created_at=self.created_at)


@dataclass(slots=True, frozen=True)
class Session:
    id: str
    user_id: int
    expires_at: datetime
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Single expiry predicate shared by lookups and the background sweep."""
        return self.expires_at <= now


@dataclass(slots=True, frozen=True)
class SessionLookup:
    user: User
    session: Session


@dataclass(slots=True, frozen=True)
class AuthResult:
    user: PublicUser
    session_id: str
