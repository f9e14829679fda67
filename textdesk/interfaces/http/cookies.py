# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from flask import Request, Response

from textdesk.shared.config import AppConfig


@dataclass(slots=True, frozen=True)
class SessionCookie:
    name: str
    max_age: int
    secure: bool
    samesite: str

    @classmethod
    def from_config(cls, config: AppConfig) -> "SessionCookie":
        # max_age must track the session store TTL
        return cls(
            name=config.session.cookie_name,
            max_age=config.session.ttl_seconds,
            secure=config.cookie_secure(),
            samesite=config.security.cookie_samesite,
        )

    def read(self, request: Request) -> str | None:
        return request.cookies.get(self.name) or None

    def set(self, response: Response, token: str) -> None:
        response.set_cookie(
            self.name,
            token,
            max_age=self.max_age,
            httponly=True,
            secure=self.secure,
            samesite=self.samesite,
        )

    def clear(self, response: Response) -> None:
        response.delete_cookie(
            self.name,
            httponly=True,
            secure=self.secure,
            samesite=self.samesite,
        )
