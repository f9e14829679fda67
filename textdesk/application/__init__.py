# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.auth_service import AuthService
from .services.credential_store import CredentialStore
from .services.password_hashing import WerkzeugPasswordHasher
from .services.session_store import SessionStore
from .services.session_sweeper import SessionSweeper

__all__ = [
    "AuthService",
    "CredentialStore",
    "SessionStore",
    "SessionSweeper",
    "WerkzeugPasswordHasher",
]
