"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from textdesk.domain.users.repositories import PasswordHasher

DEFAULT_METHOD = "scrypt:32768:8:1"
DEFAULT_SALT_LENGTH = 16


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted adaptive hashing with a fixed work factor.

    The work factor is encoded in ``method`` (e.g. ``scrypt:32768:8:1`` or
    ``pbkdf2:sha256:600000``) and stored inside every hash, so hashes made
    with an older setting keep verifying after the setting changes.
    """

    def __init__(
        self, method: str = DEFAULT_METHOD, salt_length: int = DEFAULT_SALT_LENGTH
    ) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> str:
        return str(
            generate_password_hash(
                password, method=self._method, salt_length=self._salt_length
            )
        )

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bool(check_password_hash(hashed, password))
        except (ValueError, TypeError):
            # Malformed or unknown-method hash is a non-match.
            return False
