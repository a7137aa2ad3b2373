"""
Password hashing for the auth module.

bcrypt is used directly rather than through passlib. bcrypt only reads the
first 72 bytes of a password and current releases reject anything longer,
so the encoded password is cut to 72 bytes here, the same way for hashing
and for verification.
"""

import logging
from typing import Optional

import bcrypt

from shared.config import get_settings

from .interfaces import IPasswordHasher

logger = logging.getLogger(__name__)

# bcrypt ignores input past this many bytes
BCRYPT_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt implementation of IPasswordHasher."""

    def __init__(self, rounds: Optional[int] = None):
        """
        Args:
            rounds: bcrypt cost factor. Defaults to the BCRYPT_ROUNDS setting.
        """
        self._rounds = rounds if rounds is not None else get_settings().bcrypt_rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Return a bcrypt hash of the plaintext password."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """Return True if the plaintext password matches the bcrypt hash."""
        try:
            return bcrypt.checkpw(_encode(password), hashed.encode("utf-8"))
        except ValueError:
            # Password length is capped above, so only the stored hash is left
            logger.warning("Stored password hash is not a valid bcrypt hash; treating as mismatch")
            return False
