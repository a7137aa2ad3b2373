"""
Authorization code encoding.

Codes are HS256-signed JWTs carrying the public user fields. The service
treats them as opaque strings; only repositories use this codec.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
import uuid

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.config import get_settings

from .exceptions import InvalidAuthCodeError
from .models import AuthCodeClaims, PublicUser

REQUIRED_CLAIMS = ["sub", "exp", "iat", "jti"]


class AuthCodeCodec:
    """
    Issues and decodes signed, expiring authorization codes.

    Every code carries a random ``jti`` so two codes issued for the same
    user within the same second are still distinct.
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        ttl_seconds: Optional[int] = None,
        algorithm: Optional[str] = None,
    ):
        settings = get_settings()
        self._secret = secret if secret is not None else settings.auth_code_secret
        self._ttl = timedelta(
            seconds=ttl_seconds if ttl_seconds is not None else settings.auth_code_ttl_seconds
        )
        self._algorithm = algorithm or settings.auth_code_algorithm

        if not self._secret:
            raise RuntimeError(
                "Authorization code secret missing. "
                "Set the AUTH_CODE_SECRET environment variable."
            )

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, user: PublicUser) -> str:
        """Create a signed code for the user, valid for the configured TTL."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user.id,
            "email": user.email,
            "username": user.username,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, code: str) -> AuthCodeClaims:
        """
        Verify a code's signature and expiry and return its claims.

        Raises:
            InvalidAuthCodeError: If the code is missing, malformed,
                signed with another key, or expired
        """
        if not code:
            raise InvalidAuthCodeError("Missing authorization code")

        try:
            payload = jwt.decode(
                code,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidAuthCodeError("Authorization code has expired")
        except jwt.InvalidTokenError as e:
            raise InvalidAuthCodeError(str(e))

        try:
            return AuthCodeClaims(**payload)
        except PydanticValidationError:
            raise InvalidAuthCodeError("Authorization code payload is incomplete")

    def is_valid(self, code: str) -> bool:
        """Return True if decode() would succeed."""
        try:
            self.decode(code)
        except InvalidAuthCodeError:
            return False
        return True

    @staticmethod
    def to_user(claims: AuthCodeClaims) -> PublicUser:
        return PublicUser(id=claims.sub, email=claims.email, username=claims.username)

    @staticmethod
    def expires_at(claims: AuthCodeClaims) -> datetime:
        return datetime.fromtimestamp(claims.exp, tz=timezone.utc)
