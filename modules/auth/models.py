"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from pydantic import BaseModel, EmailStr, Field


def normalize_email(email: str) -> str:
    """Emails are matched case-insensitively and stored lower-cased."""
    return email.strip().lower()


class PublicUser(BaseModel):
    """
    The subset of a user that is safe to hand back to callers.

    Returned by login and by authorization-code validation. The password
    hash is deliberately not a field here.
    """

    id: str = Field(..., description="User ID assigned by the repository")
    email: str = Field(..., description="User's email address")
    username: str = Field(..., description="Display username")

    model_config = {"frozen": True, "extra": "ignore"}


class User(BaseModel):
    """
    A stored user record, including the password hash.

    Never leaves the auth module; use to_public() at the boundary.
    """

    id: str = Field(..., description="User ID assigned by the repository")
    email: str = Field(..., description="Email address (unique)")
    username: str = Field(..., description="Display username")
    hash_password: str = Field(..., description="Stored password hash")

    model_config = {"frozen": True}

    def to_public(self) -> PublicUser:
        return PublicUser(id=self.id, email=self.email, username=self.username)


class RegisterInput(BaseModel):
    """Registration request."""

    email: EmailStr = Field(..., description="Email address for the new account")
    password: str = Field(..., min_length=1, max_length=255, description="Plaintext password")
    username: str = Field(..., min_length=1, description="Display username")


class LoginInput(BaseModel):
    """Credential login request."""

    email: str = Field(..., description="Email address")
    password: str = Field(..., description="Plaintext password")


class AuthCodeClaims(BaseModel):
    """
    Decoded authorization-code payload.

    Mirrors the registered JWT claims plus the public user fields the
    code was issued for.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: str = Field(..., description="User's email")
    username: str = Field(..., description="User's username")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")
    jti: str = Field(..., description="Unique code identifier")
