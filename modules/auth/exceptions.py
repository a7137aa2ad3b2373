"""
Authentication module exceptions.

The messages are fixed. Login and registration failures are intentionally
generic: "no such email" and "wrong password" share one error, and a taken
email is reported the same way as any other failed registration.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

REGISTRATION_NOT_POSSIBLE_MESSAGE = "Your registration was not possible. Try again later."
INVALID_CREDENTIALS_MESSAGE = "Email or password incorrect"
FORBIDDEN_MESSAGE = "Forbidden"
USER_NOT_FOUND_MESSAGE = "User not found"


class RegistrationNotPossibleError(ValidationError):
    """Raised when a registration cannot be completed (e.g. email in use)."""

    def __init__(self):
        super().__init__(REGISTRATION_NOT_POSSIBLE_MESSAGE, code="REGISTRATION_NOT_POSSIBLE")


class InvalidCredentialsError(AuthenticationError):
    """Raised when the email is unknown or the password does not match."""

    def __init__(self):
        super().__init__(INVALID_CREDENTIALS_MESSAGE, code="INVALID_CREDENTIALS")


class ForbiddenError(AuthorizationError):
    """Raised when an authorization code is invalid or expired."""

    def __init__(self):
        super().__init__(FORBIDDEN_MESSAGE, code="FORBIDDEN")


class UserNotFoundError(NotFoundError):
    """Raised when the user behind a valid code no longer exists."""

    def __init__(self):
        super().__init__(USER_NOT_FOUND_MESSAGE, code="USER_NOT_FOUND")


class EmailAlreadyUsedError(ConflictError):
    """Raised by repositories when creating a user with a taken email."""

    def __init__(self, message: str = "Email already in use"):
        super().__init__(message, code="EMAIL_ALREADY_USED")


class InvalidAuthCodeError(AuthenticationError):
    """Raised when an authorization code is malformed, tampered or expired."""

    def __init__(self, message: str = "Invalid authorization code"):
        super().__init__(message, code="INVALID_AUTH_CODE")
