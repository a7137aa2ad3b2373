"""
Authentication module.

Handles registration, credential login and short-lived authorization codes.

Public API:
- IAuthService: Interface for auth operations
- IAuthRepository / IPasswordHasher: Collaborators the service depends on
- AuthService: The use case implementation
- PublicUser / User: User views
- Auth exceptions: RegistrationNotPossibleError, InvalidCredentialsError, etc.
"""

from .interfaces import IAuthService, IAuthRepository, IPasswordHasher
from .models import (
    AuthCodeClaims,
    LoginInput,
    PublicUser,
    RegisterInput,
    User,
)
from .exceptions import (
    RegistrationNotPossibleError,
    InvalidCredentialsError,
    ForbiddenError,
    UserNotFoundError,
    EmailAlreadyUsedError,
    InvalidAuthCodeError,
)
from .service import AuthService, get_auth_service, reset_auth_service

__all__ = [
    # Interfaces
    "IAuthService",
    "IAuthRepository",
    "IPasswordHasher",
    # Service
    "AuthService",
    "get_auth_service",
    "reset_auth_service",
    # Models
    "AuthCodeClaims",
    "LoginInput",
    "PublicUser",
    "RegisterInput",
    "User",
    # Exceptions
    "RegistrationNotPossibleError",
    "InvalidCredentialsError",
    "ForbiddenError",
    "UserNotFoundError",
    "EmailAlreadyUsedError",
    "InvalidAuthCodeError",
]
