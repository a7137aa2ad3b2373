"""
Authentication module interfaces.

AuthService depends on IAuthRepository and IPasswordHasher, never on a
concrete storage backend. Other modules should depend on IAuthService.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import PublicUser, User


@runtime_checkable
class IPasswordHasher(Protocol):
    """One-way password hashing and comparison."""

    def hash(self, password: str) -> str:
        """Return the stored representation of a plaintext password."""
        ...

    def verify(self, password: str, hashed: str) -> bool:
        """Return True if the plaintext matches the stored hash."""
        ...


@runtime_checkable
class IAuthRepository(Protocol):
    """
    Persistence and authorization-code storage used by AuthService.

    Email uniqueness and code validity are enforced here, not in the
    service. Implementations decide the code format and expiry.
    """

    async def create_user(self, email: str, hash_password: str, username: str) -> str:
        """
        Persist a new user.

        Returns:
            The generated user ID

        Raises:
            EmailAlreadyUsedError: If the email belongs to another user
        """
        ...

    async def verify_email_already_used(self, email: str) -> bool:
        """Return True if an account already uses this email."""
        ...

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by email, or None."""
        ...

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by ID, or None."""
        ...

    async def generate_auth_code(self, user: PublicUser) -> str:
        """Create a new authorization code for the user (not yet saved)."""
        ...

    async def save_auth_code(self, code: str, user: PublicUser) -> None:
        """Store the code as the user's current code, replacing any previous one."""
        ...

    async def validate_auth_code(self, code: str) -> bool:
        """Return True if the code is well formed, unexpired and current."""
        ...

    async def decode_auth_code(self, code: str) -> PublicUser:
        """
        Decode a code back to the user it was issued for.

        Only meaningful after validate_auth_code returned True.
        """
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to other modules. Implementations must provide all these methods.
    """

    async def register(self, email: str, password: str, username: str) -> PublicUser:
        """
        Register a new account.

        Raises:
            RegistrationNotPossibleError: If the account cannot be created
        """
        ...

    async def login(self, email: str, password: str) -> PublicUser:
        """
        Check credentials and return the public user view.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        ...

    async def generate_auth_code(self, user: PublicUser) -> str:
        """Issue and persist an authorization code for the user."""
        ...

    async def validate_auth_code(self, code: str) -> PublicUser:
        """
        Exchange a code for the user it was issued to.

        Raises:
            ForbiddenError: If the code is not valid
        """
        ...

    async def renew_auth_code(self, code: str) -> str:
        """
        Replace a valid code with a fresh one.

        Raises:
            ForbiddenError: If the code is not valid
            UserNotFoundError: If the user has since been deleted
        """
        ...
