"""
Authentication service implementation.

Registration, credential login and the authorization-code lifecycle
(issue, validate, renew). Storage and code format are the repository's
concern; password hashing is the hasher's.
"""

import asyncio
import logging
from typing import Optional

from shared.database import get_supabase_client

from .exceptions import (
    EmailAlreadyUsedError,
    ForbiddenError,
    InvalidAuthCodeError,
    InvalidCredentialsError,
    RegistrationNotPossibleError,
    UserNotFoundError,
)
from .hashing import BcryptPasswordHasher
from .interfaces import IAuthRepository, IAuthService, IPasswordHasher
from .models import LoginInput, PublicUser, RegisterInput, normalize_email

logger = logging.getLogger(__name__)

# Compared against when the email is unknown so login does the same work
# whether or not the account exists.
_DUMMY_PASSWORD = "authflow-dummy-password"


class AuthService(IAuthService):
    """
    Implementation of the authentication use case.

    Stateless between calls: every operation goes straight to the
    repository, so uniqueness of emails and validity of codes are only
    as strong as the repository makes them.

    Password hashing and verification run on a worker thread.
    """

    def __init__(
        self,
        repository: IAuthRepository,
        hasher: Optional[IPasswordHasher] = None,
    ):
        """
        Initialize the auth service.

        Args:
            repository: User and authorization-code storage.
            hasher: Password hasher. Defaults to BcryptPasswordHasher.
        """
        self._repository = repository
        self._hasher = hasher or BcryptPasswordHasher()
        self._dummy_hash: Optional[str] = None

    async def register(self, email: str, password: str, username: str) -> PublicUser:
        """Create an account and return its public view with the new ID."""
        if await self._repository.verify_email_already_used(email):
            logger.info("Registration refused: email already in use")
            raise RegistrationNotPossibleError()

        hash_password = await asyncio.to_thread(self._hasher.hash, password)

        try:
            user_id = await self._repository.create_user(email, hash_password, username)
        except EmailAlreadyUsedError:
            # Lost the race against a concurrent registration
            logger.info("Registration refused by repository: email already in use")
            raise RegistrationNotPossibleError()

        logger.info(f"Registered user {user_id}")
        return PublicUser(id=user_id, email=normalize_email(email), username=username)

    async def register_user(self, data: RegisterInput) -> PublicUser:
        """Register from a validated request model."""
        return await self.register(data.email, data.password, data.username)

    async def login(self, email: str, password: str) -> PublicUser:
        """
        Check credentials and return the public user view.

        Unknown email and wrong password raise the same error.
        """
        user = await self._repository.get_user_by_email(email)

        if user is None:
            await asyncio.to_thread(self._hasher.verify, password, await self._get_dummy_hash())
            logger.info("Login failed")
            raise InvalidCredentialsError()

        if not await asyncio.to_thread(self._hasher.verify, password, user.hash_password):
            logger.info("Login failed")
            raise InvalidCredentialsError()

        logger.debug(f"User {user.id} logged in")
        return user.to_public()

    async def login_user(self, data: LoginInput) -> PublicUser:
        """Log in from a request model."""
        return await self.login(data.email, data.password)

    async def generate_auth_code(self, user: PublicUser) -> str:
        """Issue a new authorization code for the user and persist it."""
        code = await self._repository.generate_auth_code(user)
        await self._repository.save_auth_code(code, user)
        logger.debug(f"Issued authorization code for user {user.id}")
        return code

    async def validate_auth_code(self, code: str) -> PublicUser:
        """Return the user a valid code was issued to."""
        if not await self._repository.validate_auth_code(code):
            raise ForbiddenError()

        try:
            decoded = await self._repository.decode_auth_code(code)
        except InvalidAuthCodeError as e:
            # Expired between the two calls
            logger.debug(f"Authorization code failed to decode: {e.message}")
            raise ForbiddenError()
        return PublicUser(id=decoded.id, email=decoded.email, username=decoded.username)

    async def renew_auth_code(self, code: str) -> str:
        """
        Exchange a valid code for a fresh one.

        The user is re-read from the repository, so a code outliving its
        account cannot be renewed.
        """
        decoded = await self.validate_auth_code(code)

        user = await self._repository.get_user_by_id(decoded.id)
        if user is None:
            logger.info(f"Renewal refused: user {decoded.id} no longer exists")
            raise UserNotFoundError()

        new_code = await self.generate_auth_code(user.to_public())
        logger.info(f"Renewed authorization code for user {user.id}")
        return new_code

    async def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = await asyncio.to_thread(self._hasher.hash, _DUMMY_PASSWORD)
        return self._dummy_hash


# Module-level instance getter
_service_instance: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """
    Get the auth service singleton.

    Wired to the Supabase repository and bcrypt hasher.
    """
    global _service_instance
    if _service_instance is None:
        from .repository import SupabaseAuthRepository

        _service_instance = AuthService(SupabaseAuthRepository(get_supabase_client()))
    return _service_instance


def reset_auth_service() -> None:
    """Reset the auth service singleton (for testing)."""
    global _service_instance
    _service_instance = None
