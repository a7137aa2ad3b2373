"""
Auth repositories.

Two implementations of IAuthRepository:
- InMemoryAuthRepository: for tests and local development
- SupabaseAuthRepository: users and auth_codes tables in Supabase

Both keep a single current code per user. Saving a new code replaces the
previous one, which then fails validation.
"""

import logging
from typing import Optional, Any
import uuid

from postgrest.exceptions import APIError
from supabase import Client

from shared.config import get_settings
from shared.exceptions import ExternalServiceError
from shared.repository import BaseRepository

from .codes import AuthCodeCodec
from .exceptions import EmailAlreadyUsedError, InvalidAuthCodeError
from .interfaces import IAuthRepository
from .models import PublicUser, User, normalize_email

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class InMemoryAuthRepository(IAuthRepository):
    """
    Auth repository with in-memory storage.

    For testing and development. Use SupabaseAuthRepository for production.
    """

    def __init__(self, codec: Optional[AuthCodeCodec] = None):
        self._codec = codec or AuthCodeCodec()
        self._users: dict[str, User] = {}
        self._ids_by_email: dict[str, str] = {}
        # user_id -> current code
        self._codes: dict[str, str] = {}

    async def create_user(self, email: str, hash_password: str, username: str) -> str:
        key = normalize_email(email)
        # No await between check and insert, so this is atomic on one loop
        if key in self._ids_by_email:
            raise EmailAlreadyUsedError()

        user_id = str(uuid.uuid4())
        self._users[user_id] = User(
            id=user_id,
            email=key,
            username=username,
            hash_password=hash_password,
        )
        self._ids_by_email[key] = user_id
        return user_id

    async def delete_user(self, user_id: str) -> bool:
        """
        Remove a user. Returns False if unknown.

        Their stored code is left in place; renewing it reports the missing user.
        """
        user = self._users.pop(user_id, None)
        if user is None:
            return False
        self._ids_by_email.pop(user.email, None)
        return True

    async def verify_email_already_used(self, email: str) -> bool:
        return normalize_email(email) in self._ids_by_email

    async def get_user_by_email(self, email: str) -> Optional[User]:
        user_id = self._ids_by_email.get(normalize_email(email))
        if user_id is None:
            return None
        return self._users.get(user_id)

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    async def generate_auth_code(self, user: PublicUser) -> str:
        return self._codec.issue(user)

    async def save_auth_code(self, code: str, user: PublicUser) -> None:
        self._codes[user.id] = code

    async def validate_auth_code(self, code: str) -> bool:
        try:
            claims = self._codec.decode(code)
        except InvalidAuthCodeError as e:
            logger.debug(f"Rejected authorization code: {e.message}")
            return False
        return self._codes.get(claims.sub) == code

    async def decode_auth_code(self, code: str) -> PublicUser:
        return self._codec.to_user(self._codec.decode(code))


class SupabaseAuthRepository(BaseRepository[User]):
    """
    Auth repository backed by Supabase tables.

    Expects:
    - users(id uuid pk, email text unique, username text, hash_password text)
    - auth_codes(user_id uuid pk references users, code text, expires_at timestamptz)

    Note: The unique index on users.email is what makes create_user safe
    against concurrent registrations; the service's pre-check is advisory.
    """

    def __init__(
        self,
        db: Client,
        codec: Optional[AuthCodeCodec] = None,
        users_table: Optional[str] = None,
        auth_codes_table: Optional[str] = None,
    ) -> None:
        super().__init__(db)
        settings = get_settings()
        self._codec = codec or AuthCodeCodec()
        self._users_table = users_table or settings.users_table
        self._codes_table = auth_codes_table or settings.auth_codes_table

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    async def create_user(self, email: str, hash_password: str, username: str) -> str:
        data = {
            "email": normalize_email(email),
            "username": username,
            "hash_password": hash_password,
        }
        try:
            result = self._db.table(self._users_table).insert(data).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise EmailAlreadyUsedError()
            logger.error(f"Failed to create user: {e.message}")
            raise ExternalServiceError(
                f"Failed to create user: {e.message}",
                service="supabase",
                details={"code": e.code},
            ) from e

        return str(result.data[0]["id"])

    async def verify_email_already_used(self, email: str) -> bool:
        result = (
            self._db.table(self._users_table)
            .select("id")
            .eq("email", normalize_email(email))
            .limit(1)
            .execute()
        )
        return bool(result.data)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        result = (
            self._db.table(self._users_table)
            .select("*")
            .eq("email", normalize_email(email))
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        result = self._db.table(self._users_table).select("*").eq("id", user_id).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    # -------------------------------------------------------------------------
    # Authorization codes
    # -------------------------------------------------------------------------

    async def generate_auth_code(self, user: PublicUser) -> str:
        return self._codec.issue(user)

    async def save_auth_code(self, code: str, user: PublicUser) -> None:
        claims = self._codec.decode(code)
        self._db.table(self._codes_table).upsert(
            {
                "user_id": user.id,
                "code": code,
                "expires_at": self._codec.expires_at(claims).isoformat(),
            },
            on_conflict="user_id",
        ).execute()

    async def validate_auth_code(self, code: str) -> bool:
        try:
            claims = self._codec.decode(code)
        except InvalidAuthCodeError as e:
            logger.debug(f"Rejected authorization code: {e.message}")
            return False

        result = (
            self._db.table(self._codes_table)
            .select("code")
            .eq("user_id", claims.sub)
            .execute()
        )
        if not result.data:
            return False
        return result.data[0]["code"] == code

    async def decode_auth_code(self, code: str) -> PublicUser:
        return self._codec.to_user(self._codec.decode(code))

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User(
            id=str(data["id"]),
            email=data["email"],
            username=data["username"],
            hash_password=data["hash_password"],
        )
