"""
Pytest fixtures for auth module tests.

The mock repository stands in for IAuthRepository with one AsyncMock per
method; tests override return values the same way a real adapter would
answer.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from modules.auth.codes import AuthCodeCodec
from modules.auth.hashing import BcryptPasswordHasher
from modules.auth.models import PublicUser, User
from modules.auth.repository import InMemoryAuthRepository
from modules.auth.service import AuthService

TEST_SECRET = "test-auth-code-secret-key-for-testing-only"

REPOSITORY_METHODS = [
    "create_user",
    "verify_email_already_used",
    "get_user_by_email",
    "get_user_by_id",
    "generate_auth_code",
    "save_auth_code",
    "validate_auth_code",
    "decode_auth_code",
]


@pytest.fixture
def hasher():
    """bcrypt hasher at the minimum cost factor."""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def codec():
    """Codec with a fixed test secret and a 5 minute lifetime."""
    return AuthCodeCodec(secret=TEST_SECRET, ttl_seconds=300)


@pytest.fixture
def mock_repository():
    """Repository double with every operation as an AsyncMock."""
    repo = MagicMock()
    for name in REPOSITORY_METHODS:
        setattr(repo, name, AsyncMock())
    repo.save_auth_code.return_value = None
    return repo


@pytest.fixture
def auth(mock_repository, hasher):
    """AuthService over the mock repository."""
    return AuthService(mock_repository, hasher=hasher)


@pytest.fixture
def memory_repository(codec):
    """In-memory repository sharing the test codec."""
    return InMemoryAuthRepository(codec=codec)


@pytest.fixture
def memory_auth(memory_repository, hasher):
    """AuthService over the in-memory repository."""
    return AuthService(memory_repository, hasher=hasher)


@pytest.fixture
def public_user():
    return PublicUser(id="mockedId", email="mocked@gmail.com", username="mocked")


@pytest.fixture
def stored_user_factory(hasher):
    """Build a stored User whose hash matches the given password."""

    def factory(password: str = "P4$$word!", **overrides) -> User:
        data = {
            "id": "mockedId",
            "email": "mocked@gmail.com",
            "username": "mocked",
            "hash_password": hasher.hash(password),
        }
        data.update(overrides)
        return User(**data)

    return factory


@pytest.fixture
def code_secret() -> str:
    """Signing key used by the codec fixture."""
    return TEST_SECRET
