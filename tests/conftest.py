"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import os
from datetime import datetime, timezone, timedelta
from unittest.mock import patch

import jwt  # PyJWT
import pytest

from modules.auth.service import reset_auth_service
from shared.config import get_settings
from shared.database import reset_client_cache


# Test signing key (only for testing)
TEST_AUTH_CODE_SECRET = "test-auth-code-secret-key-for-testing-only"


def create_test_code(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    username: str = "tester",
    expired: bool = False,
    secret: str = TEST_AUTH_CODE_SECRET,
    jti: str = "test-jti",
) -> str:
    """
    Create a signed authorization code without going through the codec.

    Args:
        user_id: User ID to put in the ``sub`` claim
        email: Email claim
        username: Username claim
        expired: If True, creates an already expired code
        secret: Signing key

    Returns:
        Encoded code string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(minutes=5) if expired else now + timedelta(minutes=5)

    payload = {
        "sub": user_id,
        "email": email,
        "username": username,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
        "jti": jti,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def test_environment():
    """Provide test settings and reset cached singletons around each test."""
    env = {
        "AUTH_CODE_SECRET": TEST_AUTH_CODE_SECRET,
        "BCRYPT_ROUNDS": "4",
    }
    with patch.dict(os.environ, env):
        get_settings.cache_clear()
        reset_auth_service()
        reset_client_cache()
        yield
        reset_client_cache()
        reset_auth_service()
        get_settings.cache_clear()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_code(test_user_id: str, test_user_email: str) -> str:
    """Create a validly signed authorization code for testing."""
    return create_test_code(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def expired_auth_code(test_user_id: str, test_user_email: str) -> str:
    """Create an authorization code that has already expired."""
    return create_test_code(user_id=test_user_id, email=test_user_email, expired=True)
