"""
Pytest configuration for warden_identity domain tests.

This conftest provides fixtures specific to the warden_identity domain
(users, credentials, hashing and tokens).
"""

import pytest

from warden_identity.domain.user import User
from warden_identity.services import PasswordHashingService

TEST_USERNAME = "alice"
TEST_EMAIL = "a@x.com"
TEST_PASSWORD = "correct-horse-battery"


@pytest.fixture
def password_service() -> PasswordHashingService:
    """Fast hashing service (minimum bcrypt cost, few PBKDF2 iterations)."""
    return PasswordHashingService(rounds=4, pbkdf2_iterations=1_000)


@pytest.fixture
def test_user(password_service) -> User:
    """An unconfirmed user with an embedded bcrypt password hash."""
    hashed, algorithm = password_service.hash_with_algorithm(TEST_PASSWORD)
    return User.create(
        username=TEST_USERNAME,
        email_address=TEST_EMAIL,
        hashed_password=hashed,
        password_hash_algorithm=algorithm,
        email_confirmation_token="confirm-token",
    )
