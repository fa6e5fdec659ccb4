"""Identity services - password hashing and opaque token generation."""

from warden_identity.services.password_service import PasswordHashingService
from warden_identity.services.token_service import TokenGenerator

__all__ = [
    "PasswordHashingService",
    "TokenGenerator",
]
