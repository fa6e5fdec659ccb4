from warden_identity.domain.user.repositories.credential_repository import (
    CredentialRepository,
)
from warden_identity.domain.user.repositories.user_repository import UserRepository

__all__ = ["CredentialRepository", "UserRepository"]
