"""SQLAlchemy repository implementations for identity management."""

from warden_identity.infrastructure.persistence.sqlalchemy.repositories.credential_repository import (  # noqa: E501
    CredentialRepositorySQLAlchemy,
)
from warden_identity.infrastructure.persistence.sqlalchemy.repositories.user_repository import (  # noqa: E501
    UserRepositorySQLAlchemy,
)

__all__ = [
    "CredentialRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
