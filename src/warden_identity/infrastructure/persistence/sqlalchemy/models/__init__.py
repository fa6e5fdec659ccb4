"""SQLAlchemy models for identity management."""

from warden_identity.infrastructure.persistence.sqlalchemy.models.credential_model import (  # noqa: E501
    CredentialModel,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)

__all__ = [
    "CredentialModel",
    "UserModel",
]
