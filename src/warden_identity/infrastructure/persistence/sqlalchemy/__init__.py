"""SQLAlchemy implementation for warden_identity persistence.

Provides:
- IdentityBase: Declarative base for identity models
- UserModel / CredentialModel: SQLAlchemy models
- UserRepositorySQLAlchemy / CredentialRepositorySQLAlchemy: Repositories
- get_engine / get_session_maker: Shared engine and session factory

Examples
--------
# In Alembic env.py:
from warden_identity.infrastructure.persistence.sqlalchemy import IdentityBase
target_metadata = IdentityBase.metadata
"""

from warden_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase
from warden_identity.infrastructure.persistence.sqlalchemy.database import (
    create_engine_from_settings,
    create_session_maker,
    get_engine,
    get_session_maker,
)
from warden_identity.infrastructure.persistence.sqlalchemy.models import (
    CredentialModel,
    UserModel,
)
from warden_identity.infrastructure.persistence.sqlalchemy.repositories import (
    CredentialRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

__all__ = [
    "CredentialModel",
    "CredentialRepositorySQLAlchemy",
    "IdentityBase",
    "UserModel",
    "UserRepositorySQLAlchemy",
    "create_engine_from_settings",
    "create_session_maker",
    "get_engine",
    "get_session_maker",
]
