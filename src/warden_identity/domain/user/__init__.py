"""User domain: identity records and the credentials they own.

This domain handles:
- User aggregate (username, email addresses, embedded password hash, tokens)
- Credential entity (one authentication method per type and user)
- Repository interfaces for persistence adapters
"""

from warden_identity.domain.user.aggregates import User
from warden_identity.domain.user.entities import Credential
from warden_identity.domain.user.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidEmailError,
    UserNotConfirmedError,
    UserNotFoundError,
)
from warden_identity.domain.user.repositories import (
    CredentialRepository,
    UserRepository,
)
from warden_identity.domain.user.value_objects import (
    CredentialType,
    Email,
    is_password_type,
    normalize_email,
)

__all__ = [
    "Credential",
    "CredentialRepository",
    "CredentialType",
    "DuplicateEmailError",
    "DuplicateUsernameError",
    "Email",
    "InvalidEmailError",
    "User",
    "UserNotConfirmedError",
    "UserNotFoundError",
    "UserRepository",
    "is_password_type",
    "normalize_email",
]
