"""Warden Identity - user identities, credentials and security tokens.

This package handles:
- User registry (registration, lookups, email changes)
- Authentication (credential rows first, legacy embedded hash as fallback)
- Email confirmation and password reset tokens with expiry
- Password hashing and opaque token generation

Persistence goes through the repository interfaces in
``warden_identity.domain.user``; the SQLAlchemy adapter lives in
``warden_identity.infrastructure.persistence.sqlalchemy``.
"""

from warden_identity.application.services import (
    AuthenticationService,
    EmailConfirmationService,
    PasswordResetService,
    UserService,
)
from warden_identity.domain.user import (
    Credential,
    CredentialRepository,
    CredentialType,
    DuplicateEmailError,
    DuplicateUsernameError,
    Email,
    InvalidEmailError,
    User,
    UserNotConfirmedError,
    UserNotFoundError,
    UserRepository,
)
from warden_identity.exceptions import (
    ErrorCode,
    IdentityError,
    InvalidArgumentError,
    StoreError,
    WeakPasswordError,
)
from warden_identity.services import (
    PasswordHashingService,
    TokenGenerator,
)

__all__ = [
    # Domain - User
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
    # Exceptions
    "ErrorCode",
    "IdentityError",
    "InvalidArgumentError",
    "StoreError",
    "WeakPasswordError",
    # Services
    "PasswordHashingService",
    "TokenGenerator",
    # Application Services
    "AuthenticationService",
    "EmailConfirmationService",
    "PasswordResetService",
    "UserService",
]
