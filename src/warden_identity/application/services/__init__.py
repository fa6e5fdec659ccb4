"""Application services for identity management."""

from warden_identity.application.services.authentication_service import (
    AuthenticationService,
)
from warden_identity.application.services.email_confirmation_service import (
    EmailConfirmationService,
)
from warden_identity.application.services.password_reset_service import (
    PasswordResetService,
)
from warden_identity.application.services.user_service import UserService

__all__ = [
    "AuthenticationService",
    "EmailConfirmationService",
    "PasswordResetService",
    "UserService",
]
