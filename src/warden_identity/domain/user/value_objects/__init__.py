"""Value objects for the user domain."""

from warden_identity.domain.user.value_objects.credential_type import (
    CredentialType,
    is_password_type,
)
from warden_identity.domain.user.value_objects.email import Email, normalize_email

__all__ = [
    "CredentialType",
    "Email",
    "is_password_type",
    "normalize_email",
]
