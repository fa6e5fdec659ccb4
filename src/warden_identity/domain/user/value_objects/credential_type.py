"""Credential type identifiers.

Credential types are plain strings so that external authentication methods
can be added without touching this module. The constants below are the
types the engine itself knows about.
"""

from enum import Enum


class CredentialType(str, Enum):
    """Well-known credential types."""

    # Salted password hash produced by PasswordHashingService (bcrypt)
    PASSWORD = "password.bcrypt"
    # Opaque API key issued to tooling
    API_KEY = "apikey.v1"


def is_password_type(credential_type: str) -> bool:
    """Check whether a credential type is the salted-password type.

    The comparison is case-insensitive.
    """
    return credential_type.casefold() == CredentialType.PASSWORD.value.casefold()
