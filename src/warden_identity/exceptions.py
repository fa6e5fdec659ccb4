"""Identity exceptions and error codes.

These exceptions are raised by the warden_identity package and should be
caught and handled by the calling layer. Expected negative outcomes (a wrong
password, a stale token) are not exceptions; services report them as
``False`` or ``None``.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for callers.

    These codes are part of the public contract. Should not be changed.
    """

    # Caller misuse
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INVALID_EMAIL = "INVALID_EMAIL"
    WEAK_PASSWORD = "WEAK_PASSWORD"

    # Uniqueness
    DUPLICATE_USERNAME = "DUPLICATE_USERNAME"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"

    # State
    USER_NOT_CONFIRMED = "USER_NOT_CONFIRMED"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Storage
    STORE_ERROR = "STORE_ERROR"

    # General
    INTERNAL_ERROR = "INTERNAL_ERROR"


class IdentityError(Exception):
    """Base exception for all identity errors.

    Attributes
    ----------
    message
        Human-readable error message
    code
        Stable error code for programmatic handling
    details
        Optional additional context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class InvalidArgumentError(IdentityError, ValueError):
    """Raised when caller input is missing, empty or out of range."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INVALID_ARGUMENT,
        argument: str | None = None,
    ):
        super().__init__(message, code, {"argument": argument} if argument else None)
        self.argument = argument


class WeakPasswordError(InvalidArgumentError):
    """Raised when a new password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message, ErrorCode.WEAK_PASSWORD, "password")


class StoreError(IdentityError):
    """Raised when the persistent store fails to read or commit changes."""

    def __init__(self, message: str = "Identity store operation failed"):
        super().__init__(message, ErrorCode.STORE_ERROR)
