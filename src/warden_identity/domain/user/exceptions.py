"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""

from warden_identity.exceptions import ErrorCode, IdentityError, InvalidArgumentError


class InvalidEmailError(InvalidArgumentError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID_EMAIL, "email_address")


class DuplicateUsernameError(IdentityError):
    """Username already taken."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(
            f"Username is not available: {username}",
            ErrorCode.DUPLICATE_USERNAME,
            {"username": username},
        )


class DuplicateEmailError(IdentityError):
    """Email already in use by another user."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            f"Email address is already in use: {email}",
            ErrorCode.DUPLICATE_EMAIL,
            {"email_address": email},
        )


class UserNotFoundError(IdentityError):
    """User not found."""

    def __init__(self, user_ref: str) -> None:
        self.user_ref = user_ref
        super().__init__(
            f"User not found: {user_ref}",
            ErrorCode.USER_NOT_FOUND,
            {"user": user_ref},
        )


class UserNotConfirmedError(IdentityError):
    """Operation requires a user with a confirmed email address."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__(
            f"User has not confirmed an email address yet: {username}",
            ErrorCode.USER_NOT_CONFIRMED,
            {"username": username},
        )
