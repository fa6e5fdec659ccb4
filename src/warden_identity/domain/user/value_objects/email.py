"""Email address value object."""

import re
from dataclasses import dataclass

from warden_identity.domain.user.exceptions import InvalidEmailError

# Deliberately loose: one "@", no whitespace, a dot in the domain part
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MAX_EMAIL_LENGTH = 255


def normalize_email(value: str) -> str:
    """Canonical form used for storage and lookups (trimmed, lowercase)."""
    return value.strip().lower()


@dataclass(frozen=True)
class Email:
    """A syntactically valid, normalized email address."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            msg = "Email address cannot be empty"
            raise InvalidEmailError(msg)

        normalized = normalize_email(self.value)
        if len(normalized) > MAX_EMAIL_LENGTH:
            msg = f"Email address cannot exceed {MAX_EMAIL_LENGTH} characters"
            raise InvalidEmailError(msg)
        if not _EMAIL_PATTERN.match(normalized):
            msg = f"Invalid email address: {self.value}"
            raise InvalidEmailError(msg)

        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
