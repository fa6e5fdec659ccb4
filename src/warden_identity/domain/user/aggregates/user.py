"""User aggregate: account identity, embedded password hash and tokens."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, Optional, Union
from uuid import UUID, uuid4

from warden_identity.domain.shared.clock import ensure_tz_aware, utc_now
from warden_identity.domain.user.entities import Credential
from warden_identity.domain.user.value_objects import Email, is_password_type
from warden_identity.exceptions import InvalidArgumentError

MAX_USERNAME_LENGTH = 64


def _to_email(value: Union[str, Email, None]) -> Optional[Email]:
    if value is None:
        return None
    return value if isinstance(value, Email) else Email(value)


class User:
    """
    User aggregate root.

    Owns the user's credentials and the two token tracks (email
    confirmation, password reset). A user is confirmed iff it has a
    confirmed email address.

    ``hashed_password`` / ``password_hash_algorithm`` hold the legacy
    embedded password hash that predates credential rows; authentication
    falls back to it when no password credential exists.
    """

    def __init__(  # noqa: PLR0913
        self,
        username: str,
        email_address: Union[str, Email, None] = None,
        unconfirmed_email_address: Union[str, Email, None] = None,
        hashed_password: str | None = None,
        password_hash_algorithm: str | None = None,
        email_confirmation_token: str | None = None,
        password_reset_token: str | None = None,
        password_reset_token_expiration_date: datetime | None = None,
        email_allowed: bool = True,
        credentials: Iterable[Credential] | None = None,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        if not username or not username.strip():
            msg = "Username cannot be empty"
            raise InvalidArgumentError(msg, argument="username")
        if len(username) > MAX_USERNAME_LENGTH:
            msg = f"Username cannot exceed {MAX_USERNAME_LENGTH} characters"
            raise InvalidArgumentError(msg, argument="username")
        if (password_reset_token is None) != (
            password_reset_token_expiration_date is None
        ):
            msg = "Password reset token and its expiration must be set together"
            raise InvalidArgumentError(msg, argument="password_reset_token")

        self._id = id or uuid4()
        self._username = username
        self._email_address = _to_email(email_address)
        self._unconfirmed_email_address = _to_email(unconfirmed_email_address)
        self._hashed_password = hashed_password
        self._password_hash_algorithm = password_hash_algorithm
        self._email_confirmation_token = email_confirmation_token
        self._password_reset_token = password_reset_token
        self._password_reset_token_expiration_date = (
            ensure_tz_aware(password_reset_token_expiration_date)
            if password_reset_token_expiration_date
            else None
        )
        self._email_allowed = email_allowed
        self._credentials: list[Credential] = [
            c if c.user_id == self._id else c.bind_to(self._id)
            for c in (credentials or ())
        ]
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    # Identity

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def username(self) -> str:
        return self._username

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    # Email

    @property
    def email_address(self) -> str | None:
        """The confirmed email address, if any."""
        return self._email_address.value if self._email_address else None

    @property
    def unconfirmed_email_address(self) -> str | None:
        """The pending email address awaiting confirmation, if any."""
        if self._unconfirmed_email_address is None:
            return None
        return self._unconfirmed_email_address.value

    @property
    def email_confirmation_token(self) -> str | None:
        return self._email_confirmation_token

    @property
    def is_confirmed(self) -> bool:
        return self._email_address is not None

    @property
    def email_allowed(self) -> bool:
        return self._email_allowed

    def update_email_allowed(self, email_allowed: bool) -> None:
        self._email_allowed = email_allowed
        self._touch()

    def update_email_address(
        self,
        new_email_address: Union[str, Email],
        generate_token: Callable[[], str],
    ) -> bool:
        """Set a new pending email address and a fresh confirmation token.

        Returns False (and changes nothing) when the address is already the
        latest one: the pending address if there is one, otherwise the
        confirmed address.
        """
        new_email = _to_email(new_email_address)
        latest = self._unconfirmed_email_address or self._email_address
        if latest == new_email:
            return False

        self._unconfirmed_email_address = new_email
        self._email_confirmation_token = generate_token()
        self._touch()
        return True

    def confirm_email_address(self) -> None:
        """Promote the pending email address to the confirmed one."""
        if self._unconfirmed_email_address is None:
            msg = "User does not have an email address to confirm"
            raise InvalidArgumentError(msg, argument="unconfirmed_email_address")

        self._email_address = self._unconfirmed_email_address
        self._unconfirmed_email_address = None
        self._email_confirmation_token = None
        self._touch()

    # Legacy embedded password hash

    @property
    def hashed_password(self) -> str | None:
        return self._hashed_password

    @property
    def password_hash_algorithm(self) -> str | None:
        return self._password_hash_algorithm

    def change_password_hash(self, hashed_password: str, algorithm: str) -> None:
        self._hashed_password = hashed_password
        self._password_hash_algorithm = algorithm
        self._touch()

    # Password reset

    @property
    def password_reset_token(self) -> str | None:
        return self._password_reset_token

    @property
    def password_reset_token_expiration_date(self) -> datetime | None:
        return self._password_reset_token_expiration_date

    def has_active_password_reset_token(self, now: datetime) -> bool:
        """A token is active until its expiration instant has passed."""
        if not self._password_reset_token:
            return False
        return not self._is_reset_token_expired(now)

    def issue_password_reset_token(self, token: str, expires_at: datetime) -> None:
        if not token:
            msg = "Password reset token cannot be empty"
            raise InvalidArgumentError(msg, argument="token")
        self._password_reset_token = token
        self._password_reset_token_expiration_date = ensure_tz_aware(expires_at)
        self._touch()

    def clear_password_reset_token(self) -> None:
        self._password_reset_token = None
        self._password_reset_token_expiration_date = None
        self._touch()

    def _is_reset_token_expired(self, now: datetime) -> bool:
        expires_at = self._password_reset_token_expiration_date
        return expires_at is not None and expires_at < ensure_tz_aware(now)

    # Credentials

    @property
    def credentials(self) -> tuple[Credential, ...]:
        return tuple(self._credentials)

    def find_credential(self, credential_type: str) -> Credential | None:
        """First credential of the given type (case-insensitive match)."""
        wanted = credential_type.casefold()
        for credential in self._credentials:
            if credential.type.casefold() == wanted:
                return credential
        return None

    def find_password_credential(self) -> Credential | None:
        for credential in self._credentials:
            if is_password_type(credential.type):
                return credential
        return None

    def replace_credential(self, credential: Credential) -> Credential:
        """Drop every credential of the same type, then attach ``credential``.

        Types match case-insensitively. A credential reusing the id of one
        already held is stored under a fresh id, so the replacement always
        becomes a new row.
        """
        bound = credential.bind_to(self._id)
        if any(c.id == bound.id for c in self._credentials):
            bound = bound.with_new_id()
        wanted = bound.type.casefold()
        self._credentials = [
            c for c in self._credentials if c.type.casefold() != wanted
        ]
        self._credentials.append(bound)
        self._touch()
        return bound

    def _touch(self) -> None:
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        username: str,
        email_address: Union[str, Email],
        hashed_password: str,
        password_hash_algorithm: str,
        email_confirmation_token: str,
    ) -> User:
        """Create a new, unconfirmed user with a pending email address."""
        return cls(
            username=username,
            unconfirmed_email_address=email_address,
            hashed_password=hashed_password,
            password_hash_algorithm=password_hash_algorithm,
            email_confirmation_token=email_confirmation_token,
            email_allowed=True,
        )

    @classmethod
    def reconstitute(cls, **state) -> User:
        """Rebuild a user from persisted state."""
        return cls(**state)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, username={self._username!r})"
