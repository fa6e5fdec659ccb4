"""Credential entity: one authentication method bound to one user."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Union
from uuid import UUID, uuid4

from warden_identity.domain.shared.clock import utc_now
from warden_identity.domain.user.value_objects import CredentialType, is_password_type
from warden_identity.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class Credential:
    """Immutable credential.

    Attributes
    ----------
    type
        Credential type, e.g. ``"password.bcrypt"`` or ``"apikey.v1"``
    value
        Opaque value: a password hash or an external token
    user_id
        Owning user; ``None`` until the credential is attached to a user
    """

    type: str
    value: str
    user_id: UUID | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.type:
            msg = "Credential type cannot be empty"
            raise InvalidArgumentError(msg, argument="type")
        if not self.value:
            msg = "Credential value cannot be empty"
            raise InvalidArgumentError(msg, argument="value")

    @classmethod
    def create(cls, type: Union[str, CredentialType], value: str) -> Credential:
        type_value = type.value if isinstance(type, CredentialType) else type
        return cls(type=type_value, value=value)

    @property
    def is_password(self) -> bool:
        return is_password_type(self.type)

    def bind_to(self, user_id: UUID) -> Credential:
        """Return a copy of this credential owned by ``user_id``."""
        return replace(self, user_id=user_id)

    def with_new_id(self) -> Credential:
        return replace(self, id=uuid4(), created_at=utc_now())

    def __repr__(self) -> str:
        # Never expose the value
        return f"Credential(id={self.id}, type={self.type!r}, user_id={self.user_id})"
