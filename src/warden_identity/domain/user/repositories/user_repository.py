"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from warden_identity.domain.user.aggregates.user import User


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Lookups return ``None`` (or an empty list) when nothing matches.
    ``save`` stages changes, including the user's credential collection;
    nothing is durable until ``commit`` returns.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """Find a user by their ID."""

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by their username."""

    @abstractmethod
    async def find_by_email_address(self, email_address: str) -> Optional[User]:
        """Find a user by their confirmed email address."""

    @abstractmethod
    async def find_by_unconfirmed_email_address(
        self,
        unconfirmed_email_address: str,
        username: str | None = None,
    ) -> list[User]:
        """Find users with the given pending email, optionally filtered by username."""

    @abstractmethod
    async def find_by_username_or_email_address(
        self,
        username_or_email: str,
    ) -> Optional[User]:
        """Find a user whose username or confirmed email equals the value."""

    @abstractmethod
    async def save(self, user: User) -> None:
        """Stage a new or updated user (with credentials) in the current unit."""

    @abstractmethod
    async def commit(self) -> None:
        """Durably commit all staged changes.

        Raises
        ------
        DuplicateUsernameError, DuplicateEmailError
            If a uniqueness constraint is violated
        StoreError
            On any other storage failure
        """

    @abstractmethod
    async def rollback(self) -> None:
        """Discard all staged changes."""
