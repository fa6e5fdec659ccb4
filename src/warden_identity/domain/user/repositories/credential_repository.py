"""Credential repository interface (read side of the credential store)."""

from abc import ABC, abstractmethod
from uuid import UUID

from warden_identity.domain.user.entities import Credential


class CredentialRepository(ABC):
    """Repository interface for querying credentials across users.

    Credentials are written through their owning ``User`` aggregate via
    ``UserRepository.save``.
    """

    @abstractmethod
    async def find_by_type_and_value(
        self,
        credential_type: str,
        value: str,
    ) -> Credential | None:
        """Find the credential with exactly this type and value.

        Raises
        ------
        StoreError
            If more than one credential matches (store integrity violation)
        """

    @abstractmethod
    async def list_for_user(self, user_id: UUID) -> list[Credential]:
        """List a user's credentials in creation order."""
