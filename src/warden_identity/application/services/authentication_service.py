"""Password and credential authentication."""

import logging

from warden_identity.domain.user import (
    Credential,
    CredentialRepository,
    User,
    UserNotFoundError,
    UserRepository,
)
from warden_identity.exceptions import InvalidArgumentError
from warden_identity.services import PasswordHashingService

logger = logging.getLogger(__name__)


class AuthenticationService:
    """Decides whether a secret is valid for a user.

    Password checks consult the user's password credential first and fall
    back to the legacy hash embedded on the user record, so accounts that
    predate credential rows keep working.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        credential_repository: CredentialRepository,
        password_service: PasswordHashingService,
        rehash_legacy_passwords: bool = True,
    ):
        self._user_repo = user_repository
        self._credential_repo = credential_repository
        self._password_service = password_service
        self._rehash_legacy_passwords = rehash_legacy_passwords

    def authenticate_password(self, password: str, user: User | None) -> User | None:
        """Return ``user`` if ``password`` is valid for it, otherwise None."""
        if user is None:
            return None

        credential = user.find_password_credential()
        if credential is not None:
            valid = self._password_service.verify(
                password,
                credential.value,
                self._password_service.default_algorithm,
            )
        else:
            valid = self._password_service.verify(
                password,
                user.hashed_password,
                user.password_hash_algorithm,
            )

        return user if valid else None

    async def find_by_username_and_password(
        self,
        username: str,
        password: str,
    ) -> User | None:
        user = await self._user_repo.find_by_username(username) if username else None
        return await self._authenticate(password, user)

    async def find_by_username_or_email_and_password(
        self,
        username_or_email: str,
        password: str,
    ) -> User | None:
        """Authenticate by username or confirmed email address."""
        user = None
        if username_or_email:
            user = await self._user_repo.find_by_username_or_email_address(
                username_or_email,
            )
        return await self._authenticate(password, user)

    async def change_password(
        self,
        username: str,
        old_password: str,
        new_password: str,
    ) -> bool:
        """Change a password after re-authenticating with the old one.

        The new hash is written to the embedded password field of the user
        record, not to a credential row.

        Returns
        -------
        True on success, False if the old password did not authenticate
        """
        user = await self.find_by_username_and_password(username, old_password)
        if user is None:
            logger.debug("Password change rejected for: %s", username)
            return False

        self._password_service.validate_strength(new_password)
        self._set_password(user, new_password)
        await self._user_repo.save(user)
        await self._user_repo.commit()
        logger.info("Password changed for user: %s", user.id)
        return True

    async def authenticate_credential(
        self,
        credential_type: str,
        value: str,
    ) -> Credential | None:
        """Find the credential matching both type and value exactly."""
        if not credential_type or not value:
            return None
        return await self._credential_repo.find_by_type_and_value(
            credential_type,
            value,
        )

    async def replace_credential(
        self,
        user: User | None,
        credential: Credential,
    ) -> Credential:
        """Swap all of the user's credentials of this type for ``credential``.

        The removal and the addition are committed together.
        """
        if user is None:
            msg = "User is required"
            raise InvalidArgumentError(msg, argument="user")

        bound = user.replace_credential(credential)
        await self._user_repo.save(user)
        await self._user_repo.commit()
        logger.info("Replaced %s credential for user: %s", bound.type, user.id)
        return bound

    async def replace_credential_for_username(
        self,
        username: str,
        credential: Credential,
    ) -> Credential:
        """Like ``replace_credential`` but resolves the user by name.

        Raises
        ------
        UserNotFoundError
            If no user has this username
        """
        user = await self._user_repo.find_by_username(username) if username else None
        if user is None:
            raise UserNotFoundError(username)
        return await self.replace_credential(user, credential)

    async def _authenticate(self, password: str, user: User | None) -> User | None:
        authenticated = self.authenticate_password(password, user)
        if authenticated is None:
            return None

        if self._should_rehash(authenticated, password):
            self._set_password(authenticated, password)
            await self._user_repo.save(authenticated)
            await self._user_repo.commit()
            logger.info(
                "Upgraded embedded password hash for user: %s",
                authenticated.id,
            )

        return authenticated

    def _should_rehash(self, user: User, password: str) -> bool:
        if not self._rehash_legacy_passwords:
            return False
        if len(password.encode("utf-8")) > PasswordHashingService.MAX_BYTES:
            return False
        if user.find_password_credential() is not None or not user.hashed_password:
            return False
        return self._password_service.needs_rehash(
            user.hashed_password,
            user.password_hash_algorithm,
        )

    def _set_password(self, user: User, password: str) -> None:
        hashed_password, algorithm = self._password_service.hash_with_algorithm(
            password,
        )
        user.change_password_hash(hashed_password, algorithm)
