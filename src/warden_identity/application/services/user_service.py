"""User registry: registration, lookups and profile changes."""

import logging

from warden_identity.domain.user import (
    DuplicateEmailError,
    DuplicateUsernameError,
    Email,
    User,
    UserRepository,
    normalize_email,
)
from warden_identity.exceptions import InvalidArgumentError
from warden_identity.services import PasswordHashingService, TokenGenerator

logger = logging.getLogger(__name__)


class UserService:
    """Owns user records and enforces username / email uniqueness.

    Uniqueness is checked up front for a clear error, and again by the
    store's unique constraints at commit time for concurrent registrations.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        token_generator: TokenGenerator,
        confirm_email_addresses: bool = True,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._token_generator = token_generator
        self._confirm_email_addresses = confirm_email_addresses

    async def create(self, username: str, password: str, email_address: str) -> User:
        """Register a new user.

        The email address starts out pending with a fresh confirmation
        token, unless email confirmation is disabled, in which case the
        user is confirmed immediately.

        Raises
        ------
        InvalidArgumentError
            If the username, password or email address is unusable
        DuplicateUsernameError
            If the username is taken
        DuplicateEmailError
            If another user has confirmed this email address
        """
        if not username or not username.strip():
            msg = "Username cannot be empty"
            raise InvalidArgumentError(msg, argument="username")
        email = Email(email_address)
        self._password_service.validate_strength(password)

        if await self._user_repo.find_by_username(username) is not None:
            raise DuplicateUsernameError(username)

        # Only confirmed addresses are checked; pending ones may collide
        if await self._user_repo.find_by_email_address(email.value) is not None:
            raise DuplicateEmailError(email.value)

        hashed_password, algorithm = self._password_service.hash_with_algorithm(
            password,
        )
        user = User.create(
            username=username,
            email_address=email,
            hashed_password=hashed_password,
            password_hash_algorithm=algorithm,
            email_confirmation_token=self._token_generator.generate(),
        )

        if not self._confirm_email_addresses:
            user.confirm_email_address()

        await self._user_repo.save(user)
        await self._user_repo.commit()

        logger.info(
            "Created user: %s (id: %s, confirmed: %s)",
            user.username,
            user.id,
            user.is_confirmed,
        )
        return user

    async def find_by_username(self, username: str) -> User | None:
        if not username:
            return None
        return await self._user_repo.find_by_username(username)

    async def find_by_email_address(self, email_address: str) -> User | None:
        """Find the user owning a confirmed email address."""
        if not email_address:
            return None
        return await self._user_repo.find_by_email_address(
            normalize_email(email_address),
        )

    async def find_by_unconfirmed_email_address(
        self,
        unconfirmed_email_address: str,
        username: str | None = None,
    ) -> list[User]:
        if not unconfirmed_email_address:
            return []
        return await self._user_repo.find_by_unconfirmed_email_address(
            normalize_email(unconfirmed_email_address),
            username,
        )

    async def update_profile(self, user: User | None, email_allowed: bool) -> None:
        if user is None:
            msg = "User is required"
            raise InvalidArgumentError(msg, argument="user")

        user.update_email_allowed(email_allowed)
        await self._user_repo.save(user)
        await self._user_repo.commit()
        logger.debug("Updated profile for user: %s", user.id)

    async def change_email_address(
        self,
        user: User | None,
        new_email_address: str,
    ) -> None:
        """Stage a new email address for the user.

        The new address becomes pending with a fresh confirmation token and
        must be confirmed before it replaces the confirmed address.

        Raises
        ------
        InvalidArgumentError
            If the user is missing or the address is malformed
        DuplicateEmailError
            If another user has confirmed this email address
        """
        if user is None:
            msg = "User is required"
            raise InvalidArgumentError(msg, argument="user")
        email = Email(new_email_address)

        existing = await self._user_repo.find_by_email_address(email.value)
        if existing is not None and existing.id != user.id:
            raise DuplicateEmailError(email.value)

        if not user.update_email_address(email, self._token_generator.generate):
            logger.debug("Email address unchanged for user: %s", user.id)
            return

        await self._user_repo.save(user)
        await self._user_repo.commit()
        logger.info("Email address change pending confirmation for user: %s", user.id)
