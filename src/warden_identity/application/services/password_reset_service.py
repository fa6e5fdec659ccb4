import hmac
import logging

from warden_identity.domain.shared.clock import Clock, minutes_after, utc_now
from warden_identity.domain.user import (
    User,
    UserNotConfirmedError,
    UserRepository,
    normalize_email,
)
from warden_identity.exceptions import InvalidArgumentError
from warden_identity.services import PasswordHashingService, TokenGenerator

logger = logging.getLogger(__name__)


class PasswordResetService:
    """Service for issuing password reset tokens and consuming them.

    Expiry is evaluated lazily against ``clock`` whenever a token is
    checked; expired tokens stay on the user until overwritten or consumed.
    """

    DEFAULT_EXPIRATION_MINUTES = 60

    def __init__(  # noqa: PLR0913
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        token_generator: TokenGenerator,
        default_expiration_minutes: int = DEFAULT_EXPIRATION_MINUTES,
        clock: Clock = utc_now,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._token_generator = token_generator
        self._default_expiration_minutes = default_expiration_minutes
        self._clock = clock

    async def generate_password_reset_token(
        self,
        username_or_email: str,
        expiration_minutes: int | None = None,
    ) -> User | None:
        """Issue a reset token for the user with this confirmed email address.

        A still-active token is left untouched, so repeated requests do not
        invalidate a link that was already sent out.

        Returns
        -------
        The user carrying the (new or existing) token, or None if no user
        has this confirmed email address

        Raises
        ------
        InvalidArgumentError
            If the identifier is empty or the expiration is below one minute
        UserNotConfirmedError
            If the user has not confirmed an email address
        """
        if not username_or_email:
            msg = "Username or email address is required"
            raise InvalidArgumentError(msg, argument="username_or_email")
        if expiration_minutes is None:
            expiration_minutes = self._default_expiration_minutes
        if expiration_minutes < 1:
            msg = (
                "Token expiration should give the user at least a minute "
                "to change their password"
            )
            raise InvalidArgumentError(msg, argument="expiration_minutes")

        # Lookup is by confirmed email address only
        user = await self._user_repo.find_by_email_address(
            normalize_email(username_or_email),
        )
        if user is None:
            logger.debug("Password reset requested for unknown address")
            return None

        if not user.is_confirmed:
            raise UserNotConfirmedError(user.username)

        now = self._clock()
        if user.has_active_password_reset_token(now):
            logger.debug("Reusing active password reset token for user: %s", user.id)
            return user

        user.issue_password_reset_token(
            self._token_generator.generate(),
            minutes_after(now, expiration_minutes),
        )
        await self._user_repo.save(user)
        await self._user_repo.commit()
        logger.info("Issued password reset token for user: %s", user.id)
        return user

    async def reset_password_with_token(
        self,
        username: str,
        token: str,
        new_password: str,
    ) -> bool:
        """Set a new password if ``token`` is the user's live reset token.

        Wrong and expired tokens are indistinguishable to the caller: both
        yield False.

        Raises
        ------
        InvalidArgumentError
            If the new password is empty or too weak
        UserNotConfirmedError
            If the token matched but the user is not confirmed
        """
        if not new_password:
            msg = "New password is required"
            raise InvalidArgumentError(msg, argument="new_password")

        user = await self._user_repo.find_by_username(username) if username else None
        if user is None or not self._token_matches(user, token):
            logger.debug("Password reset rejected for: %s", username)
            return False

        if not user.is_confirmed:
            raise UserNotConfirmedError(user.username)
        self._password_service.validate_strength(new_password)

        hashed_password, algorithm = self._password_service.hash_with_algorithm(
            new_password,
        )
        user.change_password_hash(hashed_password, algorithm)
        user.clear_password_reset_token()
        await self._user_repo.save(user)
        await self._user_repo.commit()
        logger.info("Password reset completed for user: %s", user.id)
        return True

    def _token_matches(self, user: User, token: str) -> bool:
        expected = user.password_reset_token
        if not token or not expected:
            return False
        if not hmac.compare_digest(expected.encode("utf-8"), token.encode("utf-8")):
            return False
        return user.has_active_password_reset_token(self._clock())
