import hmac
import logging

from warden_identity.domain.user import User, UserRepository
from warden_identity.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


class EmailConfirmationService:
    """Confirms a user's pending email address with its confirmation token."""

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    async def confirm_email_address(self, user: User | None, token: str) -> bool:
        """Move the pending email address into the confirmed slot.

        There is no "already confirmed" short-circuit: once the token has
        been consumed it is cleared, so any later call returns False.

        Returns
        -------
        True if the token matched and the change was committed, False if the
        token does not match

        Raises
        ------
        InvalidArgumentError
            If the user or the token is missing
        """
        if user is None:
            msg = "User is required"
            raise InvalidArgumentError(msg, argument="user")
        if not token:
            msg = "Confirmation token is required"
            raise InvalidArgumentError(msg, argument="token")

        expected = user.email_confirmation_token
        if expected is None or not hmac.compare_digest(
            expected.encode("utf-8"),
            token.encode("utf-8"),
        ):
            logger.debug("Email confirmation token mismatch for user: %s", user.id)
            return False

        user.confirm_email_address()
        await self._user_repo.save(user)
        await self._user_repo.commit()
        logger.info("Email address confirmed for user: %s", user.id)
        return True
