"""Composition root wiring identity services to a database session."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from warden_config.settings import Settings
from warden_identity.application.services import (
    AuthenticationService,
    EmailConfirmationService,
    PasswordResetService,
    UserService,
)
from warden_identity.domain.shared.clock import Clock, utc_now
from warden_identity.infrastructure.persistence.sqlalchemy.repositories import (
    CredentialRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from warden_identity.services import PasswordHashingService, TokenGenerator


class IdentityServiceFactory:
    """Builds the identity services for one session (one unit of work).

    Repositories and the crypto helpers are created on demand and shared by
    every service obtained from the same factory.
    """

    def __init__(
        self,
        session: AsyncSession,
        settings: Settings,
        clock: Clock = utc_now,
    ):
        self._session = session
        self._settings = settings
        self._clock = clock

        # Cached instances (created on demand)
        self._user_repo: UserRepositorySQLAlchemy | None = None
        self._credential_repo: CredentialRepositorySQLAlchemy | None = None
        self._password_service: PasswordHashingService | None = None
        self._token_generator: TokenGenerator | None = None

    @property
    def session(self) -> AsyncSession:
        return self._session

    def user_repository(self) -> UserRepositorySQLAlchemy:
        if self._user_repo is None:
            self._user_repo = UserRepositorySQLAlchemy(self._session)
        return self._user_repo

    def credential_repository(self) -> CredentialRepositorySQLAlchemy:
        if self._credential_repo is None:
            self._credential_repo = CredentialRepositorySQLAlchemy(self._session)
        return self._credential_repo

    def password_service(self) -> PasswordHashingService:
        if self._password_service is None:
            self._password_service = PasswordHashingService(
                rounds=self._settings.bcrypt_rounds,
                min_length=self._settings.password_min_length,
            )
        return self._password_service

    def token_generator(self) -> TokenGenerator:
        if self._token_generator is None:
            self._token_generator = TokenGenerator(self._settings.token_bytes)
        return self._token_generator

    def user_service(self) -> UserService:
        return UserService(
            user_repository=self.user_repository(),
            password_service=self.password_service(),
            token_generator=self.token_generator(),
            confirm_email_addresses=self._settings.confirm_email_addresses,
        )

    def authentication_service(self) -> AuthenticationService:
        return AuthenticationService(
            user_repository=self.user_repository(),
            credential_repository=self.credential_repository(),
            password_service=self.password_service(),
        )

    def email_confirmation_service(self) -> EmailConfirmationService:
        return EmailConfirmationService(user_repository=self.user_repository())

    def password_reset_service(self) -> PasswordResetService:
        return PasswordResetService(
            user_repository=self.user_repository(),
            password_service=self.password_service(),
            token_generator=self.token_generator(),
            default_expiration_minutes=(
                self._settings.password_reset_token_expiration_minutes
            ),
            clock=self._clock,
        )
