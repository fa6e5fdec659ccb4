"""SQLAlchemy implementation of UserRepository."""

import logging
from uuid import UUID

from sqlalchemy import Select, or_, select
from sqlalchemy.exc import MultipleResultsFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from warden_identity.domain.shared.clock import ensure_tz_aware
from warden_identity.domain.user import User, UserRepository, normalize_email
from warden_identity.exceptions import StoreError
from warden_identity.infrastructure.persistence.sqlalchemy.models import UserModel
from warden_identity.infrastructure.persistence.sqlalchemy.repositories.credential_repository import (  # noqa: E501
    credential_to_domain,
    credential_to_model,
)
from warden_identity.infrastructure.persistence.sqlalchemy.repositories.errors import (
    translate_store_error,
)

logger = logging.getLogger(__name__)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface.

    ``save`` flushes immediately so constraint violations surface as
    DuplicateUsernameError / DuplicateEmailError at the call site. On any
    store failure the session is rolled back before the error is raised.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._last_saved: User | None = None

    async def find_by_id(self, user_id: UUID) -> User | None:
        return await self._find_one(self._select().where(UserModel.id == user_id))

    async def find_by_username(self, username: str) -> User | None:
        return await self._find_one(
            self._select().where(UserModel.username == username),
        )

    async def find_by_email_address(self, email_address: str) -> User | None:
        return await self._find_one(
            self._select().where(UserModel.email_address == email_address),
        )

    async def find_by_unconfirmed_email_address(
        self,
        unconfirmed_email_address: str,
        username: str | None = None,
    ) -> list[User]:
        stmt = self._select().where(
            UserModel.unconfirmed_email_address == unconfirmed_email_address,
        )
        if username is not None:
            stmt = stmt.where(UserModel.username == username)
        models = await self._find_all(stmt.order_by(UserModel.created_at))
        return [self._map_to_domain(model) for model in models]

    async def find_by_username_or_email_address(
        self,
        username_or_email: str,
    ) -> User | None:
        stmt = self._select().where(
            or_(
                UserModel.username == username_or_email,
                UserModel.email_address == normalize_email(username_or_email),
            ),
        )
        models = await self._find_all(stmt)
        # A username match wins over an email match on another account
        for model in models:
            if model.username == username_or_email:
                return self._map_to_domain(model)
        return self._map_to_domain(models[0]) if models else None

    async def save(self, user: User) -> None:
        self._last_saved = user
        existing = await self._find_model_by_id(user.id)

        if existing is None:
            self._session.add(self._map_to_model(user))
            logger.debug("Staged new user: %s", user.id)
        else:
            self._update_model(existing, user)
            await self._sync_credentials(existing, user)
            logger.debug("Staged update for user: %s", user.id)

        await self._flush()

    async def commit(self) -> None:
        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise translate_store_error(e, self._last_saved) from e
        finally:
            self._last_saved = None

    async def rollback(self) -> None:
        await self._session.rollback()
        self._last_saved = None

    async def _sync_credentials(self, model: UserModel, user: User) -> None:
        """Bring the stored credential rows in line with the aggregate.

        Removed rows, and rows whose type or value no longer match the
        aggregate, are deleted and flushed before new rows are inserted, so
        a replacement never trips the (user_id, type) constraint. Both steps
        stay inside the current transaction.
        """
        wanted = {c.id: (c.type, c.value) for c in user.credentials}
        stale = [
            c for c in model.credentials if wanted.get(c.id) != (c.type, c.value)
        ]
        if stale:
            for credential_model in stale:
                model.credentials.remove(credential_model)
            await self._flush()

        stored = {c.id for c in model.credentials}
        for credential in user.credentials:
            if credential.id not in stored:
                model.credentials.append(credential_to_model(credential))

    async def _flush(self) -> None:
        try:
            await self._session.flush()
        except SQLAlchemyError as e:
            await self._session.rollback()
            raise translate_store_error(e, self._last_saved) from e

    def _select(self) -> Select:
        return select(UserModel).options(selectinload(UserModel.credentials))

    async def _find_one(self, stmt: Select) -> User | None:
        try:
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        except MultipleResultsFound as e:
            msg = "Lookup matched more than one user"
            raise StoreError(msg) from e
        except SQLAlchemyError as e:
            raise translate_store_error(e, None) from e

        return self._map_to_domain(model) if model else None

    async def _find_all(self, stmt: Select) -> list[UserModel]:
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise translate_store_error(e, None) from e
        return list(result.scalars().all())

    async def _find_model_by_id(self, user_id: UUID) -> UserModel | None:
        try:
            result = await self._session.execute(
                self._select().where(UserModel.id == user_id),
            )
        except SQLAlchemyError as e:
            raise translate_store_error(e, None) from e
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            username=model.username,
            email_address=model.email_address,
            unconfirmed_email_address=model.unconfirmed_email_address,
            hashed_password=model.hashed_password,
            password_hash_algorithm=model.password_hash_algorithm,
            email_confirmation_token=model.email_confirmation_token,
            password_reset_token=model.password_reset_token,
            password_reset_token_expiration_date=model.password_reset_token_expiration_date,
            email_allowed=model.email_allowed,
            credentials=[credential_to_domain(c) for c in model.credentials],
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            username=user.username,
            email_address=user.email_address,
            unconfirmed_email_address=user.unconfirmed_email_address,
            hashed_password=user.hashed_password,
            password_hash_algorithm=user.password_hash_algorithm,
            email_confirmation_token=user.email_confirmation_token,
            password_reset_token=user.password_reset_token,
            password_reset_token_expiration_date=user.password_reset_token_expiration_date,
            email_allowed=user.email_allowed,
            credentials=[credential_to_model(c) for c in user.credentials],
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        model.email_address = user.email_address
        model.unconfirmed_email_address = user.unconfirmed_email_address
        model.hashed_password = user.hashed_password
        model.password_hash_algorithm = user.password_hash_algorithm
        model.email_confirmation_token = user.email_confirmation_token
        model.password_reset_token = user.password_reset_token
        model.password_reset_token_expiration_date = (
            user.password_reset_token_expiration_date
        )
        model.email_allowed = user.email_allowed
        model.updated_at = user.updated_at
