"""SQLAlchemy implementation of CredentialRepository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import MultipleResultsFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from warden_identity.domain.shared.clock import ensure_tz_aware
from warden_identity.domain.user import Credential, CredentialRepository
from warden_identity.exceptions import StoreError
from warden_identity.infrastructure.persistence.sqlalchemy.models import (
    CredentialModel,
)
from warden_identity.infrastructure.persistence.sqlalchemy.repositories.errors import (
    translate_store_error,
)


def credential_to_domain(model: CredentialModel) -> Credential:
    return Credential(
        id=model.id,
        type=model.type,
        value=model.value,
        user_id=model.user_id,
        created_at=ensure_tz_aware(model.created_at),
    )


def credential_to_model(credential: Credential) -> CredentialModel:
    return CredentialModel(
        id=credential.id,
        user_id=credential.user_id,
        type=credential.type,
        value=credential.value,
        created_at=credential.created_at,
    )


class CredentialRepositorySQLAlchemy(CredentialRepository):
    """SQLAlchemy implementation of the CredentialRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_type_and_value(
        self,
        credential_type: str,
        value: str,
    ) -> Credential | None:
        stmt = select(CredentialModel).where(
            CredentialModel.type == credential_type,
            CredentialModel.value == value,
        )
        try:
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
        except MultipleResultsFound as e:
            msg = f"Multiple credentials share one {credential_type} value"
            raise StoreError(msg) from e
        except SQLAlchemyError as e:
            raise translate_store_error(e, None) from e

        return credential_to_domain(model) if model else None

    async def list_for_user(self, user_id: UUID) -> list[Credential]:
        stmt = (
            select(CredentialModel)
            .where(CredentialModel.user_id == user_id)
            .order_by(CredentialModel.created_at)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise translate_store_error(e, None) from e
        return [credential_to_domain(model) for model in result.scalars().all()]
