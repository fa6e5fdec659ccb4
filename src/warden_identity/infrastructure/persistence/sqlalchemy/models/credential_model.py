"""SQLAlchemy model for user credentials."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from warden_identity.domain.shared.clock import utc_now
from warden_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase

if TYPE_CHECKING:
    from warden_identity.infrastructure.persistence.sqlalchemy.models.user_model import (
        UserModel,
    )


class CredentialModel(IdentityBase):
    """SQLAlchemy model for one authentication method of a user.

    At most one row per (user_id, type).
    """

    __tablename__ = "credentials"
    __table_args__ = (
        UniqueConstraint("user_id", "type", name="uq_credentials_user_id_type"),
        Index("ix_credentials_type_value", "type", "value"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    user: Mapped[UserModel] = relationship(back_populates="credentials")

    def __repr__(self) -> str:
        return f"<CredentialModel(id={self.id}, user_id={self.user_id}, type={self.type})>"
