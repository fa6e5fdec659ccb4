"""SQLAlchemy model for User aggregate."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, DateTime, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from warden_identity.infrastructure.persistence.sqlalchemy.base import (
    IdentityBase,
    TimestampMixin,
)

if TYPE_CHECKING:
    from warden_identity.infrastructure.persistence.sqlalchemy.models.credential_model import (  # noqa: E501
        CredentialModel,
    )


class UserModel(IdentityBase, TimestampMixin):
    """SQLAlchemy model for persisting User aggregates.

    Username and confirmed email address are unique at the database level;
    these constraints are what settle concurrent registrations.
    """

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email_address", name="uq_users_email_address"),
        CheckConstraint(
            "(password_reset_token IS NULL) = "
            "(password_reset_token_expiration_date IS NULL)",
            name="ck_users_password_reset_token_pair",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    username: Mapped[str] = mapped_column(String(64), nullable=False)
    email_address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    unconfirmed_email_address: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        index=True,
    )
    hashed_password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    password_hash_algorithm: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
    )
    email_confirmation_token: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    password_reset_token: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    password_reset_token_expiration_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    email_allowed: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    credentials: Mapped[list[CredentialModel]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="CredentialModel.created_at",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username={self.username})>"
