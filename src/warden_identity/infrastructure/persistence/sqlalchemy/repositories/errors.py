"""Translation of SQLAlchemy failures into identity exceptions."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from warden_identity.domain.user import (
    DuplicateEmailError,
    DuplicateUsernameError,
    User,
)
from warden_identity.exceptions import IdentityError, StoreError

logger = logging.getLogger(__name__)

# Constraint name (PostgreSQL) and column reference (SQLite) per unique key
_USERNAME_MARKERS = ("uq_users_username", "users.username")
_EMAIL_MARKERS = ("uq_users_email_address", "users.email_address")


def _violated_constraint(error: IntegrityError) -> str:
    """Name of the violated constraint, or the headline of the driver message.

    Only the first line is used: PostgreSQL appends a DETAIL line carrying
    the conflicting value, which must not influence the classification.
    """
    orig = error.orig
    sources = (orig, getattr(orig, "__cause__", None), getattr(orig, "diag", None))
    for source in sources:
        name = getattr(source, "constraint_name", None)
        if name:
            return str(name).lower()
    return str(orig).splitlines()[0].lower() if str(orig) else ""


def translate_store_error(error: SQLAlchemyError, user: User | None) -> IdentityError:
    """Map a unique-constraint violation to the matching duplicate error.

    Anything else becomes a StoreError.
    """
    if isinstance(error, IntegrityError):
        constraint = _violated_constraint(error)
        if any(marker in constraint for marker in _USERNAME_MARKERS):
            return DuplicateUsernameError(user.username if user else "")
        if any(marker in constraint for marker in _EMAIL_MARKERS):
            email = ""
            if user is not None:
                email = user.email_address or user.unconfirmed_email_address or ""
            return DuplicateEmailError(email)

    logger.warning("Identity store operation failed: %s", type(error).__name__)
    return StoreError(f"Identity store operation failed: {type(error).__name__}")
