"""Integration tests for UserRepositorySQLAlchemy."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest
from sqlalchemy.exc import OperationalError

from warden_identity import (
    Credential,
    CredentialType,
    DuplicateEmailError,
    DuplicateUsernameError,
    StoreError,
    User,
)
from warden_identity.infrastructure.persistence.sqlalchemy import (
    IdentityBase,
    UserRepositorySQLAlchemy,
)

TEST_EMAIL = "a@x.com"


def _confirmed(username="alice", email=TEST_EMAIL) -> User:
    return User(
        username=username,
        email_address=email,
        hashed_password="hash",
        password_hash_algorithm="bcrypt",
    )


@pytest.fixture
def user_repo(db_session):
    """Create UserRepository instance with the test session."""
    return UserRepositorySQLAlchemy(db_session)


@pytest.mark.integration
class TestUserRepositorySQLAlchemy:
    """Integration tests for UserRepositorySQLAlchemy."""

    @pytest.mark.asyncio
    async def test_save_and_find_by_id(self, user_repo):
        """Can save and retrieve a user by ID."""
        user = User.create("alice", TEST_EMAIL, "hash", "bcrypt", "token")

        await user_repo.save(user)
        await user_repo.commit()

        found = await user_repo.find_by_id(user.id)

        assert found is not None
        assert found.id == user.id
        assert isinstance(found.id, UUID)
        assert found.username == "alice"
        assert found.email_address is None
        assert found.unconfirmed_email_address == TEST_EMAIL
        assert found.email_confirmation_token == "token"
        assert found.hashed_password == "hash"
        assert found.password_hash_algorithm == "bcrypt"
        assert found.email_allowed is True

    @pytest.mark.asyncio
    async def test_find_by_id_not_found(self, user_repo):
        assert await user_repo.find_by_id(uuid4()) is None

    @pytest.mark.asyncio
    async def test_find_by_username_is_exact(self, user_repo):
        await user_repo.save(_confirmed())
        await user_repo.commit()

        assert (await user_repo.find_by_username("alice")) is not None
        assert await user_repo.find_by_username("bob") is None

    @pytest.mark.asyncio
    async def test_find_by_email_address_matches_confirmed_only(self, user_repo):
        await user_repo.save(User.create("bob", "b@x.com", "hash", "bcrypt", "t"))
        await user_repo.save(_confirmed())
        await user_repo.commit()

        found = await user_repo.find_by_email_address(TEST_EMAIL)

        assert found is not None
        assert found.username == "alice"
        assert await user_repo.find_by_email_address("b@x.com") is None

    @pytest.mark.asyncio
    async def test_find_by_unconfirmed_email_address(self, user_repo):
        """Pending addresses may collide across users."""
        await user_repo.save(User.create("alice", "p@x.com", "hash", "bcrypt", "t1"))
        await user_repo.save(User.create("bob", "p@x.com", "hash", "bcrypt", "t2"))
        await user_repo.commit()

        both = await user_repo.find_by_unconfirmed_email_address("p@x.com")
        only_bob = await user_repo.find_by_unconfirmed_email_address("p@x.com", "bob")

        assert {u.username for u in both} == {"alice", "bob"}
        assert [u.username for u in only_bob] == ["bob"]

    @pytest.mark.asyncio
    async def test_find_by_username_or_email_address(self, user_repo):
        await user_repo.save(_confirmed())
        await user_repo.commit()

        by_name = await user_repo.find_by_username_or_email_address("alice")
        by_email = await user_repo.find_by_username_or_email_address("A@x.com")

        assert by_name is not None and by_name.username == "alice"
        assert by_email is not None and by_email.username == "alice"
        assert await user_repo.find_by_username_or_email_address("nobody") is None

    @pytest.mark.asyncio
    async def test_username_match_wins_over_email_match(self, user_repo):
        """Another account whose email equals the identifier does not shadow it."""
        await user_repo.save(_confirmed("alice@x.com", "other@x.com"))
        await user_repo.save(_confirmed("bob", "alice@x.com"))
        await user_repo.commit()

        found = await user_repo.find_by_username_or_email_address("alice@x.com")

        assert found.username == "alice@x.com"

    @pytest.mark.asyncio
    async def test_update_persists_changes(self, user_repo):
        user = User.create("alice", TEST_EMAIL, "hash", "bcrypt", "token")
        await user_repo.save(user)
        await user_repo.commit()

        user.confirm_email_address()
        user.update_email_allowed(False)
        expires = datetime(2030, 1, 1, tzinfo=timezone.utc)
        user.issue_password_reset_token("reset", expires)
        await user_repo.save(user)
        await user_repo.commit()

        found = await user_repo.find_by_username("alice")
        assert found.email_address == TEST_EMAIL
        assert found.unconfirmed_email_address is None
        assert found.email_allowed is False
        assert found.password_reset_token == "reset"
        assert found.password_reset_token_expiration_date == expires

    @pytest.mark.asyncio
    async def test_duplicate_username_rejected_by_store(self, user_repo):
        await user_repo.save(_confirmed("alice", "a@x.com"))
        await user_repo.commit()

        with pytest.raises(DuplicateUsernameError):
            await user_repo.save(_confirmed("alice", "b@x.com"))

    @pytest.mark.asyncio
    async def test_duplicate_confirmed_email_rejected_by_store(self, user_repo):
        await user_repo.save(_confirmed("alice", "a@x.com"))
        await user_repo.commit()

        with pytest.raises(DuplicateEmailError):
            await user_repo.save(_confirmed("bob", "a@x.com"))

    @pytest.mark.asyncio
    async def test_failed_save_rolls_back_unit(self, user_repo):
        await user_repo.save(_confirmed("alice", "a@x.com"))
        await user_repo.commit()

        await user_repo.save(_confirmed("carol", "c@x.com"))
        with pytest.raises(DuplicateUsernameError):
            await user_repo.save(_confirmed("alice", "d@x.com"))

        assert await user_repo.find_by_username("carol") is None
        assert await user_repo.find_by_username("alice") is not None


@pytest.mark.integration
class TestUserCredentialPersistence:
    """Credentials are stored through their owning user."""

    @pytest.mark.asyncio
    async def test_credentials_round_trip(self, user_repo):
        user = _confirmed()
        user.replace_credential(Credential.create(CredentialType.API_KEY, "key-1"))
        await user_repo.save(user)
        await user_repo.commit()

        found = await user_repo.find_by_id(user.id)

        assert len(found.credentials) == 1
        assert found.credentials[0].type == "apikey.v1"
        assert found.credentials[0].value == "key-1"
        assert found.credentials[0].user_id == user.id

    @pytest.mark.asyncio
    async def test_replace_credential_swaps_rows(self, user_repo):
        user = _confirmed()
        user.replace_credential(Credential.create(CredentialType.API_KEY, "key-1"))
        user.replace_credential(Credential.create(CredentialType.PASSWORD, "hash-1"))
        await user_repo.save(user)
        await user_repo.commit()

        user.replace_credential(Credential.create(CredentialType.API_KEY, "key-2"))
        await user_repo.save(user)
        await user_repo.commit()

        found = await user_repo.find_by_id(user.id)
        by_type = {c.type: c.value for c in found.credentials}
        assert by_type == {"apikey.v1": "key-2", "password.bcrypt": "hash-1"}

    @pytest.mark.asyncio
    async def test_timestamps_are_timezone_aware(self, user_repo):
        user = _confirmed()
        user.issue_password_reset_token("reset", datetime.now(timezone.utc))
        await user_repo.save(user)
        await user_repo.commit()

        found = await user_repo.find_by_id(user.id)

        assert found.created_at.tzinfo is not None
        assert found.password_reset_token_expiration_date.tzinfo is not None
        drift = (
            found.password_reset_token_expiration_date
            - user.password_reset_token_expiration_date
        )
        assert abs(drift) < timedelta(seconds=1)

    @pytest.mark.asyncio
    async def test_edited_credential_copy_persists_new_value(
        self,
        user_repo,
        session_maker,
    ):
        """Replacing with an edited copy of a stored credential writes the new value."""
        user = _confirmed()
        user.replace_credential(Credential.create(CredentialType.API_KEY, "key-1"))
        await user_repo.save(user)
        await user_repo.commit()
        stored = user.find_credential("apikey.v1")

        user.replace_credential(replace(stored, value="key-2"))
        await user_repo.save(user)
        await user_repo.commit()

        async with session_maker() as session:
            found = await UserRepositorySQLAlchemy(session).find_by_id(user.id)
        values = [(c.type, c.value) for c in found.credentials]
        assert values == [("apikey.v1", "key-2")]
        assert found.credentials[0].id != stored.id


@pytest.mark.integration
class TestStoreFailures:
    @pytest.mark.asyncio
    async def test_missing_schema_raises_store_error(self, user_repo, async_engine):
        async with async_engine.begin() as conn:
            await conn.run_sync(IdentityBase.metadata.drop_all)

        with pytest.raises(StoreError):
            await user_repo.find_by_username("alice")

    @pytest.mark.asyncio
    async def test_failed_commit_leaves_nothing_behind(
        self,
        user_repo,
        db_session,
        monkeypatch,
    ):
        await user_repo.save(_confirmed("carol", "c@x.com"))
        monkeypatch.setattr(
            db_session,
            "commit",
            AsyncMock(side_effect=OperationalError("COMMIT", {}, Exception("I/O"))),
        )

        with pytest.raises(StoreError):
            await user_repo.commit()

        monkeypatch.undo()
        assert await user_repo.find_by_username("carol") is None
