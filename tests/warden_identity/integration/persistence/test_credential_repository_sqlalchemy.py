"""Integration tests for CredentialRepositorySQLAlchemy."""

import pytest

from warden_identity import Credential, CredentialType, StoreError, User
from warden_identity.infrastructure.persistence.sqlalchemy import (
    CredentialRepositorySQLAlchemy,
    IdentityBase,
    UserRepositorySQLAlchemy,
)


@pytest.fixture
def user_repo(db_session):
    return UserRepositorySQLAlchemy(db_session)


@pytest.fixture
def credential_repo(db_session):
    return CredentialRepositorySQLAlchemy(db_session)


async def _user_with_key(user_repo, username, key) -> User:
    user = User(username=username, email_address=f"{username}@x.com")
    user.replace_credential(Credential.create(CredentialType.API_KEY, key))
    await user_repo.save(user)
    await user_repo.commit()
    return user


@pytest.mark.integration
class TestCredentialRepositorySQLAlchemy:
    """Integration tests for CredentialRepositorySQLAlchemy."""

    @pytest.mark.asyncio
    async def test_find_by_type_and_value(self, user_repo, credential_repo):
        alice = await _user_with_key(user_repo, "alice", "key-a")
        await _user_with_key(user_repo, "bob", "key-b")

        found = await credential_repo.find_by_type_and_value("apikey.v1", "key-a")

        assert found is not None
        assert found.user_id == alice.id
        assert found.value == "key-a"

    @pytest.mark.asyncio
    async def test_match_is_exact(self, user_repo, credential_repo):
        await _user_with_key(user_repo, "alice", "key-a")

        assert await credential_repo.find_by_type_and_value("apikey.v1", "KEY-A") is None
        assert await credential_repo.find_by_type_and_value("APIKEY.V1", "key-a") is None
        assert await credential_repo.find_by_type_and_value("apikey.v2", "key-a") is None

    @pytest.mark.asyncio
    async def test_replaced_value_no_longer_authenticates(
        self,
        user_repo,
        credential_repo,
    ):
        alice = await _user_with_key(user_repo, "alice", "key-old")

        alice.replace_credential(Credential.create(CredentialType.API_KEY, "key-new"))
        await user_repo.save(alice)
        await user_repo.commit()

        assert await credential_repo.find_by_type_and_value("apikey.v1", "key-old") is None
        assert await credential_repo.find_by_type_and_value("apikey.v1", "key-new")

    @pytest.mark.asyncio
    async def test_list_for_user(self, user_repo, credential_repo):
        alice = await _user_with_key(user_repo, "alice", "key-a")
        alice.replace_credential(Credential.create(CredentialType.PASSWORD, "hash"))
        await user_repo.save(alice)
        await user_repo.commit()

        credentials = await credential_repo.list_for_user(alice.id)

        assert [c.type for c in credentials] == ["apikey.v1", "password.bcrypt"]

    @pytest.mark.asyncio
    async def test_value_shared_by_two_users_is_store_error(
        self,
        user_repo,
        credential_repo,
    ):
        """An exact lookup must resolve to one owner at most."""
        await _user_with_key(user_repo, "alice", "shared")
        await _user_with_key(user_repo, "bob", "shared")

        with pytest.raises(StoreError):
            await credential_repo.find_by_type_and_value("apikey.v1", "shared")

    @pytest.mark.asyncio
    async def test_missing_schema_is_store_error(self, credential_repo, async_engine):
        async with async_engine.begin() as conn:
            await conn.run_sync(IdentityBase.metadata.drop_all)

        with pytest.raises(StoreError):
            await credential_repo.find_by_type_and_value("apikey.v1", "key-a")
