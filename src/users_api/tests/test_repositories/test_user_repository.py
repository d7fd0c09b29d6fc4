"""
Tests for SqlAlchemyUserRepository.

The adapter never classifies: database failures surface as PersistenceError
carrying the raw DatabaseErrorInfo.
"""

import pytest
from sqlalchemy import func, select

from users_api.domain.user import User
from users_api.exceptions.mapper import PersistenceError
from users_api.models.user import UserRecord


async def count_rows(db_session) -> int:
    return await db_session.scalar(select(func.count()).select_from(UserRecord))


class TestUserRepositoryReads:
    @pytest.mark.asyncio
    async def test_find_all_empty(self, user_repository):
        assert await user_repository.find_all() == []

    @pytest.mark.asyncio
    async def test_find_all_ordered_by_id(self, user_repository, multiple_users):
        found = await user_repository.find_all()
        assert [u.id for u in found] == sorted(u.id for u in multiple_users)
        assert all(isinstance(u, User) for u in found)

    @pytest.mark.asyncio
    async def test_find_by_id(self, user_repository, created_user):
        found = await user_repository.find_by_id(created_user.id)
        assert found == created_user

    @pytest.mark.asyncio
    async def test_find_by_id_missing_returns_none(self, user_repository):
        assert await user_repository.find_by_id(999_999) is None


class TestUserRepositorySave:
    @pytest.mark.asyncio
    async def test_insert_assigns_id(self, user_repository, sample_user_data):
        saved = await user_repository.save(User(**sample_user_data))

        assert saved.id is not None
        assert saved.name == sample_user_data["name"]
        assert saved.email == sample_user_data["email"]

    @pytest.mark.asyncio
    async def test_update_overwrites_fields(self, user_repository, created_user):
        saved = await user_repository.save(User(id=created_user.id, name="Renamed", email=created_user.email))

        assert saved == User(id=created_user.id, name="Renamed", email=created_user.email)
        assert (await user_repository.find_by_id(created_user.id)).name == "Renamed"

    @pytest.mark.asyncio
    async def test_update_missing_row_returns_none(self, user_repository, db_session):
        assert await user_repository.save(User(id=424242, name="Ghost", email="ghost@example.com")) is None
        assert await count_rows(db_session) == 0

    @pytest.mark.asyncio
    async def test_duplicate_email_raises_persistence_error(self, user_repository, created_user, db_session):
        with pytest.raises(PersistenceError) as exc_info:
            await user_repository.save(User(name="Other", email=created_user.email))

        assert exc_info.value.info.code == "23505"
        assert "email" in exc_info.value.info.constraint
        assert exc_info.value.operation == "insert"
        # session was rolled back and is usable again
        assert await count_rows(db_session) == 1

    @pytest.mark.asyncio
    async def test_null_name_raises_persistence_error(self, user_repository):
        with pytest.raises(PersistenceError) as exc_info:
            await user_repository.save(User(name=None, email="noname@example.com"))

        assert exc_info.value.info.code == "23502"
        assert exc_info.value.info.column == "name"


class TestUserRepositoryDelete:
    @pytest.mark.asyncio
    async def test_delete_existing(self, user_repository, created_user, db_session):
        assert await user_repository.delete(created_user.id) is True
        assert await count_rows(db_session) == 0

    @pytest.mark.asyncio
    async def test_delete_missing(self, user_repository, created_user, db_session):
        assert await user_repository.delete(created_user.id + 1000) is False
        assert await count_rows(db_session) == 1
