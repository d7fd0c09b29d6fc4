from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.database.session import get_async_session
from users_api.repositories.user_repository import SqlAlchemyUserRepository
from users_api.services.user_service import UserService


def get_user_service(db: AsyncSession = Depends(get_async_session)) -> UserService:
    # Explicit construction per request: service <- port adapter <- session.
    return UserService(SqlAlchemyUserRepository(db))
