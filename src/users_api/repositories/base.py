from typing import Protocol

from users_api.domain.user import User


class UserRepositoryPort(Protocol):
    """
    Persistence capability required by `UserService`.

    Implementations raise `users_api.exceptions.PersistenceError` when the database
    rejects an operation; they never classify errors themselves.
    """

    async def find_all(self) -> list[User]:
        ...

    async def find_by_id(self, user_id: int) -> User | None:
        ...

    async def save(self, user: User) -> User | None:
        """
        Insert `user` when its id is None, otherwise overwrite the stored row.
        Returns None when the row to overwrite no longer exists.
        """
        ...

    async def delete(self, user_id: int) -> bool:
        """Return True when a row was removed."""
        ...
