from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from users_api.database.base import Base
from users_api.domain.user import User


class UserRecord(Base):
    """
    `users` table mapping.

    Email uniqueness is enforced here, by the database, and nowhere in application
    code: a duplicate insert fails with a unique violation on `uq_users_email`.
    """
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("email"),)

    # Generated by the database; never reassigned.
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    def to_domain(self) -> User:
        return User(id=self.id, name=self.name, email=self.email)

    def __repr__(self) -> str:
        return f"<UserRecord(id={self.id!r}, email={self.email!r})>"
