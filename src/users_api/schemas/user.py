"""User schemas: request validation and response shapes for /users.

Unknown fields are rejected (extra="forbid"); a request that fails validation
never reaches the service.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from users_api.domain.user import UserChanges


class UserCreate(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"name": "Gabriel", "email": "gabriel@example.com"}},
    )

    name: str = Field(min_length=1, max_length=100)
    email: EmailStr


class UserUpdate(BaseModel):
    """Partial update; omitted (or null) fields are left unchanged."""

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"name": "Robert"}},
    )

    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None

    def to_changes(self) -> UserChanges:
        return UserChanges(name=self.name, email=self.email)


class UserRead(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": {"id": 1, "name": "Robert", "email": "jason.todd@gotham.com"}},
    )

    id: int
    name: str
    email: str


class DeleteResponse(BaseModel):
    deleted: bool = True
