from dataclasses import asdict, dataclass
from typing import Any

# Ids are stored in a 32-bit INTEGER column; anything outside this range cannot exist.
MAX_USER_ID = 2**31 - 1


@dataclass
class User:
    """A user as the service and the HTTP client see it. `id` is None until persisted."""

    name: str
    email: str
    id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class UserChanges:
    """Partial update: only the fields that are not None are applied."""

    name: str | None = None
    email: str | None = None

    def supplied(self) -> dict[str, str]:
        return {k: v for k, v in asdict(self).items() if v is not None}
