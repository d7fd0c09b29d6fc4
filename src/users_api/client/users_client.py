"""
Async HTTP client for the /users API.

Usage:
    async with UsersClient("http://localhost:3000") as client:
        user = await client.create_user("Gabriel", "gabriel@example.com")
        await client.update_user(user.id, name="Gabe")

Non-2xx responses are raised as the same categories the service uses
(NotFoundError, ConflictError, BadRequestError, InternalError), rebuilt from the
status code and the JSON error body.
"""

import logging
from typing import Any

import httpx

from users_api.domain.user import User
from users_api.exceptions.base import error_from_response

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"


class UsersClient:
    """
    Args:
        base_url: API root; ignored when `client` is given.
        client: an existing httpx.AsyncClient (e.g. one using ASGITransport in tests).
            A client passed in is not closed by `aclose()`.
        timeout: seconds, for the client this class creates itself.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, *, client: httpx.AsyncClient | None = None, timeout: float = 10.0):
        self._owns_client = client is None
        self._http = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "UsersClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Operations (one per route)
    # ------------------------------------------------------------------

    async def list_users(self) -> list[User]:
        data = await self._request("GET", "/users")
        return [_to_user(item) for item in data]

    async def get_user(self, user_id: int) -> User:
        return _to_user(await self._request("GET", f"/users/{user_id}"))

    async def create_user(self, name: str, email: str) -> User:
        return _to_user(await self._request("POST", "/users", json={"name": name, "email": email}))

    async def update_user(self, user_id: int, *, name: str | None = None, email: str | None = None) -> User:
        """Send only the supplied fields; the server leaves the others unchanged."""
        body = {k: v for k, v in {"name": name, "email": email}.items() if v is not None}
        return _to_user(await self._request("PUT", f"/users/{user_id}", json=body))

    async def delete_user(self, user_id: int) -> bool:
        data = await self._request("DELETE", f"/users/{user_id}")
        return bool(data.get("deleted"))

    # ------------------------------------------------------------------

    async def _request(self, method: str, path: str, *, json: Any = None) -> Any:
        response = await self._http.request(method, path, json=json)
        if response.is_success:
            return response.json()

        try:
            payload = response.json()
        except ValueError:
            payload = None
        logger.debug("client.error_response", extra={"method": method, "path": path, "status": response.status_code})
        raise error_from_response(response.status_code, payload)


def _to_user(data: dict[str, Any]) -> User:
    return User(id=data["id"], name=data["name"], email=data["email"])
