from __future__ import annotations

from app.client import views
from app.client.base import ApiContext
from app.client.result import Result

USERS_URL = "/api/admin/users"


class UserContext(ApiContext):
    """Admin-side cache of user accounts."""

    def __init__(self, client, token: str | None = None):
        super().__init__(client, token)
        self.users: list[dict] = []

    async def load_all(self) -> Result:
        result = await self._request("GET", USERS_URL)
        if result.ok:
            self.users = list(result.value or [])
        return result

    def _replace(self, record: dict) -> None:
        self.users = [record if u.get("id") == record.get("id") else u for u in self.users]

    async def set_role(self, user_id: str, role: str) -> Result:
        result = await self._request("PUT", f"{USERS_URL}/{user_id}/role", json={"role": role})
        if result.ok:
            self._replace(result.value)
        return result

    async def set_active(self, user_id: str, is_active: bool) -> Result:
        result = await self._request(
            "PUT", f"{USERS_URL}/{user_id}/active", json={"is_active": is_active},
        )
        if result.ok:
            self._replace(result.value)
        return result

    def filtered(self, search_term: str = "", role: str = "all") -> list[dict]:
        return views.filter_users(self.users, search_term, role)
