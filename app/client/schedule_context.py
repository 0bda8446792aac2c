from __future__ import annotations

from app.client import views
from app.client.base import ApiContext
from app.client.result import Result

SCHEDULES_URL = "/api/schedules"


class ScheduleContext(ApiContext):
    """Admin-side cache of viewing appointments."""

    def __init__(self, client, token: str | None = None):
        super().__init__(client, token)
        self.schedules: list[dict] = []

    async def load_all(self) -> Result:
        result = await self._request("GET", SCHEDULES_URL)
        if result.ok:
            self.schedules = list(result.value or [])
        return result

    async def update_status(self, schedule_id: str, status: str) -> Result:
        result = await self._request(
            "PUT", f"{SCHEDULES_URL}/{schedule_id}/status", json={"status": status},
        )
        if result.ok:
            self.schedules = [
                result.value if s.get("id") == schedule_id else s for s in self.schedules
            ]
        return result

    async def delete(self, schedule_id: str) -> Result:
        result = await self._request("DELETE", f"{SCHEDULES_URL}/{schedule_id}")
        if result.ok:
            self.schedules = [s for s in self.schedules if s.get("id") != schedule_id]
        return result

    def filtered(self, status: str = "all") -> list[dict]:
        return views.filter_schedules(self.schedules, status)

    def counts(self) -> dict[str, int]:
        return views.schedule_counts(self.schedules)
