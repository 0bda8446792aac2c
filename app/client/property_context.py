"""Client-side cache of the listing collection.

The context mirrors what the dashboard renders: it loads the collection once,
merges the server's answer after each successful mutation and then refreshes.
Every public call returns a `Result`; failures leave the cache untouched.
"""

from __future__ import annotations

import logging
from typing import Iterable

from app.client import views
from app.client.base import ApiContext
from app.client.result import ErrorKind, Result
from app.errors import ValidationError

logger = logging.getLogger(__name__)

PROPERTIES_URL = "/api/properties"

# (filename, bytes, content type)
ImageFile = tuple[str, bytes, str]


def _form_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_form_fields(fields: dict) -> dict:
    """Flatten a property payload into the multipart form the API expects."""
    form: dict = {}
    for key, value in fields.items():
        if value is None:
            continue
        if key == "location":
            for loc_key, loc_value in value.items():
                form[loc_key] = _form_value(loc_value)
        elif key == "amenities":
            form["amenities"] = [str(a) for a in value]
        else:
            form[key] = _form_value(value)
    return form


class PropertyContext(ApiContext):

    def __init__(self, client, token: str | None = None):
        super().__init__(client, token)
        self.properties: list[dict] = []
        self.loaded = False

    # ── Loading ───────────────────────────────────────────

    async def load(self) -> Result:
        """First load (dashboard mount)."""
        result = await self.refresh()
        self.loaded = result.ok
        return result

    async def refresh(self) -> Result:
        result = await self._request("GET", PROPERTIES_URL)
        if result.ok:
            self.properties = list(result.value or [])
        else:
            logger.warning("Property refresh failed: %s %s", result.error, result.message)
        return result

    def _merge(self, record: dict) -> None:
        for i, existing in enumerate(self.properties):
            if existing.get("id") == record.get("id"):
                self.properties[i] = record
                return
        self.properties.append(record)

    # ── Mutations ─────────────────────────────────────────

    async def add_property(self, fields: dict, images: Iterable[ImageFile] = ()) -> Result:
        files = [("images", image) for image in images]
        result = await self._request(
            "POST", PROPERTIES_URL,
            data=to_form_fields(fields),
            files=files or None,
        )
        if result.ok:
            self._merge(result.value)
            await self.refresh()
        return result

    async def update_property(self, property_id: str, fields: dict, version: int | None = None) -> Result:
        headers = {"If-Match": str(version)} if version is not None else None
        result = await self._request(
            "PUT", f"{PROPERTIES_URL}/{property_id}", json=fields, headers=headers,
        )
        if result.ok:
            self._merge(result.value)
            await self.refresh()
        return result

    async def delete_property(self, property_id: str) -> Result:
        result = await self._request("DELETE", f"{PROPERTIES_URL}/{property_id}")
        if result.ok:
            self.properties = [p for p in self.properties if p.get("id") != property_id]
            await self.refresh()
        return result

    # ── Derived views ─────────────────────────────────────

    def get(self, property_id: str) -> dict | None:
        return next((p for p in self.properties if p.get("id") == property_id), None)

    def favorites(self) -> list[dict]:
        return views.favorites(self.properties)

    def public_listings(self) -> list[dict]:
        return views.public_listings(self.properties)

    def search(
        self,
        location: str | None = None,
        property_type: str | None = None,
        price_range: str | None = None,
    ) -> Result:
        try:
            matches = views.search(self.properties, location, property_type, price_range)
        except ValidationError as exc:
            return Result.failure(ErrorKind.VALIDATION, exc.message, exc.fields)
        return Result.success(matches)
