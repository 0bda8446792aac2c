from __future__ import annotations

import logging

import httpx

from app.client.result import ErrorKind, Result

logger = logging.getLogger(__name__)


class ApiContext:
    """Shared request plumbing: bearer header and Result normalisation.

    Nothing raised while encoding, sending or decoding escapes `_request`.
    """

    def __init__(self, client: httpx.AsyncClient, token: str | None = None):
        self._client = client
        self.token = token

    def _headers(self, extra: dict[str, str] | None = None) -> dict[str, str]:
        headers = dict(extra or {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(self, method: str, url: str, headers: dict[str, str] | None = None, **kwargs) -> Result:
        try:
            response = await self._client.request(method, url, headers=self._headers(headers), **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            return Result.failure(ErrorKind.TRANSPORT, str(exc))
        except (httpx.InvalidURL, TypeError, ValueError) as exc:
            # Raised while building the request, e.g. a payload json cannot encode
            logger.warning("%s %s not sent: %s", method, url, exc)
            return Result.failure(ErrorKind.VALIDATION, str(exc))

        if not response.is_success:
            return Result.from_error_response(response)
        if not response.content:
            return Result.success()
        try:
            return Result.success(response.json())
        except ValueError:
            return Result.failure(ErrorKind.SERVER, "Response was not JSON")
