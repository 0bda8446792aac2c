"""Tagged result returned by every client context call."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import httpx


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    PAYLOAD = "payload"
    TRANSPORT = "transport"
    SERVER = "server"


_STATUS_KINDS = {
    400: ErrorKind.VALIDATION,
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
    409: ErrorKind.CONFLICT,
    413: ErrorKind.PAYLOAD,
    415: ErrorKind.PAYLOAD,
    422: ErrorKind.VALIDATION,
}


@dataclass(frozen=True)
class Result:
    ok: bool
    value: Any = None
    error: ErrorKind | None = None
    message: str = ""
    fields: list[str] = field(default_factory=list)

    @classmethod
    def success(cls, value: Any = None) -> Result:
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str = "", fields: list[str] | None = None) -> Result:
        return cls(ok=False, error=kind, message=message, fields=fields or [])

    @classmethod
    def from_error_response(cls, response: httpx.Response) -> Result:
        kind = _STATUS_KINDS.get(response.status_code, ErrorKind.SERVER)
        message, fields = response.reason_phrase, []
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = str(body.get("detail") or message)
            fields = list(body.get("fields") or [])
        return cls.failure(kind, message, fields)
