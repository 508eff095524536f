from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from starlette.requests import Request


@dataclass(frozen=True)
class RawEvent:
    """Exact request bytes (for the HMAC) plus a best-effort JSON decode."""

    raw: bytes
    payload: dict[str, Any] = field(default_factory=dict)


def parse_payload(raw: bytes) -> dict[str, Any]:
    """
    Decode a webhook body without ever failing the request.

    Empty bodies, bad UTF-8, bad JSON and non-object documents all become {}.
    """
    if not raw:
        return {}
    try:
        data = json.loads(raw.decode("utf-8"))
    except ValueError:
        # UnicodeDecodeError and JSONDecodeError are both ValueErrors
        return {}
    return data if isinstance(data, dict) else {}


async def read_event(request: Request) -> RawEvent:
    raw = await request.body()
    return RawEvent(raw=raw, payload=parse_payload(raw))
