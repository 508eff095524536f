from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .errors import UpstreamError
from .sms import OutboundMessage

logger = logging.getLogger(__name__)

TEXTABLE_ERROR = "Textable API error"


@dataclass
class ProviderReply:
    status_code: int
    ok: bool
    body: Any


def parse_provider_body(text: str) -> Any:
    """Decode Textable's response, wrapping non-JSON text as {"raw": text}."""
    try:
        return json.loads(text)
    except ValueError:
        return {"raw": text}


class TextableClient:
    """
    Minimal Textable messages API client.

    One POST per message; no retries and no timeout beyond httpx's default.
    `transport` is only there so tests can plug in httpx.MockTransport.
    """

    def __init__(self, url: str, transport: httpx.BaseTransport | None = None) -> None:
        self.url = url
        self._transport = transport

    def send(self, message: OutboundMessage, api_key: str) -> ProviderReply:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        payload = message.to_provider_json()
        logger.info("Sending to Textable: %s", payload)

        try:
            with httpx.Client(transport=self._transport) as client:
                resp = client.post(self.url, json=payload, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Textable request failed: %s", exc)
            raise UpstreamError(TEXTABLE_ERROR, details=str(exc)) from exc

        return ProviderReply(
            status_code=resp.status_code,
            ok=resp.is_success,
            body=parse_provider_body(resp.text),
        )
