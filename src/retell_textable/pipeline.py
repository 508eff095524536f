from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final

from .accounts import AccountTable
from .errors import UpstreamError, InvalidEventError
from .sms import IncomingEvent, OutboundMessage
from .textable_client import TEXTABLE_ERROR, TextableClient

logger = logging.getLogger(__name__)

FUNCTION_NAME: Final[str] = "send_textable_sms"

# Ordered extraction candidates; the first non-empty value wins.
AGENT_ID_KEYS: Final[Sequence[tuple[str, ...]]] = (("agent_id",), ("agentId",), ("agent", "id"))
TO_NUMBER_KEYS: Final[Sequence[tuple[str, ...]]] = (("toNumber",), ("to",), ("phone",))
MESSAGE_BODY_KEYS: Final[Sequence[tuple[str, ...]]] = (("messageBody",), ("body",), ("message",))


def first_present(data: Mapping[str, Any], candidates: Sequence[tuple[str, ...]]) -> str | None:
    """
    Return the first non-empty value found along the candidate key paths.

    Strings count when non-empty; non-zero numbers are stringified. Anything
    else (None, "", 0, dicts, lists, booleans) is skipped, so an object-valued
    agent id is reported as missing rather than looked up.
    """
    for path in candidates:
        value: Any = data
        for key in path:
            if not isinstance(value, Mapping):
                value = None
                break
            value = value.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, str) and value:
            return value
        if isinstance(value, (int, float)) and value:
            return str(value)
    return None


@dataclass
class RelayResult:
    status_code: int
    body: dict[str, Any]


class Dispatcher:
    """Validates a Retell function call and forwards it to Textable once."""

    def __init__(self, accounts: AccountTable, client: TextableClient) -> None:
        self.accounts = accounts
        self.client = client

    def dispatch(self, payload: Mapping[str, Any]) -> RelayResult:
        """
        Steps, in order:
          1. function name must be send_textable_sms
          2. agent id from call.agent_id / call.agentId / call.agent.id
          3. account lookup
          4. destination + message from their alias fields
          5. single POST to Textable
          6-8. translate Textable's reply

        Validation problems raise InvalidEventError (400); a failed or
        non-2xx Textable call raises UpstreamError (500).
        """
        event = IncomingEvent.from_payload(dict(payload))
        logger.info("Received Retell function call: %s", event.name)
        logger.debug("call: %s", json.dumps(event.call, default=str))
        logger.debug("args: %s", json.dumps(event.args, default=str))

        if event.name != FUNCTION_NAME:
            raise InvalidEventError("Unknown function name")

        agent_id = first_present(event.call, AGENT_ID_KEYS)
        if not agent_id:
            logger.warning("No agent id in call context: %s", event.call)
            raise InvalidEventError("Missing agent id")

        account = self.accounts.resolve(agent_id)

        to_number = first_present(event.args, TO_NUMBER_KEYS)
        message_body = first_present(event.args, MESSAGE_BODY_KEYS)
        if not to_number or not message_body:
            raise InvalidEventError("Missing toNumber or messageBody")

        message = OutboundMessage(
            to_number=to_number,
            from_number=account.from_number,
            message_body=message_body,
        )
        reply = self.client.send(message, api_key=account.api_key)

        if not reply.ok:
            logger.error("Textable API returned error: %s %s", reply.status_code, reply.body)
            raise UpstreamError(TEXTABLE_ERROR, details=reply.body)

        logger.info("Textable success: %s", reply.body)
        return RelayResult(status_code=200, body={"success": True, "textable": reply.body})
