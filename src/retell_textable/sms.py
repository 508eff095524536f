from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IncomingEvent(BaseModel):
    """Retell function-call event, as much of it as we could parse."""

    name: str | None = None
    call: dict[str, Any] = Field(default_factory=dict)
    args: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> IncomingEvent:
        # Anything that isn't the expected shape degrades to "missing" so the
        # field checks downstream produce the rejection.
        name = payload.get("name")
        call = payload.get("call")
        args = payload.get("args")
        return cls(
            name=name if isinstance(name, str) else None,
            call=call if isinstance(call, dict) else {},
            args=args if isinstance(args, dict) else {},
        )


class OutboundMessage(BaseModel):
    """Body POSTed to Textable's messages endpoint."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    to_number: str = Field(alias="toNumber")
    from_number: str = Field(alias="fromNumber")
    message_body: str = Field(alias="messageBody")

    @field_validator("to_number", "message_body")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    def to_provider_json(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)
