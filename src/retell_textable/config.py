from __future__ import annotations

import os
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_TEXTABLE_API_URL = "https://onesms-txb.textable.app/api/messages"


def _env(name: str, default: str = "") -> Any:
    # Read at instantiation time so get_settings.cache_clear() picks up new env vars.
    return Field(default_factory=lambda: os.getenv(name, default))


class Settings(BaseModel):
    host: str = _env("HOST", "0.0.0.0")
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    log_level: str = _env("LOG_LEVEL", "INFO")

    # Shared secret Retell signs webhook bodies with (X-Retell-Signature)
    retell_api_key: str = _env("RETELL_API_KEY")

    # --- Static agent -> Textable account table (two entries) ---
    retell_agent_1: str = _env("RETELL_AGENT_1", "retell-agent-123")
    textable_api_key_1: str = _env("TEXTABLE_API_KEY_1")
    textable_from_1: str = _env("TEXTABLE_FROM_1", "+16660001111")

    retell_agent_2: str = _env("RETELL_AGENT_2", "retell-agent-456")
    textable_api_key_2: str = _env("TEXTABLE_API_KEY_2")
    textable_from_2: str = _env("TEXTABLE_FROM_2", "+16660002222")

    textable_api_url: str = _env("TEXTABLE_API_URL", DEFAULT_TEXTABLE_API_URL)

    def account_entries(self) -> list[tuple[str, str, str]]:
        """(agent_id, api_key, from_number) for every configured agent."""
        return [
            (self.retell_agent_1, self.textable_api_key_1, self.textable_from_1),
            (self.retell_agent_2, self.textable_api_key_2, self.textable_from_2),
        ]


@lru_cache
def get_settings() -> Settings:
    return Settings()
