from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .config import Settings
from .errors import MissingCredentialsError, UnknownAgentError

logger = logging.getLogger(__name__)

NO_USABLE_ACCOUNT = "Unknown agent ID or missing Textable credentials"


@dataclass(frozen=True)
class Account:
    agent_id: str
    api_key: str = field(repr=False)
    from_number: str  # E.164


class AccountTable(Mapping[str, Account]):
    """
    Read-only agent id -> Textable account table.

    Built once at startup and shared across requests; nothing mutates it
    afterwards.
    """

    def __init__(self, accounts: Iterable[Account]) -> None:
        table: dict[str, Account] = {}
        for account in accounts:
            if account.agent_id in table:
                raise ValueError(f"Duplicate agent id in account table: {account.agent_id!r}")
            table[account.agent_id] = account
        self._table = MappingProxyType(table)

    @classmethod
    def from_settings(cls, settings: Settings) -> AccountTable:
        return cls(
            Account(agent_id=agent_id, api_key=api_key, from_number=from_number)
            for agent_id, api_key, from_number in settings.account_entries()
        )

    def __getitem__(self, agent_id: str) -> Account:
        return self._table[agent_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def resolve(self, agent_id: str) -> Account:
        """
        Return the usable account for an agent id.

        Raises UnknownAgentError when the id is not configured and
        MissingCredentialsError when it is configured without an API key.
        """
        account = self._table.get(agent_id)
        if account is None:
            logger.warning("Unknown agent id: %s", agent_id)
            raise UnknownAgentError(NO_USABLE_ACCOUNT)
        if not account.api_key:
            logger.warning("No Textable API key configured for agent: %s", agent_id)
            raise MissingCredentialsError(NO_USABLE_ACCOUNT)
        return account
