from __future__ import annotations

import pytest

from retell_textable.accounts import Account, AccountTable
from retell_textable.config import Settings, get_settings
from retell_textable.errors import MissingCredentialsError, UnknownAgentError, InvalidEventError


@pytest.fixture
def table() -> AccountTable:
    return AccountTable(
        [
            Account(agent_id="agent-a", api_key="key-a", from_number="+15550000001"),
            Account(agent_id="agent-b", api_key="", from_number="+15550000002"),
        ]
    )


def test_resolve_known_agent(table: AccountTable) -> None:
    account = table.resolve("agent-a")
    assert account.api_key == "key-a"
    assert account.from_number == "+15550000001"


def test_resolve_unknown_agent(table: AccountTable) -> None:
    with pytest.raises(UnknownAgentError) as excinfo:
        table.resolve("agent-z")
    assert isinstance(excinfo.value, InvalidEventError)
    assert excinfo.value.status_code == 400


def test_resolve_known_agent_without_key(table: AccountTable) -> None:
    with pytest.raises(MissingCredentialsError) as excinfo:
        table.resolve("agent-b")
    assert excinfo.value.status_code == 400


def test_get_does_not_raise(table: AccountTable) -> None:
    assert table.get("agent-z") is None
    assert table.get("agent-b") is not None


def test_duplicate_agent_ids_are_rejected() -> None:
    with pytest.raises(ValueError):
        AccountTable(
            [
                Account(agent_id="same", api_key="k1", from_number="+1"),
                Account(agent_id="same", api_key="k2", from_number="+2"),
            ]
        )


def test_api_key_not_in_repr() -> None:
    account = Account(agent_id="agent-a", api_key="super-secret", from_number="+1")
    assert "super-secret" not in repr(account)


def test_from_settings_uses_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RETELL_AGENT_1", "agent-one")
    monkeypatch.setenv("TEXTABLE_API_KEY_1", "key-one")
    monkeypatch.setenv("TEXTABLE_FROM_1", "+15551110000")
    monkeypatch.delenv("RETELL_AGENT_2", raising=False)
    monkeypatch.delenv("TEXTABLE_API_KEY_2", raising=False)
    monkeypatch.delenv("TEXTABLE_FROM_2", raising=False)
    get_settings.cache_clear()

    table = AccountTable.from_settings(get_settings())

    assert set(table) == {"agent-one", "retell-agent-456"}
    assert table.resolve("agent-one").from_number == "+15551110000"
    with pytest.raises(MissingCredentialsError):
        table.resolve("retell-agent-456")
    assert table["retell-agent-456"].from_number == "+16660002222"
    get_settings.cache_clear()


def test_default_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PORT", "RETELL_API_KEY", "TEXTABLE_API_URL"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.port == 3000
    assert settings.retell_api_key == ""
    assert settings.textable_api_url == "https://onesms-txb.textable.app/api/messages"
