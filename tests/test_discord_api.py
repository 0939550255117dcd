from __future__ import annotations

import asyncio
from typing import Any, cast

import aiohttp

from discord_relay.discord_api import DiscordClient


class DummyResponse:
    def __init__(self, status: int, payload: Any = None, body: str = "") -> None:
        self.status = status
        self._payload = payload
        self._body = body

    async def json(self) -> Any:
        return self._payload

    async def text(self) -> str:
        return self._body

    async def __aenter__(self) -> "DummyResponse":
        return self

    async def __aexit__(self, *exc: object) -> bool:
        return False


class DummySession:
    def __init__(self, response: DummyResponse | None = None, error: BaseException | None = None):
        self.response = response
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, **kwargs: Any) -> DummyResponse:
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def _verify(session: DummySession, token: str = "abc") -> Any:
    client = DiscordClient(cast(aiohttp.ClientSession, session))
    return asyncio.run(client.verify_token(token))


def test_verify_token_success_uses_bot_prefix() -> None:
    session = DummySession(DummyResponse(200, {"id": "1", "username": "relay-bot"}))

    result = _verify(session)

    assert result.ok is True
    assert result.display_name == "relay-bot"
    assert result.user_id == "1"
    url, kwargs = session.calls[0]
    assert url.endswith("/users/@me")
    assert kwargs["headers"]["Authorization"] == "Bot abc"


def test_verify_token_keeps_explicit_prefix() -> None:
    session = DummySession(DummyResponse(200, {"id": "1", "username": "relay-bot"}))

    _verify(session, token="Bot abc")

    assert session.calls[0][1]["headers"]["Authorization"] == "Bot abc"


def test_verify_token_rejected() -> None:
    result = _verify(DummySession(DummyResponse(401, body='{"message": "401: Unauthorized"}')))

    assert result.ok is False
    assert result.status == 401


def test_verify_token_network_error() -> None:
    result = _verify(DummySession(error=aiohttp.ClientConnectionError("dns")))

    assert result.ok is False
    assert result.status is None
    assert result.error


def test_verify_token_empty() -> None:
    session = DummySession()

    result = _verify(session, token="  ")

    assert result.ok is False
    assert session.calls == []
