"""Discord REST API client."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import aiohttp

_API_BASE = "https://discord.com/api/v10"
_DEFAULT_USER_AGENT = "DiscordBot (https://github.com, 1.0)"
_VERIFY_TIMEOUT = 15.0


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TokenCheckResult:
    """Outcome of a Discord token validation attempt."""

    ok: bool
    display_name: str | None = None
    user_id: str | None = None
    error: str | None = None
    status: int | None = None


class DiscordClient:
    """Thin asynchronous wrapper around the Discord REST API."""

    def __init__(self, session: aiohttp.ClientSession, *, api_base: str = _API_BASE):
        self._session = session
        self._api_base = api_base.rstrip("/")

    async def verify_token(self, token: str) -> TokenCheckResult:
        """Check a bot token against ``GET /users/@me``."""

        candidate_token = (token or "").strip()
        if not candidate_token:
            return TokenCheckResult(ok=False, error="Токен не задан")

        auth_token = candidate_token
        if not candidate_token.lower().startswith("bot "):
            auth_token = f"Bot {candidate_token}"
        headers = {
            "Authorization": auth_token,
            "User-Agent": _DEFAULT_USER_AGENT,
            "Accept": "application/json",
        }
        url = f"{self._api_base}/users/@me"

        try:
            timeout_cfg = aiohttp.ClientTimeout(total=_VERIFY_TIMEOUT)
            async with self._session.get(url, headers=headers, timeout=timeout_cfg) as resp:
                status = resp.status
                if status == 200:
                    payload = await resp.json()
                    username = str(payload.get("username") or "")
                    user_id = str(payload.get("id") or "") or None
                    return TokenCheckResult(
                        ok=True,
                        display_name=username or user_id or "bot",
                        user_id=user_id,
                        status=status,
                    )
                body = await resp.text()
                if status == 401:
                    error = "Discord отклонил токен (401). Проверьте правильность значения."
                else:
                    error = f"Discord ответил статусом {status}: {body[:300]}"
                return TokenCheckResult(ok=False, error=error, status=status)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Не удалось проверить Discord токен: %s", exc)
            return TokenCheckResult(
                ok=False,
                error=f"Не удалось обратиться к Discord: {exc or type(exc).__name__}",
            )
