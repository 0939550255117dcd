"""Delivery of relay payloads to the external endpoint."""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from .config import DEFAULT_RELAY_TIMEOUT
from .models import RelayPayload, RelayResult
from .utils import preview_body

logger = logging.getLogger(__name__)


class RelayClient:
    """Post payloads to the relay endpoint, one request per message.

    Delivery is best effort: failures are reported and logged, never retried.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        url: str,
        *,
        timeout: float = DEFAULT_RELAY_TIMEOUT,
    ):
        self._session = session
        self._url = url
        self._timeout = timeout

    async def send(self, payload: RelayPayload) -> RelayResult:
        try:
            timeout_cfg = aiohttp.ClientTimeout(total=self._timeout)
            async with self._session.post(
                self._url,
                json=payload.to_dict(),
                headers={"Content-Type": "application/json"},
                timeout=timeout_cfg,
            ) as resp:
                status = resp.status
                body = await resp.text(errors="replace")
        except asyncio.TimeoutError:
            logger.error(
                "Таймаут отправки сообщения %s (%.1f с)", payload.message_id, self._timeout
            )
            return RelayResult(ok=False, error="timeout")
        except aiohttp.ClientError as exc:
            error = str(exc) or type(exc).__name__
            logger.error("Ошибка отправки сообщения %s: %s", payload.message_id, error)
            return RelayResult(ok=False, error=error)

        preview = preview_body(body)
        if 200 <= status < 300:
            logger.info("Ответ получателя для %s: %s %s", payload.message_id, status, preview)
            return RelayResult(ok=True, status=status, preview=preview)

        logger.error(
            "Получатель ответил статусом %s для сообщения %s: %s",
            status,
            payload.message_id,
            preview,
        )
        return RelayResult(ok=False, status=status, preview=preview, error=f"HTTP {status}")
