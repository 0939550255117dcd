"""Application bootstrap for Discord Relay."""

from __future__ import annotations

import asyncio
import logging

import aiohttp
import discord

from .config import RelaySettings
from .deduplication import MessageDeduplicator, build_message_fingerprint
from .discord_api import DiscordClient
from .errors import StartupError
from .filters import ScopeFilter
from .gateway import RelayGateway
from .models import InboundMessage, RelayResult
from .normalize import build_relay_payload
from .relay import RelayClient

logger = logging.getLogger(__name__)


class RelayApp:
    """High level coordinator tying together the gateway, the filters and the relay."""

    def __init__(
        self,
        settings: RelaySettings,
        *,
        relay: RelayClient | None = None,
        deduplicator: MessageDeduplicator | None = None,
    ):
        self._settings = settings
        self._scope = ScopeFilter(settings.channel_id)
        self._deduplicator = deduplicator or MessageDeduplicator(settings.dedup_capacity)
        self._relay = relay
        self._self_id: str | None = None

    @property
    def scope(self) -> ScopeFilter:
        return self._scope

    @property
    def deduplicator(self) -> MessageDeduplicator:
        return self._deduplicator

    def set_self_id(self, user_id: str | None) -> None:
        self._self_id = user_id or None

    async def run(self) -> None:
        async with aiohttp.ClientSession() as session:
            discord_client = DiscordClient(session)
            check = await discord_client.verify_token(self._settings.discord_token)
            if not check.ok:
                raise StartupError(check.error or "Токен Discord не прошёл проверку")
            logger.info("Токен Discord OK, бот: %s (%s)", check.display_name, check.user_id)
            self.set_self_id(check.user_id)

            self._relay = RelayClient(
                session,
                self._settings.relay_url,
                timeout=self._settings.relay_timeout,
            )
            gateway = RelayGateway(self)
            async with gateway:
                try:
                    await gateway.start(_gateway_token(self._settings.discord_token))
                except discord.LoginFailure as exc:
                    raise StartupError(str(exc)) from exc

    async def handle_message(self, message: InboundMessage) -> RelayResult | None:
        """Run one gateway message through the pipeline, containing any failure."""

        try:
            return await self.process_message(message)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Ошибка при обработке сообщения %s", message.id)
            return None

    async def process_message(self, message: InboundMessage) -> RelayResult | None:
        if self._is_own_message(message):
            return None
        if not self._scope.is_in_scope(message):
            return None

        fingerprint = build_message_fingerprint(message)
        # No await between the check and the insert: admit stays atomic on the loop.
        if not self._deduplicator.admit(fingerprint):
            logger.debug("Сообщение %s уже отправлено, пропуск", message.id)
            return None

        payload = build_relay_payload(message, secret=self._settings.webhook_secret)
        logger.info(
            "Пересылка сообщения id=%s len=%d att=%d emb=%d thread=%s",
            message.id,
            len(payload.content),
            len(payload.attachments),
            len(payload.embeds),
            message.thread_id,
        )
        if self._relay is None:
            raise RuntimeError("Relay client is not configured")
        return await self._relay.send(payload)

    def _is_own_message(self, message: InboundMessage) -> bool:
        if not self._settings.ignore_self or not self._self_id:
            return False
        return message.author_id == self._self_id


def _gateway_token(token: str) -> str:
    stripped = token.strip()
    if stripped.lower().startswith("bot "):
        return stripped[4:].strip()
    return stripped
