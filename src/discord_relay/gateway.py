"""discord.py gateway adapter feeding the relay pipeline."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping

import discord

from .models import ChannelRef, InboundMessage, TextChannelRef, ThreadChannelRef, ThreadInfo

if TYPE_CHECKING:
    from .app import RelayApp

logger = logging.getLogger(__name__)

_THREAD_CHANNEL_TYPES = {
    discord.ChannelType.public_thread,
    discord.ChannelType.private_thread,
    discord.ChannelType.news_thread,
}
_THREADED_PARENT_TYPES = {discord.ChannelType.forum, discord.ChannelType.news}


def build_intents() -> discord.Intents:
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_messages = True
    intents.message_content = True
    return intents


class RelayGateway(discord.Client):
    """Gateway client: converts events and keeps the monitored threads joined."""

    def __init__(self, app: "RelayApp"):
        super().__init__(intents=build_intents())
        self._app = app

    async def on_ready(self) -> None:
        logger.info("Шлюз Discord подключён: %s", self.user)
        if self.user is not None:
            self._app.set_self_id(str(self.user.id))
        await self._join_active_threads()

    async def on_thread_create(self, thread: discord.Thread) -> None:
        await self.join_thread(thread)

    async def on_message(self, message: discord.Message) -> None:
        await self._app.handle_message(inbound_from_discord(message))

    async def join_thread(self, thread: Any) -> bool:
        """Register ``thread`` when it belongs to the monitored channel and join it."""

        info = thread_info(thread)
        scope = self._app.scope
        if not scope.remember_thread(info):
            return False
        if not scope.should_join(info):
            return True
        try:
            await thread.join()
        except discord.HTTPException as exc:
            logger.warning("Не удалось войти в тред %s: %s", info.id, exc)
            return False
        logger.info("Вход в новый тред %s", info.id)
        return True

    async def _join_active_threads(self) -> None:
        channel_id = self._app.scope.monitored_channel_id
        try:
            channel = await self.fetch_channel(int(channel_id))
        except ValueError:
            logger.warning("CHANNEL_ID %r не похож на идентификатор Discord", channel_id)
            return
        except discord.HTTPException as exc:
            logger.warning("Не удалось получить канал %s: %s", channel_id, exc)
            return

        channel_type = getattr(channel, "type", None)
        logger.info("Канал найден: %s (%s)", channel.id, channel_type)
        if channel_type not in _THREADED_PARENT_TYPES:
            return

        guild = getattr(channel, "guild", None)
        if guild is None:
            return
        try:
            threads = await guild.active_threads()
        except discord.HTTPException as exc:
            logger.warning("Не удалось получить активные треды канала %s: %s", channel_id, exc)
            return

        joined = 0
        for thread in threads:
            if await self.join_thread(thread):
                joined += 1
        logger.info(
            "Активных тредов канала: %d, известно тредов: %d",
            joined,
            len(self._app.scope.known_threads()),
        )


def thread_info(thread: Any) -> ThreadInfo:
    parent_id = getattr(thread, "parent_id", None)
    return ThreadInfo(
        id=str(thread.id),
        parent_id=str(parent_id) if parent_id else None,
        joined=getattr(thread, "me", None) is not None,
    )


def channel_ref(channel: Any) -> ChannelRef:
    if getattr(channel, "type", None) in _THREAD_CHANNEL_TYPES:
        parent_id = getattr(channel, "parent_id", None)
        return ThreadChannelRef(id=str(channel.id), parent_id=str(parent_id) if parent_id else None)
    return TextChannelRef(id=str(channel.id))


def inbound_from_discord(message: Any) -> InboundMessage:
    """Convert a discord.py message into the relay's own model."""

    author = getattr(message, "author", None)
    author_id = getattr(author, "id", None)
    webhook_id = getattr(message, "webhook_id", None)
    return InboundMessage(
        id=str(message.id),
        channel=channel_ref(message.channel),
        content=message.content or "",
        created_at=message.created_at,
        author_id=str(author_id) if author_id else None,
        author_name=getattr(author, "name", None) or None,
        webhook_id=str(webhook_id) if webhook_id else None,
        attachments=tuple(_attachment_payload(item) for item in message.attachments),
        embeds=tuple(_embed_payload(item) for item in message.embeds),
    )


def _attachment_payload(attachment: Any) -> Mapping[str, Any]:
    return {
        "id": str(attachment.id),
        "filename": attachment.filename,
        "url": attachment.url,
        "content_type": getattr(attachment, "content_type", None),
        "size": attachment.size,
    }


def _embed_payload(embed: Any) -> Mapping[str, Any]:
    if isinstance(embed, Mapping):
        return embed
    return embed.to_dict()
