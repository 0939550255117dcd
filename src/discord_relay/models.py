"""Data models used across the relay service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Sequence, Union


@dataclass(slots=True, frozen=True)
class TextChannelRef:
    """Ordinary guild channel."""

    id: str


@dataclass(slots=True, frozen=True)
class ThreadChannelRef:
    """Thread or forum post nested under a parent channel."""

    id: str
    parent_id: str | None = None


ChannelRef = Union[TextChannelRef, ThreadChannelRef]


@dataclass(slots=True)
class ThreadInfo:
    """Thread metadata seen by the discovery flow."""

    id: str
    parent_id: str | None
    joined: bool = False


@dataclass(slots=True)
class InboundMessage:
    """Subset of the Discord gateway message used by the relay.

    ``attachments`` and ``embeds`` keep the Discord REST API shape
    (``filename``/``content_type`` for attachments, nested ``footer.text``,
    ``image.url`` and so on for embeds).
    """

    id: str
    channel: ChannelRef
    content: str
    created_at: datetime
    author_id: str | None = None
    author_name: str | None = None
    webhook_id: str | None = None
    attachments: Sequence[Mapping[str, Any]] = ()
    embeds: Sequence[Mapping[str, Any]] = ()

    @property
    def channel_id(self) -> str:
        return self.channel.id

    @property
    def is_webhook(self) -> bool:
        return bool(self.webhook_id)

    @property
    def thread_id(self) -> str | None:
        if isinstance(self.channel, ThreadChannelRef):
            return self.channel.id
        return None


@dataclass(slots=True)
class RelayAttachment:
    id: str
    name: str
    url: str
    content_type: str | None
    size: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "contentType": self.content_type,
            "size": self.size,
        }


@dataclass(slots=True)
class RelayEmbedField:
    name: str
    value: str
    inline: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "inline": self.inline}


@dataclass(slots=True)
class RelayEmbed:
    """Flattened rich embed: footer, image, thumbnail and author keep one value each."""

    title: str | None = None
    description: str | None = None
    url: str | None = None
    fields: Sequence[RelayEmbedField] = ()
    footer: str | None = None
    image: str | None = None
    thumbnail: str | None = None
    author: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "fields": [item.to_dict() for item in self.fields],
            "footer": self.footer,
            "image": self.image,
            "thumbnail": self.thumbnail,
            "author": self.author,
        }


@dataclass(slots=True)
class RelayPayload:
    """Outgoing record posted to the relay endpoint."""

    channel_id: str
    message_id: str
    author_id: str
    author_name: str
    content: str
    created_at: str
    secret: str
    attachments: Sequence[RelayAttachment] = field(default_factory=tuple)
    embeds: Sequence[RelayEmbed] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "channelId": self.channel_id,
            "messageId": self.message_id,
            "authorId": self.author_id,
            "author": self.author_name,
            "content": self.content,
            "embeds": [embed.to_dict() for embed in self.embeds],
            "attachments": [attachment.to_dict() for attachment in self.attachments],
            "createdAt": self.created_at,
            "secret": self.secret,
        }


@dataclass(slots=True)
class RelayResult:
    """Outcome of a single relay attempt."""

    ok: bool
    status: int | None = None
    preview: str | None = None
    error: str | None = None
