"""Conversion of gateway messages into relay payloads."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from .models import (
    InboundMessage,
    RelayAttachment,
    RelayEmbed,
    RelayEmbedField,
    RelayPayload,
)
from .utils import format_utc_timestamp

EmbedPayload = Mapping[str, Any]
AttachmentPayload = Mapping[str, Any]

WEBHOOK_AUTHOR_NAME = "Webhook"
UNKNOWN_AUTHOR_NAME = "Unknown"
UNKNOWN_AUTHOR_ID = "unknown"


def build_relay_payload(message: InboundMessage, *, secret: str = "") -> RelayPayload:
    """Project ``message`` into the flat record posted to the relay endpoint.

    Every field has a default, so this never fails on messages that made it
    past the scope filter and the deduplicator.
    """

    return RelayPayload(
        channel_id=message.channel_id,
        message_id=message.id,
        author_id=resolve_author_id(message),
        author_name=resolve_author_name(message),
        content=message.content or "",
        created_at=format_utc_timestamp(message.created_at),
        secret=secret,
        attachments=tuple(normalize_attachments(message.attachments)),
        embeds=tuple(normalize_embeds(message.embeds)),
    )


def resolve_author_name(message: InboundMessage) -> str:
    if message.author_name:
        return message.author_name
    if message.is_webhook:
        return WEBHOOK_AUTHOR_NAME
    return UNKNOWN_AUTHOR_NAME


def resolve_author_id(message: InboundMessage) -> str:
    if message.author_id:
        return message.author_id
    if message.is_webhook:
        return f"webhook:{message.webhook_id}"
    return UNKNOWN_AUTHOR_ID


def normalize_attachments(
    attachments: Sequence[AttachmentPayload],
) -> Iterable[RelayAttachment]:
    for attachment in attachments:
        yield RelayAttachment(
            id=str(attachment.get("id") or ""),
            name=str(attachment.get("filename") or attachment.get("name") or ""),
            url=str(attachment.get("url") or ""),
            content_type=_optional_text(attachment.get("content_type")),
            size=_coerce_int(attachment.get("size")),
        )


def normalize_embeds(embeds: Sequence[EmbedPayload]) -> Iterable[RelayEmbed]:
    for embed in embeds:
        fields = [
            RelayEmbedField(
                name=str(entry.get("name") or ""),
                value=str(entry.get("value") or ""),
                inline=bool(entry.get("inline")),
            )
            for entry in embed.get("fields") or []
            if isinstance(entry, Mapping)
        ]
        yield RelayEmbed(
            title=_optional_text(embed.get("title")),
            description=_optional_text(embed.get("description")),
            url=_optional_text(embed.get("url")),
            fields=fields,
            footer=_nested_text(embed.get("footer"), "text"),
            image=_nested_text(embed.get("image"), "url"),
            thumbnail=_nested_text(embed.get("thumbnail"), "url"),
            author=_nested_text(embed.get("author"), "name"),
        )


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


def _nested_text(block: Any, key: str) -> str | None:
    if not isinstance(block, Mapping):
        return None
    return _optional_text(block.get(key))


def _coerce_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
