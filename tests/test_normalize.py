from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from discord_relay.models import InboundMessage, TextChannelRef
from discord_relay.normalize import (
    UNKNOWN_AUTHOR_NAME,
    WEBHOOK_AUTHOR_NAME,
    build_relay_payload,
)


def make_message(**kwargs: Any) -> InboundMessage:
    return InboundMessage(
        id=str(kwargs.get("id", "42")),
        channel=TextChannelRef(str(kwargs.get("channel_id", "100"))),
        content=kwargs.get("content", "hello"),
        created_at=kwargs.get(
            "created_at", datetime(2024, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)
        ),
        author_id=kwargs.get("author_id", "7"),
        author_name=kwargs.get("author_name", "alice"),
        webhook_id=kwargs.get("webhook_id"),
        attachments=tuple(kwargs.get("attachments", ())),
        embeds=tuple(kwargs.get("embeds", ())),
    )


def test_plain_message_has_empty_lists() -> None:
    payload = build_relay_payload(make_message(), secret="s3cret")
    body = payload.to_dict()

    assert body == {
        "channelId": "100",
        "messageId": "42",
        "authorId": "7",
        "author": "alice",
        "content": "hello",
        "embeds": [],
        "attachments": [],
        "createdAt": "2024-01-01T12:00:00.123Z",
        "secret": "s3cret",
    }


def test_empty_content_becomes_empty_string() -> None:
    payload = build_relay_payload(make_message(content=None, embeds=[{"title": "Only"}]))

    assert payload.content == ""
    assert payload.secret == ""


def test_webhook_author_fallback() -> None:
    message = make_message(author_id=None, author_name=None, webhook_id="555")
    payload = build_relay_payload(message)

    assert payload.author_name == WEBHOOK_AUTHOR_NAME == "Webhook"
    assert payload.author_id == "webhook:555"


def test_unknown_author_fallback() -> None:
    payload = build_relay_payload(make_message(author_id=None, author_name=""))

    assert payload.author_name == UNKNOWN_AUTHOR_NAME
    assert payload.author_id == "unknown"


def test_attachments_keep_order_and_duplicates() -> None:
    attachments = [
        {
            "id": "1",
            "filename": "a.png",
            "url": "https://cdn/a.png",
            "content_type": "image/png",
            "size": 10,
        },
        {"id": "2", "filename": "b.bin", "url": "https://cdn/b.bin", "size": 20},
        {"id": "2", "filename": "b.bin", "url": "https://cdn/b.bin", "size": 20},
    ]
    body = build_relay_payload(make_message(attachments=attachments)).to_dict()

    assert body["attachments"] == [
        {
            "id": "1",
            "name": "a.png",
            "url": "https://cdn/a.png",
            "contentType": "image/png",
            "size": 10,
        },
        {"id": "2", "name": "b.bin", "url": "https://cdn/b.bin", "contentType": None, "size": 20},
        {"id": "2", "name": "b.bin", "url": "https://cdn/b.bin", "contentType": None, "size": 20},
    ]


def test_embed_fields_are_flattened() -> None:
    embed = {
        "title": "Order",
        "description": "",
        "url": "https://example.com",
        "fields": [{"name": "Qty", "value": "2", "inline": 1}, {"name": "Note", "value": "x"}],
        "footer": {"text": "footer"},
        "image": {"url": "https://img"},
        "thumbnail": {"url": "https://thumb"},
        "author": {"name": "Shop"},
    }
    body = build_relay_payload(make_message(embeds=[embed, {}])).to_dict()

    assert body["embeds"] == [
        {
            "title": "Order",
            "description": None,
            "url": "https://example.com",
            "fields": [
                {"name": "Qty", "value": "2", "inline": True},
                {"name": "Note", "value": "x", "inline": False},
            ],
            "footer": "footer",
            "image": "https://img",
            "thumbnail": "https://thumb",
            "author": "Shop",
        },
        {
            "title": None,
            "description": None,
            "url": None,
            "fields": [],
            "footer": None,
            "image": None,
            "thumbnail": None,
            "author": None,
        },
    ]


def test_timestamp_is_rendered_in_utc() -> None:
    moment = datetime(2024, 1, 1, 15, 30, tzinfo=timezone(timedelta(hours=3)))
    payload = build_relay_payload(make_message(created_at=moment))

    assert payload.created_at == "2024-01-01T12:30:00.000Z"

    naive = build_relay_payload(make_message(created_at=datetime(2024, 5, 6, 7, 8, 9)))
    assert naive.created_at == "2024-05-06T07:08:09.000Z"
