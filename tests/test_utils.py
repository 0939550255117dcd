from datetime import datetime, timezone

from discord_relay.utils import (
    format_utc_timestamp,
    parse_bool,
    parse_int_setting,
    parse_timeout_setting,
    preview_body,
)


def test_parse_timeout_setting_seconds_float() -> None:
    assert parse_timeout_setting("1.50", 0.0) == 1.5


def test_parse_timeout_setting_invalid_returns_default() -> None:
    assert parse_timeout_setting("not-a-number", 2.0) == 2.0
    assert parse_timeout_setting("0", 2.0) == 2.0
    assert parse_timeout_setting(None, 20.0) == 20.0


def test_parse_int_setting() -> None:
    assert parse_int_setting("10", 5) == 10
    assert parse_int_setting(" ", 5) == 5
    assert parse_int_setting("1.5", 5) == 5


def test_parse_bool_supports_truthy_and_falsy() -> None:
    assert parse_bool("on") is True
    assert parse_bool("NO") is False
    assert parse_bool(None, default=True) is True
    assert parse_bool("unexpected", default=False) is False


def test_format_utc_timestamp_matches_javascript_iso() -> None:
    moment = datetime(2024, 3, 4, 5, 6, 7, 890123, tzinfo=timezone.utc)

    assert format_utc_timestamp(moment) == "2024-03-04T05:06:07.890Z"


def test_preview_body_truncates() -> None:
    assert preview_body("a" * 500) == "a" * 300
    assert preview_body(b"ok") == "ok"
    assert preview_body({"ok": True}) == '{"ok": true}'
    assert preview_body(None) == ""
