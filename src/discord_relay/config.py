"""Environment based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from .deduplication import DEFAULT_CAPACITY
from .errors import ConfigError
from .utils import parse_bool, parse_int_setting, parse_timeout_setting

DEFAULT_RELAY_TIMEOUT = 20.0


@dataclass(slots=True)
class RelaySettings:
    """Runtime settings of the relay process."""

    discord_token: str
    channel_id: str
    relay_url: str
    webhook_secret: str = ""
    relay_timeout: float = DEFAULT_RELAY_TIMEOUT
    dedup_capacity: int = DEFAULT_CAPACITY
    ignore_self: bool = True


def load_settings(
    environ: Mapping[str, str] | None = None,
    *,
    env_file: Path | None = None,
) -> RelaySettings:
    """Build settings from ``environ`` (``os.environ`` after reading ``.env`` by default)."""

    if environ is None:
        load_dotenv(env_file or find_dotenv(usecwd=True), override=False)
        environ = os.environ

    token = (environ.get("DISCORD_TOKEN") or "").strip()
    channel_id = (environ.get("CHANNEL_ID") or "").strip()
    relay_url = (environ.get("APPS_SCRIPT_URL") or "").strip()

    missing = [
        name
        for name, value in (
            ("DISCORD_TOKEN", token),
            ("CHANNEL_ID", channel_id),
            ("APPS_SCRIPT_URL", relay_url),
        )
        if not value
    ]
    if missing:
        raise ConfigError("Не заданы переменные окружения: " + ", ".join(missing))
    if not relay_url.lower().startswith(("http://", "https://")):
        raise ConfigError(f"APPS_SCRIPT_URL должен быть http(s) адресом: {relay_url!r}")

    return RelaySettings(
        discord_token=token,
        channel_id=channel_id,
        relay_url=relay_url,
        webhook_secret=environ.get("WEBHOOK_SECRET") or "",
        relay_timeout=parse_timeout_setting(
            environ.get("RELAY_TIMEOUT"), DEFAULT_RELAY_TIMEOUT
        ),
        dedup_capacity=parse_int_setting(environ.get("DEDUP_CAPACITY"), DEFAULT_CAPACITY),
        ignore_self=parse_bool(environ.get("RELAY_IGNORE_SELF"), default=True),
    )
