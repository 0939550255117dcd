"""Command line entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

from .app import RelayApp
from .config import load_settings
from .errors import ConfigError, StartupError


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Relay Discord channel messages to an HTTP endpoint"
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Путь к .env файлу (по умолчанию ищется автоматически)",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="Уровень логирования",
    )
    args = parser.parse_args()

    log_level = getattr(logging, args.log_level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger = logging.getLogger(__name__)

    try:
        settings = load_settings(env_file=args.env_file)
    except ConfigError as exc:
        parser.error(str(exc))

    app = RelayApp(settings)
    try:
        asyncio.run(app.run())
    except StartupError as exc:
        logger.error("Токен Discord недействителен или сеть недоступна: %s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Остановка по запросу пользователя")


if __name__ == "__main__":
    main()
