"""Exceptions raised by the relay service."""

from __future__ import annotations


class RelayError(Exception):
    """Base class for relay errors."""


class ConfigError(RelayError):
    """Required configuration is missing or invalid."""


class StartupError(RelayError):
    """The service cannot enter steady state (for example, a rejected token)."""
