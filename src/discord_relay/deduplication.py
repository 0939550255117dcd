"""Helpers for detecting duplicate Discord messages."""
from __future__ import annotations

import hashlib
from collections import deque

from .models import InboundMessage

DEFAULT_CAPACITY = 5000


class MessageDeduplicator:
    """Track recently forwarded fingerprints to skip duplicates.

    Entries are evicted oldest first once ``capacity`` is exceeded, so a
    message whose fingerprint fell out of the window can be relayed again.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self._capacity = max(1, int(capacity))
        self._order: deque[str] = deque()
        self._known: set[str] = set()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._known)

    def contains(self, fingerprint: str) -> bool:
        return fingerprint in self._known

    def admit(self, fingerprint: str) -> bool:
        """Record ``fingerprint`` and return True unless it was already known.

        Must stay free of awaits: handlers share one instance on the event loop.
        """

        if fingerprint in self._known:
            return False
        self._known.add(fingerprint)
        self._order.append(fingerprint)
        if len(self._order) > self._capacity:
            removed = self._order.popleft()
            self._known.discard(removed)
        return True


def compute_fingerprint(
    message_id: str, content: str, attachment_count: int, embed_count: int
) -> str:
    """Return a stable hex digest for the given message identity fields."""

    raw = f"{message_id}:{content}:{attachment_count}:{embed_count}"
    return hashlib.sha1(raw.encode("utf-8"), usedforsecurity=False).hexdigest()


def build_message_fingerprint(message: InboundMessage) -> str:
    return compute_fingerprint(
        message.id,
        message.content or "",
        len(message.attachments),
        len(message.embeds),
    )
