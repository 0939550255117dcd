"""Scope rules applied before relaying messages."""

from __future__ import annotations

from .models import InboundMessage, TextChannelRef, ThreadChannelRef, ThreadInfo


class ScopeFilter:
    """Decide whether a message belongs to the monitored channel or its threads."""

    def __init__(self, monitored_channel_id: str):
        self._monitored = (monitored_channel_id or "").strip()
        self._known_threads: set[str] = set()

    @property
    def monitored_channel_id(self) -> str:
        return self._monitored

    def is_in_scope(self, message: InboundMessage) -> bool:
        if not self._monitored:
            return False
        channel = getattr(message, "channel", None)
        if isinstance(channel, TextChannelRef):
            # Uncached channels arrive without a kind; a discovered thread still counts.
            return channel.id == self._monitored or channel.id in self._known_threads
        if isinstance(channel, ThreadChannelRef):
            if channel.id == self._monitored:
                return True
            if channel.parent_id:
                return channel.parent_id == self._monitored
            # Partial thread objects may lack a parent; use what discovery saw.
            return channel.id in self._known_threads
        return False

    def belongs_to_monitored(self, thread: ThreadInfo) -> bool:
        return bool(self._monitored) and thread.parent_id == self._monitored

    def remember_thread(self, thread: ThreadInfo) -> bool:
        """Register a thread of the monitored channel. Return True when it qualifies."""

        if not self.belongs_to_monitored(thread):
            return False
        self._known_threads.add(thread.id)
        return True

    def should_join(self, thread: ThreadInfo) -> bool:
        return self.belongs_to_monitored(thread) and not thread.joined

    def known_threads(self) -> frozenset[str]:
        return frozenset(self._known_threads)
