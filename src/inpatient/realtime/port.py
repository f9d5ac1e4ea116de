"""Realtime publisher port: abstract interface for broadcasting domain changes."""

from abc import ABC, abstractmethod


class EventPublisher(ABC):
    """Abstract interface for realtime publisher adapters.

    Publishing is fire-and-forget: adapters must not block the caller on
    delivery, and callers never retry.
    """

    @abstractmethod
    def publish(self, event: str, payload) -> None:
        """Broadcast ``payload`` under the client-facing ``event`` name to every listener."""
        ...
