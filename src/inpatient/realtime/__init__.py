"""Realtime publisher registry: the publisher is installed, not reached for.

The web application installs its WebSocket broadcaster with
``set_publisher``. Other processes fall back to the adapter named by the
REALTIME_PUBLISHER environment variable (in-memory by default).
"""

import os

from inpatient.realtime.port import EventPublisher

_publisher_instance: EventPublisher | None = None


def get_publisher() -> EventPublisher:
    """Return the installed publisher, creating the configured default on first use."""
    global _publisher_instance
    if _publisher_instance is None:
        adapter = os.environ.get("REALTIME_PUBLISHER", "memory")
        if adapter == "memory":
            from inpatient.realtime.memory import InMemoryPublisher

            _publisher_instance = InMemoryPublisher()
        elif adapter == "websocket":
            from inpatient.realtime.websocket import WebSocketBroadcaster

            _publisher_instance = WebSocketBroadcaster()
        else:
            raise ValueError(f"Unknown realtime publisher: {adapter}")
    return _publisher_instance


def set_publisher(publisher: EventPublisher) -> EventPublisher:
    """Install ``publisher`` for all subsequent broadcasts."""
    global _publisher_instance
    _publisher_instance = publisher
    return publisher


def reset_publisher():
    """Reset the publisher singleton (useful for testing)."""
    global _publisher_instance
    _publisher_instance = None
