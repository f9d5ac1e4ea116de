"""In-memory publisher: records broadcasts for tests and local runs."""

from inpatient.realtime.port import EventPublisher


class InMemoryPublisher(EventPublisher):
    """Publisher that keeps every broadcast in memory for assertions."""

    def __init__(self):
        self.published: list[dict] = []
        self.should_fail = False
        self.failure_reason = "Realtime transport unavailable"

    def configure(self, should_fail: bool = False, failure_reason: str = "Realtime transport unavailable"):
        """Make subsequent publishes raise, to exercise failure handling."""
        self.should_fail = should_fail
        self.failure_reason = failure_reason

    def publish(self, event: str, payload) -> None:
        if self.should_fail:
            raise ConnectionError(self.failure_reason)
        self.published.append({"event": event, "data": payload})

    def events(self, name: str | None = None) -> list[dict]:
        """Recorded broadcasts, optionally only those with the given event name."""
        if name is None:
            return list(self.published)
        return [record for record in self.published if record["event"] == name]

    def reset(self):
        self.published.clear()
        self.should_fail = False
        self.failure_reason = "Realtime transport unavailable"
