"""WebSocket broadcaster: pushes every published event to all connected clients."""

import asyncio

import structlog
from fastapi import WebSocket

from inpatient.realtime.port import EventPublisher

logger = structlog.get_logger(__name__)


class WebSocketBroadcaster(EventPublisher):
    """Fan-out publisher over FastAPI WebSocket connections.

    ``publish`` is called synchronously from event handlers running on the
    server's event loop; sends are scheduled as tasks so the request that
    caused the change is never held up by slow clients.
    """

    def __init__(self):
        self._connections: set[WebSocket] = set()
        self._pending: set[asyncio.Task] = set()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.add(websocket)
        logger.info("Realtime client connected", connections=self.connection_count)

    def disconnect(self, websocket: WebSocket) -> None:
        self._connections.discard(websocket)
        logger.info("Realtime client disconnected", connections=self.connection_count)

    def publish(self, event: str, payload) -> None:
        if not self._connections:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, broadcast skipped", event_name=event)
            return

        message = {"event": event, "data": payload}
        for websocket in list(self._connections):
            task = loop.create_task(self._send(websocket, message))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    async def _send(self, websocket: WebSocket, message: dict) -> None:
        try:
            await websocket.send_json(message)
        except Exception as exc:
            logger.warning("Dropping realtime client after failed send", event_name=message["event"], error=str(exc))
            self.disconnect(websocket)
