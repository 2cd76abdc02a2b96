"""
core/notifier.py – OrderNotifier class.
Best-effort push of order lifecycle events to every connected WebSocket.
No delivery guarantee, no retries; a socket that fails or stalls a send is dropped.
"""
import asyncio
import logging

from fastapi import WebSocket

from ..models import Order

logger = logging.getLogger(__name__)

CONNECTED     = "connected"
ORDER_CREATED = "order:created"
ORDER_UPDATED = "order:updated"

DEFAULT_SEND_TIMEOUT = 2.0


class OrderNotifier:

    def __init__(self, send_timeout: float = DEFAULT_SEND_TIMEOUT) -> None:
        self._listeners: set[WebSocket] = set()
        self._send_timeout = send_timeout

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._listeners.add(websocket)
        logger.info("[Notify] listener connected (%d total)", len(self._listeners))
        # tells the client it is registered and will receive events from now on
        await websocket.send_json({"event": CONNECTED})

    def disconnect(self, websocket: WebSocket) -> None:
        self._listeners.discard(websocket)
        logger.info("[Notify] listener disconnected (%d total)", len(self._listeners))

    async def broadcast(self, event: str, order: Order) -> int:
        """
        Send {event, order} to all listeners concurrently.
        Each send is bounded by the send timeout. Returns how many sends succeeded.
        """
        message   = {"event": event, "order": order.model_dump(mode="json")}
        listeners = list(self._listeners)
        results   = await asyncio.gather(
            *(asyncio.wait_for(ws.send_json(message), self._send_timeout) for ws in listeners),
            return_exceptions=True,
        )

        delivered = 0
        for ws, result in zip(listeners, results):
            if isinstance(result, BaseException):
                logger.warning("[Notify] dropping listener after send failure: %r", result)
                self._listeners.discard(ws)
            else:
                delivered += 1
        return delivered
