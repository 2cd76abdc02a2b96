"""routes/events.py – WS /ws/orders (order:created / order:updated push channel)"""
from fastapi import APIRouter, WebSocket
from ..deps import get_notifier

router = APIRouter(tags=["Events"])


@router.websocket("/ws/orders")
async def ws_orders(websocket: WebSocket):
    notifier = get_notifier()
    await notifier.connect(websocket)
    try:
        while True:
            # inbound text or binary frames are ignored, the loop only waits for the disconnect
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    finally:
        notifier.disconnect(websocket)
