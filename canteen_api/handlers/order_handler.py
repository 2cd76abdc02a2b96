"""
handlers/order_handler.py – OrderHandler class.
Responsibility: orchestrate payment check, order placement, status changes,
feedback and pickup verification, then notify listeners.
"""
import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from ..core.access import Principal, canteen_scope, ensure_canteen_access, sees_no_orders
from ..core.errors import InvalidRequest, NotFound
from ..core.lifecycle import INITIAL_STATUS, advance
from ..core.notifier import ORDER_CREATED, ORDER_UPDATED, OrderNotifier
from ..core.payments import PaymentVerifier
from ..core.pickup import generate_numeric_token, qr_payload, render_qr_data_url
from ..core.store import CanteenStore
from ..models import (
    CreateOrderRequest,
    LineItem,
    Order,
    PaymentVerifyResponse,
    TokenVerifyResponse,
)

logger = logging.getLogger(__name__)

_TOKEN_ATTEMPTS = 20


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderHandler:
    """Handles /orders/* and /staff/orders."""

    def __init__(
        self,
        store: CanteenStore,
        payments: PaymentVerifier,
        notifier: OrderNotifier,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store    = store
        self._payments = payments
        self._notifier = notifier
        self._clock    = clock

    # ── Student ────────────────────────────────────────────────────────────────

    def verify_payment(self, method: str) -> PaymentVerifyResponse:
        return self._payments.verify(method)

    async def create(self, principal: Principal, req: CreateOrderRequest) -> Order:
        """Validate, price from the live menu, attach pickup token + QR, persist, notify."""
        if not (req.canteen_id and req.items and req.pickup_slot and req.payment_id):
            raise InvalidRequest("Missing required fields")

        menu  = {m.id: m for m in await self._store.list_menu(req.canteen_id)}
        lines = []
        for requested in req.items:
            item = menu.get(requested.menu_id)
            if item is None or not item.available:
                logger.info("[Orders] rejected: %s unavailable at %s", requested.menu_id, req.canteen_id)
                raise InvalidRequest("One or more items unavailable")
            lines.append(LineItem(menu_id=item.id, name=item.name, quantity=requested.quantity, price=item.price))

        order_id = str(uuid.uuid4())
        token    = await self._unused_token()
        qr_code  = await asyncio.get_running_loop().run_in_executor(
            None, render_qr_data_url, qr_payload(order_id, token, principal.user_id)
        )

        order = Order(
            id=order_id,
            student_id=principal.user_id,
            canteen_id=req.canteen_id,
            items=lines,
            pickup_slot=req.pickup_slot,
            payment_id=req.payment_id,
            total=sum(l.price * l.quantity for l in lines),
            status=INITIAL_STATUS,
            numeric_token=token,
            qr_code=qr_code,
            created_at=self._clock().isoformat(),
            feedback="",
        )
        saved = await self._store.add_order(order)
        logger.info("[Orders] created %s at %s total=%s", saved.id, saved.canteen_id, saved.total)
        await self._notifier.broadcast(ORDER_CREATED, saved)
        return saved

    async def list_mine(self, principal: Principal) -> list[Order]:
        return await self._store.list_orders(student_id=principal.user_id)

    async def add_feedback(self, principal: Principal, order_id: str, feedback: Optional[str]) -> Order:
        order = await self._store.get_order(order_id)
        if order is None or order.student_id != principal.user_id:
            raise NotFound("Order not found")
        return await self._store.set_feedback(order_id, feedback or "")

    # ── Staff / Admin ──────────────────────────────────────────────────────────

    async def update_status(self, principal: Principal, order_id: str, status: str) -> Order:
        order = await self._store.get_order(order_id)
        if order is None:
            raise NotFound("Order not found")
        ensure_canteen_access(principal, order.canteen_id, "Cannot modify other canteen orders")

        new_status = advance(order.status, status)
        updated = await self._store.set_order_status(order_id, new_status)
        logger.info("[Orders] %s %s → %s by %s", order_id, order.status.value, new_status.value, principal.user_id)
        await self._notifier.broadcast(ORDER_UPDATED, updated)
        return updated

    async def verify_token(self, principal: Principal, token: str) -> TokenVerifyResponse:
        order = await self._store.find_order_by_token(token)
        if order is None:
            raise NotFound("Invalid token")
        ensure_canteen_access(principal, order.canteen_id, "Cannot verify this order")
        return TokenVerifyResponse(valid=True, order=order)

    async def canteen_orders(self, principal: Principal) -> list[Order]:
        """Orders of the caller's canteen (all for admin), earliest pickup first."""
        if sees_no_orders(principal):
            return []
        orders = await self._store.list_orders(canteen_id=canteen_scope(principal))
        return sorted(orders, key=self._pickup_key)

    # ── Private helpers ────────────────────────────────────────────────────────

    async def _unused_token(self) -> str:
        for _ in range(_TOKEN_ATTEMPTS):
            token = generate_numeric_token()
            if await self._store.find_order_by_token(token) is None:
                return token
        raise RuntimeError("Could not allocate a free pickup token")

    @staticmethod
    def _pickup_key(order: Order) -> tuple:
        # unparseable slots sort last, keeping their relative order
        try:
            slot = datetime.fromisoformat(order.pickup_slot.replace("Z", "+00:00"))
        except ValueError:
            return (1, 0.0)
        if slot.tzinfo is None:
            slot = slot.replace(tzinfo=timezone.utc)
        return (0, slot.timestamp())
