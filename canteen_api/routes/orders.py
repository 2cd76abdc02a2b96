"""routes/orders.py – payment check, order placement, status, feedback, pickup verification"""
from fastapi import APIRouter, Depends, HTTPException, status

from ..core.access import STAFF_OR_ADMIN, STUDENT_ONLY, Principal
from ..core.errors import CanteenError
from ..deps import get_order_handler, require_roles
from ..models import (
    CreateOrderRequest,
    FeedbackRequest,
    Order,
    PaymentVerifyRequest,
    PaymentVerifyResponse,
    StatusUpdateRequest,
    TokenVerifyRequest,
    TokenVerifyResponse,
)

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post("/payment/verify", response_model=PaymentVerifyResponse)
async def verify_payment(
    req: PaymentVerifyRequest,
    principal: Principal = Depends(require_roles(*STUDENT_ONLY)),
):
    """Accepts UPI, CARD or WALLET and returns the `payment_id` to place the order with."""
    try:
        return get_order_handler().verify_payment(req.payment_method)
    except CanteenError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
async def create_order(
    req: CreateOrderRequest,
    principal: Principal = Depends(require_roles(*STUDENT_ONLY)),
):
    """
    Places an order at one canteen.

    Every item must be on that canteen's menu and **available**; prices are
    taken from the menu now and frozen into the order. The response carries
    the 6-digit `numeric_token` and a `qr_code` data URL for pickup.
    """
    try:
        return await get_order_handler().create(principal, req)
    except CanteenError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/my", response_model=list[Order])
async def my_orders(principal: Principal = Depends(require_roles(*STUDENT_ONLY))):
    return await get_order_handler().list_mine(principal)


@router.patch("/{order_id}/status", response_model=Order)
async def update_status(
    order_id: str,
    req: StatusUpdateRequest,
    principal: Principal = Depends(require_roles(*STAFF_OR_ADMIN)),
):
    """Moves an order one step: queued → preparing → ready → collected."""
    try:
        return await get_order_handler().update_status(principal, order_id, req.status)
    except CanteenError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/{order_id}/feedback", response_model=Order)
async def add_feedback(
    order_id: str,
    req: FeedbackRequest,
    principal: Principal = Depends(require_roles(*STUDENT_ONLY)),
):
    try:
        return await get_order_handler().add_feedback(principal, order_id, req.feedback)
    except CanteenError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/verify-token", response_model=TokenVerifyResponse)
async def verify_token(
    req: TokenVerifyRequest,
    principal: Principal = Depends(require_roles(*STAFF_OR_ADMIN)),
):
    try:
        return await get_order_handler().verify_token(principal, req.token)
    except CanteenError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
