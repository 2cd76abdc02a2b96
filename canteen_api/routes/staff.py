"""routes/staff.py – GET /staff/orders, GET /staff/summary"""
from fastapi import APIRouter, Depends

from ..core.access import STAFF_OR_ADMIN, Principal
from ..deps import get_order_handler, get_report_handler, require_roles
from ..models import DailySummary, Order

router = APIRouter(prefix="/staff", tags=["Staff"])


@router.get("/orders", response_model=list[Order])
async def canteen_orders(principal: Principal = Depends(require_roles(*STAFF_OR_ADMIN))):
    """Orders of the caller's canteen (every canteen for admins), earliest pickup first."""
    return await get_order_handler().canteen_orders(principal)


@router.get("/summary", response_model=DailySummary)
async def daily_summary(principal: Principal = Depends(require_roles(*STAFF_OR_ADMIN))):
    """Today's (UTC) order count, sales and collected count."""
    return await get_report_handler().daily_summary(principal)
