"""
handlers/report_handler.py – ReportHandler class.
Responsibility: load the orders a caller may see and hand them to core.reports.
"""
from datetime import datetime, timezone
from typing import Callable

from ..core import reports
from ..core.access import Principal, canteen_scope, sees_no_orders
from ..core.store import CanteenStore
from ..models import DailySummary, Overview


class ReportHandler:
    """Handles /staff/summary and /admin/overview."""

    def __init__(
        self,
        store: CanteenStore,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._store = store
        self._clock = clock

    async def daily_summary(self, principal: Principal) -> DailySummary:
        if sees_no_orders(principal):
            orders = []
        else:
            orders = await self._store.list_orders(canteen_id=canteen_scope(principal))
        return reports.daily_summary(orders, reports.today_prefix(self._clock()))

    async def overview(self) -> Overview:
        orders = await self._store.list_orders()
        return reports.platform_overview(orders, await self._store.count_canteens())
