"""
core/reports.py – Derived reports over orders (pure functions, no I/O).

Ties are broken by first-encountered order: dicts keep insertion order,
max() keeps the first maximum, sorted() is stable.
"""
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Optional

from ..models import DailySummary, Order, Overview, PopularItem
from .lifecycle import OrderStatus

POPULAR_LIMIT = 5


def today_prefix(now: Optional[datetime] = None) -> str:
    """UTC date string `YYYY-MM-DD` that created_at values of today start with."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).date().isoformat()


def daily_summary(orders: Iterable[Order], today: str) -> DailySummary:
    todays = [o for o in orders if o.created_at.startswith(today)]
    return DailySummary(
        orders=len(todays),
        sales=sum(o.total for o in todays),
        collected=sum(1 for o in todays if o.status == OrderStatus.COLLECTED),
    )


def peak_hour(orders: Iterable[Order]) -> str:
    by_hour: dict[int, int] = {}
    for o in orders:
        hour = datetime.fromisoformat(o.created_at).hour
        by_hour[hour] = by_hour.get(hour, 0) + 1
    if not by_hour:
        return "N/A"
    return str(max(by_hour, key=by_hour.__getitem__))


def popular_items(orders: Iterable[Order], limit: int = POPULAR_LIMIT) -> list[PopularItem]:
    frequency: dict[str, int] = {}
    for o in orders:
        for line in o.items:
            frequency[line.name] = frequency.get(line.name, 0) + line.quantity
    ranked = sorted(frequency.items(), key=lambda kv: kv[1], reverse=True)
    return [PopularItem(name=name, qty=qty) for name, qty in ranked[:limit]]


def platform_overview(orders: list[Order], canteen_count: int) -> Overview:
    return Overview(
        canteens=canteen_count,
        total_orders=len(orders),
        total_sales=sum(o.total for o in orders),
        peak_time=peak_hour(orders),
        popular_items=popular_items(orders),
    )
