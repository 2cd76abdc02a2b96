"""
tests/test_reports.py – Unit tests for daily summary and platform overview.
"""
from datetime import datetime, timezone

from canteen_api.core import reports
from canteen_api.models import LineItem

from conftest import make_order


def _line(name: str, qty: int, price: float = 10) -> LineItem:
    return LineItem(menu_id=name.lower(), name=name, quantity=qty, price=price)


class TestTodayPrefix:

    def test_utc_date(self):
        now = datetime(2026, 10, 19, 23, 30, tzinfo=timezone.utc)
        assert reports.today_prefix(now) == "2026-10-19"


class TestDailySummary:

    def test_counts_only_today(self):
        orders = [
            make_order(id="a", total=30, created_at="2026-10-19T09:00:00+00:00"),
            make_order(id="b", total=55, created_at="2026-10-19T11:00:00+00:00", status="collected"),
            make_order(id="c", total=70, created_at="2026-10-18T11:00:00+00:00", status="collected"),
        ]
        summary = reports.daily_summary(orders, "2026-10-19")
        assert summary.orders == 2
        assert summary.sales == 85
        assert summary.collected == 1

    def test_empty(self):
        summary = reports.daily_summary([], "2026-10-19")
        assert (summary.orders, summary.sales, summary.collected) == (0, 0, 0)


class TestPeakHour:

    def test_most_frequent_hour(self):
        orders = [
            make_order(id="a", created_at="2026-10-19T10:05:00+00:00"),
            make_order(id="b", created_at="2026-10-19T10:45:00+00:00"),
            make_order(id="c", created_at="2026-10-19T14:10:00+00:00"),
        ]
        assert reports.peak_hour(orders) == "10"

    def test_tie_goes_to_first_seen(self):
        orders = [
            make_order(id="a", created_at="2026-10-19T14:00:00+00:00"),
            make_order(id="b", created_at="2026-10-19T09:00:00+00:00"),
        ]
        assert reports.peak_hour(orders) == "14"

    def test_no_orders(self):
        assert reports.peak_hour([]) == "N/A"


class TestPopularItems:

    def test_sums_quantity_by_name(self):
        orders = [
            make_order(id="a", items=[_line("Dosa", 2), _line("Idli", 1)]),
            make_order(id="b", items=[_line("Idli", 3)]),
        ]
        top = reports.popular_items(orders)
        assert [(p.name, p.qty) for p in top] == [("Idli", 4), ("Dosa", 2)]

    def test_top_five_with_first_seen_ties(self):
        names = ["A", "B", "C", "D", "E", "F"]
        orders = [make_order(id=n, items=[_line(n, 1)]) for n in names]
        top = reports.popular_items(orders)
        assert [p.name for p in top] == ["A", "B", "C", "D", "E"]


class TestOverview:

    def test_totals(self):
        orders = [
            make_order(id="a", total=30, items=[_line("Idli", 1, 30)], created_at="2026-10-19T10:00:00+00:00"),
            make_order(id="b", total=110, items=[_line("Dosa", 2, 55)], created_at="2026-10-19T10:30:00+00:00"),
        ]
        overview = reports.platform_overview(orders, canteen_count=4)
        assert overview.canteens == 4
        assert overview.total_orders == 2
        assert overview.total_sales == 140
        assert overview.peak_time == "10"
        assert overview.popular_items[0].name == "Dosa"
