from datetime import date, datetime

from bakery_pos.models import InventoryRecord, Order, OrderItem
from bakery_pos.reports import ReportCache, daily_summary, dashboard, hourly_sales, product_analysis
from tests.conftest import PRODUCTS


def make_order(order_id, when, order_type, *items):
    order_items = tuple(OrderItem(pid, name, qty, price) for pid, name, qty, price in items)
    total = sum(item.subtotal for item in order_items)
    return Order(order_id, when, order_type, order_items, total, "cash", total, 0)


ORDERS = [
    make_order("o4", datetime(2026, 10, 18, 18, 5), "takeaway", ("beer", "Beer", 2, 600)),
    make_order("o3", datetime(2026, 10, 18, 9, 40), "eat-in", ("bread", "Bread", 1, 300), ("coffee", "Coffee", 1, 350)),
    make_order("o2", datetime(2026, 10, 18, 9, 10), "takeaway", ("bread", "Bread", 3, 300)),
    make_order("o1", datetime(2026, 10, 17, 15, 0), "eat-in", ("coffee", "Coffee", 2, 350)),
]


def test_daily_summary_groups_by_date_newest_first():
    days = daily_summary(ORDERS)

    assert [day.day for day in days] == [date(2026, 10, 18), date(2026, 10, 17)]
    today = days[0]
    assert today.total == 1200 + 650 + 900
    assert today.eat_in == 650
    assert today.takeaway == 2100
    assert today.count == 3
    assert [order.order_id for order in today.orders] == ["o4", "o3", "o2"]


def test_product_analysis_sorted_by_sales():
    stats = product_analysis(ORDERS)

    assert [(s.product_id, s.quantity, s.sales) for s in stats] == [
        ("beer", 2, 1200),
        ("bread", 4, 1200),
        ("coffee", 3, 1050),
    ]


def test_hourly_sales_buckets():
    buckets = hourly_sales(ORDERS[:3])

    assert len(buckets) == 24
    assert buckets[9] == 1550
    assert buckets[18] == 1200
    assert sum(buckets) == 2750


def test_dashboard_for_one_day():
    records = [
        InventoryRecord("bread", 1, 2, datetime(2026, 10, 18, 8, 0)),
        InventoryRecord("croissant", 9, 3, datetime(2026, 10, 18, 8, 0)),
    ]

    board = dashboard(ORDERS, records, PRODUCTS, date(2026, 10, 18))

    assert board.sales == 2750
    assert board.order_count == 3
    assert board.average_ticket == 2750 // 3
    assert board.eat_in_sales == 650
    assert board.takeaway_sales == 2100
    assert [(p.product_id, p.quantity) for p in board.top_products] == [("bread", 4), ("beer", 2), ("coffee", 1)]
    assert [r.product_id for r in board.low_stock] == ["bread"]


def test_dashboard_without_orders():
    board = dashboard([], [], PRODUCTS, date(2026, 10, 18))

    assert board.sales == 0
    assert board.average_ticket == 0
    assert board.top_products == ()


def test_report_cache_recomputes_only_when_version_changes():
    calls = []
    cache = ReportCache(lambda: calls.append(1) or len(calls))

    assert cache.get(0) == 1
    assert cache.get(0) == 1
    assert cache.get(1) == 2
    assert len(calls) == 2
