# tests/test_stats_service.py
"""Unit tests for sales statistics."""

from datetime import date, datetime
from app.core.enums import OrderStatus, StatsPeriod
from app.services.stats_service import resolve_period, summarize
from factories import make_item, make_order


def order(order_id, status, total, profit_items=None, customer_id="c1", name="Ivan", day=10):
    return make_order(order_id=order_id, status=status, total_amount=total, customer_id=customer_id,
                      customer_name=name, items=profit_items or [make_item(buy=0, sell=total)],
                      date=datetime(2026, 3, day, 15, 0))


class TestSummarize:
    def test_profit_counts_realized_statuses_only(self):
        orders = [
            order("o1", OrderStatus.NEW, 100),
            order("o2", OrderStatus.PAID, 200),
            order("o3", OrderStatus.PICKED_UP, 300),
            order("o4", OrderStatus.DEBT, 400),
            order("o5", OrderStatus.NOTIFIED, 500),
        ]
        stats = summarize(orders)
        assert stats.revenue == 1500
        assert stats.profit == 900
        assert stats.debt == 400
        assert stats.count == 5
        assert stats.by_status["NEW"] == 1
        assert stats.by_status["RECEIVED"] == 0

    def test_top_customers_by_spend(self):
        orders = [
            order("o1", OrderStatus.PAID, 100, customer_id="a", name="Anna"),
            order("o2", OrderStatus.PAID, 900, customer_id="b", name="Bohdan"),
            order("o3", OrderStatus.PAID, 300, customer_id="a", name="Anna"),
        ]
        top = summarize(orders, top_limit=1).top_customers
        assert [(c.name, c.total, c.orders) for c in top] == [("Bohdan", 900, 1)]
        assert [c.customer_id for c in summarize(orders).top_customers] == ["b", "a"]

    def test_date_range_inclusive(self):
        orders = [order("o1", OrderStatus.PAID, 100, day=1), order("o2", OrderStatus.PAID, 200, day=15),
                  order("o3", OrderStatus.PAID, 300, day=31)]
        stats = summarize(orders, date(2026, 3, 1), date(2026, 3, 15))
        assert stats.count == 2
        assert stats.revenue == 300


class TestResolvePeriod:
    today = date(2026, 10, 14)    # a Wednesday

    def test_today(self):
        assert resolve_period(StatsPeriod.TODAY, self.today) == (self.today, self.today)

    def test_week_monday_to_sunday(self):
        assert resolve_period(StatsPeriod.WEEK, self.today) == (date(2026, 10, 12), date(2026, 10, 18))

    def test_month(self):
        assert resolve_period(StatsPeriod.MONTH, self.today) == (date(2026, 10, 1), date(2026, 10, 31))
        assert resolve_period(StatsPeriod.MONTH, date(2028, 2, 10)) == (date(2028, 2, 1), date(2028, 2, 29))

    def test_all_and_incomplete_custom(self):
        assert resolve_period(StatsPeriod.ALL, self.today) == (None, None)
        assert resolve_period(StatsPeriod.CUSTOM, self.today, start=date(2026, 1, 1)) == (None, None)
        assert resolve_period(StatsPeriod.CUSTOM, self.today, date(2026, 1, 1), date(2026, 1, 31)) == \
            (date(2026, 1, 1), date(2026, 1, 31))
