# app/services/stats_service.py
"""
Sales statistics over a date range.

Revenue counts every order. Profit counts only realized orders
(PICKED_UP, PAID, DEBT); debt is the total of DEBT orders.
"""

from datetime import date, timedelta
from typing import Iterable, Optional, Tuple

from app.config import settings
from app.core.enums import OrderStatus, StatsPeriod
from app.schemas.order import Order
from app.schemas.stats import StatsOut, TopCustomer
from app.services.order_lifecycle import REALIZED_STATUSES


def resolve_period(period: StatsPeriod, today: date,
                   start: Optional[date] = None, end: Optional[date] = None) -> Tuple[Optional[date], Optional[date]]:
    """Inclusive date bounds for a period. (None, None) means all time."""
    if period == StatsPeriod.TODAY:
        return today, today
    if period == StatsPeriod.WEEK:
        monday = today - timedelta(days=today.weekday())
        return monday, monday + timedelta(days=6)
    if period == StatsPeriod.MONTH:
        first = today.replace(day=1)
        next_month = (first + timedelta(days=32)).replace(day=1)
        return first, next_month - timedelta(days=1)
    if period == StatsPeriod.CUSTOM and start and end:
        return start, end
    return None, None


def filter_orders(orders: Iterable[Order], start: Optional[date], end: Optional[date]):
    if not start or not end:
        return list(orders)
    return [o for o in orders if start <= o.date.date() <= end]


def summarize(orders: Iterable[Order], start: Optional[date] = None, end: Optional[date] = None,
              top_limit: Optional[int] = None) -> StatsOut:
    selected = filter_orders(orders, start, end)
    revenue = profit = debt = 0.0
    by_status = {status.value: 0 for status in OrderStatus}
    spending = {}

    for order in selected:
        revenue += order.total_amount
        if order.status in REALIZED_STATUSES:
            profit += order.total_profit
        if order.status == OrderStatus.DEBT:
            debt += order.total_amount
        by_status[order.status.value] += 1

        entry = spending.setdefault(order.customer_id, TopCustomer(
            customer_id=order.customer_id, name=order.customer_snapshot.name, total=0.0, orders=0))
        entry.total += order.total_amount
        entry.orders += 1

    limit = top_limit if top_limit is not None else settings.TOP_CUSTOMERS_LIMIT
    top = sorted(spending.values(), key=lambda c: c.total, reverse=True)[:limit]
    return StatsOut(start=start, end=end, revenue=revenue, profit=profit, debt=debt,
                    count=len(selected), by_status=by_status, top_customers=top)
