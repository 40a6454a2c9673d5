# app/services/pricing_service.py
"""
Order pricing.

Totals are computed once, when the order is created, from the line items
and the customer's discount. Nothing here rounds; prices are rounded
upstream (bulk markup) before they ever reach an order.
"""

from dataclasses import dataclass
from typing import Iterable

from app.schemas.order import OrderItem


@dataclass(frozen=True)
class OrderFinancials:
    subtotal: float
    total_amount: float
    total_cost: float
    expenses: float
    total_profit: float

    @property
    def discount_amount(self) -> float:
        return self.subtotal - self.total_amount


def items_subtotal(items: Iterable[OrderItem]) -> float:
    return sum(item.sell_price * item.quantity for item in items)


def items_cost(items: Iterable[OrderItem]) -> float:
    """Cost of goods, always from the item snapshot's buy prices."""
    return sum(item.buy_price * item.quantity for item in items)


def apply_discount(subtotal: float, discount_percent: float) -> float:
    # zero discount keeps the subtotal as is, no float multiply
    if discount_percent > 0:
        return subtotal * (1 - discount_percent / 100)
    return subtotal


def compute_profit(total_amount: float, total_cost: float, expenses: float) -> float:
    """Revenue minus cost of goods minus expenses. Negative profit is kept as is."""
    return total_amount - total_cost - expenses


def compute_order_financials(items, discount_percent: float, expenses: float = 0.0) -> OrderFinancials:
    """
    Price a list of line items for a customer discount.

    Pure function. An empty item list prices to zero; refusing empty
    orders is the order-creation flow's job.
    """
    items = list(items)
    subtotal = items_subtotal(items)
    total_amount = apply_discount(subtotal, discount_percent)
    total_cost = items_cost(items)
    return OrderFinancials(
        subtotal=subtotal,
        total_amount=total_amount,
        total_cost=total_cost,
        expenses=expenses,
        total_profit=compute_profit(total_amount, total_cost, expenses),
    )


def remaining_balance(total_amount: float, prepayment: float) -> float:
    """What the customer still owes, floored at zero. Overpayment is not negative debt."""
    return max(0.0, total_amount - prepayment)
