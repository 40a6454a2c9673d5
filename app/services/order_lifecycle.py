# app/services/order_lifecycle.py
"""
Order status model and the post-creation mutations of an order.

Statuses: NEW → RECEIVED → NOTIFIED → PAID → PICKED_UP is the suggested
flow, DEBT is a side branch. Any status can be set from any other; the
operator is trusted. set_status() is the single place a status changes,
so a stricter transition table can be added here later.

Every function takes an Order and returns a new Order; the input is not
mutated. Numeric arguments are expected to be validated already.
"""

from typing import List

from app.core.enums import OrderStatus
from app.schemas.order import Order, ProgressStep
from app.services.pricing_service import compute_profit, items_cost, remaining_balance

STATUS_FLOW: List[OrderStatus] = [
    OrderStatus.NEW,
    OrderStatus.RECEIVED,
    OrderStatus.NOTIFIED,
    OrderStatus.PAID,
    OrderStatus.PICKED_UP,
]

# Statuses whose profit counts as earned in reports
REALIZED_STATUSES = frozenset({OrderStatus.PICKED_UP, OrderStatus.PAID, OrderStatus.DEBT})


def is_step_completed(current_status: OrderStatus, step_status: OrderStatus) -> bool:
    """Progress display only, never a transition guard. DEBT shows no progress."""
    if current_status == OrderStatus.DEBT:
        return False
    if current_status == step_status:
        return True
    if current_status not in STATUS_FLOW or step_status not in STATUS_FLOW:
        return False
    return STATUS_FLOW.index(step_status) <= STATUS_FLOW.index(current_status)


def progress(order: Order) -> List[ProgressStep]:
    return [
        ProgressStep(
            status=step,
            completed=is_step_completed(order.status, step),
            current=order.status == step,
        )
        for step in STATUS_FLOW
    ]


def set_status(order: Order, new_status: OrderStatus) -> Order:
    return order.model_copy(update={"status": OrderStatus(new_status)})


def close_debt(order: Order) -> Order:
    """
    Mark the order fully paid. A DEBT order is also considered picked up.
    Both fields change in the one returned copy.
    """
    update = {"prepayment": order.total_amount}
    if order.status == OrderStatus.DEBT:
        update["status"] = OrderStatus.PICKED_UP
    return order.model_copy(update=update)


def update_expenses(order: Order, new_expenses: float) -> Order:
    """Recompute profit from the stored items and total; total_amount stays."""
    profit = compute_profit(order.total_amount, items_cost(order.items), new_expenses)
    return order.model_copy(update={"expenses": new_expenses, "total_profit": profit})


def update_prepayment(order: Order, new_prepayment: float) -> Order:
    # not clamped to total_amount, overpayment is stored as entered
    return order.model_copy(update={"prepayment": new_prepayment})


def update_notes(order: Order, text: str) -> Order:
    return order.model_copy(update={"notes": text})


def order_remaining_balance(order: Order) -> float:
    return remaining_balance(order.total_amount, order.prepayment)
