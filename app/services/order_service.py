# app/services/order_service.py
"""
Order creation and post-creation updates against the orders collection.

Creation flow:
  1. resolve the customer and one of its vehicles (no vehicles → refused)
  2. refuse an empty item list
  3. price the items with the customer's discount (pricing_service)
  4. store the order with deep copies of customer and vehicle, newest first
  5. auto-register unknown item names in the catalog

After creation only status, notes, prepayment and expenses change, each
as one load → replace → save_all of the orders collection.
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from app.core.enums import OrderStatus
from app.core.exceptions import EmptyOrderError, MissingVehicleError, OrderNotFoundError, VehicleNotFoundError
from app.schemas.order import Order, OrderCreate, OrderItem, OrderItemIn, OrderOut, OrderQuote, OrderQuoteRequest
from app.services import order_lifecycle
from app.services.catalog_service import auto_register_from_order
from app.services.customer_service import find_vehicle, get_customer
from app.services.pricing_service import compute_order_financials, remaining_balance
from app.services.storage_service import OrderRepository, ProductRepository
from app.utils.ids import new_id
from app.utils.logger import get_logger

logger = get_logger(__name__)


def build_items(items: List[OrderItemIn]) -> List[OrderItem]:
    """Line items get their own ids, distinct from any catalog product."""
    return [OrderItem(**item.model_dump(), id=new_id()) for item in items]


def to_out(order: Order) -> OrderOut:
    out = OrderOut(**order.model_dump())
    out.remaining_balance = order_lifecycle.order_remaining_balance(order)
    return out


def quote(body: OrderQuoteRequest) -> OrderQuote:
    """Price a draft without saving anything."""
    financials = compute_order_financials(build_items(body.items), body.discount_percent, body.expenses)
    return OrderQuote(
        subtotal=financials.subtotal,
        discount_amount=financials.discount_amount,
        total_amount=financials.total_amount,
        total_cost=financials.total_cost,
        total_profit=financials.total_profit,
        remaining_balance=remaining_balance(financials.total_amount, body.prepayment),
    )


def create_order(db: Session, body: OrderCreate, now: Optional[datetime] = None) -> Order:
    customer = get_customer(db, body.customer_id)
    if not customer.vehicles:
        logger.warning(f"Order refused: customer {customer.id} has no vehicles")
        raise MissingVehicleError(
            f"Customer {customer.name} has no vehicles. Add a vehicle before creating an order.",
            {"customer_id": customer.id},
        )
    if body.vehicle_id:
        vehicle = find_vehicle(customer, body.vehicle_id)
    elif len(customer.vehicles) == 1:
        vehicle = customer.vehicles[0]
    else:
        raise VehicleNotFoundError(
            f"Customer {customer.name} has {len(customer.vehicles)} vehicles, vehicle_id is required",
            {"vehicle_ids": [v.id for v in customer.vehicles]},
        )

    if not body.items:
        logger.warning(f"Order refused: no items for customer {customer.id}")
        raise EmptyOrderError("Order has no items")

    items = build_items(body.items)
    financials = compute_order_financials(items, customer.discount_percent, body.expenses)

    order = Order(
        id=new_id(),
        customer_id=customer.id,
        customer_snapshot=customer.model_copy(deep=True),
        vehicle_snapshot=vehicle.model_copy(deep=True),
        items=items,
        status=OrderStatus.NEW,
        date=now or datetime.now(timezone.utc).replace(tzinfo=None),
        total_amount=financials.total_amount,
        prepayment=body.prepayment,
        expenses=body.expenses,
        payment_method=body.payment_method,
        total_profit=financials.total_profit,
        notes=body.notes,
    )

    orders = OrderRepository(db)
    orders.save_all([order] + orders.load_all())

    products = ProductRepository(db)
    products.save_all(auto_register_from_order(products.load_all(), items))

    logger.info(
        f"Order {order.id[:8]} created for {customer.name}: "
        f"{len(items)} items, total={order.total_amount} profit={order.total_profit}"
    )
    return order


def list_orders(db: Session, customer_id: Optional[str] = None) -> List[Order]:
    """Newest first. Filtering by customer_id works for deleted customers too."""
    orders = OrderRepository(db).load_all()
    if customer_id:
        orders = [o for o in orders if o.customer_id == customer_id]
    return sorted(orders, key=lambda o: o.date, reverse=True)


def get_order(db: Session, order_id: str) -> Order:
    for order in OrderRepository(db).load_all():
        if order.id == order_id:
            return order
    raise OrderNotFoundError(f"Order {order_id} not found")


def _apply(db: Session, order_id: str, change: Callable[[Order], Order]) -> Order:
    repo = OrderRepository(db)
    orders = repo.load_all()
    for i, order in enumerate(orders):
        if order.id == order_id:
            orders[i] = change(order)
            repo.save_all(orders)
            return orders[i]
    raise OrderNotFoundError(f"Order {order_id} not found")


def change_status(db: Session, order_id: str, status: OrderStatus) -> Order:
    order = _apply(db, order_id, lambda o: order_lifecycle.set_status(o, status))
    logger.info(f"Order {order_id[:8]} status → {order.status.value}")
    return order


def change_notes(db: Session, order_id: str, notes: str) -> Order:
    return _apply(db, order_id, lambda o: order_lifecycle.update_notes(o, notes))


def change_expenses(db: Session, order_id: str, expenses: float) -> Order:
    order = _apply(db, order_id, lambda o: order_lifecycle.update_expenses(o, expenses))
    logger.info(f"Order {order_id[:8]} expenses={expenses} profit={order.total_profit}")
    return order


def change_prepayment(db: Session, order_id: str, prepayment: float) -> Order:
    order = _apply(db, order_id, lambda o: order_lifecycle.update_prepayment(o, prepayment))
    logger.info(f"Order {order_id[:8]} prepayment={prepayment}")
    return order


def settle_debt(db: Session, order_id: str) -> Order:
    """Prepayment and status are written in the same save."""
    order = _apply(db, order_id, order_lifecycle.close_debt)
    logger.info(f"Order {order_id[:8]} paid in full, status={order.status.value}")
    return order


def delete_order(db: Session, order_id: str) -> None:
    repo = OrderRepository(db)
    orders = repo.load_all()
    remaining = [o for o in orders if o.id != order_id]
    if len(remaining) == len(orders):
        raise OrderNotFoundError(f"Order {order_id} not found")
    repo.save_all(remaining)
    logger.info(f"Order deleted: {order_id}")
