# app/routers/orders.py
"""Order creation, lifecycle updates, and derived views."""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.routers._confirm import require_confirmation
from app.schemas.order import (
    ExpensesUpdate, NotesUpdate, OrderCreate, OrderOut, OrderQuote,
    OrderQuoteRequest, PrepaymentUpdate, ProgressStep, StatusUpdate,
)
from app.services import order_lifecycle, order_service

router = APIRouter()


@router.post("/orders", response_model=OrderOut, status_code=201, summary="Create an order")
def create_order(body: OrderCreate, db: Session = Depends(get_db)):
    """
    Prices the items with the customer's discount, snapshots customer and
    vehicle, and adds unknown item names to the catalog.
    """
    return order_service.to_out(order_service.create_order(db, body))


@router.post("/orders/quote", response_model=OrderQuote, summary="Price a draft order without saving")
def quote_order(body: OrderQuoteRequest):
    return order_service.quote(body)


@router.get("/orders", response_model=list[OrderOut])
def list_orders(customer_id: Optional[str] = None, db: Session = Depends(get_db)):
    return [order_service.to_out(o) for o in order_service.list_orders(db, customer_id=customer_id)]


@router.get("/orders/{order_id}", response_model=OrderOut)
def get_order(order_id: str, db: Session = Depends(get_db)):
    return order_service.to_out(order_service.get_order(db, order_id))


@router.get("/orders/{order_id}/progress", response_model=list[ProgressStep])
def get_progress(order_id: str, db: Session = Depends(get_db)):
    return order_lifecycle.progress(order_service.get_order(db, order_id))


@router.put("/orders/{order_id}/status", response_model=OrderOut)
def set_status(order_id: str, body: StatusUpdate, db: Session = Depends(get_db)):
    return order_service.to_out(order_service.change_status(db, order_id, body.status))


@router.put("/orders/{order_id}/notes", response_model=OrderOut)
def set_notes(order_id: str, body: NotesUpdate, db: Session = Depends(get_db)):
    return order_service.to_out(order_service.change_notes(db, order_id, body.notes))


@router.put("/orders/{order_id}/expenses", response_model=OrderOut, summary="Update expenses, recompute profit")
def set_expenses(order_id: str, body: ExpensesUpdate, db: Session = Depends(get_db)):
    return order_service.to_out(order_service.change_expenses(db, order_id, body.expenses))


@router.put("/orders/{order_id}/prepayment", response_model=OrderOut)
def set_prepayment(order_id: str, body: PrepaymentUpdate, db: Session = Depends(get_db)):
    return order_service.to_out(order_service.change_prepayment(db, order_id, body.prepayment))


@router.post("/orders/{order_id}/close-debt", response_model=OrderOut, summary="Mark paid in full")
def close_debt(order_id: str, db: Session = Depends(get_db)):
    """Sets prepayment to the total; a DEBT order also becomes PICKED_UP."""
    return order_service.to_out(order_service.settle_debt(db, order_id))


@router.delete("/orders/{order_id}", dependencies=[Depends(require_confirmation)])
def delete_order(order_id: str, db: Session = Depends(get_db)):
    order_service.delete_order(db, order_id)
    return {"status": "deleted", "order_id": order_id}
