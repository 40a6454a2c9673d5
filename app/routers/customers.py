# app/routers/customers.py
"""Customer / vehicle registry endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.routers._confirm import require_confirmation
from app.schemas.customer import Customer, CustomerCreate, CustomerUpdate, VehicleCreate, VehicleUpdate
from app.schemas.order import OrderOut
from app.services import customer_service, order_service

router = APIRouter()


@router.get("/customers", response_model=list[Customer])
def list_customers(db: Session = Depends(get_db)):
    return customer_service.list_customers(db)


@router.get("/customers/{customer_id}", response_model=Customer)
def get_customer(customer_id: str, db: Session = Depends(get_db)):
    return customer_service.get_customer(db, customer_id)


@router.post("/customers", response_model=Customer, status_code=201, summary="Create a customer")
def create_customer(body: CustomerCreate, db: Session = Depends(get_db)):
    """discount_percent is coerced to a number and clamped to 0–100."""
    return customer_service.create_customer(db, body)


@router.patch("/customers/{customer_id}", response_model=Customer)
def update_customer(customer_id: str, body: CustomerUpdate, db: Session = Depends(get_db)):
    return customer_service.update_customer(db, customer_id, body)


@router.delete("/customers/{customer_id}", dependencies=[Depends(require_confirmation)],
               summary="Delete a customer (orders are kept)")
def delete_customer(customer_id: str, db: Session = Depends(get_db)):
    customer_service.delete_customer(db, customer_id)
    return {"status": "deleted", "customer_id": customer_id}


@router.get("/customers/{customer_id}/orders", response_model=list[OrderOut], summary="Order history")
def customer_orders(customer_id: str, db: Session = Depends(get_db)):
    """Looks orders up by customer_id only, so history survives customer deletion."""
    return [order_service.to_out(o) for o in order_service.list_orders(db, customer_id=customer_id)]


# ── Vehicles ─────────────────────────────────────────────────────────────────

@router.post("/customers/{customer_id}/vehicles", response_model=Customer, status_code=201)
def add_vehicle(customer_id: str, body: VehicleCreate, db: Session = Depends(get_db)):
    return customer_service.add_vehicle(db, customer_id, body)


@router.patch("/customers/{customer_id}/vehicles/{vehicle_id}", response_model=Customer)
def update_vehicle(customer_id: str, vehicle_id: str, body: VehicleUpdate, db: Session = Depends(get_db)):
    return customer_service.update_vehicle(db, customer_id, vehicle_id, body)


@router.delete("/customers/{customer_id}/vehicles/{vehicle_id}", response_model=Customer)
def remove_vehicle(customer_id: str, vehicle_id: str, db: Session = Depends(get_db)):
    return customer_service.remove_vehicle(db, customer_id, vehicle_id)
