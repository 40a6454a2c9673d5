# app/services/customer_service.py
"""
Customer / vehicle registry.

Vehicles belong to exactly one customer and are only reachable through it.
Deleting a customer leaves its orders alone: they carry their own snapshot.
"""

from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import CustomerNotFoundError, VehicleNotFoundError
from app.schemas.customer import Customer, CustomerCreate, CustomerUpdate, Vehicle, VehicleCreate, VehicleUpdate
from app.services.storage_service import CustomerRepository
from app.utils.ids import new_id
from app.utils.logger import get_logger

logger = get_logger(__name__)

NULLABLE_FIELDS = {"birth_date"}


def build_vehicle(body: VehicleCreate) -> Vehicle:
    return Vehicle(**body.model_dump(), id=new_id())


def _find_index(customers: List[Customer], customer_id: str) -> int:
    for i, customer in enumerate(customers):
        if customer.id == customer_id:
            return i
    raise CustomerNotFoundError(f"Customer {customer_id} not found")


def _vehicle_index(customer: Customer, vehicle_id: str) -> int:
    for i, vehicle in enumerate(customer.vehicles):
        if vehicle.id == vehicle_id:
            return i
    raise VehicleNotFoundError(f"Vehicle {vehicle_id} not found for customer {customer.id}")


def find_vehicle(customer: Customer, vehicle_id: str) -> Vehicle:
    return customer.vehicles[_vehicle_index(customer, vehicle_id)]


def list_customers(db: Session) -> List[Customer]:
    return CustomerRepository(db).load_all()


def get_customer(db: Session, customer_id: str) -> Customer:
    customers = CustomerRepository(db).load_all()
    return customers[_find_index(customers, customer_id)]


def create_customer(db: Session, body: CustomerCreate) -> Customer:
    repo = CustomerRepository(db)
    customer = Customer(
        id=new_id(),
        name=body.name,
        phone=body.phone,
        birth_date=body.birth_date or None,
        discount_percent=body.discount_percent,
        vehicles=[build_vehicle(v) for v in body.vehicles],
    )
    repo.save_all(repo.load_all() + [customer])
    logger.info(f"Customer created: {customer.name} ({len(customer.vehicles)} vehicles)")
    return customer


def update_customer(db: Session, customer_id: str, body: CustomerUpdate) -> Customer:
    repo = CustomerRepository(db)
    customers = repo.load_all()
    index = _find_index(customers, customer_id)

    changes = body.model_dump(exclude_unset=True, exclude={"vehicles"})
    # birth_date may be cleared, the other fields keep their value on null
    changes = {k: v for k, v in changes.items() if v is not None or k in NULLABLE_FIELDS}
    if body.vehicles is not None:
        changes["vehicles"] = [build_vehicle(v) for v in body.vehicles]
    # re-validate so discount_percent is coerced and clamped
    updated = Customer.model_validate({**customers[index].model_dump(), **changes})

    customers[index] = updated
    repo.save_all(customers)
    logger.info(f"Customer updated: {customer_id} fields={sorted(changes)}")
    return updated


def delete_customer(db: Session, customer_id: str) -> None:
    repo = CustomerRepository(db)
    customers = repo.load_all()
    index = _find_index(customers, customer_id)
    removed = customers.pop(index)
    repo.save_all(customers)
    logger.info(f"Customer deleted: {removed.name} ({customer_id}), order history kept")


def _save_vehicles(db: Session, customer_id: str, edit) -> Customer:
    repo = CustomerRepository(db)
    customers = repo.load_all()
    index = _find_index(customers, customer_id)
    customer = customers[index]
    customers[index] = customer.model_copy(update={"vehicles": edit(list(customer.vehicles), customer)})
    repo.save_all(customers)
    return customers[index]


def add_vehicle(db: Session, customer_id: str, body: VehicleCreate) -> Customer:
    vehicle = build_vehicle(body)
    customer = _save_vehicles(db, customer_id, lambda vehicles, _: vehicles + [vehicle])
    logger.info(f"Vehicle {vehicle.make} {vehicle.model} added to customer {customer_id}")
    return customer


def update_vehicle(db: Session, customer_id: str, vehicle_id: str, body: VehicleUpdate) -> Customer:
    def edit(vehicles, customer):
        i = _vehicle_index(customer, vehicle_id)
        vehicles[i] = vehicles[i].model_copy(update=body.model_dump(exclude_unset=True, exclude_none=True))
        return vehicles

    customer = _save_vehicles(db, customer_id, edit)
    logger.info(f"Vehicle {vehicle_id} of customer {customer_id} updated")
    return customer


def remove_vehicle(db: Session, customer_id: str, vehicle_id: str) -> Customer:
    def edit(vehicles, customer):
        vehicles.pop(_vehicle_index(customer, vehicle_id))
        return vehicles

    customer = _save_vehicles(db, customer_id, edit)
    logger.info(f"Vehicle {vehicle_id} removed from customer {customer_id}")
    return customer
