# app/services/storage_service.py
"""
Full-collection persistence for customers, products and orders.

Each repository exposes two operations only:
  - load_all()  → every record in stored order; an empty list if the table
                  is missing or any row cannot be decoded. Never raises.
  - save_all()  → replaces the whole collection in one transaction.

Services read a collection, build the new collection, and write it back;
one save_all call is the unit of atomicity.
"""

from typing import Generic, List, Type, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.customer import CustomerRecord
from app.models.order import OrderRecord
from app.models.product import ProductRecord
from app.schemas.customer import Customer, Vehicle
from app.schemas.order import Order
from app.schemas.product import Product
from app.utils.ids import new_id
from app.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

LEGACY_VEHICLE_FIELDS = ("vin", "make", "model", "year", "engine_size")


class CollectionRepository(Generic[T]):
    record_class = None
    schema: Type[BaseModel] = None
    collection = "records"

    def __init__(self, db: Session):
        self.db = db

    def load_all(self) -> List[T]:
        try:
            rows = self.db.query(self.record_class).order_by(self.record_class.position).all()
            return [self._to_schema(row) for row in rows]
        except (SQLAlchemyError, ValidationError, ValueError, TypeError) as e:
            self.db.rollback()
            logger.error(f"Could not load {self.collection}, starting with an empty collection: {e}")
            return []

    def save_all(self, items: List[T]) -> None:
        try:
            self.db.query(self.record_class).delete(synchronize_session=False)
            # rows loaded earlier in this session would clash with the re-inserted ids
            self.db.expunge_all()
            for position, item in enumerate(items):
                self.db.add(self._to_record(item, position))
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error(f"Saving {len(items)} {self.collection} failed", exc_info=True)
            raise
        logger.debug(f"Saved {len(items)} {self.collection}")

    def _row_dict(self, row) -> dict:
        # NULL columns fall back to the schema defaults
        values = {c.name: getattr(row, c.name) for c in row.__table__.columns if c.name != "position"}
        return {k: v for k, v in values.items() if v is not None}

    def _to_schema(self, row) -> T:
        return self.schema.model_validate(self._row_dict(row))

    def _to_record(self, item: T, position: int):
        return self.record_class(position=position, **item.model_dump(mode="json"))


class CustomerRepository(CollectionRepository[Customer]):
    record_class = CustomerRecord
    schema = Customer
    collection = "customers"

    def _to_schema(self, row) -> Customer:
        data = self._row_dict(row)
        legacy = {field: data.pop(field, None) for field in LEGACY_VEHICLE_FIELDS}
        if data.get("vehicles") is None:
            # Upgrade in memory only; the new shape is persisted on the next save_all
            data["vehicles"] = [Vehicle(id=new_id(), **{k: v or "" for k, v in legacy.items()})]
            logger.info(f"Upgraded legacy customer {row.id} to a vehicle list")
        return Customer.model_validate(data)


class ProductRepository(CollectionRepository[Product]):
    record_class = ProductRecord
    schema = Product
    collection = "products"


class OrderRepository(CollectionRepository[Order]):
    record_class = OrderRecord
    schema = Order
    collection = "orders"

    def _to_record(self, item: Order, position: int):
        data = item.model_dump(mode="json")
        data["date"] = item.date     # DateTime column wants a datetime, not the ISO string
        return OrderRecord(position=position, **data)
