# app/models/customer.py
"""
Customers table. Each row is one customer with its owned vehicle list
stored as JSON. `position` keeps the collection order.

The flat vin/make/model/year/engine_size columns are the legacy schema,
from before a customer could own several vehicles. Rows written today
leave them NULL; rows with vehicles NULL are upgraded on load.
"""

from sqlalchemy import Column, Integer, String, Float, JSON
from app.database import Base


class CustomerRecord(Base):
    __tablename__ = "customers"

    id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    phone = Column(String(50))
    birth_date = Column(String(20))
    discount_percent = Column(Float, default=0, nullable=False)
    vehicles = Column(JSON)            # list of vehicle dicts, NULL on legacy rows
    # Legacy single-vehicle fields
    vin = Column(String(50))
    make = Column(String(100))
    model = Column(String(100))
    year = Column(String(10))
    engine_size = Column(String(20))

    def __repr__(self):
        return f"<CustomerRecord {self.id} name={self.name}>"
