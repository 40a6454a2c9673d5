# app/models/order.py
"""
Orders table. Customer, vehicle and line items are point-in-time copies
stored as JSON; they are never joined back to the live customers/products.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, JSON
from app.database import Base


class OrderRecord(Base):
    __tablename__ = "orders"

    id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, index=True)
    customer_id = Column(String(64), nullable=False, index=True)   # no FK, orders outlive customers
    customer_snapshot = Column(JSON, nullable=False)
    vehicle_snapshot = Column(JSON, nullable=False)
    items = Column(JSON, nullable=False)
    status = Column(String(20), nullable=False, index=True)
    date = Column(DateTime, nullable=False, index=True)
    total_amount = Column(Float, nullable=False)
    prepayment = Column(Float, default=0, nullable=False)
    expenses = Column(Float, default=0, nullable=False)
    payment_method = Column(String(20), nullable=False)
    total_profit = Column(Float, nullable=False)
    notes = Column(Text)

    def __repr__(self):
        return f"<OrderRecord {self.id} status={self.status} total={self.total_amount}>"
