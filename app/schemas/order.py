# app/schemas/order.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional
from app.core.enums import OrderStatus, PaymentMethod
from app.schemas.customer import Customer, Vehicle


class OrderItem(BaseModel):
    """Line item: a priced copy of a product, never re-read from the catalog."""
    id: str
    code: str = ""
    brand: Optional[str] = ""
    name: str
    buy_price: float = 0.0
    sell_price: float = 0.0
    quantity: int = 1


class Order(BaseModel):
    id: str
    customer_id: str
    customer_snapshot: Customer
    vehicle_snapshot: Vehicle
    items: List[OrderItem]
    status: OrderStatus = OrderStatus.NEW
    date: datetime
    total_amount: float
    prepayment: float = 0.0
    expenses: float = 0.0
    payment_method: PaymentMethod = PaymentMethod.CASH
    total_profit: float
    notes: Optional[str] = None


class OrderItemIn(BaseModel):
    code: str = ""
    brand: Optional[str] = ""
    name: str = Field(..., min_length=1)
    buy_price: float = Field(0.0, ge=0, allow_inf_nan=False)
    sell_price: float = Field(..., ge=0, allow_inf_nan=False)
    quantity: int = Field(1, ge=1)


class OrderCreate(BaseModel):
    customer_id: str
    vehicle_id: Optional[str] = None     # may be omitted when the customer owns one vehicle
    items: List[OrderItemIn] = Field(default_factory=list)
    notes: Optional[str] = ""
    prepayment: float = Field(0.0, ge=0, allow_inf_nan=False)
    expenses: float = Field(0.0, ge=0, allow_inf_nan=False)
    payment_method: PaymentMethod = PaymentMethod.CASH


class OrderQuoteRequest(BaseModel):
    items: List[OrderItemIn] = Field(default_factory=list)
    discount_percent: float = Field(0.0, ge=0, le=100, allow_inf_nan=False)
    prepayment: float = Field(0.0, ge=0, allow_inf_nan=False)
    expenses: float = Field(0.0, ge=0, allow_inf_nan=False)


class OrderQuote(BaseModel):
    subtotal: float
    discount_amount: float
    total_amount: float
    total_cost: float
    total_profit: float
    remaining_balance: float


class StatusUpdate(BaseModel):
    status: OrderStatus


class NotesUpdate(BaseModel):
    notes: str = ""


class ExpensesUpdate(BaseModel):
    expenses: float = Field(..., ge=0, allow_inf_nan=False)


class PrepaymentUpdate(BaseModel):
    prepayment: float = Field(..., ge=0, allow_inf_nan=False)


class OrderOut(Order):
    remaining_balance: Optional[float] = None   # derived, never stored


class ProgressStep(BaseModel):
    status: OrderStatus
    completed: bool
    current: bool
