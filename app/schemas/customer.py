# app/schemas/customer.py
from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Optional
from app.utils.numbers import parse_float


def coerce_discount_percent(value: Any) -> float:
    """Numeric discount clamped to [0, 100]. Non-numeric input counts as no discount."""
    number = parse_float(value)
    if number is None:
        return 0.0
    return min(100.0, max(0.0, number))


class Vehicle(BaseModel):
    id: str
    vin: str = ""            # not unique, may be blank
    make: str = ""
    model: str = ""
    year: str = ""
    engine_size: str = ""


class VehicleCreate(BaseModel):
    vin: str = ""
    make: str = ""
    model: str = ""
    year: str = ""
    engine_size: str = ""


class VehicleUpdate(BaseModel):
    vin: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    year: Optional[str] = None
    engine_size: Optional[str] = None


class Customer(BaseModel):
    id: str
    name: str
    phone: str = ""
    birth_date: Optional[str] = None     # YYYY-MM-DD
    discount_percent: float = 0.0
    vehicles: List[Vehicle] = Field(default_factory=list)

    @field_validator("discount_percent", mode="before")
    @classmethod
    def _clamp_discount(cls, v):
        return coerce_discount_percent(v)


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = ""
    birth_date: Optional[str] = None
    discount_percent: Any = 0
    vehicles: List[VehicleCreate] = Field(default_factory=list)


class CustomerUpdate(BaseModel):
    """Only the fields present in the request body are changed."""
    name: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[str] = None
    discount_percent: Any = None
    vehicles: Optional[List[VehicleCreate]] = None
