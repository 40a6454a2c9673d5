# app/schemas/stats.py
from pydantic import BaseModel
from datetime import date
from typing import Dict, List, Optional


class TopCustomer(BaseModel):
    customer_id: str
    name: str
    total: float
    orders: int


class StatsOut(BaseModel):
    start: Optional[date]
    end: Optional[date]
    revenue: float
    profit: float        # realized statuses only
    debt: float
    count: int
    by_status: Dict[str, int]
    top_customers: List[TopCustomer]
