# app/routers/stats.py
"""Sales statistics: revenue, realized profit, debt, top customers."""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.core.enums import StatsPeriod
from app.database import get_db
from app.schemas.stats import StatsOut
from app.services import order_service, stats_service

router = APIRouter()


@router.get("/stats", response_model=StatsOut, summary="Sales summary for a period")
def get_stats(
    period: StatsPeriod = StatsPeriod.MONTH,
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: Session = Depends(get_db),
):
    """
    period=today|week|month|all, or custom with start and end (inclusive).
    Week is Monday–Sunday, month is the calendar month.
    """
    start, end = stats_service.resolve_period(period, date.today(), start, end)
    return stats_service.summarize(order_service.list_orders(db), start, end)
