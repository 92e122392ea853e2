from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from orderflow.data.database import get_db
from orderflow.domain.schemas import MonthlySalesOut, RevenueOut, TotalOrdersOut
from orderflow.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["analytics"])


def get_service(db: Session = Depends(get_db)) -> AnalyticsService:
    return AnalyticsService(db)


@router.get("/orders/total", response_model=TotalOrdersOut)
def total_orders(svc: AnalyticsService = Depends(get_service)):
    return {"total": svc.get_total_orders()}


@router.get("/revenue", response_model=RevenueOut)
def total_revenue(svc: AnalyticsService = Depends(get_service)):
    return {"revenue": svc.get_total_revenue()}


@router.get("/sales/monthly", response_model=List[MonthlySalesOut])
def monthly_sales(
    year: int | None = Query(None, ge=1970, le=9999),
    svc: AnalyticsService = Depends(get_service),
):
    return svc.get_monthly_sales_chart(year)
