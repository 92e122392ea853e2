# orderflow/services/analytics_service.py
from decimal import Decimal
from typing import Callable
from datetime import datetime

from sqlalchemy.orm import Session

from orderflow.domain.schemas import OrderStatus
from orderflow.repos.analytics_repo import AnalyticsRepo
from orderflow.services.pricing import CENTS, to_decimal
from orderflow.utils.ids import utcnow


class AnalyticsService:
    """Read-only sales figures for the admin dashboard."""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.repo = AnalyticsRepo(db)
        self.clock = clock

    def get_total_orders(self) -> int:
        return int(self.repo.count_orders() or 0)

    def get_total_revenue(self) -> Decimal:
        """Sum of completed orders only."""
        revenue = self.repo.sum_totals(OrderStatus.COMPLETED.value)
        if revenue is None:
            return Decimal("0.00")
        return to_decimal(revenue).quantize(CENTS)

    def get_monthly_sales_chart(self, year: int | None = None) -> list[dict]:
        if year is None:
            year = self.clock().year

        return [
            {"month": int(row["month"]), "total": int(row["total"])}
            for row in self.repo.count_by_month(year)
        ]
