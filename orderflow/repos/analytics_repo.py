# orderflow/repos/analytics_repo.py
from sqlalchemy import select, func, extract
from sqlalchemy.orm import Session

from orderflow.data.models.order import OrderModel
from orderflow.utils.retry import db_retry


class AnalyticsRepo:
    def __init__(self, db: Session):
        self.db = db

    @db_retry()
    def count_orders(self) -> int:
        return self.db.execute(select(func.count(OrderModel.id))).scalar_one()

    @db_retry()
    def sum_totals(self, status: str):
        return self.db.execute(
            select(func.sum(OrderModel.total)).where(OrderModel.status == status)
        ).scalar_one()

    @db_retry()
    def count_by_month(self, year: int) -> list[dict]:
        month = extract("month", OrderModel.created_at)
        stmt = (
            select(month.label("month"), func.count(OrderModel.id).label("total"))
            .where(extract("year", OrderModel.created_at) == year)
            .group_by(month)
            .order_by(month)
        )
        return [dict(row) for row in self.db.execute(stmt).mappings().all()]
