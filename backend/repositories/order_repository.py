"""
Order repository for order-specific data access operations.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import func

from models import Order
from domain.entities import OrderRecord
from domain.value_objects import OrderStatus, WeekSummary
from services.interfaces import IOrderStore
from .base_repository import BaseRepository
from .order_specifications import active_in_week, in_week_with_status


class OrderRepository(BaseRepository[Order], IOrderStore):
    """Repository for Order model operations."""

    def __init__(self, db: Session):
        super().__init__(db, Order)

    def find_order_by_id(self, order_id: int) -> Optional[OrderRecord]:
        order = self.get_by_id(order_id)
        return order.to_record() if order else None

    def insert_order(self, order: OrderRecord) -> OrderRecord:
        row = Order(
            client_name=order.client_name,
            detail=order.detail,
            total_dozens=order.total_dozens,
            status=order.status.value,
            created_at=order.created_at,
            week_id=order.week_id,
            unit_cost_per_dozen=order.unit_cost_per_dozen,
            unit_sale_per_dozen=order.unit_sale_per_dozen
        )
        self.create(row)
        self.commit()
        return row.to_record()

    def update_order(self, order: OrderRecord) -> None:
        """
        Full-record overwrite by id.

        An id that no longer exists is ignored.
        """
        row = self.get_by_id(order.id)
        if row is None:
            return

        row.client_name = order.client_name
        row.detail = order.detail
        row.total_dozens = order.total_dozens
        row.status = order.status.value
        row.created_at = order.created_at
        row.week_id = order.week_id
        row.unit_cost_per_dozen = order.unit_cost_per_dozen
        row.unit_sale_per_dozen = order.unit_sale_per_dozen
        self.commit()

    def _newest_first(self, spec) -> List[OrderRecord]:
        rows = self.db.query(self.model).filter(
            spec.to_sql_filter()
        ).order_by(
            self.model.created_at.desc(),
            self.model.id.desc()
        ).all()
        return [row.to_record() for row in rows]

    def orders_by_week_and_status(self, week_id: str, status: OrderStatus) -> List[OrderRecord]:
        return self._newest_first(in_week_with_status(week_id, status))

    def active_orders_by_week(self, week_id: str) -> List[OrderRecord]:
        return self._newest_first(active_in_week(week_id))

    def distinct_week_ids(self) -> List[str]:
        """
        Every recorded week id, newest first.

        Week ids sort chronologically as plain strings.
        """
        rows = self.db.query(self.model.week_id).distinct().order_by(
            self.model.week_id.desc()
        ).all()
        return [row.week_id for row in rows]

    def pending_count(self, week_id: str) -> int:
        return self.db.query(func.count(self.model.id)).filter(
            in_week_with_status(week_id, OrderStatus.PENDING).to_sql_filter()
        ).scalar() or 0

    def week_totals(self, week_id: str) -> WeekSummary:
        """
        Aggregate the non-cancelled orders of a week.

        Args:
            week_id: Business week id

        Returns:
            WeekSummary with sales, costs and order count (pending_count 0)
        """
        result = self.db.query(
            func.coalesce(func.sum(self.model.total_dozens * self.model.unit_sale_per_dozen), 0.0).label('total_sales'),
            func.coalesce(func.sum(self.model.total_dozens * self.model.unit_cost_per_dozen), 0.0).label('total_costs'),
            func.count(self.model.id).label('order_count')
        ).filter(
            active_in_week(week_id).to_sql_filter()
        ).first()

        return WeekSummary(
            total_sales=float(result.total_sales),
            total_costs=float(result.total_costs),
            order_count=int(result.order_count)
        )

