"""
Order-specific Specifications

Concrete specifications for querying orders.
"""

from models import Order
from domain.value_objects import OrderStatus
from .specifications import Specification


class OrdersInWeekSpec(Specification[Order]):
    """Orders recorded in a given business week."""

    def __init__(self, week_id: str):
        self.week_id = week_id

    def is_satisfied_by(self, order: Order) -> bool:
        return order.week_id == self.week_id

    def to_sql_filter(self):
        return Order.week_id == self.week_id


class OrdersByStatusSpec(Specification[Order]):
    """Orders in a given lifecycle status."""

    def __init__(self, status: OrderStatus):
        """
        Initialize specification.

        Args:
            status: Order status to filter by
        """
        self.status = status

    def is_satisfied_by(self, order: Order) -> bool:
        return order.status == self.status.value

    def to_sql_filter(self):
        return Order.status == self.status.value


def active_in_week(week_id: str) -> Specification[Order]:
    """Orders of a week that count towards its totals (not cancelled)."""
    return OrdersInWeekSpec(week_id) & ~OrdersByStatusSpec(OrderStatus.CANCELLED)


def in_week_with_status(week_id: str, status: OrderStatus) -> Specification[Order]:
    return OrdersInWeekSpec(week_id) & OrdersByStatusSpec(status)
