"""
Report Value Objects

Derived weekly figures. None of these are persisted; they are recomputed
from the current orders every time.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class WeekSummary:
    """Money and counts for one business week."""

    total_sales: float = 0.0
    total_costs: float = 0.0
    order_count: int = 0
    pending_count: int = 0

    @property
    def profit(self) -> float:
        return self.total_sales - self.total_costs


@dataclass(frozen=True)
class FlavorTotal:
    """Dozens sold of one flavor."""

    flavor: str
    total_dozens: int


@dataclass(frozen=True)
class ClientTotal:
    """Orders and dozens of one client."""

    client_name: str
    total_orders: int
    total_dozens: int
