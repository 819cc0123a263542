"""
Order entity snapshot.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from domain import line_item_codec
from domain.value_objects.line_item import LineItem
from domain.value_objects.order_status import OrderStatus


@dataclass(frozen=True)
class OrderRecord:
    """
    Immutable view of a stored order.

    ``client_name`` is a copy taken when the order was written, not a
    reference to a client row: editing a client never rewrites past orders.
    """

    id: Optional[int]
    client_name: str
    detail: str
    total_dozens: int
    status: OrderStatus
    created_at: datetime
    week_id: str
    unit_cost_per_dozen: float
    unit_sale_per_dozen: float

    @property
    def items(self) -> List[LineItem]:
        return line_item_codec.decode(self.detail)

    @property
    def display_detail(self) -> str:
        return line_item_codec.to_display_text(self.detail)

    @property
    def sale_total(self) -> float:
        return self.total_dozens * self.unit_sale_per_dozen

    @property
    def cost_total(self) -> float:
        return self.total_dozens * self.unit_cost_per_dozen
