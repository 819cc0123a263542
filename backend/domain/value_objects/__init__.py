"""
Domain Value Objects

Value objects are immutable types compared by value, not by ID.

- OrderStatus: Lifecycle state of an order
- LineItem: One flavor/quantity pair of an order
- Pricing: Per-dozen cost and sale values
- WeekSummary, FlavorTotal, ClientTotal: Weekly report rows
"""

from .order_status import OrderStatus
from .line_item import LineItem
from .pricing import Pricing
from .reports import WeekSummary, FlavorTotal, ClientTotal

__all__ = [
    "OrderStatus",
    "LineItem",
    "Pricing",
    "WeekSummary",
    "FlavorTotal",
    "ClientTotal",
]
