"""
Command validation rules.

Each check returns the user-facing message of the first violated rule, or
None when the command may proceed. Nothing here raises.
"""

from typing import Optional, Sequence

from constants import Messages
from domain import line_item_codec
from domain.value_objects.line_item import LineItem
from domain.value_objects.pricing import Pricing


def validate_order_draft(client_name: str, items: Sequence[LineItem]) -> Optional[str]:
    """
    Client name and line item rules shared by order creation and edits.

    Flavors are checked as they will be stored, so a flavor made only of
    separator characters is refused.
    """
    if not client_name or not client_name.strip():
        return Messages.CLIENT_NAME_REQUIRED
    if not items:
        return Messages.LINE_ITEMS_REQUIRED
    if any(not line_item_codec.is_recordable(item) for item in items):
        return Messages.LINE_ITEMS_INVALID
    return None


def validate_order_pricing(pricing: Pricing) -> Optional[str]:
    """The settings an order is priced from must not be negative."""
    if not pricing.is_valid():
        return Messages.SETTINGS_INVALID
    return None


def validate_settings(cost_per_dozen: float, sale_per_dozen: float) -> Optional[str]:
    """Both values must be finite and not negative; NaN is refused."""
    if not Pricing(cost_per_dozen=cost_per_dozen, sale_per_dozen=sale_per_dozen).is_valid():
        return Messages.SETTINGS_NEGATIVE
    return None


def validate_client_name(name: str) -> Optional[str]:
    if not name or not name.strip():
        return Messages.CLIENT_NAME_REQUIRED
    return None
