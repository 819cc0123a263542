"""
Weekly rankings.

Both rankings take the orders of one week, leave cancelled orders out and
return the complete ranked list. Callers that only want a top-N slice it.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from domain.entities.order import OrderRecord
from domain.value_objects.reports import ClientTotal, FlavorTotal


def _active(orders: Iterable[OrderRecord]) -> List[OrderRecord]:
    return [order for order in orders if order.status.counts_towards_totals()]


def rank_flavors(orders: Iterable[OrderRecord], limit: Optional[int] = None) -> List[FlavorTotal]:
    """
    Total dozens per flavor across the decoded line items of every order.

    Flavors are grouped by exact text. Sorted by dozens descending, then
    flavor name ascending.
    """
    dozens_by_flavor: Dict[str, int] = defaultdict(int)
    for order in _active(orders):
        for item in order.items:
            dozens_by_flavor[item.flavor] += item.dozens

    ranking = sorted(
        (FlavorTotal(flavor=flavor, total_dozens=dozens) for flavor, dozens in dozens_by_flavor.items()),
        key=lambda row: (-row.total_dozens, row.flavor),
    )
    return ranking[:limit] if limit is not None else ranking


def rank_clients(orders: Iterable[OrderRecord], limit: Optional[int] = None) -> List[ClientTotal]:
    """
    Order count and dozens per client, grouped by trimmed client name.

    Blank names are skipped. Sorted by order count descending, then dozens
    descending, then name ascending.
    """
    order_counts: Dict[str, int] = defaultdict(int)
    dozens: Dict[str, int] = defaultdict(int)
    for order in _active(orders):
        name = order.client_name.strip()
        if not name:
            continue
        order_counts[name] += 1
        dozens[name] += order.total_dozens

    ranking = sorted(
        (
            ClientTotal(client_name=name, total_orders=count, total_dozens=dozens[name])
            for name, count in order_counts.items()
        ),
        key=lambda row: (-row.total_orders, -row.total_dozens, row.client_name),
    )
    return ranking[:limit] if limit is not None else ranking
