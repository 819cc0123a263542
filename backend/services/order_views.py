"""
Order Views

Cache of live views over orders, clients and settings. Week-scoped views are
keyed by their week id, so every (view, week) pair is computed independently
and shared by everyone who asks for it.
"""

from datetime import datetime
from typing import Callable, Dict, List, Tuple

from sqlalchemy.orm import Session, sessionmaker

from constants import TableNames
from domain.entities import ClientRecord, OrderRecord
from domain.value_objects import ClientTotal, FlavorTotal, Pricing, WeekSummary
from services.live_views import ChangeNotifier, LiveView
from services.order_service import OrderService


class OrderViews:
    """Factory and cache of LiveViews backed by OrderService queries."""

    def __init__(
        self,
        session_factory: sessionmaker,
        notifier: ChangeNotifier,
        clock: Callable[[], datetime] = datetime.now
    ):
        self._session_factory = session_factory
        self._notifier = notifier
        self._clock = clock
        self._cache: Dict[Tuple[str, str], LiveView] = {}

    def _view(self, name: str, key: str, query: Callable[[OrderService], object], *tables: str) -> LiveView:
        cache_key = (name, key)
        view = self._cache.get(cache_key)
        if view is None:
            def compute(db: Session):
                return query(OrderService.from_session(db, self._clock))

            view = LiveView(
                compute,
                tables,
                self._session_factory,
                self._notifier,
                name=f"{name}[{key}]" if key else name
            )
            self._cache[cache_key] = view
        return view

    @property
    def cached_count(self) -> int:
        return len(self._cache)

    def settings(self) -> LiveView[Pricing]:
        return self._view('settings', '', lambda service: service.get_settings(), TableNames.SETTINGS)

    def clients(self) -> LiveView[List[ClientRecord]]:
        return self._view('clients', '', lambda service: service.list_clients(), TableNames.CLIENTS)

    def week_ids(self) -> LiveView[List[str]]:
        return self._view('week_ids', '', lambda service: service.week_ids(), TableNames.ORDERS)

    def pending_orders(self, week_id: str) -> LiveView[List[OrderRecord]]:
        return self._view(
            'pending_orders', week_id,
            lambda service: service.pending_orders(week_id),
            TableNames.ORDERS
        )

    def delivered_orders(self, week_id: str) -> LiveView[List[OrderRecord]]:
        return self._view(
            'delivered_orders', week_id,
            lambda service: service.delivered_orders(week_id),
            TableNames.ORDERS
        )

    def week_summary(self, week_id: str) -> LiveView[WeekSummary]:
        return self._view(
            'week_summary', week_id,
            lambda service: service.week_summary(week_id),
            TableNames.ORDERS
        )

    def top_flavors(self, week_id: str) -> LiveView[List[FlavorTotal]]:
        return self._view(
            'top_flavors', week_id,
            lambda service: service.top_flavors(week_id),
            TableNames.ORDERS
        )

    def top_clients(self, week_id: str) -> LiveView[List[ClientTotal]]:
        return self._view(
            'top_clients', week_id,
            lambda service: service.top_clients(week_id),
            TableNames.ORDERS
        )
