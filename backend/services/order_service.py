"""
Order Service

Business logic for orders, clients and default pricing: validation, order
creation with pricing snapshot, lifecycle transitions, and the weekly
reports.

Commands return a CommandResult. Validation runs before any store call and
rejects without writing. Commands on ids the store does not know are silent
no-ops. Store failures are raised as DatabaseError.
"""

from dataclasses import replace
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from domain import line_item_codec, reports
from domain.entities import ClientRecord, OrderRecord
from domain.validation import (
    validate_client_name,
    validate_order_draft,
    validate_order_pricing,
)
from domain.value_objects import (
    ClientTotal,
    FlavorTotal,
    LineItem,
    OrderStatus,
    Pricing,
    WeekSummary,
)
from domain.week_calendar import WeekRange, current_week_range, label_from_week_id, week_range_for
from dtos.internal import CommandResult
from exceptions import DatabaseError
from services.interfaces import IClientStore, IOrderStore, ISettingsStore
from utils.logging_utils import StructuredLogger, log_operation

logger = StructuredLogger(__name__)


class OrderService:
    """Service for order, client and settings business logic."""

    def __init__(
        self,
        orders: IOrderStore,
        clients: IClientStore,
        settings: ISettingsStore,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Initialize OrderService.

        Args:
            orders: Order store
            clients: Client store
            settings: Settings store
            clock: Returns the current local time; orders take their
                timestamp and business week from it
        """
        self.orders = orders
        self.clients = clients
        self.settings = settings
        self._clock = clock

    @classmethod
    def from_session(cls, db: Session, clock: Callable[[], datetime] = datetime.now) -> "OrderService":
        """Build the service on top of the SQLAlchemy repositories."""
        from repositories import ClientRepository, OrderRepository, SettingsRepository

        return cls(
            orders=OrderRepository(db),
            clients=ClientRepository(db),
            settings=SettingsRepository(db),
            clock=clock
        )

    @staticmethod
    def _write(operation: str, action: Callable[[], object]):
        try:
            return action()
        except SQLAlchemyError as e:
            cause = getattr(e, 'orig', None) or e
            raise DatabaseError(operation, str(cause)) from e

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_settings(self) -> Pricing:
        """Current default pricing; zeros before the first save."""
        return self.settings.get_settings() or Pricing()

    @log_operation("save_settings")
    def save_settings(self, cost_per_dozen: float, sale_per_dozen: float) -> CommandResult:
        """
        Replace the default pricing.

        Callers validate non-negativity; existing orders keep their snapshot.
        """
        pricing = Pricing(cost_per_dozen=cost_per_dozen, sale_per_dozen=sale_per_dozen)
        self._write("save_settings", lambda: self.settings.insert_or_update_settings(pricing))
        return CommandResult.ok()

    # ------------------------------------------------------------------
    # Clients
    # ------------------------------------------------------------------

    def list_clients(self) -> List[ClientRecord]:
        return self.clients.all_by_name()

    @staticmethod
    def _client_record(
        client_id: Optional[int],
        name: str,
        street: str,
        number: str,
        cross_streets: str,
        phone: str
    ) -> ClientRecord:
        return ClientRecord(
            id=client_id,
            name=(name or '').strip(),
            street=(street or '').strip(),
            street_number=(number or '').strip(),
            cross_streets=(cross_streets or '').strip(),
            phone=(phone or '').strip()
        )

    @log_operation("create_client")
    def create_client(
        self,
        name: str,
        street: str = '',
        number: str = '',
        cross_streets: str = '',
        phone: str = ''
    ) -> CommandResult:
        """Store a new client. Duplicate names are allowed."""
        message = validate_client_name(name)
        if message:
            return CommandResult.rejected(message)

        record = self._client_record(None, name, street, number, cross_streets, phone)
        self._write("create_client", lambda: self.clients.insert_or_update_client(record))
        return CommandResult.ok()

    @log_operation("update_client")
    def update_client(
        self,
        client_id: int,
        name: str,
        street: str = '',
        number: str = '',
        cross_streets: str = '',
        phone: str = ''
    ) -> CommandResult:
        """Overwrite every field of a client. Past orders keep the old name."""
        message = validate_client_name(name)
        if message:
            return CommandResult.rejected(message)

        record = self._client_record(client_id, name, street, number, cross_streets, phone)
        self._write("update_client", lambda: self.clients.insert_or_update_client(record))
        return CommandResult.ok()

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    def get_order(self, order_id: int) -> Optional[OrderRecord]:
        return self.orders.find_order_by_id(order_id)

    @log_operation("create_order")
    def create_order(
        self,
        client_name: str,
        line_items: Sequence[LineItem],
        current_settings: Optional[Pricing] = None
    ) -> CommandResult:
        """
        Take a new order.

        Args:
            client_name: Client name, copied onto the order
            line_items: Flavors and dozens; at least one
            current_settings: Pricing to snapshot; read from the store if None

        Returns:
            CommandResult; rejected when the name is blank, there are no
            items, an item is invalid, or the pricing is negative
        """
        message = validate_order_draft(client_name, line_items)
        if message:
            return CommandResult.rejected(message)

        pricing = current_settings if current_settings is not None else self.get_settings()
        message = validate_order_pricing(pricing)
        if message:
            return CommandResult.rejected(message)

        detail = line_item_codec.encode(line_items)
        now = self._clock()
        order = OrderRecord(
            id=None,
            client_name=client_name.strip(),
            detail=detail,
            total_dozens=line_item_codec.total_dozens(line_item_codec.decode(detail)),
            status=OrderStatus.initial(),
            created_at=now,
            week_id=week_range_for(now).week_id,
            unit_cost_per_dozen=pricing.cost_per_dozen,
            unit_sale_per_dozen=pricing.sale_per_dozen
        )
        self._write("create_order", lambda: self.orders.insert_order(order))
        return CommandResult.ok()

    @log_operation("update_order")
    def update_order(self, order_id: int, client_name: str, line_items: Sequence[LineItem]) -> CommandResult:
        """
        Rewrite the client name and line items of an order.

        Status, week, creation time and pricing snapshot are left untouched.
        """
        message = validate_order_draft(client_name, line_items)
        if message:
            return CommandResult.rejected(message)

        existing = self.orders.find_order_by_id(order_id)
        if existing is None:
            logger.debug("Order not found, nothing to update", extra={"order_id": order_id})
            return CommandResult.ok()

        detail = line_item_codec.encode(line_items)
        # TODO: decide with the business whether delivered/cancelled orders may still be edited
        updated = replace(
            existing,
            client_name=client_name.strip(),
            detail=detail,
            total_dozens=line_item_codec.total_dozens(line_item_codec.decode(detail))
        )
        self._write("update_order", lambda: self.orders.update_order(updated))
        return CommandResult.ok()

    def _transition(self, operation: str, order_id: int, new_status: OrderStatus) -> CommandResult:
        existing = self.orders.find_order_by_id(order_id)
        if existing is None:
            logger.debug(f"Order not found, skipping {operation}", extra={"order_id": order_id})
            return CommandResult.ok()

        if not existing.status.can_transition_to(new_status):
            logger.warning(
                f"Order status {existing.status.value} -> {new_status.value} is outside the lifecycle",
                extra={"order_id": order_id}
            )

        updated = replace(existing, status=new_status)
        self._write(operation, lambda: self.orders.update_order(updated))
        return CommandResult.ok()

    @log_operation("mark_delivered")
    def mark_delivered(self, order_id: int) -> CommandResult:
        return self._transition("mark_delivered", order_id, OrderStatus.DELIVERED)

    @log_operation("cancel_order")
    def cancel_order(self, order_id: int) -> CommandResult:
        return self._transition("cancel_order", order_id, OrderStatus.CANCELLED)

    # ------------------------------------------------------------------
    # Weeks and reports
    # ------------------------------------------------------------------

    def current_week(self) -> WeekRange:
        return current_week_range(self._clock())

    def orders_by_week_and_status(self, week_id: str, status: OrderStatus) -> List[OrderRecord]:
        return self.orders.orders_by_week_and_status(week_id, status)

    def pending_orders(self, week_id: str) -> List[OrderRecord]:
        return self.orders.orders_by_week_and_status(week_id, OrderStatus.PENDING)

    def delivered_orders(self, week_id: str) -> List[OrderRecord]:
        return self.orders.orders_by_week_and_status(week_id, OrderStatus.DELIVERED)

    def week_ids(self) -> List[str]:
        """Week ids with at least one order, newest first."""
        return self.orders.distinct_week_ids()

    def available_weeks(self) -> List[str]:
        """
        Recorded week ids plus the current week, newest first.

        The current week is always selectable, even with no orders at all.
        """
        return merge_weeks(self.week_ids(), self.current_week().week_id)

    def week_summary(self, week_id: str) -> WeekSummary:
        """Sales, costs, profit and counts of a week, cancelled orders excluded."""
        totals = self.orders.week_totals(week_id)
        return replace(totals, pending_count=self.orders.pending_count(week_id))

    def top_flavors(self, week_id: str, limit: Optional[int] = None) -> List[FlavorTotal]:
        return reports.rank_flavors(self.orders.active_orders_by_week(week_id), limit=limit)

    def top_clients(self, week_id: str, limit: Optional[int] = None) -> List[ClientTotal]:
        return reports.rank_clients(self.orders.active_orders_by_week(week_id), limit=limit)


def merge_weeks(week_ids: Iterable[str], current_week_id: str) -> List[str]:
    """Distinct union of the recorded weeks and the current week, newest first."""
    return sorted(set(week_ids) | {current_week_id}, reverse=True)


def week_labels(week_ids: Iterable[str]) -> Dict[str, str]:
    """Display label for every week id."""
    return {week_id: label_from_week_id(week_id) for week_id in week_ids}
