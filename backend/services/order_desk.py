"""
Order Desk

View-state facade for a presentation layer. Combines the live order views,
the week selections and the busy/error flags into one DeskState that is
recomputed whenever any of its inputs changes, and runs the operator's
commands.

Commands run inside a notifier batch: all views are refreshed once after the
command finishes. A rejected or failed command leaves its message in
``error`` until ``clear_error``; nothing is retried.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from constants import Messages
from domain.entities import ClientRecord, OrderRecord
from domain.validation import validate_settings
from domain.value_objects import ClientTotal, FlavorTotal, LineItem, Pricing, WeekSummary
from domain.week_calendar import current_week_range
from dtos.internal import CommandResult
from exceptions import ApplicationError
from services.live_views import ChangeNotifier, CombinedView, ObservableValue, SwitchView
from services.order_service import OrderService, merge_weeks, week_labels
from services.order_views import OrderViews
from utils.logging_utils import StructuredLogger, logging_context

logger = StructuredLogger(__name__)


@dataclass(frozen=True)
class DeskState:
    """Everything the operator's screens show, as one snapshot."""

    current_week_id: str
    selected_delivered_week_id: str
    selected_summary_week_id: str
    is_loading: bool = False
    error_message: Optional[str] = None
    settings: Pricing = field(default_factory=Pricing)
    available_weeks: List[str] = field(default_factory=list)
    week_labels: Dict[str, str] = field(default_factory=dict)
    pending_orders: List[OrderRecord] = field(default_factory=list)
    delivered_orders: List[OrderRecord] = field(default_factory=list)
    week_summary: WeekSummary = field(default_factory=WeekSummary)
    top_flavors: List[FlavorTotal] = field(default_factory=list)
    top_clients: List[ClientTotal] = field(default_factory=list)


class OrderDesk:
    """Live DeskState plus the commands that change it."""

    def __init__(
        self,
        session_factory: sessionmaker,
        notifier: Optional[ChangeNotifier] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self._session_factory = session_factory
        self._clock = clock
        self.notifier = notifier or ChangeNotifier(session_factory)
        self.views = OrderViews(session_factory, self.notifier, clock)

        # Fixed for the lifetime of the desk
        self.current_week_id = current_week_range(clock()).week_id

        self.busy: ObservableValue[bool] = ObservableValue(False)
        self.error: ObservableValue[Optional[str]] = ObservableValue(None)
        self.selected_delivered_week: ObservableValue[str] = ObservableValue(self.current_week_id)
        self.selected_summary_week: ObservableValue[str] = ObservableValue(self.current_week_id)

        week_ids = self.views.week_ids()
        delivered_week = CombinedView(
            [self.selected_delivered_week, week_ids], self._resolve_week, self.notifier
        )
        summary_week = CombinedView(
            [self.selected_summary_week, week_ids], self._resolve_week, self.notifier
        )

        self.state: CombinedView[DeskState] = CombinedView(
            [
                self.busy,
                self.error,
                self.views.settings(),
                week_ids,
                self.views.pending_orders(self.current_week_id),
                delivered_week,
                summary_week,
                SwitchView(delivered_week, self.views.delivered_orders),
                SwitchView(summary_week, self.views.week_summary),
                SwitchView(summary_week, self.views.top_flavors),
                SwitchView(summary_week, self.views.top_clients),
            ],
            self._build_state,
            self.notifier
        )

    def _resolve_week(self, selected: str, week_ids: Sequence[str]) -> str:
        """A selection that is not an available week falls back to the current week."""
        if selected in merge_weeks(week_ids, self.current_week_id):
            return selected
        return self.current_week_id

    def _build_state(
        self,
        busy: bool,
        error: Optional[str],
        settings: Pricing,
        week_ids: List[str],
        pending: List[OrderRecord],
        delivered_week: str,
        summary_week: str,
        delivered: List[OrderRecord],
        summary: WeekSummary,
        flavors: List[FlavorTotal],
        clients: List[ClientTotal]
    ) -> DeskState:
        available = merge_weeks(week_ids, self.current_week_id)
        return DeskState(
            current_week_id=self.current_week_id,
            selected_delivered_week_id=delivered_week,
            selected_summary_week_id=summary_week,
            is_loading=busy,
            error_message=error,
            settings=settings,
            available_weeks=available,
            week_labels=week_labels(available),
            pending_orders=pending,
            delivered_orders=delivered,
            week_summary=summary,
            top_flavors=flavors,
            top_clients=clients
        )

    # ------------------------------------------------------------------
    # Selection and errors
    # ------------------------------------------------------------------

    def select_delivered_week(self, week_id: str) -> None:
        self.selected_delivered_week.set(week_id)

    def select_summary_week(self, week_id: str) -> None:
        self.selected_summary_week.set(week_id)

    def clear_error(self) -> None:
        self.error.set(None)

    def clients(self) -> List[ClientRecord]:
        return self.views.clients().value

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _reject(self, message: str) -> CommandResult:
        self.error.set(message)
        return CommandResult.rejected(message)

    def _execute(self, command: str, action: Callable[[OrderService], CommandResult]) -> CommandResult:
        try:
            with logging_context(command=command):
                with self._session_factory() as db:
                    return action(OrderService.from_session(db, self._clock))
        except ApplicationError as e:
            logger.error(f"{command} failed: {e.message}")
            return CommandResult.failed(e.message or Messages.UNEXPECTED_ERROR)
        except SQLAlchemyError as e:
            logger.error(f"{command} failed reading the store", exc_info=True)
            return CommandResult.failed(str(getattr(e, 'orig', None) or e) or Messages.UNEXPECTED_ERROR)

    def _run(self, command: str, action: Callable[[OrderService], CommandResult]) -> CommandResult:
        self.busy.set(True)
        try:
            # Views refresh when the batch exits, after the command outcome is settled
            with self.notifier.batch():
                result = self._execute(command, action)
        finally:
            self.busy.set(False)

        if not result.succeeded:
            self.error.set(result.message or Messages.UNEXPECTED_ERROR)
        return result

    def save_settings(self, cost_per_dozen: float, sale_per_dozen: float) -> CommandResult:
        message = validate_settings(cost_per_dozen, sale_per_dozen)
        if message:
            return self._reject(message)
        return self._run(
            "save_settings",
            lambda service: service.save_settings(cost_per_dozen, sale_per_dozen)
        )

    def create_order(self, client_name: str, line_items: Sequence[LineItem]) -> CommandResult:
        """Take an order priced with the settings currently shown."""
        settings = self.views.settings().value
        return self._run(
            "create_order",
            lambda service: service.create_order(client_name, line_items, settings)
        )

    def update_order(self, order_id: int, client_name: str, line_items: Sequence[LineItem]) -> CommandResult:
        return self._run(
            "update_order",
            lambda service: service.update_order(order_id, client_name, line_items)
        )

    def mark_delivered(self, order_id: int) -> CommandResult:
        return self._run("mark_delivered", lambda service: service.mark_delivered(order_id))

    def cancel_order(self, order_id: int) -> CommandResult:
        return self._run("cancel_order", lambda service: service.cancel_order(order_id))

    def create_client(
        self,
        name: str,
        street: str = '',
        number: str = '',
        cross_streets: str = '',
        phone: str = ''
    ) -> CommandResult:
        return self._run(
            "create_client",
            lambda service: service.create_client(name, street, number, cross_streets, phone)
        )

    def update_client(
        self,
        client_id: int,
        name: str,
        street: str = '',
        number: str = '',
        cross_streets: str = '',
        phone: str = ''
    ) -> CommandResult:
        return self._run(
            "update_client",
            lambda service: service.update_client(client_id, name, street, number, cross_streets, phone)
        )
