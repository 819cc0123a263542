"""
Store Interfaces

Abstract persistence contracts consumed by OrderService, following the
Dependency Inversion Principle. The SQLAlchemy repositories implement them;
tests can substitute in-memory fakes.

Every write is durable when it returns. Reads return immutable domain
records, never ORM objects.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from domain.entities import ClientRecord, OrderRecord
from domain.value_objects import OrderStatus, Pricing, WeekSummary


class IOrderStore(ABC):
    """Order persistence."""

    @abstractmethod
    def find_order_by_id(self, order_id: int) -> Optional[OrderRecord]:
        """Return the order, or None if the id is unknown."""
        pass

    @abstractmethod
    def insert_order(self, order: OrderRecord) -> OrderRecord:
        """
        Store a new order.

        Args:
            order: Record whose id is ignored

        Returns:
            The stored record with its assigned id
        """
        pass

    @abstractmethod
    def update_order(self, order: OrderRecord) -> None:
        """Overwrite every column of the order with the same id."""
        pass

    @abstractmethod
    def orders_by_week_and_status(self, week_id: str, status: OrderStatus) -> List[OrderRecord]:
        """Orders of a week in one status, newest first."""
        pass

    @abstractmethod
    def active_orders_by_week(self, week_id: str) -> List[OrderRecord]:
        """Orders of a week that are not cancelled, newest first."""
        pass

    @abstractmethod
    def distinct_week_ids(self) -> List[str]:
        """Every week id with at least one order, newest first."""
        pass

    @abstractmethod
    def pending_count(self, week_id: str) -> int:
        pass

    @abstractmethod
    def week_totals(self, week_id: str) -> WeekSummary:
        """
        Sales, costs and order count of the non-cancelled orders of a week.

        pending_count of the returned summary is always 0.
        """
        pass


class IClientStore(ABC):
    """Client persistence."""

    @abstractmethod
    def insert_or_update_client(self, client: ClientRecord) -> ClientRecord:
        """
        Store a client, replacing any client with the same id.

        Args:
            client: Record; id None inserts a new client

        Returns:
            The stored record with its id
        """
        pass

    @abstractmethod
    def all_by_name(self) -> List[ClientRecord]:
        """Every client, ordered by name case-insensitively."""
        pass


class ISettingsStore(ABC):
    """Singleton settings persistence."""

    @abstractmethod
    def insert_or_update_settings(self, pricing: Pricing) -> None:
        """Replace the settings row wholesale."""
        pass

    @abstractmethod
    def get_settings(self) -> Optional[Pricing]:
        """The settings row, or None before it was ever written."""
        pass
