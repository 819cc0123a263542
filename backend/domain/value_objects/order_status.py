"""
OrderStatus Value Object

Lifecycle state of an order.
"""

from enum import Enum


class OrderStatus(str, Enum):
    """
    Order lifecycle.

    Every order starts PENDING and ends either DELIVERED or CANCELLED.
    Both end states are terminal.
    """

    PENDING = "PENDING"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    def is_terminal(self) -> bool:
        """Check if this state is terminal (no further transitions)."""
        return self in {OrderStatus.DELIVERED, OrderStatus.CANCELLED}

    def counts_towards_totals(self) -> bool:
        """Cancelled orders are left out of weekly money and order counts."""
        return self is not OrderStatus.CANCELLED

    def can_transition_to(self, new_state: "OrderStatus") -> bool:
        """
        Check if transition to new state is valid.

        Args:
            new_state: Target state

        Returns:
            True if transition is allowed
        """
        valid_transitions = {
            OrderStatus.PENDING: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
            OrderStatus.DELIVERED: set(),
            OrderStatus.CANCELLED: set(),
        }

        return new_state in valid_transitions.get(self, set())

    @classmethod
    def initial(cls) -> "OrderStatus":
        """State assigned to every new order."""
        return cls.PENDING

    @classmethod
    def from_string(cls, value: str) -> "OrderStatus":
        """
        Create OrderStatus from its stored string value.

        Raises:
            ValueError: If value is not a valid state
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid order status: {value}")
