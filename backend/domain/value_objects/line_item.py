"""
LineItem Value Object

One flavor/quantity pair of an order. Line items are not stored as rows of
their own; a list of them is packed into the order detail column.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LineItem:
    """A flavor and the number of dozens ordered of it."""

    flavor: str
    dozens: int

    def __str__(self) -> str:
        return f"{self.flavor} ({self.dozens})"
