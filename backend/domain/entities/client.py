"""
Client entity snapshot.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ClientRecord:
    """A client with its delivery address and phone. Only the name is required."""

    id: Optional[int]
    name: str
    street: str = ''
    street_number: str = ''
    cross_streets: str = ''
    phone: str = ''
