"""
Domain Entities

Records with identity. These are immutable snapshots of stored rows, handed
to views and callers so that nothing outside the repositories holds a live
ORM object.

- OrderRecord: One order with its pricing snapshot
- ClientRecord: One client of the business
"""

from .order import OrderRecord
from .client import ClientRecord

__all__ = ["OrderRecord", "ClientRecord"]
