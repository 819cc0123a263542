"""
Repository layer for data access abstraction.

Repositories implement the store interfaces of services.interfaces on top
of SQLAlchemy and hand out immutable domain records.
"""

from .base_repository import BaseRepository
from .order_repository import OrderRepository
from .client_repository import ClientRepository
from .settings_repository import SettingsRepository

__all__ = [
    "BaseRepository",
    "OrderRepository",
    "ClientRepository",
    "SettingsRepository",
]
