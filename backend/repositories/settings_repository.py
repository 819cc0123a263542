"""
Settings repository for the singleton pricing row.
"""

from typing import Optional
from sqlalchemy.orm import Session

from models import Settings
from constants import SettingsDefaults
from domain.value_objects import Pricing
from services.interfaces import ISettingsStore
from .base_repository import BaseRepository


class SettingsRepository(BaseRepository[Settings], ISettingsStore):
    """Repository for the Settings row (id fixed to 1)."""

    def __init__(self, db: Session):
        super().__init__(db, Settings)

    def get_settings(self) -> Optional[Pricing]:
        row = self.get_by_id(SettingsDefaults.ROW_ID)
        return row.to_pricing() if row else None

    def insert_or_update_settings(self, pricing: Pricing) -> None:
        row = self.get_by_id(SettingsDefaults.ROW_ID)
        if row is None:
            row = Settings(id=SettingsDefaults.ROW_ID)
            self.db.add(row)

        row.cost_per_dozen_default = pricing.cost_per_dozen
        row.sale_per_dozen_default = pricing.sale_per_dozen
        self.commit()

    def ensure_exists(self) -> bool:
        """
        Seed the zero-valued row if the table is empty.

        Returns:
            True if the row was created
        """
        if self.get_by_id(SettingsDefaults.ROW_ID) is not None:
            return False
        self.insert_or_update_settings(Pricing())
        return True
