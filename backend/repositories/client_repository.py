"""
Client repository for client-specific data access operations.
"""

from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import func

from models import Client
from domain.entities import ClientRecord
from services.interfaces import IClientStore
from .base_repository import BaseRepository


class ClientRepository(BaseRepository[Client], IClientStore):
    """Repository for Client model operations."""

    def __init__(self, db: Session):
        super().__init__(db, Client)

    def insert_or_update_client(self, client: ClientRecord) -> ClientRecord:
        """
        Replace-by-id upsert.

        A record without an id, or with an id not in the table, is inserted.
        """
        row = self.get_by_id(client.id) if client.id is not None else None
        if row is None:
            row = Client(id=client.id)
            self.db.add(row)

        row.name = client.name
        row.street = client.street
        row.street_number = client.street_number
        row.cross_streets = client.cross_streets
        row.phone = client.phone
        self.commit()
        return row.to_record()

    def all_by_name(self) -> List[ClientRecord]:
        rows = self.db.query(self.model).order_by(
            func.lower(self.model.name),
            self.model.id
        ).all()
        return [row.to_record() for row in rows]
