"""
Base repository providing common CRUD operations.
"""

from typing import Generic, TypeVar, Optional, Type
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

T = TypeVar('T')

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Generic base repository providing common CRUD operations.
    All specific repositories should inherit from this class.

    Writes made through ``commit`` are durable when it returns; on failure
    the session is rolled back and the driver error propagates.
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize the repository.

        Args:
            db: SQLAlchemy database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    def create(self, obj: T) -> T:
        """
        Add a new record and flush it so its primary key is assigned.

        Args:
            obj: Model instance to create

        Returns:
            Created model instance

        Raises:
            SQLAlchemyError: If the store rejects the row; the session is rolled back first
        """
        try:
            self.db.add(obj)
            self.db.flush()
        except SQLAlchemyError:
            logger.warning(f"Rolling back failed {self.model.__tablename__} insert")
            self.db.rollback()
            raise
        return obj

    def get_by_id(self, id: int) -> Optional[T]:
        """
        Retrieve a record by its ID.

        Args:
            id: Primary key value

        Returns:
            Model instance or None if not found
        """
        return self.db.get(self.model, id)

    def commit(self) -> None:
        """
        Commit the current unit of work.

        Raises:
            SQLAlchemyError: If the store rejects the write
        """
        try:
            self.db.commit()
        except SQLAlchemyError:
            logger.warning(f"Rolling back failed {self.model.__tablename__} write")
            self.db.rollback()
            raise
