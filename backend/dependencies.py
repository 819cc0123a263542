"""
Dependency injection providers for FastAPI.

Routes depend on the service factory rather than building repositories
themselves, so tests can override it (fixed clock, fake stores).
"""

from sqlalchemy.orm import Session
from fastapi import Depends
from database import get_db
from services.order_service import OrderService


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """
    Factory function for creating OrderService instances.

    Args:
        db: Database session (injected)

    Returns:
        OrderService on top of the SQLAlchemy repositories
    """
    return OrderService.from_session(db)
