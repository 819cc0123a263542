import os
import sys
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

# Keep the test run away from the operator's real database and logs
_scratch_dir = Path(tempfile.mkdtemp(prefix="dozen-orders-tests-"))
os.environ.setdefault("DOZEN_ORDERS_DB_PATH", str(_scratch_dir / "orders.db"))
os.environ.setdefault("DOZEN_ORDERS_LOG_DIR", str(_scratch_dir / "logs"))

# Add backend directory to Python path FIRST
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Now import after path is set
import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from models import Base
from database import get_db
from dependencies import get_order_service
from services.order_service import OrderService

# A Friday morning: the business week 03/01/2025 - 09/01/2025
FIXED_NOW = datetime(2025, 1, 3, 10, 0)
FIXED_WEEK_ID = "20250103_20250109"


class FakeClock:
    """Settable stand-in for datetime.now"""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def engine():
    """In-memory database shared by every session of one test"""
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Create in-memory database for testing"""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(db_session, clock):
    return OrderService.from_session(db_session, clock)


@pytest.fixture
def client(session_factory, clock):
    """API client on the in-memory database with the fixed clock"""
    from main import app

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    def override_get_order_service(db: Session = Depends(get_db)):
        return OrderService.from_session(db, clock)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_order_service] = override_get_order_service
    yield TestClient(app)
    app.dependency_overrides.clear()
