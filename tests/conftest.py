# tests/conftest.py
import sys
import pytest
from datetime import datetime, timedelta, UTC
from pathlib import Path
from sqlalchemy.sql import text

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from core.sa.database import Database
from core.services.catalog_service import CatalogService
from core.services.lending_service import LendingService

@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory):
    """Create a temporary directory for the test database."""
    test_dir = tmp_path_factory.mktemp("test_db")
    return str(test_dir / "test_library.db")

@pytest.fixture(scope="session")
def database(test_db_path):
    """Create a test database instance"""
    db = Database(f"sqlite:///{test_db_path}")

    # Drop all tables and recreate schema
    db.drop_all()
    db.init_db()

    yield db

    db.dispose()

@pytest.fixture(autouse=True)
def cleanup_db(database):
    """Clean up database tables before each test"""
    # Delete all data from tables in reverse order of dependencies
    with database.transaction() as session:
        session.execute(text("DELETE FROM borrow_record"))
        session.execute(text("DELETE FROM book"))
        session.execute(text("DELETE FROM user"))
    yield

class StepClock:
    """Clock that advances one minute per call, for predictable borrow dates"""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)):
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current += timedelta(minutes=1)
        return now

@pytest.fixture
def clock():
    return StepClock()

@pytest.fixture
def catalog(database):
    return CatalogService(database)

@pytest.fixture
def lending(database, clock):
    return LendingService(database, clock=clock)
