from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import Decimal128, ObjectId

from app.core.clock import Clock
from app.main import app
from app.repositories.payable_repo import PayableRepository
from app.repositories.receivable_repo import ReceivableRepository

# Fixed "now" for every test: 2026-03-10 12:00 UTC
NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


class FixedClock(Clock):
    """Clock pinned to a single instant."""

    def __init__(self, now: datetime = NOW, tz_name: str = "UTC"):
        super().__init__(tz_name)
        self._now = now

    def now(self) -> datetime:
        return self._now


@pytest.fixture
def fixed_clock():
    return FixedClock()


@pytest.fixture
def mock_collection():
    """Mock Motor collection with async write/read methods."""
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    collection.find_one = AsyncMock()
    collection.find_one_and_update = AsyncMock()
    collection.delete_one = AsyncMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    """Mock database that hands out the same collection for any name."""
    db = MagicMock()
    db.__getitem__.return_value = mock_collection
    return db


@pytest.fixture
def payable_repo():
    return AsyncMock(spec=PayableRepository)


@pytest.fixture
def receivable_repo():
    return AsyncMock(spec=ReceivableRepository)


def stored_document(counterparty_field: str, counterparty: str, **overrides) -> dict:
    """Raw document as Motor returns it from the collection."""
    doc = {
        "_id": ObjectId(),
        "description": "Compra X",
        counterparty_field: counterparty,
        "amount": Decimal128("150.50"),
        "due_date": (TODAY + timedelta(days=5)).isoformat(),
        "status": "PENDING",
        "category": "Software",
        "created_at": NOW - timedelta(days=1),
        "updated_at": None,
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def payable_doc():
    return stored_document("vendor", "Fornecedor A", paid_at=None)


@pytest.fixture
def receivable_doc():
    return stored_document("customer", "Cliente B", received_at=None)


@pytest.fixture
def payable_payload():
    return {
        "description": "Compra X",
        "vendor": "Fornecedor A",
        "amount": 150.50,
        "dueDate": (TODAY + timedelta(days=5)).isoformat(),
        "category": "Software"
    }


@pytest.fixture
def receivable_payload():
    return {
        "description": "Consultoria",
        "customer": "Cliente B",
        "amount": 980.00,
        "dueDate": (TODAY + timedelta(days=10)).isoformat(),
        "category": "Services"
    }


@pytest.fixture
def override_dependency():
    """Replace a FastAPI dependency for one test."""
    def _override(dependency, value):
        app.dependency_overrides[dependency] = lambda: value

    yield _override
    app.dependency_overrides.clear()
