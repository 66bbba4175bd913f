import os

# In-memory database shared through a single connection; must be set before
# the application modules are imported.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("POS_USERNAME", "zyrus")
os.environ.setdefault("POS_PASSWORD", "zyrus12345")
os.environ["GEMINI_API_KEY"] = ""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from database import Base, SessionLocal, engine, init_db
from schemas.flower import FlowerBatch
from schemas.shift import Shift
from services.controller import PosController
from services.storage import CollectionStore

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


class FrozenClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FrozenClock(NOW)


@pytest.fixture
def make_flower():
    def _make(**overrides):
        data = {
            "id": "f1",
            "name": "Peony",
            "price": 2.50,
            "stock": 20,
            "threshold": 5,
            "shelf_life_days": 7,
            "added_at": NOW,
            "image": "https://example.com/peony.jpg",
            "description": "",
        }
        data.update(overrides)
        return FlowerBatch(**data)
    return _make


@pytest.fixture
def open_shift_record():
    return Shift(id="s1", opened_at=NOW, start_cash=50.0)


@pytest.fixture
def store():
    init_db()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield CollectionStore(SessionLocal)
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def controller(store, clock):
    return PosController(store=store, username="zyrus", password="zyrus12345", clock=clock)


@pytest.fixture
def client(store, clock):
    from main import app

    with TestClient(app) as c:
        app.state.controller.clock = clock
        yield c


@pytest.fixture
def logged_in(client):
    resp = client.post("/login", json={"username": "zyrus", "password": "zyrus12345"})
    assert resp.status_code == 200
    return client
