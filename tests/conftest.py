from datetime import datetime, timezone
import pytest
from fastapi.testclient import TestClient
from app.main import create_app
from services.core import RestaurantCore
from storage.memory import MemoryStore
from storage.sql import SqlStore
from utils.ids import SequentialIdGenerator

NOW = datetime(2024, 12, 1, 12, 0, 0, tzinfo=timezone.utc)


class FixedClock:
    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def make_store(backend: str):
    if backend == "memory":
        return MemoryStore()
    return SqlStore("sqlite://")


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    store = make_store(request.param)
    yield store
    store.close()


@pytest.fixture
def core(store, clock):
    core = RestaurantCore(store=store, id_generator=SequentialIdGenerator(), clock=clock)
    core.reset(seed=True)
    return core


@pytest.fixture
def client(core):
    with TestClient(create_app(core)) as client:
        yield client
