# tests/helpers.py
import itertools

from fastapi.testclient import TestClient

from catalog.config import Settings
from catalog.database import ProductStore
from catalog.main import create_app

TOKEN = "12345"
AUTH = {"token": TOKEN}


def counter_ids():
    # deterministic ids so tests never hit the same-millisecond clash
    counter = itertools.count(1)
    return lambda: str(next(counter))


def make_client(store=None, **settings):
    store = store if store is not None else ProductStore(id_factory=counter_ids())
    settings.setdefault("api_token", TOKEN)
    app = create_app(settings=Settings(**settings), store=store)
    return TestClient(app), store


class BrokenStore(ProductStore):
    def get(self, product_id):
        raise RuntimeError("db password is hunter2")
