# catalog/database.py
import threading
import time
from typing import Any, Callable, List, Mapping, Optional

from .models import Product

# This file holds the in-memory product store and its lock.


def timestamp_id() -> str:
    # Millisecond clock; two creates in the same millisecond share an id.
    return str(int(time.time() * 1000))


class ProductStore:
    """
    Ordered, in-memory collection of products.

    The store is the only owner of the backing list. Every operation takes the
    store lock, and records handed back to callers are copies, so nothing
    outside the store can observe or cause a half-applied mutation.
    """

    def __init__(self, id_factory: Optional[Callable[[], str]] = None):
        self._products: List[Product] = []
        self._lock = threading.Lock()
        self._new_id = id_factory or timestamp_id

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return -1

    def create(self, payload: Mapping[str, Any]) -> Product:
        with self._lock:
            product = Product.model_validate({**payload, "id": self._new_id()})
            self._products.append(product)
            return product.model_copy(deep=True)

    def get(self, product_id: str) -> Optional[Product]:
        with self._lock:
            i = self._index_of(product_id)
            if i == -1:
                return None
            return self._products[i].model_copy(deep=True)

    def list(self, search: Optional[str] = None, page: int = 1, limit: int = 10) -> List[Product]:
        with self._lock:
            snapshot = [p.model_copy(deep=True) for p in self._products]

        if search:
            term = search.lower()
            snapshot = [p for p in snapshot if term in p.name.lower()]

        start = (page - 1) * limit
        end = start + limit
        return snapshot[start:end]

    def update(self, product_id: str, payload: Mapping[str, Any]) -> Optional[Product]:
        with self._lock:
            i = self._index_of(product_id)
            if i == -1:
                return None
            merged = {**self._products[i].model_dump(), **payload}
            # a payload id replaces the stored one; ids are kept as strings
            merged["id"] = str(merged["id"])
            self._products[i] = Product.model_validate(merged)
            return self._products[i].model_copy(deep=True)

    def delete(self, product_id: str) -> Optional[Product]:
        with self._lock:
            i = self._index_of(product_id)
            if i == -1:
                return None
            return self._products.pop(i)
