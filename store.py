import itertools
import threading
from typing import Dict, Optional, Protocol

from basket import Basket


class BasketStore(Protocol):
    def save(self, basket: Basket) -> Basket:
        """Persist a draft basket and return it with its new identifier."""
        ...

    def find_by_id(self, basket_id: str) -> Optional[Basket]:
        ...


class InMemoryBasketStore:
    """Dict-backed store with a lock-guarded counter for identifiers."""

    def __init__(self):
        self._baskets: Dict[str, Basket] = {}
        self._lock = threading.Lock()
        self._ids = itertools.count(1)

    def save(self, basket: Basket) -> Basket:
        with self._lock:
            basket_id = str(next(self._ids))
            saved = Basket(id=basket_id, items=tuple(basket.items))
            self._baskets[basket_id] = saved
        return saved

    def find_by_id(self, basket_id: str) -> Optional[Basket]:
        return self._baskets.get(basket_id)

    def clear(self):
        with self._lock:
            self._baskets.clear()
            self._ids = itertools.count(1)

    def __len__(self):
        return len(self._baskets)
