from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from loguru import logger

from basket import Basket, BasketItem, make_item
from errors import EmptyBasket, NotFound
from pricing import PricingResult, compute_receipt
from store import BasketStore

ItemSpec = Union[BasketItem, Tuple[str, object, int]]


@dataclass(frozen=True)
class BasketView:
    basket: Basket
    pricing: PricingResult

    @property
    def items(self):
        return self.basket.items


def create_basket(store: BasketStore, items: Sequence[ItemSpec]) -> str:
    """Validate every item, then persist the basket in a single save."""
    if not items:
        raise EmptyBasket()

    built = [
        item if isinstance(item, BasketItem) else make_item(*item)
        for item in items
    ]
    saved = store.save(Basket.draft(built))
    logger.info("Created basket {} with {} item(s)", saved.id, len(saved.items))
    return saved.id


def get_basket(store: BasketStore, basket_id: str, minor_units: int = 0) -> BasketView:
    basket = store.find_by_id(basket_id)
    if basket is None:
        raise NotFound(basket_id)
    return BasketView(basket=basket, pricing=compute_receipt(basket.items, minor_units))
