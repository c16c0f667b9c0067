from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from errors import InvalidItem
from money import MoneyLike, ZERO, exact_arithmetic, to_money


@dataclass(frozen=True)
class BasketItem:
    name: str
    price: Decimal
    quantity: int
    # frozen at construction, never recomputed from price * quantity
    total: Decimal


@dataclass(frozen=True)
class Basket:
    id: Optional[str]
    items: Tuple[BasketItem, ...]

    @classmethod
    def draft(cls, items) -> "Basket":
        return cls(id=None, items=tuple(items))

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


def make_item(name: str, price: MoneyLike, quantity: int) -> BasketItem:
    """Validate a line item and freeze its line total."""
    if not isinstance(name, str) or not name.strip():
        raise InvalidItem("name", "must be a non-empty string")

    try:
        unit_price = to_money(price)
    except ValueError as e:
        raise InvalidItem("price", str(e))
    if unit_price < ZERO:
        raise InvalidItem("price", "must not be negative")

    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidItem("quantity", "must be an integer")
    if quantity < 1:
        raise InvalidItem("quantity", "must be at least 1")

    with exact_arithmetic():
        total = unit_price * quantity

    return BasketItem(
        name=name,
        price=unit_price,
        quantity=quantity,
        total=total,
    )
