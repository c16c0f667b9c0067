from decimal import Decimal
from typing import Annotated, List, Union

from pydantic import BaseModel, PlainSerializer, StrictInt

from money import is_integral


def _money_to_json(value: Decimal) -> Union[int, str]:
    # whole amounts as numbers; fractions as decimal strings so no digit is lost
    if is_integral(value):
        return int(value)
    return f"{value:f}"


Money = Annotated[Decimal, PlainSerializer(_money_to_json, return_type=Union[int, str], when_used="json")]

class BasketItemRequest(BaseModel):
    name: str
    price: Decimal
    quantity: StrictInt

class BasketItemRequests(BaseModel):
    items: List[BasketItemRequest]

class BasketResponse(BaseModel):
    basketId: str

class BasketItemDto(BaseModel):
    name: str
    quantity: int
    price: Money
    total: Money

class BasketDetailsResponse(BaseModel):
    basketId: str
    items: List[BasketItemDto]
    subtotal: Money
    discount: Money
    finalAmount: Money
