"""
pricing.py — basket subtotal, discount tier and final amount.

Tiers are selected by subtotal alone:

    subtotal <= 10,000           ->  0%
    10,000 < subtotal < 20,000   ->  5%
    subtotal >= 20,000           -> 10%

The lower bound of the 5% tier is exclusive while the 10% tier starts
inclusively at 20,000. Both boundaries are pinned by tests.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from basket import BasketItem
from money import ZERO, exact_arithmetic, round_money


@dataclass(frozen=True)
class DiscountTier:
    threshold: Decimal
    rate: Decimal
    inclusive: bool

    def applies_to(self, subtotal: Decimal) -> bool:
        if self.inclusive:
            return subtotal >= self.threshold
        return subtotal > self.threshold


# Highest tier first; the first match wins.
DISCOUNT_TIERS = (
    DiscountTier(threshold=Decimal("20000"), rate=Decimal("0.10"), inclusive=True),
    DiscountTier(threshold=Decimal("10000"), rate=Decimal("0.05"), inclusive=False),
)


@dataclass(frozen=True)
class PricingResult:
    subtotal: Decimal
    discount_rate: Decimal
    discount: Decimal
    final_amount: Decimal

    @property
    def discount_percent(self) -> int:
        return int(self.discount_rate * 100)


def discount_rate_for(subtotal: Decimal) -> Decimal:
    for tier in DISCOUNT_TIERS:
        if tier.applies_to(subtotal):
            return tier.rate
    return ZERO


def compute_receipt(items: Iterable[BasketItem], minor_units: int = 0) -> PricingResult:
    """Price a basket from its frozen line totals.

    The discount is rounded half-up to ``minor_units`` decimal places and the
    final amount is derived from it by subtraction, so
    ``final_amount == subtotal - discount`` always holds exactly.
    """
    with exact_arithmetic():
        subtotal = sum((item.total for item in items), ZERO)
        rate = discount_rate_for(subtotal)
        raw_discount = subtotal * rate
    discount = round_money(raw_discount, minor_units)
    with exact_arithmetic():
        final_amount = subtotal - discount
    return PricingResult(
        subtotal=subtotal,
        discount_rate=rate,
        discount=discount,
        final_amount=final_amount,
    )
