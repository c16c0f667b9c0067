from decimal import (
    Context, Decimal, DivisionByZero, Inexact, InvalidOperation, Overflow,
    MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_UP, localcontext,
)
from typing import Union

ZERO = Decimal("0")

# Unbounded precision: sums and products of finite decimals are never rounded.
_WIDE = Context(
    prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)
_EXACT = _WIDE.copy()
_EXACT.traps[Inexact] = True


def exact_arithmetic():
    """Context manager for money arithmetic that must not round."""
    return localcontext(_EXACT)


MoneyLike = Union[Decimal, int, str, float]


def to_money(value: MoneyLike) -> Decimal:
    """Convert a price-like value to an exact Decimal.

    Floats go through their shortest ``str`` form so ``0.1`` becomes
    ``Decimal("0.1")`` rather than its binary expansion.
    """
    if isinstance(value, bool):
        raise ValueError("boolean is not a money value")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"not a money value: {value!r}")
    if not amount.is_finite():
        raise ValueError(f"not a finite money value: {value!r}")
    return amount


def round_money(amount: Decimal, minor_units: int = 0) -> Decimal:
    # only quantize when the value carries more digits than the currency
    exponent = Decimal(1).scaleb(-minor_units)
    if amount.as_tuple().exponent >= -minor_units:
        return amount
    with localcontext(_WIDE):
        return amount.quantize(exponent, rounding=ROUND_HALF_UP)


def is_integral(amount: Decimal) -> bool:
    return amount == amount.to_integral_value()


def format_money(amount: Decimal) -> str:
    # 15000.00 -> "15,000", 10000.50 -> "10,000.5"
    if is_integral(amount):
        return f"{int(amount):,}"
    with localcontext(_WIDE):
        return f"{amount.normalize():,f}"
