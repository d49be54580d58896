"""
Money helpers

All amounts are Decimals with two places. Floats never enter the ledger:
anything numeric is converted through ``str`` first.

Amounts coming in from callers are also bounded by the ``NUMERIC(10, 2)``
columns they end up in; stored values and sums are not.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

from bucketbook.core.exceptions import InvalidAmountError

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")
MAX_AMOUNT = Decimal("1e8")


def _quantize(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
        if not amount.is_finite():
            return None
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        # quantize overflows the context precision for huge exponents
        return None


def try_parse_money(value: Any) -> Optional[Decimal]:
    """Parse a caller-supplied amount, or None when it is not a storable number"""
    amount = _quantize(value)
    if amount is None or abs(amount) >= MAX_AMOUNT:
        return None
    return amount


def to_money(value: Any) -> Decimal:
    amount = _quantize(value)
    if amount is None:
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    return amount


def parse_amount(value: Any) -> Decimal:
    """Parse a signed caller-supplied amount"""
    amount = try_parse_money(value)
    if amount is None:
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    return amount


def parse_positive_amount(value: Any) -> Decimal:
    """Parse a transfer amount; must be numeric and greater than zero"""
    amount = parse_amount(value)
    if amount <= ZERO:
        raise InvalidAmountError("Invalid amount")
    return amount


def money_sum(values) -> Decimal:
    total = ZERO
    for value in values:
        total += to_money(value)
    return total


def format_money(amount: Decimal) -> str:
    return str(to_money(amount))
