"""Price computation for a stay. Pure functions, no I/O."""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from rentals.domain.errors import InvalidInputError, InvalidRangeError


@dataclass(frozen=True)
class PriceQuote:
    """Breakdown of a stay's price, all amounts in the smallest currency unit."""

    nights: int
    subtotal: int
    fee: int
    total: int


def whole_days_between(check_in: date, check_out: date) -> int:
    return (check_out - check_in).days


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_total(
    nightly_price: int,
    check_in: date,
    check_out: date,
    fee_rate: float = 0,
) -> PriceQuote:
    """
    Computes ``nights x nightly_price`` plus an optional service fee.

    The fee is ``subtotal * fee_rate`` rounded half-up to a whole currency
    unit. The rate goes through ``str`` before becoming a Decimal so that
    0.12 means exactly 0.12 and not its binary approximation.

    Raises:
        InvalidRangeError: the stay covers fewer than one night.
        InvalidInputError: negative price or fee rate.
    """
    if nightly_price < 0:
        raise InvalidInputError("nightly_price", f"must be >= 0, got {nightly_price}")
    if fee_rate < 0:
        raise InvalidInputError("fee_rate", f"must be >= 0, got {fee_rate}")

    nights = whole_days_between(check_in, check_out)
    if nights < 1:
        raise InvalidRangeError(nights)

    subtotal = nights * nightly_price
    fee = round_half_up(Decimal(subtotal) * Decimal(str(fee_rate)))
    return PriceQuote(nights=nights, subtotal=subtotal, fee=fee, total=subtotal + fee)
