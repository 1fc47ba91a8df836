"""Money helpers.

Amounts are stored as whole paise in ``Integer`` fields and handled as
``Decimal`` rupees everywhere else, quantized to two places.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def quantize(amount) -> Decimal:
    return Decimal(str(amount)).quantize(CENT, rounding=ROUND_HALF_UP)


def to_paise(amount) -> int:
    return int(quantize(amount) * 100)


def from_paise(paise) -> Decimal:
    return quantize(Decimal(paise or 0) / 100)
