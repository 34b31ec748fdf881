"""Money Arithmetic — integer minor units with Decimal only where division happens.

Invariants:
    - Inputs and outputs are ints (minor currency units)
    - Rounding is half-up, matching what shoppers expect on a receipt
    - split_by_weights always returns parts that sum exactly to the total

Design Decisions:
    - decimal.Decimal for intermediate division: no float drift on accumulation
    - Largest-remainder apportionment: deterministic, ties broken by input order
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence


def round_half_up(value: Decimal | float | int) -> int:
    """Round to the nearest int, .5 away from zero."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def slice_price(pizza_price: int, slices: int) -> Decimal:
    """Nominal price of one slice, kept as Decimal for weighting and display."""
    if slices <= 0:
        return Decimal(0)
    return Decimal(pizza_price) / Decimal(slices)


def prorate(total: int, part: int, whole: int) -> int:
    """total * part / whole, rounded half-up. Zero when whole is zero."""
    if whole == 0:
        return 0
    return round_half_up(Decimal(total) * Decimal(part) / Decimal(whole))


def split_by_weights(total: int, weights: Sequence[Decimal]) -> list[int]:
    """Apportion total across weights; parts sum exactly to total."""
    weight_sum = sum(weights, Decimal(0))
    if total == 0 or weight_sum == 0:
        return [0] * len(weights)

    exact = [Decimal(total) * w / weight_sum for w in weights]
    parts = [int(e) for e in exact]  # floor for non-negative
    leftover = total - sum(parts)
    order = sorted(
        range(len(weights)), key=lambda i: (-(exact[i] - parts[i]), i),
    )
    for i in order[:leftover]:
        parts[i] += 1
    return parts
