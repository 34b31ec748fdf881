"""Combination Search — minimal-mismatch mix of large and small pizzas for a slice demand.

Invariants:
    - best_factors is PURE and never returns negative counts or mismatch
    - mismatch is a shortfall when small pizzas fill the gap, an overage when large
      pizzas alone meet the total
    - Ties on mismatch keep the candidate with fewer large pizzas (first found)
    - A shortfall is an expected result, not an error: callers decide how to cover it

Design Decisions:
    - Enumerate large counts, derive small counts by floor division: at most
      total // large_slices + 2 candidates, no search limit needed
    - small_only_alternative kept beside best_factors: it is offered exactly when
      the primary combination has no small pizzas
"""

from typing import NamedTuple

from pizzasplit.core.errors import InvalidParticipantError, InvalidSettingsError


def ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


class Combination(NamedTuple):
    large_count: int
    small_count: int
    mismatch: int


def _check_inputs(total: int, large_slices: int, small_slices: int) -> None:
    if total < 0:
        raise InvalidParticipantError(f"Slice demand cannot be negative ({total})")
    if large_slices <= 0:
        raise InvalidSettingsError(
            "large pizza must have at least one slice", field="large.slices_per_pizza",
        )
    if small_slices <= 0:
        raise InvalidSettingsError(
            "small pizza must have at least one slice", field="small.slices_per_pizza",
        )


def _candidate(total: int, large_count: int, large_slices: int, small_slices: int) -> Combination:
    needed = total - large_count * large_slices
    if needed > 0:
        small_count = needed // small_slices
        return Combination(large_count, small_count, needed - small_count * small_slices)
    return Combination(large_count, 0, -needed)


def best_factors(total: int, large_slices: int, small_slices: int) -> Combination:
    """Large/small pizza counts whose slices deviate least from total."""
    _check_inputs(total, large_slices, small_slices)

    best: Combination | None = None
    large_count = 0
    while True:
        candidate = _candidate(total, large_count, large_slices, small_slices)
        if best is None or candidate.mismatch < best.mismatch:
            best = candidate
        # the first count that overshoots is the last candidate worth trying
        if large_count * large_slices > total:
            break
        large_count += 1
    return best


def small_only_alternative(
    total: int, small_slices: int, all_want_small_only: bool,
) -> Combination | None:
    """All-small cover of total, or None when no alternative applies.

    Called only for primary combinations without small pizzas. Participants who
    all want small pizzas already get an all-small primary plan, so they get no
    separate alternative.
    """
    if all_want_small_only:
        return None
    if small_slices <= 0:
        raise InvalidSettingsError(
            "small pizza must have at least one slice", field="small.slices_per_pizza",
        )
    count = ceil_div(total, small_slices)
    return Combination(0, count, count * small_slices - total)
