"""Combination Search — verifies the minimal-mismatch large/small mix.

Tests:
    - Known totals land on the expected combination
    - Counts and mismatch are never negative across a grid of menus
    - Ties on mismatch keep fewer large pizzas
    - Invalid totals and slice counts raise typed errors
    - The small-only alternative covers demand and is skipped for all-small demand
"""

import pytest

from pizzasplit.core.combination_search import (
    Combination, best_factors, ceil_div, small_only_alternative,
)
from pizzasplit.core.errors import InvalidParticipantError, InvalidSettingsError


def test_twelve_slices_are_two_small_pizzas():
    assert best_factors(12, 8, 6) == Combination(0, 2, 0)


def test_nine_slices_are_one_large_one_short():
    assert best_factors(9, 8, 6) == Combination(1, 0, 1)


def test_zero_demand_orders_nothing():
    assert best_factors(0, 8, 6) == Combination(0, 0, 0)


def test_exact_large_multiple_has_no_mismatch():
    assert best_factors(24, 8, 5) == Combination(3, 0, 0)


def test_exact_mixed_combination_is_found():
    assert best_factors(40, 8, 6).mismatch == 0


def test_tie_keeps_fewer_large_pizzas():
    # 7 slices: one small (short by 1) ties one large (over by 1)
    assert best_factors(7, 8, 6) == Combination(0, 1, 1)


def test_shortfall_is_returned_not_raised():
    combo = best_factors(13, 8, 6)
    assert combo == Combination(0, 2, 1)
    assert combo.small_count * 6 < 13


@pytest.mark.parametrize("large,small", [(8, 6), (12, 8), (6, 4), (10, 10), (1, 1)])
def test_counts_and_mismatch_never_negative(large, small):
    for total in range(0, 61):
        combo = best_factors(total, large, small)
        assert combo.large_count >= 0
        assert combo.small_count >= 0
        assert combo.mismatch >= 0
        delivered = combo.large_count * large + combo.small_count * small
        assert combo.mismatch == abs(delivered - total)


def test_negative_total_raises():
    with pytest.raises(InvalidParticipantError):
        best_factors(-1, 8, 6)


def test_zero_large_slices_raises():
    with pytest.raises(InvalidSettingsError) as exc_info:
        best_factors(10, 0, 6)
    assert exc_info.value.field == "large.slices_per_pizza"


def test_zero_small_slices_raises():
    with pytest.raises(InvalidSettingsError) as exc_info:
        best_factors(10, 8, 0)
    assert exc_info.value.field == "small.slices_per_pizza"


def test_ceil_div_rounds_up():
    assert ceil_div(9, 6) == 2
    assert ceil_div(12, 6) == 2
    assert ceil_div(0, 6) == 0


# ─── Small-only alternative ─────────────────────────────────────

def test_alternative_covers_nine_slices_with_two_small():
    assert small_only_alternative(9, 6, all_want_small_only=False) == Combination(0, 2, 3)


def test_no_alternative_when_everyone_wants_small():
    assert small_only_alternative(9, 6, all_want_small_only=True) is None


def test_alternative_for_zero_demand_is_empty():
    assert small_only_alternative(0, 6, all_want_small_only=False) == Combination(0, 0, 0)
