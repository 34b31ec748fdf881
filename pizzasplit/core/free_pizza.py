"""Free-Pizza Allocator — marks every Nth pizza of a plan as promotional.

Invariants:
    - free_count = floor(len(candidates) / threshold) when enabled, else 0
    - Units of free_pizza_size are marked first, in plan order; remaining free
      slots fall back to the other size present in the plan
    - total_cost counts only non-free units; free_pizza_value only free ones
    - Candidates are never mutated: marked units are new PizzaUnit copies

Design Decisions:
    - Pure function returning a FreePizzaAllocation: the plan builder decides
      whether a plan is eligible (all-small plans never call with enabled=True)
"""

from dataclasses import dataclass, replace
from typing import Sequence

from pizzasplit.core.domain_types import Money, PizzaSize
from pizzasplit.core.order_models import PizzaUnit


@dataclass(frozen=True)
class FreePizzaAllocation:
    units: tuple[PizzaUnit, ...]
    free_pizza_count: int
    free_pizza_value: Money
    total_cost: Money


def free_pizza_count(pizza_count: int, threshold: int, enabled: bool) -> int:
    if not enabled or threshold <= 0:
        return 0
    return pizza_count // threshold


def _free_indices(
    units: Sequence[PizzaUnit], count: int, free_size: PizzaSize,
) -> set[int]:
    preferred = [i for i, u in enumerate(units) if u.size == free_size]
    # with two sizes the fallback is always the other size
    fallback = [i for i, u in enumerate(units) if u.size != free_size]
    return set((preferred + fallback)[:count])


def allocate_free_pizzas(
    candidates: Sequence[PizzaUnit],
    threshold: int,
    free_size: PizzaSize,
    enabled: bool,
) -> FreePizzaAllocation:
    """Mark floor(n / threshold) units free and total up the plan."""
    count = free_pizza_count(len(candidates), threshold, enabled)
    free = _free_indices(candidates, count, free_size) if count else set()

    units = tuple(
        replace(u, is_free=i in free) for i, u in enumerate(candidates)
    )
    return FreePizzaAllocation(
        units=units,
        free_pizza_count=len(free),
        free_pizza_value=Money(sum(u.price for u in units if u.is_free)),
        total_cost=Money(sum(u.price for u in units if not u.is_free)),
    )
