"""Order Plan Builder — turns aggregate demand into a priced PizzaOrderPlan.

Invariants:
    - Pure: same demand + settings always yields an equal plan (ids included)
    - All-small demand forces an all-small plan, with no promotion and no alternative
    - Promotion applies only to plans with at least one large pizza; an all-small
      plan chosen by best_factors gets no free pizzas either
    - Otherwise: best_factors -> small-only alternative (if no small pizzas) ->
      free-pizza allocation over the primary units only
    - Alternative units are always small and never free
    - cover_demand=True tops up a shortfall with one small pizza; the gap left by
      best_factors is always smaller than one small pizza, so one is enough

Design Decisions:
    - Large units listed before small units: free-pizza fallback and slice
      assignment both walk the plan in this order
    - plan_from_counts exported for plan_variants (one construction path for
      every plan the service shows)
"""

from pizzasplit.core.combination_search import (
    Combination, best_factors, small_only_alternative, ceil_div,
)
from pizzasplit.core.demand import DemandSummary
from pizzasplit.core.domain_types import PizzaId, PizzaSize
from pizzasplit.core.free_pizza import allocate_free_pizzas
from pizzasplit.core.order_models import OrderSettings, PizzaOrderPlan, PizzaUnit


def make_units(size: PizzaSize, count: int, settings: OrderSettings) -> list[PizzaUnit]:
    price = settings.price_of(size)
    slices = settings.slices_of(size)
    return [
        PizzaUnit(PizzaId(f"pizza-{size.value}-{i}"), size, price, slices)
        for i in range(count)
    ]


def plan_from_counts(
    large_count: int,
    small_count: int,
    mismatch: int,
    settings: OrderSettings,
    promotion: bool = True,
    alternative: Combination | None = None,
) -> PizzaOrderPlan:
    candidates = (
        make_units(PizzaSize.LARGE, large_count, settings)
        + make_units(PizzaSize.SMALL, small_count, settings)
    )
    allocation = allocate_free_pizzas(
        candidates,
        settings.free_pizza_threshold,
        settings.free_pizza_size,
        enabled=promotion and settings.use_free_promotion,
    )

    alternative_units = None
    if alternative is not None and alternative.small_count > 0:
        alternative_units = tuple(
            make_units(PizzaSize.SMALL, alternative.small_count, settings),
        )

    pizza_count = len(allocation.units)
    return PizzaOrderPlan(
        units=allocation.units,
        total_cost=allocation.total_cost,
        free_pizza_value=allocation.free_pizza_value,
        pizza_count=pizza_count,
        free_pizza_count=allocation.free_pizza_count,
        regular_pizza_count=pizza_count - allocation.free_pizza_count,
        large_count=large_count,
        small_count=small_count,
        mismatch=mismatch,
        has_small_alternative=alternative_units is not None,
        alternative_units=alternative_units,
    )


def build_small_only_plan(total: int, settings: OrderSettings) -> PizzaOrderPlan:
    """All-small cover of total. Promotion never applies."""
    small_slices = settings.small.slices_per_pizza
    count = ceil_div(total, small_slices)
    return plan_from_counts(
        0, count, count * small_slices - total, settings, promotion=False,
    )


def _cover_shortfall(combo: Combination, total: int, settings: OrderSettings) -> Combination:
    large_slices = settings.large.slices_per_pizza
    small_slices = settings.small.slices_per_pizza
    delivered = combo.large_count * large_slices + combo.small_count * small_slices
    if delivered >= total:
        return combo
    small_count = combo.small_count + 1
    return Combination(
        combo.large_count, small_count,
        combo.large_count * large_slices + small_count * small_slices - total,
    )


def build_order_plan(
    demand: DemandSummary, settings: OrderSettings, cover_demand: bool = False,
) -> PizzaOrderPlan:
    """Minimal-mismatch plan for demand, with free pizzas and small-only alternative."""
    if demand.all_want_small_only:
        return build_small_only_plan(demand.total, settings)

    combo = best_factors(
        demand.total,
        settings.large.slices_per_pizza,
        settings.small.slices_per_pizza,
    )
    # the alternative follows the raw search result, before any top-up
    alternative = None
    if combo.small_count == 0:
        alternative = small_only_alternative(
            demand.total, settings.small.slices_per_pizza, demand.all_want_small_only,
        )

    if cover_demand:
        combo = _cover_shortfall(combo, demand.total, settings)

    return plan_from_counts(
        combo.large_count, combo.small_count, combo.mismatch, settings,
        promotion=combo.large_count > 0, alternative=alternative,
    )
