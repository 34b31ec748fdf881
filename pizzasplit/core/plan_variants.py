"""Plan Variants — the side-by-side pizza plans offered before an order is placed.

Invariants:
    - LARGE is ceil(demand / large_slices) large pizzas and is always visible
    - REDUCED is one large pizza fewer; visible only when it leaves a small gap
      (0 < missing <= large_slices // 4) and still contains a pizza
    - SMALL is the mismatch-optimal combination when it has small pizzas, else the
      small-only alternative; visible when it has small pizzas and differs from LARGE
    - Free pizzas only on variants with at least one large pizza
    - Distributions here never raise: under-covering variants report missing_slices

Design Decisions:
    - Variants are previews, not orders: the chosen scheme still prices the final
      order through cost_schemes.calculate_order
"""

from dataclasses import dataclass
from typing import Sequence

from pizzasplit.core.combination_search import best_factors, ceil_div
from pizzasplit.core.demand import aggregate_demand
from pizzasplit.core.domain_types import VariantName
from pizzasplit.core.order_models import OrderSettings, Participant, PizzaOrderPlan
from pizzasplit.core.order_plan import build_small_only_plan, plan_from_counts
from pizzasplit.core.slice_distribution import SliceDistribution, distribute_slices
from pizzasplit.core.validation import validate_participants, validate_settings


REDUCED_GAP_DIVISOR: int = 4


@dataclass(frozen=True)
class PlanVariant:
    name: VariantName
    plan: PizzaOrderPlan
    distribution: SliceDistribution
    visible: bool

    @property
    def extra_slices(self) -> int:
        return self.distribution.extra_slices

    @property
    def missing_slices(self) -> int:
        return self.distribution.missing_slices


def _same_mix(a: PizzaOrderPlan, b: PizzaOrderPlan) -> bool:
    return (a.large_count, a.small_count) == (b.large_count, b.small_count)


def _small_plan(total: int, settings: OrderSettings, all_small: bool) -> PizzaOrderPlan:
    if all_small:
        return build_small_only_plan(total, settings)
    combo = best_factors(
        total, settings.large.slices_per_pizza, settings.small.slices_per_pizza,
    )
    if combo.small_count > 0:
        return plan_from_counts(
            combo.large_count, combo.small_count, combo.mismatch, settings,
            promotion=combo.large_count > 0,
        )
    return build_small_only_plan(total, settings)


def compute_plan_variants(
    participants: Sequence[Participant], settings: OrderSettings,
) -> list[PlanVariant]:
    """LARGE, REDUCED and SMALL previews with visibility flags."""
    participants = tuple(participants)
    validate_participants(participants)
    validate_settings(settings)

    demand = aggregate_demand(participants)
    large_slices = settings.large.slices_per_pizza

    large_count = ceil_div(demand.total, large_slices)
    large_plan = plan_from_counts(
        large_count, 0, large_count * large_slices - demand.total, settings,
    )

    reduced_count = max(large_count - 1, 0)
    reduced_plan = plan_from_counts(
        reduced_count, 0, abs(reduced_count * large_slices - demand.total), settings,
    )

    small_plan = _small_plan(demand.total, settings, demand.all_want_small_only)

    variants = []
    for name, plan in (
        (VariantName.LARGE, large_plan),
        (VariantName.REDUCED, reduced_plan),
        (VariantName.SMALL, small_plan),
    ):
        distribution = distribute_slices(participants, plan.total_slices, strict=False)
        if name == VariantName.LARGE:
            visible = True
        elif name == VariantName.REDUCED:
            missing = distribution.missing_slices
            visible = (
                0 < missing <= large_slices // REDUCED_GAP_DIVISOR
                and plan.pizza_count > 0
                and not _same_mix(plan, large_plan)
            )
        else:
            visible = plan.small_count > 0 and not _same_mix(plan, large_plan)
        variants.append(PlanVariant(name, plan, distribution, visible))
    return variants
