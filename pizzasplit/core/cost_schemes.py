"""Cost-Splitting Schemes — interchangeable policies that price a plan per participant.

Invariants:
    - Every scheme validates participants + settings BEFORE building anything:
      either a complete CalculationResult is returned or a PizzaSplitError is raised
    - Schemes hold no state: calling calculate() twice with equal inputs yields
      equal results
    - Scheme lookup is an explicit dict; unknown ids raise UnknownSchemeError
    - Money stays in int minor units; division goes through core.money
    - proportional-price charges for every reported slice: slices the plan cannot
      supply are weighted at the nominal price of the size the participant would draw

Design Decisions:
    - Protocol over ABC: structural subtyping, schemes are plain classes
    - Explicit registry dict over getattr/auto-discovery: every scheme id visible
      in one place, adding a scheme requires editing SCHEMES
    - equal-price covers demand (tops up a shortfall) because it distributes real
      slices; proportional-price reports requested slices and prices each of them,
      whether or not the plan can hand it out
"""

from decimal import Decimal
from typing import Protocol, Sequence

from pizzasplit.core.demand import aggregate_demand
from pizzasplit.core.domain_types import (
    Money, ParticipantId, PizzaSize, SchemeId, SlicePreference,
)
from pizzasplit.core.errors import UnknownSchemeError
from pizzasplit.core.money import prorate, slice_price, split_by_weights
from pizzasplit.core.order_models import (
    CalculationResult, OrderSettings, Participant, PizzaOrderPlan, SliceRef,
)
from pizzasplit.core.order_plan import build_order_plan
from pizzasplit.core.slice_distribution import assign_slice_refs, distribute_slices
from pizzasplit.core.validation import validate_participants, validate_settings


class CostScheme(Protocol):
    """Contract every cost-splitting scheme implements."""
    scheme_id: str
    name: str
    description: str

    def calculate(
        self, participants: Sequence[Participant], settings: OrderSettings,
    ) -> CalculationResult: ...


def _slice_weight(plan: PizzaOrderPlan, refs: Sequence[SliceRef]) -> Decimal:
    """Nominal value of a participant's slices (free pizzas keep their list price)."""
    by_id = {u.id: u for u in plan.units}
    return sum(
        (slice_price(by_id[r.pizza_id].price, by_id[r.pizza_id].slices) for r in refs),
        Decimal(0),
    )


def _unserved_weight(
    participant: Participant, missing: int, settings: OrderSettings,
) -> Decimal:
    """Nominal value of requested slices the plan could not hand out."""
    if missing <= 0:
        return Decimal(0)
    size = (
        PizzaSize.SMALL
        if participant.slice_preference == SlicePreference.SMALL_ONLY
        else PizzaSize.LARGE
    )
    return missing * slice_price(settings.price_of(size), settings.slices_of(size))


class ProportionalPriceScheme:
    """Slice price follows pizza size: large slices are cheaper than small ones."""

    scheme_id = SchemeId.PROPORTIONAL_PRICE.value
    name = "Proportional price by pizza size"
    description = (
        "Price per slice depends on pizza size - larger pizzas have "
        "lower price per slice"
    )

    def calculate(
        self, participants: Sequence[Participant], settings: OrderSettings,
    ) -> CalculationResult:
        participants = tuple(participants)
        validate_participants(participants)
        validate_settings(settings)

        demand = aggregate_demand(participants)
        plan = build_order_plan(demand, settings)

        requested = {p.id: p.min_slices for p in participants}
        refs = assign_slice_refs(plan.units, participants, requested)
        # every requested slice carries weight, served from the plan or not
        weights = [
            _slice_weight(plan, refs[p.id])
            + _unserved_weight(p, p.min_slices - len(refs[p.id]), settings)
            for p in participants
        ]
        costs = split_by_weights(plan.total_cost, weights)

        assigned = sum(len(r) for r in refs.values())
        return CalculationResult(
            scheme_id=self.scheme_id,
            plan=plan,
            total_users=len(participants),
            total_slices=demand.total,
            user_slices_distribution=requested,
            user_costs={p.id: Money(c) for p, c in zip(participants, costs)},
            user_slice_refs=refs,
            extra_slices=plan.total_slices - assigned,
        )


class EqualPriceScheme:
    """Every slice costs the same, whichever pizza it comes from."""

    scheme_id = SchemeId.EQUAL_PRICE.value
    name = "Equal price per slice"
    description = (
        "All slices cost the same regardless of pizza size - each participant "
        "pays for the slices they receive"
    )

    def calculate(
        self, participants: Sequence[Participant], settings: OrderSettings,
    ) -> CalculationResult:
        participants = tuple(participants)
        validate_participants(participants)
        validate_settings(settings)

        demand = aggregate_demand(participants)
        plan = build_order_plan(demand, settings, cover_demand=True)
        distribution = distribute_slices(participants, plan.total_slices)
        refs = assign_slice_refs(plan.units, participants, distribution.counts)

        delivered = plan.total_slices
        costs: dict[ParticipantId, Money] = {
            p.id: Money(prorate(plan.total_cost, distribution.counts[p.id], delivered))
            for p in participants
        }
        return CalculationResult(
            scheme_id=self.scheme_id,
            plan=plan,
            total_users=len(participants),
            total_slices=demand.total,
            user_slices_distribution=dict(distribution.counts),
            user_costs=costs,
            user_slice_refs=refs,
            extra_slices=distribution.extra_slices,
        )


# explicit id -> scheme mapping, no lookup by attribute name
SCHEMES: dict[str, CostScheme] = {
    SchemeId.EQUAL_PRICE.value: EqualPriceScheme(),
    SchemeId.PROPORTIONAL_PRICE.value: ProportionalPriceScheme(),
}


def get_scheme(scheme_id: str) -> CostScheme:
    scheme = SCHEMES.get(scheme_id)
    if scheme is None:
        raise UnknownSchemeError(scheme_id)
    return scheme


def list_schemes() -> list[CostScheme]:
    return list(SCHEMES.values())


def calculate_order(
    participants: Sequence[Participant], settings: OrderSettings,
) -> CalculationResult:
    """Run the scheme named by settings.scheme_id."""
    return get_scheme(settings.scheme_id).calculate(participants, settings)
