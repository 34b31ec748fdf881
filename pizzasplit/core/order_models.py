"""Order Models — immutable input snapshots and results of one calculation.

Invariants:
    - Every type is a frozen dataclass: the engine never mutates what it receives
    - Money fields are ints in minor currency units
    - CalculationResult is built once per calculate() call and never changed
    - apply_result() returns NEW Participant copies (inputs stay untouched)

Design Decisions:
    - Dataclasses over Pydantic in core: no validation framework inside the pure
      engine; schemas/ validates at the REST boundary
    - Tuples for sequences and plain dicts built fresh per result: no sharing
      between concurrent calculations
"""

from dataclasses import dataclass, field, replace
from typing import Iterable

from pizzasplit.core.domain_types import (
    Money, ParticipantId, PizzaId, PizzaSize, SlicePreference, SchemeId,
)
from pizzasplit.core.money import prorate


@dataclass(frozen=True)
class SliceRef:
    """One concrete slice of one pizza in a plan."""
    pizza_id: PizzaId
    index: int
    size: PizzaSize
    is_free: bool = False


@dataclass(frozen=True)
class Participant:
    id: ParticipantId
    name: str
    min_slices: int
    max_slices: int
    can_take_more: bool = False
    slice_preference: SlicePreference = SlicePreference.ANY
    assigned_slices: tuple[SliceRef, ...] = ()
    total_cost: Money = Money(0)


@dataclass(frozen=True)
class PizzaSizeConfig:
    slices_per_pizza: int
    base_price: Money


@dataclass(frozen=True)
class OrderSettings:
    """Order-level settings — explicit input, never read from global state."""
    large: PizzaSizeConfig
    small: PizzaSizeConfig
    small_price_percent: int | None = None
    free_pizza_threshold: int = 3
    free_pizza_size: PizzaSize = PizzaSize.LARGE
    use_free_promotion: bool = True
    currency: str = "RUB"
    scheme_id: str = SchemeId.EQUAL_PRICE.value

    @property
    def large_price(self) -> Money:
        return self.large.base_price

    @property
    def small_price(self) -> Money:
        """Small price, derived from the large price when a percent is set."""
        if self.small_price_percent is None:
            return self.small.base_price
        return Money(prorate(self.large.base_price, self.small_price_percent, 100))

    def price_of(self, size: PizzaSize) -> Money:
        return self.large_price if size == PizzaSize.LARGE else self.small_price

    def slices_of(self, size: PizzaSize) -> int:
        if size == PizzaSize.LARGE:
            return self.large.slices_per_pizza
        return self.small.slices_per_pizza


@dataclass(frozen=True)
class PizzaUnit:
    id: PizzaId
    size: PizzaSize
    price: Money
    slices: int
    is_free: bool = False

    def slice_refs(self) -> list[SliceRef]:
        return [
            SliceRef(self.id, i, self.size, self.is_free)
            for i in range(self.slices)
        ]


@dataclass(frozen=True)
class PizzaOrderPlan:
    """Pizzas to order, with free-pizza marks and an optional all-small alternative.

    mismatch is the shortfall or overage of the chosen combination against
    demand; a shortfall means total_slices < demand (allowed, see best_factors).
    """
    units: tuple[PizzaUnit, ...]
    total_cost: Money
    free_pizza_value: Money
    pizza_count: int
    free_pizza_count: int
    regular_pizza_count: int
    large_count: int = 0
    small_count: int = 0
    mismatch: int = 0
    has_small_alternative: bool = False
    alternative_units: tuple[PizzaUnit, ...] | None = None

    @property
    def total_slices(self) -> int:
        return sum(u.slices for u in self.units)

    def slice_refs(self) -> list[SliceRef]:
        return [ref for unit in self.units for ref in unit.slice_refs()]


@dataclass(frozen=True)
class CalculationResult:
    scheme_id: str
    plan: PizzaOrderPlan
    total_users: int
    total_slices: int
    user_slices_distribution: dict[ParticipantId, int] = field(default_factory=dict)
    user_costs: dict[ParticipantId, Money] = field(default_factory=dict)
    user_slice_refs: dict[ParticipantId, tuple[SliceRef, ...]] = field(default_factory=dict)
    extra_slices: int = 0

    @property
    def collected_total(self) -> Money:
        return Money(sum(self.user_costs.values()))


def apply_result(
    participants: Iterable[Participant], result: CalculationResult,
) -> list[Participant]:
    """Copy participants with slices and costs from a result. Inputs untouched."""
    return [
        replace(
            p,
            assigned_slices=result.user_slice_refs.get(p.id, ()),
            total_cost=result.user_costs.get(p.id, Money(0)),
        )
        for p in participants
    ]
