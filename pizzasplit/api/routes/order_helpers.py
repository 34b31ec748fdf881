"""Order Helpers — conversion between REST schemas and engine dataclasses.

Invariants:
    - Request -> engine: omitted settings fall back to app config (explicit OrderSettings)
    - Engine -> JSON: every value is a str/int/bool/list/dict (storable in JSON columns)
    - Participant ids default to "participant-<n>" (1-based, request order)

Design Decisions:
    - Extracted from routes: calculations and orders share the same conversions
    - Plain dicts as the serialized form: the same dict is persisted in orders.result
      and validated into CalculationResultOut for the response
"""

from dataclasses import asdict

from pizzasplit.config import Settings
from pizzasplit.core.domain_types import Money, ParticipantId, PizzaSize
from pizzasplit.core.money import prorate
from pizzasplit.core.order_models import (
    CalculationResult, OrderSettings, Participant, PizzaOrderPlan, PizzaSizeConfig,
    PizzaUnit,
)
from pizzasplit.core.plan_variants import PlanVariant
from pizzasplit.schemas.order import OrderSettingsIn, ParticipantIn


def to_participants(items: list[ParticipantIn]) -> list[Participant]:
    return [
        Participant(
            id=ParticipantId(item.id or f"participant-{i + 1}"),
            name=item.name,
            min_slices=item.min_slices,
            max_slices=item.max_slices,
            can_take_more=item.can_take_more,
            slice_preference=item.slice_preference,
        )
        for i, item in enumerate(items)
    ]


def build_order_settings(body: OrderSettingsIn, cfg: Settings) -> OrderSettings:
    """Request overrides on top of configured defaults."""
    large, small = body.large, body.small
    large_price = large.base_price if large else cfg.default_large_price
    # an explicit small price wins over the configured percent
    if "small_price_percent" in body.model_fields_set:
        percent = body.small_price_percent
    elif small is not None:
        percent = None
    else:
        percent = cfg.default_small_price_percent
    base_percent = percent if percent is not None else cfg.default_small_price_percent
    default_small_price = prorate(large_price, base_percent or 0, 100)
    return OrderSettings(
        large=PizzaSizeConfig(
            slices_per_pizza=large.slices_per_pizza if large else cfg.default_large_slices,
            base_price=Money(large_price),
        ),
        small=PizzaSizeConfig(
            slices_per_pizza=small.slices_per_pizza if small else cfg.default_small_slices,
            base_price=Money(small.base_price if small else default_small_price),
        ),
        small_price_percent=percent,
        free_pizza_threshold=(
            body.free_pizza_threshold
            if body.free_pizza_threshold is not None
            else cfg.default_free_pizza_threshold
        ),
        free_pizza_size=body.free_pizza_size or PizzaSize(cfg.default_free_pizza_size),
        use_free_promotion=(
            body.use_free_promotion
            if body.use_free_promotion is not None
            else cfg.default_use_free_promotion
        ),
        currency=body.currency or cfg.default_currency,
        scheme_id=body.scheme_id or cfg.default_scheme_id,
    )


# --- Engine -> JSON -----------------------------------------------------------

def _unit_to_dict(unit: PizzaUnit) -> dict:
    return {
        "id": unit.id,
        "size": unit.size.value,
        "price": unit.price,
        "slices": unit.slices,
        "is_free": unit.is_free,
    }


def plan_to_dict(plan: PizzaOrderPlan) -> dict:
    return {
        "units": [_unit_to_dict(u) for u in plan.units],
        "total_cost": plan.total_cost,
        "free_pizza_value": plan.free_pizza_value,
        "pizza_count": plan.pizza_count,
        "free_pizza_count": plan.free_pizza_count,
        "regular_pizza_count": plan.regular_pizza_count,
        "large_count": plan.large_count,
        "small_count": plan.small_count,
        "mismatch": plan.mismatch,
        "total_slices": plan.total_slices,
        "has_small_alternative": plan.has_small_alternative,
        "alternative_units": (
            [_unit_to_dict(u) for u in plan.alternative_units]
            if plan.alternative_units is not None else None
        ),
    }


def result_to_dict(result: CalculationResult, currency: str) -> dict:
    return {
        "scheme_id": result.scheme_id,
        "currency": currency,
        "plan": plan_to_dict(result.plan),
        "total_users": result.total_users,
        "total_slices": result.total_slices,
        "extra_slices": result.extra_slices,
        "user_slices_distribution": dict(result.user_slices_distribution),
        "user_costs": dict(result.user_costs),
        "user_slice_refs": {
            pid: [
                {
                    "pizza_id": ref.pizza_id,
                    "index": ref.index,
                    "size": ref.size.value,
                    "is_free": ref.is_free,
                }
                for ref in refs
            ]
            for pid, refs in result.user_slice_refs.items()
        },
    }


def variant_to_dict(variant: PlanVariant) -> dict:
    return {
        "name": variant.name.value,
        "visible": variant.visible,
        "plan": plan_to_dict(variant.plan),
        "distribution": dict(variant.distribution.counts),
        "extra_slices": variant.extra_slices,
        "missing_slices": variant.missing_slices,
    }


def settings_to_dict(settings: OrderSettings) -> dict:
    data = asdict(settings)
    data["free_pizza_size"] = settings.free_pizza_size.value
    data["small"]["effective_price"] = settings.small_price
    return data


def participants_to_dicts(participants: list[Participant]) -> list[dict]:
    """Participants as stored with an order, costs filled in from the result."""
    return [
        {
            "id": p.id,
            "name": p.name,
            "min_slices": p.min_slices,
            "max_slices": p.max_slices,
            "can_take_more": p.can_take_more,
            "slice_preference": p.slice_preference.value,
            "assigned_slices": len(p.assigned_slices),
            "total_cost": p.total_cost,
        }
        for p in participants
    ]
