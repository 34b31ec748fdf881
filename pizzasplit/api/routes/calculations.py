"""Calculations — stateless pizza plan and cost split, nothing persisted.

Invariants:
    - Request validated by Pydantic before reaching the handler
    - Engine errors (PizzaSplitError) propagate to the global handler untouched
    - Settings defaults come from get_settings() and are passed to the engine explicitly

Design Decisions:
    - Separate from orders: clients preview and tweak freely, then POST /orders once
"""

import logging

from fastapi import APIRouter, Depends

from pizzasplit.config import Settings, get_settings
from pizzasplit.core.cost_schemes import calculate_order
from pizzasplit.core.plan_variants import compute_plan_variants
from pizzasplit.schemas.order import (
    CalculationRequest, CalculationResultOut, PlanVariantsOut,
)
from pizzasplit.api.routes.order_helpers import (
    build_order_settings, result_to_dict, to_participants, variant_to_dict,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/calculations", tags=["calculations"])


@router.post("", response_model=CalculationResultOut)
async def calculate(
    body: CalculationRequest, cfg: Settings = Depends(get_settings),
):
    """Plan pizzas and split costs for the given participants."""
    participants = to_participants(body.participants)
    settings = build_order_settings(body.settings, cfg)
    result = calculate_order(participants, settings)
    logger.info(
        "Calculated order",
        extra={
            "scheme_id": result.scheme_id,
            "participants": result.total_users,
            "pizza_count": result.plan.pizza_count,
            "total_cost": result.plan.total_cost,
        },
    )
    return result_to_dict(result, settings.currency)


@router.post("/variants", response_model=PlanVariantsOut)
async def calculate_variants(
    body: CalculationRequest, cfg: Settings = Depends(get_settings),
):
    """Large, reduced and small plan previews with visibility flags."""
    participants = to_participants(body.participants)
    settings = build_order_settings(body.settings, cfg)
    variants = compute_plan_variants(participants, settings)
    return {
        "currency": settings.currency,
        "variants": [variant_to_dict(v) for v in variants],
    }
