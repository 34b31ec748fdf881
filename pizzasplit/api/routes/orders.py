"""Orders — calculate-and-save, history, lookup and deletion of pizza orders.

Invariants:
    - An order row is written only after the engine returned a complete result
    - Stored result JSON is exactly what POST /orders returned
    - Missing orders raise ResourceNotFoundError (404 via global handler)

Design Decisions:
    - History lists summaries only (denormalized columns), never the full result
    - get_order_or_404 exported for reuse (DRY over duplication)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pizzasplit.config import Settings, get_settings
from pizzasplit.core.cost_schemes import calculate_order
from pizzasplit.core.errors import ErrorContext, ResourceNotFoundError
from pizzasplit.core.order_models import apply_result
from pizzasplit.infrastructure.database import get_db
from pizzasplit.models.order import Order
from pizzasplit.schemas.order import OrderCreate, OrderResponse, OrderSummary
from pizzasplit.api.routes.order_helpers import (
    build_order_settings, participants_to_dicts, result_to_dict, settings_to_dict,
    to_participants,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/orders", tags=["orders"])


async def get_order_or_404(order_id: UUID, db: AsyncSession) -> Order:
    result = await db.execute(select(Order).where(Order.id == order_id))
    order = result.scalar_one_or_none()
    if not order:
        raise ResourceNotFoundError(
            "Order", str(order_id), ErrorContext(order_id=str(order_id)),
        )
    return order


def _to_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        name=order.name,
        scheme_id=order.scheme_id,
        currency=order.currency,
        created_at=order.created_at,
        participants=order.participants,
        settings=order.settings,
        result=order.result,
    )


@router.post(
    "", response_model=OrderResponse, status_code=status.HTTP_201_CREATED,
)
async def create_order(
    body: OrderCreate,
    db: AsyncSession = Depends(get_db),
    cfg: Settings = Depends(get_settings),
):
    """Calculate an order and store it."""
    participants = to_participants(body.participants)
    settings = build_order_settings(body.settings, cfg)
    result = calculate_order(participants, settings)

    order = Order(
        name=body.name,
        scheme_id=result.scheme_id,
        currency=settings.currency,
        participants=participants_to_dicts(apply_result(participants, result)),
        settings=settings_to_dict(settings),
        result=result_to_dict(result, settings.currency),
        total_cost=result.plan.total_cost,
        pizza_count=result.plan.pizza_count,
        free_pizza_count=result.plan.free_pizza_count,
        free_pizza_value=result.plan.free_pizza_value,
    )
    db.add(order)
    await db.commit()
    await db.refresh(order)
    logger.info(
        "Order saved",
        extra={
            "order_id": str(order.id),
            "scheme_id": order.scheme_id,
            "total_cost": order.total_cost,
        },
    )
    return _to_response(order)


@router.get("")
async def list_orders(
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """Order history, newest first."""
    query = (
        select(Order).order_by(Order.created_at.desc()).limit(limit).offset(offset)
    )
    orders = (await db.execute(query)).scalars().all()
    total = (await db.execute(select(func.count()).select_from(Order))).scalar_one()

    return {
        "orders": [
            OrderSummary(
                id=o.id,
                name=o.name,
                scheme_id=o.scheme_id,
                currency=o.currency,
                total_cost=o.total_cost,
                pizza_count=o.pizza_count,
                free_pizza_count=o.free_pizza_count,
                free_pizza_value=o.free_pizza_value,
                created_at=o.created_at,
            ).model_dump(mode="json")
            for o in orders
        ],
        "total": total,
        "limit": limit,
        "offset": offset,
    }


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: UUID, db: AsyncSession = Depends(get_db)):
    """One stored order with its full result."""
    return _to_response(await get_order_or_404(order_id, db))


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(order_id: UUID, db: AsyncSession = Depends(get_db)):
    """Delete a stored order."""
    order = await get_order_or_404(order_id, db)
    await db.delete(order)
    await db.commit()
    logger.info("Order deleted", extra={"order_id": str(order_id)})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
