"""Scheme Catalogue — lists cost-splitting schemes and the menu's per-slice prices.

Invariants:
    - Catalogue comes straight from core.cost_schemes.SCHEMES (single source of truth)
    - Slice prices use configured defaults, rounded half-up to minor units
"""

from fastapi import APIRouter

from pizzasplit.config import get_settings
from pizzasplit.core.cost_schemes import list_schemes
from pizzasplit.core.money import round_half_up, slice_price
from pizzasplit.schemas.order import OrderSettingsIn, SchemeOut, SlicePricesOut
from pizzasplit.api.routes.order_helpers import build_order_settings

router = APIRouter(prefix="/api/v1/schemes", tags=["schemes"])


@router.get("", response_model=list[SchemeOut])
async def get_schemes():
    """All registered cost-splitting schemes."""
    return [
        SchemeOut(id=s.scheme_id, name=s.name, description=s.description)
        for s in list_schemes()
    ]


@router.get("/slice-prices", response_model=SlicePricesOut)
async def get_slice_prices():
    """Nominal price of one large and one small slice on the default menu."""
    settings = build_order_settings(OrderSettingsIn(), get_settings())
    return SlicePricesOut(
        currency=settings.currency,
        large=round_half_up(
            slice_price(settings.large_price, settings.large.slices_per_pizza),
        ),
        small=round_half_up(
            slice_price(settings.small_price, settings.small.slices_per_pizza),
        ),
    )
