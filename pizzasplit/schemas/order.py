"""Order Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - ParticipantIn.name: 1-100 chars, stripped, non-empty
    - Slice bounds enforced here AND in core/validation (engine never trusts callers)
    - OrderSettingsIn fields are all optional: omitted fields fall back to app config
    - small_price_percent distinguishes "omitted" (use default) from explicit null
      (use small.base_price) via model_fields_set
    - Responses carry money as int minor units

Design Decisions:
    - scheme_id is a plain str, not an enum: unknown ids reach the engine and come
      back as UNKNOWN_SCHEME rather than a generic validation error
    - min_slices <= max_slices left to the engine: one error code (INVALID_PARTICIPANT)
      for every participant-level rule
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from pizzasplit.core.domain_types import (
    MIN_SLICES_PER_PARTICIPANT, MAX_SLICES_PER_PARTICIPANT, MIN_FREE_PIZZA_THRESHOLD,
    PizzaSize, SlicePreference, VariantName,
)


# --- Requests -----------------------------------------------------------------

class ParticipantIn(BaseModel):
    """One person sharing the order."""
    id: str | None = Field(None, min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=100)
    min_slices: int = Field(ge=MIN_SLICES_PER_PARTICIPANT, le=MAX_SLICES_PER_PARTICIPANT)
    max_slices: int = Field(ge=MIN_SLICES_PER_PARTICIPANT, le=MAX_SLICES_PER_PARTICIPANT)
    can_take_more: bool = False
    slice_preference: SlicePreference = SlicePreference.ANY

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class PizzaSizeIn(BaseModel):
    slices_per_pizza: int = Field(gt=0, le=64)
    base_price: int = Field(ge=0)


class OrderSettingsIn(BaseModel):
    """Per-order overrides of the configured pizza menu."""
    large: PizzaSizeIn | None = None
    small: PizzaSizeIn | None = None
    small_price_percent: int | None = Field(None, ge=0, le=1000)
    free_pizza_threshold: int | None = Field(None, ge=MIN_FREE_PIZZA_THRESHOLD)
    free_pizza_size: PizzaSize | None = None
    use_free_promotion: bool | None = None
    currency: str | None = Field(None, pattern=r"^[A-Z]{3}$")
    scheme_id: str | None = Field(None, min_length=1, max_length=50)


class CalculationRequest(BaseModel):
    """Participants + settings for one stateless calculation."""
    participants: list[ParticipantIn] = Field(min_length=1, max_length=100)
    settings: OrderSettingsIn = Field(default_factory=OrderSettingsIn)


class OrderCreate(CalculationRequest):
    """Calculation that is also persisted as an order."""
    name: str | None = Field(None, max_length=200)


# --- Responses ----------------------------------------------------------------

class PizzaUnitOut(BaseModel):
    id: str
    size: PizzaSize
    price: int
    slices: int
    is_free: bool


class SliceRefOut(BaseModel):
    pizza_id: str
    index: int
    size: PizzaSize
    is_free: bool


class PlanOut(BaseModel):
    units: list[PizzaUnitOut]
    total_cost: int
    free_pizza_value: int
    pizza_count: int
    free_pizza_count: int
    regular_pizza_count: int
    large_count: int
    small_count: int
    mismatch: int
    total_slices: int
    has_small_alternative: bool
    alternative_units: list[PizzaUnitOut] | None = None


class CalculationResultOut(BaseModel):
    scheme_id: str
    currency: str
    plan: PlanOut
    total_users: int
    total_slices: int
    extra_slices: int
    user_slices_distribution: dict[str, int]
    user_costs: dict[str, int]
    user_slice_refs: dict[str, list[SliceRefOut]]


class PlanVariantOut(BaseModel):
    name: VariantName
    visible: bool
    plan: PlanOut
    distribution: dict[str, int]
    extra_slices: int
    missing_slices: int


class PlanVariantsOut(BaseModel):
    currency: str
    variants: list[PlanVariantOut]


class SchemeOut(BaseModel):
    id: str
    name: str
    description: str


class SlicePricesOut(BaseModel):
    """Nominal per-slice prices of the configured menu, in minor units."""
    currency: str
    large: int
    small: int


class OrderResponse(BaseModel):
    id: UUID
    name: str | None
    scheme_id: str
    currency: str
    created_at: datetime
    participants: list[dict]
    settings: dict
    result: CalculationResultOut


class OrderSummary(BaseModel):
    id: UUID
    name: str | None
    scheme_id: str
    currency: str
    total_cost: int
    pizza_count: int
    free_pizza_count: int
    free_pizza_value: int
    created_at: datetime
