"""Input Validation — rejects participants and settings the engine cannot honour.

Invariants:
    - All functions are PURE: raise on the first violation, return None otherwise
    - Runs before any plan is built, so a failed calculation never leaves partial output
    - Bounds come from domain_types (single source of truth)

Design Decisions:
    - Raise typed errors (not error dicts): calculate() has exactly one success shape
      and the REST handler maps PizzaSplitError to a 400 envelope
"""

from typing import Iterable

from pizzasplit.core.domain_types import (
    MIN_SLICES_PER_PARTICIPANT, MAX_SLICES_PER_PARTICIPANT, MIN_FREE_PIZZA_THRESHOLD,
)
from pizzasplit.core.errors import InvalidParticipantError, InvalidSettingsError
from pizzasplit.core.order_models import Participant, OrderSettings


def validate_participant(participant: Participant) -> None:
    """min/max both within bounds, min <= max."""
    lo, hi = MIN_SLICES_PER_PARTICIPANT, MAX_SLICES_PER_PARTICIPANT
    for label, value in (
        ("min_slices", participant.min_slices),
        ("max_slices", participant.max_slices),
    ):
        if not lo <= value <= hi:
            raise InvalidParticipantError(
                f"Participant '{participant.name}': {label}={value} "
                f"is outside [{lo}, {hi}]",
                participant_id=participant.id,
            )
    if participant.min_slices > participant.max_slices:
        raise InvalidParticipantError(
            f"Participant '{participant.name}': min_slices "
            f"({participant.min_slices}) exceeds max_slices ({participant.max_slices})",
            participant_id=participant.id,
        )


def validate_participants(participants: Iterable[Participant]) -> None:
    seen: set[str] = set()
    for participant in participants:
        if participant.id in seen:
            raise InvalidParticipantError(
                f"Duplicate participant id '{participant.id}'",
                participant_id=participant.id,
            )
        seen.add(participant.id)
        validate_participant(participant)


def validate_settings(settings: OrderSettings) -> None:
    """Slice counts positive, prices non-negative, threshold >= 2."""
    for label, size in (("large", settings.large), ("small", settings.small)):
        if size.slices_per_pizza <= 0:
            raise InvalidSettingsError(
                f"{label} pizza must have at least one slice",
                field=f"{label}.slices_per_pizza",
            )
        if size.base_price < 0:
            raise InvalidSettingsError(
                f"{label} pizza price cannot be negative",
                field=f"{label}.base_price",
            )
    if settings.small_price_percent is not None and settings.small_price_percent < 0:
        raise InvalidSettingsError(
            "small_price_percent cannot be negative",
            field="small_price_percent",
        )
    if settings.free_pizza_threshold < MIN_FREE_PIZZA_THRESHOLD:
        raise InvalidSettingsError(
            f"free_pizza_threshold must be >= {MIN_FREE_PIZZA_THRESHOLD}",
            field="free_pizza_threshold",
        )
