"""Slice Distributor — maps a plan's slice supply back onto participants.

Invariants:
    - Every participant starts at min_slices; surplus goes one slice per pass,
      round-robin in input order, to can_take_more participants below max_slices
    - Undistributable surplus is reported as extra_slices (never forced on anyone)
    - strict=True: supply below the combined minimum raises InsufficientSupplyError
    - strict=False: the shortfall is taken back one slice per participant per pass,
      never below zero (used to preview plans that deliberately under-cover)
    - assign_slice_refs never hands out more slices than the plan contains

Design Decisions:
    - Counts and concrete slices are separate steps: schemes that only need counts
      (equal-price) skip the slice walk; proportional-price needs slice sizes
    - Restricted preferences are served from their own size first and fall back to
      the other size only when it runs out, so nobody is left hungry by a preference
"""

from dataclasses import dataclass
from typing import Sequence

from pizzasplit.core.domain_types import ParticipantId, PizzaSize, SlicePreference
from pizzasplit.core.errors import InsufficientSupplyError
from pizzasplit.core.order_models import Participant, PizzaUnit, SliceRef


@dataclass(frozen=True)
class SliceDistribution:
    counts: dict[ParticipantId, int]
    extra_slices: int
    missing_slices: int = 0

    @property
    def assigned_total(self) -> int:
        return sum(self.counts.values())


def _hand_out_surplus(
    participants: Sequence[Participant], counts: dict[ParticipantId, int], surplus: int,
) -> int:
    while surplus > 0:
        handed = False
        for p in participants:
            if surplus == 0:
                break
            if p.can_take_more and counts[p.id] < p.max_slices:
                counts[p.id] += 1
                surplus -= 1
                handed = True
        if not handed:
            break
    return surplus


def _take_back_shortfall(
    participants: Sequence[Participant], counts: dict[ParticipantId, int], missing: int,
) -> None:
    while missing > 0:
        took = False
        for p in participants:
            if missing == 0:
                break
            if counts[p.id] > 0:
                counts[p.id] -= 1
                missing -= 1
                took = True
        if not took:
            break


def distribute_slices(
    participants: Sequence[Participant], available: int, strict: bool = True,
) -> SliceDistribution:
    """Per-participant slice counts for a supply of available slices."""
    required = sum(p.min_slices for p in participants)
    counts = {p.id: p.min_slices for p in participants}

    if available < required:
        if strict:
            raise InsufficientSupplyError(available, required)
        _take_back_shortfall(participants, counts, required - available)
        return SliceDistribution(counts, 0, required - available)

    extra = _hand_out_surplus(participants, counts, available - required)
    return SliceDistribution(counts, extra)


# ─── Concrete slice assignment ──────────────────────────────────

_PREFERRED_SIZE = {
    SlicePreference.SMALL_ONLY: PizzaSize.SMALL,
    SlicePreference.LARGE_ONLY: PizzaSize.LARGE,
}


def _draw(
    pool: list[SliceRef], taken: list[SliceRef], want: int,
) -> None:
    while pool and len(taken) < want:
        taken.append(pool.pop(0))


def assign_slice_refs(
    units: Sequence[PizzaUnit],
    participants: Sequence[Participant],
    counts: dict[ParticipantId, int],
) -> dict[ParticipantId, tuple[SliceRef, ...]]:
    """Concrete slices for each participant's count, honouring slice preference."""
    pools: dict[PizzaSize, list[SliceRef]] = {PizzaSize.LARGE: [], PizzaSize.SMALL: []}
    for unit in units:
        pools[unit.size].extend(unit.slice_refs())

    taken: dict[ParticipantId, list[SliceRef]] = {p.id: [] for p in participants}
    restricted = [p for p in participants if p.slice_preference in _PREFERRED_SIZE]
    flexible = [p for p in participants if p.slice_preference not in _PREFERRED_SIZE]

    for p in restricted:
        _draw(pools[_PREFERRED_SIZE[p.slice_preference]], taken[p.id], counts.get(p.id, 0))
    for p in flexible:
        for size in (PizzaSize.LARGE, PizzaSize.SMALL):
            _draw(pools[size], taken[p.id], counts.get(p.id, 0))
    for p in restricted:
        other = (
            PizzaSize.LARGE
            if _PREFERRED_SIZE[p.slice_preference] == PizzaSize.SMALL
            else PizzaSize.SMALL
        )
        _draw(pools[other], taken[p.id], counts.get(p.id, 0))

    return {pid: tuple(refs) for pid, refs in taken.items()}
