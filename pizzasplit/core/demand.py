"""Demand Aggregator — reduces participants to total and per-preference slice demand."""

from dataclasses import dataclass
from typing import Iterable

from pizzasplit.core.domain_types import SlicePreference
from pizzasplit.core.errors import InvalidParticipantError
from pizzasplit.core.order_models import Participant


@dataclass(frozen=True)
class DemandSummary:
    total: int
    small_only: int
    large_only: int
    any_size: int
    participant_count: int

    @property
    def all_want_small_only(self) -> bool:
        return self.total > 0 and self.small_only == self.total


def aggregate_demand(participants: Iterable[Participant]) -> DemandSummary:
    """Sum min_slices overall and per slice preference. Pure, no IO."""
    by_pref = {pref: 0 for pref in SlicePreference}
    count = 0
    for p in participants:
        if p.min_slices < 0:
            raise InvalidParticipantError(
                f"Participant '{p.name}' has negative demand ({p.min_slices})",
                participant_id=p.id,
            )
        by_pref[p.slice_preference] += p.min_slices
        count += 1

    return DemandSummary(
        total=sum(by_pref.values()),
        small_only=by_pref[SlicePreference.SMALL_ONLY],
        large_only=by_pref[SlicePreference.LARGE_ONLY],
        any_size=by_pref[SlicePreference.ANY],
        participant_count=count,
    )
