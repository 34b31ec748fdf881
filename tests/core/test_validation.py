"""Input Validation — verifies participants and settings are rejected before calculation.

Tests:
    - Slice bounds outside [1, 20] and inverted bounds raise InvalidParticipantError
    - Duplicate participant ids raise InvalidParticipantError
    - Non-positive slice counts, negative prices and thresholds below 2 raise
      InvalidSettingsError naming the field
"""

from dataclasses import replace

import pytest

from pizzasplit.core.errors import InvalidParticipantError, InvalidSettingsError
from pizzasplit.core.order_models import PizzaSizeConfig
from pizzasplit.core.validation import (
    validate_participant, validate_participants, validate_settings,
)
from tests.factories import menu, person


def test_valid_participant_passes():
    validate_participant(person("a", 1, max_slices=20))


@pytest.mark.parametrize("min_slices,max_slices", [(0, 3), (1, 21), (21, 21), (5, 4)])
def test_out_of_range_participant_rejected(min_slices, max_slices):
    with pytest.raises(InvalidParticipantError):
        validate_participant(person("a", min_slices, max_slices=max_slices))


def test_duplicate_ids_rejected():
    with pytest.raises(InvalidParticipantError) as exc_info:
        validate_participants([person("a", 2), person("a", 3)])
    assert "Duplicate" in exc_info.value.message


def test_default_menu_is_valid():
    validate_settings(menu())


def test_zero_slice_pizza_rejected():
    settings = replace(menu(), small=PizzaSizeConfig(0, 640))
    with pytest.raises(InvalidSettingsError) as exc_info:
        validate_settings(settings)
    assert exc_info.value.field == "small.slices_per_pizza"


def test_negative_price_rejected():
    with pytest.raises(InvalidSettingsError) as exc_info:
        validate_settings(menu(large_price=-1))
    assert exc_info.value.field == "large.base_price"


def test_negative_percent_rejected():
    with pytest.raises(InvalidSettingsError):
        validate_settings(menu(small_price_percent=-10))


def test_threshold_below_two_rejected():
    with pytest.raises(InvalidSettingsError) as exc_info:
        validate_settings(menu(threshold=1))
    assert exc_info.value.field == "free_pizza_threshold"
