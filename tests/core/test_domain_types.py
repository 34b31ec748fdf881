"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - NewType wrappers exist and are callable
    - Enums have expected members and serialize to string values
    - Participant bounds are the documented constants
"""

from pizzasplit.core.domain_types import (
    ParticipantId, PizzaId, Money,
    MIN_SLICES_PER_PARTICIPANT, MAX_SLICES_PER_PARTICIPANT, MIN_FREE_PIZZA_THRESHOLD,
    PizzaSize, SlicePreference, SchemeId, VariantName,
)


def test_identity_types_wrap_str():
    assert ParticipantId("p-1") == "p-1"
    assert PizzaId("pizza-large-0") == "pizza-large-0"


def test_money_wraps_int():
    assert Money(640) == 640


def test_participant_bounds():
    assert MIN_SLICES_PER_PARTICIPANT == 1
    assert MAX_SLICES_PER_PARTICIPANT == 20
    assert MIN_FREE_PIZZA_THRESHOLD == 2


def test_pizza_size_has_two_sizes():
    assert set(PizzaSize) == {PizzaSize.SMALL, PizzaSize.LARGE}


def test_slice_preference_values():
    assert SlicePreference.ANY.value == "any"
    assert SlicePreference.SMALL_ONLY.value == "small_only"
    assert SlicePreference.LARGE_ONLY.value == "large_only"


def test_scheme_ids_are_kebab_case():
    assert SchemeId.EQUAL_PRICE.value == "equal-price"
    assert SchemeId.PROPORTIONAL_PRICE.value == "proportional-price"


def test_variant_names():
    assert [v.value for v in VariantName] == ["large", "reduced", "small"]


def test_str_enums_compare_to_plain_strings():
    assert PizzaSize("small") is PizzaSize.SMALL
    assert SlicePreference.SMALL_ONLY == "small_only"
