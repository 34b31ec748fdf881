"""Domain Types — rich types that replace bare primitives across the engine.

Invariants:
    - ParticipantId, PizzaId wrap str — never use bare str ids in engine logic
    - Money is always an int in minor currency units (no floats anywhere)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders (REST + JSON columns)
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ParticipantId = NewType("ParticipantId", str)
PizzaId = NewType("PizzaId", str)


# ─── Value Types ─────────────────────────────────────────────────

Money = NewType("Money", int)   # minor currency units


# ─── Bounds ──────────────────────────────────────────────────────

MIN_SLICES_PER_PARTICIPANT: int = 1
MAX_SLICES_PER_PARTICIPANT: int = 20
MIN_FREE_PIZZA_THRESHOLD: int = 2


# ─── Enums ───────────────────────────────────────────────────────

class PizzaSize(str, Enum):
    """The two pizza sizes the engine combines."""
    SMALL = "small"
    LARGE = "large"


class SlicePreference(str, Enum):
    """Which pizza size a participant is willing to eat."""
    ANY = "any"
    SMALL_ONLY = "small_only"
    LARGE_ONLY = "large_only"


class SchemeId(str, Enum):
    """Registered cost-splitting schemes."""
    EQUAL_PRICE = "equal-price"
    PROPORTIONAL_PRICE = "proportional-price"


class VariantName(str, Enum):
    """Plan variants offered side by side to the user."""
    LARGE = "large"
    REDUCED = "reduced"
    SMALL = "small"
