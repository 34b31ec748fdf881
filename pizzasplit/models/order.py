"""Order ORM — persists one calculated pizza order.

Invariants:
    - id is UUID primary key (client-side default)
    - participants/settings/result store the exact request and engine output as JSON
    - total_cost, free_pizza_count, free_pizza_value denormalized for history listing
    - Money columns are integers in minor currency units

Design Decisions:
    - JSON columns over child tables: an order is written once and read whole,
      never queried by participant or pizza
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import Uuid

from pizzasplit.db.base import Base


class Order(Base):
    """Calculated order — participants, settings and the engine's result."""
    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    scheme_id: Mapped[str] = mapped_column(String(50), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="RUB")
    participants: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    settings: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    result: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    total_cost: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pizza_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    free_pizza_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    free_pizza_value: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )
