"""Sake ORM — catalog rows with denormalized filter columns.

Invariants:
    - type_id and brewery_id are NOT NULL foreign keys with ON DELETE RESTRICT
    - abv is NUMERIC(4, 2)
    - memo is optional; taste_notes is required

Design Decisions:
    - No ORM relationships: nested entities are loaded by explicit lookups in
      SqlAlchemySakeRepository, never lazily
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Numeric, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Sake(Base):
    """A sake in the catalog."""
    __tablename__ = "sakes"
    __table_args__ = (
        Index("idx_sakes_type_id", "type_id"),
        Index("idx_sakes_brewery_id", "brewery_id"),
        Index("idx_sakes_name", "name"),
        Index("idx_sakes_created_at_id", "created_at", "id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sake_types.id", ondelete="RESTRICT"),
        nullable=False,
    )
    brewery_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("breweries.id", ondelete="RESTRICT"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    abv: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False)
    taste_notes: Mapped[str] = mapped_column(Text, nullable=False)
    memo: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )
