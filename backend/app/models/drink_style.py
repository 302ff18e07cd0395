"""DrinkStyle ORM — master table of serving styles, linked to sakes many-to-many.

Invariants:
    - name is unique, description optional
    - sake_drink_styles rows cascade when the sake is deleted
    - Deleting a drink style still linked to a sake is rejected (RESTRICT)
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Column, DateTime, ForeignKey, Index, Integer, Table, Text, func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class DrinkStyle(Base):
    """Serving style (cold, warm, on the rocks, ...)."""
    __tablename__ = "drink_styles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
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


sake_drink_styles = Table(
    "sake_drink_styles",
    Base.metadata,
    Column(
        "sake_id", Integer,
        ForeignKey("sakes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "drink_style_id", Integer,
        ForeignKey("drink_styles.id", ondelete="RESTRICT"),
        primary_key=True,
    ),
    Index("idx_sake_drink_styles_drink_style_id", "drink_style_id"),
)
