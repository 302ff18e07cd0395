"""Brewery ORM — breweries with an optional PostGIS point.

Invariants:
    - (name, origin_country) is unique
    - position is GEOMETRY(Point, 4326) on PostgreSQL, nullable
    - Referenced by sakes.brewery_id with ON DELETE RESTRICT

Design Decisions:
    - Geometry is a UserDefinedType without bind/result processing; the raw
      driver value is passed through untouched
    - SQLite (tests) stores the column as BLOB
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, Index, Integer, Text, UniqueConstraint, func
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import UserDefinedType

from app.db.base import Base


class Geometry(UserDefinedType):
    """PostGIS GEOMETRY column type."""
    cache_ok = True

    def __init__(self, geometry_type: str = "Point", srid: int = 4326):
        self.geometry_type = geometry_type
        self.srid = srid

    def get_col_spec(self, **kw) -> str:
        return f"GEOMETRY({self.geometry_type}, {self.srid})"


@compiles(Geometry, "sqlite")
def _compile_geometry_sqlite(type_, compiler, **kw) -> str:
    return "BLOB"


class Brewery(Base):
    """Brewery that produces sakes."""
    __tablename__ = "breweries"
    __table_args__ = (
        UniqueConstraint("name", "origin_country"),
        Index("idx_breweries_origin_country", "origin_country"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    origin_country: Mapped[str] = mapped_column(Text, nullable=False)
    origin_region: Mapped[str | None] = mapped_column(Text, nullable=True)
    position: Mapped[Any | None] = mapped_column(
        Geometry("Point", 4326), nullable=True,
    )
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
