"""Domain Entities — plain records returned by the sake list pipeline.

Invariants:
    - No behavior, no IO, no ORM coupling
    - Optional fields are None when absent (never "" or 0)
    - drink_styles is an ordered tuple (DrinkStyle id ascending)
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class SakeType:
    id: int
    name: str


@dataclass(frozen=True)
class Brewery:
    id: int
    name: str
    origin_country: str
    origin_region: str | None = None
    latitude: float | None = None
    longitude: float | None = None


@dataclass(frozen=True)
class DrinkStyle:
    id: int
    name: str
    description: str | None = None


@dataclass(frozen=True)
class Sake:
    id: int
    type: SakeType
    brewery: Brewery
    name: str
    abv: float
    taste_notes: str
    created_at: datetime
    updated_at: datetime
    memo: str | None = None
    drink_styles: tuple[DrinkStyle, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Pagination:
    """Describes the page returned. Not a cursor."""
    total: int
    offset: int
    limit: int
