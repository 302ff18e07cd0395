"""Sake Schemas — query parameters and response bodies for GET /sakes.

Invariants:
    - ListSakesQuery validates every field independently (pydantic collects all failures)
    - offset >= 0, 1 <= limit <= 100, type_id >= 1, brewery_id >= 1
    - offset, type_id and brewery_id fit in a signed 32-bit integer
    - Wire defaults: offset 0, limit 20
    - Response shapes mirror the domain entities field by field
"""

from datetime import datetime

from pydantic import BaseModel, Field

from app.core import entities
from app.core.pagination import DEFAULT_LIMIT, DEFAULT_OFFSET, MAX_LIMIT, MIN_LIMIT
from app.schemas.common import APIError

# Ids and offsets are int4 columns/parameters in PostgreSQL
MAX_INT32 = 2**31 - 1


class ListSakesQuery(BaseModel):
    """Query string of GET /sakes."""
    offset: int = Field(DEFAULT_OFFSET, ge=0, le=MAX_INT32)
    limit: int = Field(DEFAULT_LIMIT, ge=MIN_LIMIT, le=MAX_LIMIT)
    type_id: int | None = Field(None, ge=1, le=MAX_INT32)
    brewery_id: int | None = Field(None, ge=1, le=MAX_INT32)


class SakeTypeResponse(BaseModel):
    id: int
    name: str


class BreweryResponse(BaseModel):
    id: int
    name: str
    origin_country: str
    origin_region: str | None = None
    latitude: float | None = None
    longitude: float | None = None


class DrinkStyleResponse(BaseModel):
    id: int
    name: str
    description: str | None = None


class SakeResponse(BaseModel):
    id: int
    type: SakeTypeResponse
    brewery: BreweryResponse
    name: str
    abv: float
    taste_notes: str
    memo: str | None = None
    drink_styles: list[DrinkStyleResponse] = []
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, sake: entities.Sake) -> "SakeResponse":
        return cls(
            id=sake.id,
            type=SakeTypeResponse(id=sake.type.id, name=sake.type.name),
            brewery=BreweryResponse(
                id=sake.brewery.id,
                name=sake.brewery.name,
                origin_country=sake.brewery.origin_country,
                origin_region=sake.brewery.origin_region,
                latitude=sake.brewery.latitude,
                longitude=sake.brewery.longitude,
            ),
            name=sake.name,
            abv=round(sake.abv, 2),
            taste_notes=sake.taste_notes,
            memo=sake.memo,
            drink_styles=[
                DrinkStyleResponse(
                    id=ds.id, name=ds.name, description=ds.description,
                )
                for ds in sake.drink_styles
            ],
            created_at=sake.created_at,
            updated_at=sake.updated_at,
        )


class SakeListMeta(BaseModel):
    total: int
    offset: int
    limit: int


class ListSakesResponse(BaseModel):
    data: list[SakeResponse]
    meta: SakeListMeta
    errors: list[APIError] | None = None
