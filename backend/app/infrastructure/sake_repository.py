"""Sake Repository — SQLAlchemy implementation of the SakeRepository protocol.

Invariants:
    - COUNT and page SELECT share the same optional equality filters
    - An unset filter drops its predicate; it never matches "nothing" or NULL
    - Page order is created_at DESC, id DESC; OFFSET/LIMIT applied after ordering
    - Every row is hydrated (type, brewery, drink styles) before returning
    - A missing type or brewery raises NotFoundError and fails the whole call
    - Any other SQLAlchemy failure raises DatabaseError with the cause attached
    - Count and page are separate statements; they are not snapshot-consistent

Design Decisions:
    - One AsyncSession per repository instance (request scoped via get_db)
    - Coordinates are not decoded from PostGIS geometry yet (always None)
"""

import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.exc import NoResultFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import entities
from app.core.errors import DatabaseError, NotFoundError
from app.core.repository_protocols import ListSakesFilter
from app.infrastructure.observability import log_database_error, traced
from app.models import Brewery, DrinkStyle, Sake, SakeType, sake_drink_styles

logger = logging.getLogger(__name__)


class SqlAlchemySakeRepository:
    """Reads fully hydrated sakes from PostgreSQL."""

    def __init__(
        self,
        session: AsyncSession,
        log: logging.Logger | logging.LoggerAdapter | None = None,
    ):
        self._session = session
        self._log = log or logger

    @traced("SakeRepository.list")
    async def list(
        self, filter: ListSakesFilter,
    ) -> tuple[list[entities.Sake], entities.Pagination]:
        try:
            total = (await self._session.execute(
                _apply_filters(select(func.count()).select_from(Sake), filter),
            )).scalar_one()
        except SQLAlchemyError as e:
            log_database_error(
                self._log, "SELECT", "sakes", e, filter=_describe(filter),
            )
            raise DatabaseError("Failed to count sakes", e) from e

        page = (
            _apply_filters(select(Sake), filter)
            .order_by(Sake.created_at.desc(), Sake.id.desc())
            .offset(filter.offset)
            .limit(filter.limit)
        )
        try:
            rows = list((await self._session.execute(page)).scalars().all())
        except SQLAlchemyError as e:
            log_database_error(
                self._log, "SELECT", "sakes", e, filter=_describe(filter),
            )
            raise DatabaseError("Failed to list sakes", e) from e

        sakes = [await self._hydrate(row) for row in rows]
        pagination = entities.Pagination(
            total=int(total), offset=filter.offset, limit=filter.limit,
        )
        return sakes, pagination

    async def _hydrate(self, row: Sake) -> entities.Sake:
        sake_type = await self._get_sake_type(row.type_id)
        brewery = await self._get_brewery(row.brewery_id)
        drink_styles = await self._get_drink_styles(row.id)

        return entities.Sake(
            id=row.id,
            type=sake_type,
            brewery=brewery,
            name=row.name,
            abv=numeric_to_float(row.abv),
            taste_notes=row.taste_notes,
            memo=row.memo,
            drink_styles=drink_styles,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    async def _get_sake_type(self, type_id: int) -> entities.SakeType:
        try:
            row = (await self._session.execute(
                select(SakeType).where(SakeType.id == type_id),
            )).scalar_one()
        except NoResultFound:
            raise NotFoundError(f"Sake type {type_id} not found")
        except SQLAlchemyError as e:
            log_database_error(
                self._log, "SELECT", "sake_types", e, type_id=type_id,
            )
            raise DatabaseError("Failed to load sake type", e) from e
        return entities.SakeType(id=row.id, name=row.name)

    async def _get_brewery(self, brewery_id: int) -> entities.Brewery:
        try:
            row = (await self._session.execute(
                select(Brewery).where(Brewery.id == brewery_id),
            )).scalar_one()
        except NoResultFound:
            raise NotFoundError(f"Brewery {brewery_id} not found")
        except SQLAlchemyError as e:
            log_database_error(
                self._log, "SELECT", "breweries", e, brewery_id=brewery_id,
            )
            raise DatabaseError("Failed to load brewery", e) from e

        latitude, longitude = extract_coordinates(row.position)
        return entities.Brewery(
            id=row.id,
            name=row.name,
            origin_country=row.origin_country,
            origin_region=row.origin_region,
            latitude=latitude,
            longitude=longitude,
        )

    async def _get_drink_styles(
        self, sake_id: int,
    ) -> tuple[entities.DrinkStyle, ...]:
        query = (
            select(DrinkStyle)
            .join(
                sake_drink_styles,
                DrinkStyle.id == sake_drink_styles.c.drink_style_id,
            )
            .where(sake_drink_styles.c.sake_id == sake_id)
            .order_by(DrinkStyle.id)
        )
        try:
            rows = (await self._session.execute(query)).scalars().all()
        except SQLAlchemyError as e:
            log_database_error(
                self._log, "SELECT", "drink_styles", e, sake_id=sake_id,
            )
            raise DatabaseError("Failed to load drink styles", e) from e
        return tuple(
            entities.DrinkStyle(id=ds.id, name=ds.name, description=ds.description)
            for ds in rows
        )


def _apply_filters(query: Select, filter: ListSakesFilter) -> Select:
    if filter.type_id is not None:
        query = query.where(Sake.type_id == filter.type_id)
    if filter.brewery_id is not None:
        query = query.where(Sake.brewery_id == filter.brewery_id)
    return query


def _describe(filter: ListSakesFilter) -> dict:
    return {
        "type_id": filter.type_id,
        "brewery_id": filter.brewery_id,
        "offset": filter.offset,
        "limit": filter.limit,
    }


def extract_coordinates(position: Any) -> tuple[float | None, float | None]:
    """Latitude/longitude from a PostGIS point.

    Not implemented: always (None, None), whatever is stored.
    """
    return None, None


def numeric_to_float(value: Decimal | float | None) -> float:
    """NUMERIC -> float, with 0.0 for missing, NaN, infinite or unparsable values."""
    if value is None:
        return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError, InvalidOperation):
        return 0.0
    if not math.isfinite(result):
        return 0.0
    return result
