"""Root conftest — shared test configuration and database fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the full schema
    - SQLite does not enforce foreign keys here, so dangling references can be seeded
    - `catalog` seeds a small, fixed data set (ids and timestamps are explicit)
"""

import os
from decimal import Decimal

import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Ensure tests never reach real services
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CACHE_URL", "redis://localhost:6399/15")

from app.db.base import Base  # noqa: E402
from app.models import (  # noqa: E402
    Brewery, DrinkStyle, SakeType, sake_drink_styles,
)
from tests.fakes import make_sake_row  # noqa: E402


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def catalog(test_db):
    """Seed two types, two breweries, three drink styles and four sakes.

    Newest first: sake 4 (type 2, brewery 2), sake 3 (type 1, brewery 2),
    sake 2 (type 2, brewery 1), sake 1 (type 1, brewery 1).
    """
    test_db.add_all([
        SakeType(id=1, name="Junmai"),
        SakeType(id=2, name="Ginjo"),
        Brewery(
            id=1, name="Asahi Shuzo", origin_country="Japan",
            origin_region="Yamaguchi", position=b"\x01\x01\x00\x00\x00",
        ),
        Brewery(id=2, name="Kiku-Masamune", origin_country="Japan"),
        DrinkStyle(id=1, name="Reishu", description="Chilled"),
        DrinkStyle(id=2, name="Kanzake", description=None),
        DrinkStyle(id=3, name="On the rocks", description="Over ice"),
    ])
    await test_db.flush()

    test_db.add_all([
        make_sake_row(1, 1, 1, minutes=0, name="Dassai 45", memo="Fruity"),
        make_sake_row(2, 2, 1, minutes=10, abv=Decimal("16.25")),
        make_sake_row(3, 1, 2, minutes=20),
        make_sake_row(4, 2, 2, minutes=30),
    ])
    await test_db.flush()

    # Inserted out of order on purpose; reads must come back by drink style id
    await test_db.execute(insert(sake_drink_styles).values([
        {"sake_id": 1, "drink_style_id": 3},
        {"sake_id": 1, "drink_style_id": 1},
        {"sake_id": 2, "drink_style_id": 2},
    ]))
    await test_db.commit()
    return test_db
