"""GET /sakes — validation, envelope, error mapping and request IDs.

Invariants:
    - Invalid query parameters → 400 VALIDATION_ERROR, one entry per field, use case not called
    - Success → {data, meta, errors: null}; meta echoes the effective offset/limit
    - DatabaseError → 500 DATABASE_ERROR without the cause; NotFoundError → 404
    - Unclassified errors → 500 INTERNAL_ERROR with a generic message
"""

import asyncio

import pytest

from app.api.dependencies import get_sake_repository
from app.config import get_settings
from app.core.errors import DatabaseError, NotFoundError
from app.core.repository_protocols import ListSakesFilter
from app.main import app
from tests.fakes import make_sake, make_sake_row


# ─── Validation ─────────────────────────────────────────────────

@pytest.mark.parametrize("query, field", [
    ("offset=-1", "offset"),
    ("limit=0", "limit"),
    ("limit=101", "limit"),
    ("type_id=0", "type_id"),
    ("brewery_id=-4", "brewery_id"),
    ("offset=abc", "offset"),
    ("limit=ten", "limit"),
    ("offset=100000000000000000000", "offset"),
    ("offset=2147483648", "offset"),
    ("type_id=2147483648", "type_id"),
    ("brewery_id=100000000000000000000", "brewery_id"),
])
async def test_invalid_parameter_returns_400(client, fake_repository, query, field):
    res = await client.get(f"/sakes?{query}")

    assert res.status_code == 400
    body = res.json()
    assert body["data"] is None
    assert len(body["errors"]) == 1
    assert body["errors"][0]["code"] == "VALIDATION_ERROR"
    assert body["errors"][0]["message"].startswith(f"{field}: ")
    assert fake_repository.calls == []


async def test_every_invalid_field_is_reported(client, fake_repository):
    res = await client.get("/sakes?offset=-1&limit=500&type_id=0&brewery_id=0")

    assert res.status_code == 400
    fields = [e["message"].split(":")[0] for e in res.json()["errors"]]
    assert fields == ["offset", "limit", "type_id", "brewery_id"]
    assert fake_repository.calls == []


@pytest.mark.parametrize("query", [
    "limit=1", "limit=100", "offset=0",
    "offset=2147483647", "type_id=2147483647", "brewery_id=2147483647",
])
async def test_boundary_values_accepted(client, query):
    res = await client.get(f"/sakes?{query}")
    assert res.status_code == 200


# ─── Success ────────────────────────────────────────────────────

async def test_empty_catalog(client):
    res = await client.get("/sakes")

    assert res.status_code == 200
    assert res.json() == {
        "data": [],
        "meta": {"total": 0, "offset": 0, "limit": 20},
        "errors": None,
    }


async def test_filters_forwarded_to_repository(client, fake_repository):
    await client.get("/sakes?type_id=1&brewery_id=2&offset=5&limit=10")

    assert fake_repository.calls == [
        ListSakesFilter(offset=5, limit=10, type_id=1, brewery_id=2),
    ]


async def test_sake_serialization(client, fake_repository):
    fake_repository.sakes = [make_sake(id=7, abv=15.456, memo="Limited")]

    res = await client.get("/sakes")

    sake = res.json()["data"][0]
    assert sake["id"] == 7
    assert sake["abv"] == 15.46
    assert sake["memo"] == "Limited"
    assert sake["type"] == {"id": 1, "name": "Junmai Daiginjo"}
    assert sake["brewery"]["origin_region"] == "Yamaguchi"
    assert sake["brewery"]["latitude"] is None
    assert sake["drink_styles"] == [
        {"id": 1, "name": "Reishu", "description": "Chilled"},
    ]


async def test_meta_total_independent_of_page(client, fake_repository):
    fake_repository.sakes = [make_sake(id=2), make_sake(id=1)]
    fake_repository.total = 57

    body = (await client.get("/sakes?offset=20&limit=2")).json()

    assert body["meta"] == {"total": 57, "offset": 20, "limit": 2}
    assert len(body["data"]) == 2


# ─── Error mapping ──────────────────────────────────────────────

async def test_database_error_hides_cause(client, fake_repository):
    fake_repository.error = DatabaseError(
        "Failed to list sakes",
        RuntimeError("FATAL: password authentication failed for user postgres"),
    )

    res = await client.get("/sakes")

    assert res.status_code == 500
    assert res.json() == {
        "data": None,
        "errors": [{"code": "DATABASE_ERROR", "message": "Failed to list sakes"}],
    }
    assert "password" not in res.text


async def test_not_found_returns_404(client, fake_repository):
    fake_repository.error = NotFoundError("Brewery 9 not found")

    res = await client.get("/sakes")

    assert res.status_code == 404
    assert res.json()["errors"] == [
        {"code": "NOT_FOUND", "message": "Brewery 9 not found"},
    ]


async def test_unexpected_error_returns_generic_500(client, fake_repository):
    fake_repository.error = RuntimeError("segfault in driver at 0xdeadbeef")

    res = await client.get("/sakes")

    assert res.status_code == 500
    assert res.json()["errors"] == [
        {"code": "INTERNAL_ERROR", "message": "An unexpected error occurred"},
    ]
    assert "deadbeef" not in res.text


async def test_deadline_exceeded_returns_500(client, monkeypatch):
    class SlowRepository:
        async def list(self, filter):
            await asyncio.sleep(5)

    app.dependency_overrides[get_sake_repository] = lambda: SlowRepository()
    monkeypatch.setattr(get_settings(), "request_timeout_seconds", 0.05)

    res = await client.get("/sakes")

    assert res.status_code == 500
    assert res.json()["errors"] == [
        {"code": "INTERNAL_ERROR", "message": "Request timed out"},
    ]


async def test_unknown_route_uses_envelope(client):
    res = await client.get("/sake")

    assert res.status_code == 404
    assert res.json()["data"] is None
    assert res.json()["errors"][0]["code"] == "NOT_FOUND"


# ─── Request IDs ────────────────────────────────────────────────

async def test_request_id_echoed(client):
    res = await client.get("/sakes", headers={"X-Request-ID": "req-abc-123"})
    assert res.headers["X-Request-ID"] == "req-abc-123"


async def test_request_id_generated_when_absent(client):
    first = await client.get("/sakes")
    second = await client.get("/sakes")

    assert len(first.headers["X-Request-ID"]) == 36
    assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]


async def test_request_id_on_error_responses(client):
    res = await client.get("/sakes?limit=0", headers={"X-Request-ID": "bad-1"})

    assert res.status_code == 400
    assert res.headers["X-Request-ID"] == "bad-1"


# ─── End to end (SQLite catalog) ────────────────────────────────

async def test_lists_seeded_catalog_newest_first(db_client):
    body = (await db_client.get("/sakes")).json()

    assert [s["id"] for s in body["data"]] == [4, 3, 2, 1]
    assert body["meta"] == {"total": 4, "offset": 0, "limit": 20}


async def test_page_size_smaller_than_total(db_client):
    body = (await db_client.get("/sakes?limit=2&offset=1")).json()

    assert [s["id"] for s in body["data"]] == [3, 2]
    assert body["meta"]["total"] == 4


async def test_combined_filters(db_client):
    body = (await db_client.get("/sakes?type_id=1&brewery_id=1")).json()

    assert [s["id"] for s in body["data"]] == [1]
    sake = body["data"][0]
    assert sake["name"] == "Dassai 45"
    assert sake["abv"] == 15.5
    assert [ds["id"] for ds in sake["drink_styles"]] == [1, 3]
    assert sake["brewery"]["latitude"] is None
    assert sake["brewery"]["longitude"] is None


async def test_dangling_brewery_returns_404(db_client, catalog):
    catalog.add(make_sake_row(5, 1, 42, minutes=60))
    await catalog.commit()

    res = await db_client.get("/sakes")

    assert res.status_code == 404
    assert res.json()["errors"] == [
        {"code": "NOT_FOUND", "message": "Brewery 42 not found"},
    ]


@pytest.mark.parametrize("query, field", [
    ("offset=100000000000000000000", "offset"),
    ("type_id=100000000000000000000", "type_id"),
])
async def test_oversized_integer_rejected_before_store(db_client, query, field):
    res = await db_client.get(f"/sakes?{query}")

    assert res.status_code == 400
    assert res.json()["errors"][0]["code"] == "VALIDATION_ERROR"
    assert res.json()["errors"][0]["message"].startswith(f"{field}: ")
