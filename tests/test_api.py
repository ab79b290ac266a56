"""Tests for the HTTP API."""

import csv
import io

import pytest
from faker.config import AVAILABLE_LOCALES
from fastapi.testclient import TestClient

from synthdata.api.app import create_app
from synthdata.engine.generation_engine import GenerationEngine
from synthdata.generators.base import Generator
from synthdata.generators.registry import GeneratorRegistry
from synthdata.params.base import EntityKind
from synthdata.settings import Settings


@pytest.fixture
def settings(tmp_path):
    return Settings(
        log_json=False,
        log_level="WARNING",
        request_log_path=str(tmp_path / "usage.db"),
    )


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))


class TestUsersEndpoint:
    """Tests for GET /users."""

    def test_default(self, client):
        response = client.get("/users")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        users = response.json()
        assert len(users) == 5
        assert all(set(u) == {"name", "email", "age", "address"} for u in users)

    @pytest.mark.parametrize("count, expected", [("0", 1), ("1", 1), ("42", 42), ("-3", 1)])
    def test_count(self, client, count, expected):
        assert len(client.get("/users", params={"count": count}).json()) == expected

    def test_non_numeric_count(self, client):
        response = client.get("/users", params={"count": "lots"})

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid parameter: count")

    def test_requested_fields_only(self, client):
        users = client.get("/users", params={"fields": "phone,job", "count": "4"}).json()
        assert all(list(u) == ["phone", "job"] for u in users)

    def test_unknown_fields_fall_back(self, client):
        users = client.get("/users", params={"fields": "password"}).json()
        assert set(users[0]) == {"name", "email", "age", "address"}

    def test_age_range(self, client):
        users = client.get("/users", params={"ageRange": "20-30", "count": "50"}).json()
        assert all(20 <= u["age"] <= 30 for u in users)

    def test_inverted_age_range(self, client):
        response = client.get("/users", params={"ageRange": "30-20"})

        assert response.status_code == 400
        assert "ageRange" in response.json()["error"]

    def test_seed_is_reproducible(self, client):
        params = {"seed": "42", "count": "10", "fields": "name,email,age,address,phone,job"}
        first = client.get("/users", params=params)
        second = client.get("/users", params=params)

        assert first.content == second.content

    def test_unsupported_locale_falls_back(self, client):
        response = client.get("/users", params={"locale": "xx_XX"})
        assert response.status_code == 200

    def test_unknown_format_falls_back_to_json(self, client):
        response = client.get("/users", params={"format": "xml"})
        assert response.headers["content-type"].startswith("application/json")

    def test_csv(self, client):
        params = {"count": "6", "seed": "1"}
        json_users = client.get("/users", params=params).json()
        response = client.get("/users", params={**params, "format": "csv"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        rows = list(csv.reader(io.StringIO(response.text)))
        assert len(rows) == len(json_users) + 1
        assert rows[0] == ["name", "email", "age", "address"]
        assert rows[1][0] == json_users[0]["name"]


class TestEntityEndpoints:
    """Tests for the fixed-shape entity endpoints."""

    def test_products(self, client):
        products = client.get("/products", params={"count": "3"}).json()

        assert len(products) == 3
        for product in products:
            assert product["inStock"] == any(v["stock"] > 0 for v in product["variants"])

    def test_companies(self, client):
        companies = client.get("/companies", params={"count": "2"}).json()

        assert len(companies) == 2
        assert all(2 <= len(c["departments"]) <= 5 for c in companies)

    def test_transactions_reference_pools(self, client):
        transactions = client.get("/transactions", params={"count": "5"}).json()

        assert len(transactions) == 5
        assert len({t["user"]["id"] for t in transactions}) <= 5
        assert len({t["product"]["id"] for t in transactions}) <= 5

    def test_dataset(self, client):
        payload = client.get("/dataset", params={"count": "10", "seed": "3"}).json()

        user_ids = {u["id"] for u in payload["users"]}
        product_ids = {p["id"] for p in payload["products"]}
        assert len(payload["transactions"]) == 10
        assert all(t["user"]["id"] in user_ids for t in payload["transactions"])
        assert all(t["product"]["id"] in product_ids for t in payload["transactions"])

    def test_timeseries_hourly(self, client):
        points = client.get(
            "/timeseries",
            params={"count": "3", "interval": "hour", "start": "2024-01-01T00:00:00Z"},
        ).json()

        assert [p["timestamp"] for p in points] == [
            "2024-01-01T00:00:00Z",
            "2024-01-01T01:00:00Z",
            "2024-01-01T02:00:00Z",
        ]

    def test_timeseries_bad_interval(self, client):
        response = client.get("/timeseries", params={"interval": "fortnight"})
        assert response.status_code == 400

    def test_timeseries_single_point_on_last_day(self, client):
        response = client.get(
            "/timeseries", params={"count": "1", "start": "9999-12-31T00:00:00Z"}
        )

        assert response.status_code == 200
        assert [p["timestamp"] for p in response.json()] == ["9999-12-31T00:00:00Z"]

    def test_timeseries_early_year_padded(self, client):
        points = client.get(
            "/timeseries", params={"count": "2", "start": "0010-01-01"}
        ).json()
        assert points[0]["timestamp"] == "0010-01-01T00:00:00Z"

    @pytest.mark.parametrize("locale", AVAILABLE_LOCALES)
    def test_users_in_every_locale(self, client, locale):
        response = client.get(
            "/users",
            params={"count": "2", "locale": locale, "fields": "name,address,phone,job"},
        )
        assert response.status_code == 200


class TestCustomEndpoint:
    """Tests for POST /custom."""

    def test_schema(self, client):
        response = client.post(
            "/custom",
            params={"count": "3"},
            json={"schema": {"name": "name", "score": "number"}},
        )

        assert response.status_code == 200
        records = response.json()
        assert len(records) == 3
        for record in records:
            assert list(record) == ["name", "score"]
            assert isinstance(record["name"], str)
            assert isinstance(record["score"], int)
            assert 1 <= record["score"] <= 100

    @pytest.mark.parametrize("body", [{}, {"schema": {}}, {"schema": "name"}, []])
    def test_missing_schema(self, client, body):
        response = client.post("/custom", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing or empty schema"}

    def test_no_body(self, client):
        response = client.post("/custom")
        assert response.status_code == 400

    def test_unknown_type_tag(self, client):
        response = client.post("/custom", json={"schema": {"born": "date"}})

        assert response.status_code == 400
        assert "schema.born" in response.json()["error"]

    def test_csv(self, client):
        response = client.post(
            "/custom",
            params={"count": "2", "format": "csv"},
            json={"schema": {"who": "email"}},
        )

        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[0] == ["who"]
        assert len(rows) == 3


class TestStreaming:
    """Tests for large streamed responses."""

    def test_streamed_response_parses(self, client):
        response = client.get("/timeseries", params={"count": "20000"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/json")
        assert len(response.json()) == 10000

    def test_streamed_series_near_end_of_calendar(self, client):
        response = client.get(
            "/timeseries", params={"count": "2000", "start": "9990-01-01"}
        )

        points = response.json()
        assert response.status_code == 200
        assert len(points) == 2000
        assert points[-1]["timestamp"].startswith("9995-")

    def test_streamed_series_past_end_of_calendar_rejected(self, client):
        response = client.get(
            "/timeseries",
            params={"count": "2000", "start": "9999-01-01", "interval": "day"},
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid parameter: start")

    def test_streamed_matches_bulk_structure(self, settings):
        streaming = TestClient(create_app(settings))
        bulk = TestClient(create_app(settings.model_copy(update={"streaming_threshold": 5000})))
        params = {"count": "1200", "seed": "11"}

        assert streaming.get("/products", params=params).content == bulk.get(
            "/products", params=params
        ).content


class TestServiceEndpoints:
    """Tests for the non-generating endpoints."""

    def test_root(self, client):
        body = client.get("/").json()
        assert "/users" in body["endpoints"]

    def test_health(self, client):
        assert client.get("/health").json()["status"] == "healthy"

    def test_docs(self, client):
        docs = client.get("/docs").json()

        assert "GET /users" in docs["endpoints"]
        assert "POST /custom" in docs["endpoints"]
        assert "ageRange" in docs["endpoints"]["GET /users"]["parameters"]

    def test_stats(self, client):
        client.get("/users")
        client.get("/users", params={"count": "abc"})
        client.get("/products")
        client.get("/health")

        stats = client.get("/stats").json()

        assert stats["enabled"] is True
        assert stats["endpoints"] == {"/products": 1, "/users": 2}
        assert stats["total"] == 3

    def test_stats_disabled(self, settings):
        client = TestClient(create_app(settings.model_copy(update={"request_log_enabled": False})))
        client.get("/users")

        assert client.get("/stats").json() == {"enabled": False, "total": 0, "endpoints": {}}


class ExplodingGenerator(Generator):
    kind = EntityKind.COMPANIES

    def build(self, config=None):
        raise KeyError("department")


class TestErrors:
    """Tests for error mapping."""

    def test_generation_failure_is_500(self, settings):
        app = create_app(settings)
        registry = GeneratorRegistry()
        registry.register(EntityKind.COMPANIES, ExplodingGenerator)
        app.state.engine = GenerationEngine(generator_registry=registry)

        response = TestClient(app).get("/companies")

        assert response.status_code == 500
        assert response.json()["error"].startswith("Failed to generate companies")
