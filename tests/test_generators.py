"""Tests for the Generators module."""

from datetime import datetime, timedelta, timezone

import pytest

from synthdata.errors import InternalGenerationError
from synthdata.generators import fields
from synthdata.generators.base import GeneratorState
from synthdata.generators.company_generator import CompanyGenerator
from synthdata.generators.custom_generator import CustomGenerator
from synthdata.generators.dataset_generator import DatasetGenerator
from synthdata.generators.pool import PRODUCT_POOL_CAP, USER_POOL_CAP, PoolManager
from synthdata.generators.product_generator import ProductGenerator
from synthdata.generators.registry import GeneratorRegistry
from synthdata.generators.timeseries_generator import TimeSeriesGenerator
from synthdata.generators.transaction_generator import TransactionGenerator
from synthdata.generators.user_generator import UserGenerator
from synthdata.params.base import CustomFieldType, EntityKind, GenerationConfig, Interval


NOW = datetime(2024, 6, 15, 13, 45, 30, tzinfo=timezone.utc)


@pytest.fixture
def state():
    return GeneratorState(seed=42, now=NOW)


@pytest.fixture
def pool(state):
    pool = PoolManager(state)
    pool.build_users(10)
    pool.build_products(10)
    return pool


class TestGeneratorState:
    """Tests for request-scoped random state."""

    def test_seeded_reference_time_is_midnight(self, state):
        assert state.reference_time == datetime(2024, 6, 15, tzinfo=timezone.utc)

    def test_unseeded_reference_time_is_now(self):
        assert GeneratorState(now=NOW).reference_time == NOW

    def test_same_seed_same_draws(self):
        first = GeneratorState(seed=1, now=NOW)
        second = GeneratorState(seed=1, now=NOW)

        assert fields.full_name(first) == fields.full_name(second)
        assert first.uuid4() == second.uuid4()

    def test_uuid_is_version_4(self, state):
        value = state.uuid4()
        assert len(value) == 36
        assert value[14] == "4"


class TestFields:
    """Tests for field generators."""

    def test_integer_bounds(self, state):
        values = {fields.integer(state, 1, 3) for _ in range(200)}
        assert values == {1, 2, 3}

    def test_age_within_range(self, state):
        assert all(20 <= fields.age(state, (20, 30)) <= 30 for _ in range(100))

    def test_job_title_follows_age(self, state):
        junior = fields.job_title(state, 25)
        senior = fields.job_title(state, 45)

        assert junior.split()[0] in fields.JUNIOR_PREFIXES
        assert senior.split()[0] in fields.SENIOR_PREFIXES

    def test_amount_rounded(self, state):
        value = fields.amount(state, 5, 10)
        assert 5 <= value <= 10
        assert round(value, 2) == value

    def test_department_names_distinct(self, state):
        for _ in range(20):
            names = fields.department_names(state)
            assert 2 <= len(names) <= 5
            assert len(set(names)) == len(names)

    def test_recent_timestamp_window(self, state):
        for _ in range(50):
            moment = fields.recent_timestamp(state, days=30)
            assert state.reference_time - moment <= timedelta(days=30)
            assert moment <= state.reference_time

    def test_format_timestamp(self):
        assert fields.format_timestamp(NOW) == "2024-06-15T13:45:30Z"

    def test_format_timestamp_pads_early_years(self):
        moment = datetime(10, 1, 1, 7, 5, 3, tzinfo=timezone.utc)
        assert fields.format_timestamp(moment) == "0010-01-01T07:05:03Z"


class TestUserGenerator:
    """Tests for UserGenerator."""

    def test_only_requested_fields(self, state):
        generator = UserGenerator(state)
        config = GenerationConfig(fields=("email", "name"))

        records = list(generator.stream(config))

        assert len(records) == 5
        for record in records:
            assert list(record) == ["email", "name"]

    def test_address_shape(self, state):
        generator = UserGenerator(state)
        config = GenerationConfig(fields=("address",))

        record = next(generator.stream(config))

        assert set(record["address"]) == {"street", "city", "country", "zipCode"}

    def test_job_matches_age(self, state):
        generator = UserGenerator(state)

        young = generator.build_user(("age", "job"), (20, 25))
        old = generator.build_user(("age", "job"), (40, 60))

        assert young.job.split()[0] in fields.JUNIOR_PREFIXES
        assert old.job.split()[0] in fields.SENIOR_PREFIXES

    def test_job_without_age_field(self, state):
        generator = UserGenerator(state)
        config = GenerationConfig(fields=("job",), age_range=(20, 22))

        record = next(generator.stream(config))

        assert list(record) == ["job"]
        assert record["job"].split()[0] in fields.JUNIOR_PREFIXES

    def test_columns(self, state):
        config = GenerationConfig(fields=("name", "address"))
        assert UserGenerator(state).columns(config) == ["name", "address"]


class TestProductGenerator:
    """Tests for ProductGenerator."""

    def test_variants(self, state):
        generator = ProductGenerator(state)

        for _ in range(50):
            product = generator.build()
            sizes = [variant.size for variant in product.variants]

            assert 1 <= len(sizes) <= 4
            assert len(set(sizes)) == len(sizes)
            assert product.in_stock == any(v.stock > 0 for v in product.variants)
            assert 5 <= product.price <= 1000

    def test_output_uses_wire_names(self, state):
        generator = ProductGenerator(state)
        record = next(generator.stream(GenerationConfig(count=1)))

        assert "inStock" in record
        assert isinstance(record["variants"], list)


class TestCompanyGenerator:
    """Tests for CompanyGenerator."""

    def test_company(self, state):
        company = CompanyGenerator(state).build()

        assert 10 <= company.employees <= 10000
        assert 2 <= len(company.departments) <= 5
        assert ", " in company.location

    def test_output_keys(self, state):
        record = next(CompanyGenerator(state).stream(GenerationConfig(count=1)))
        assert list(record) == [
            "name", "industry", "catchPhrase", "employees", "location", "departments",
        ]


class TestPoolManager:
    """Tests for entity pools."""

    def test_pool_sizes_capped(self, state):
        pool = PoolManager(state)
        pool.build_users(500)
        pool.build_products(500)

        assert len(pool.users) == USER_POOL_CAP
        assert len(pool.products) == PRODUCT_POOL_CAP

    def test_small_pools(self, state):
        pool = PoolManager(state)
        pool.build_users(3)
        pool.build_products(3)

        assert len(pool.users) == 3
        assert len(pool.products) == 3

    def test_name_always_populated(self, state):
        pool = PoolManager(state)
        pool.build_users(2, ("email",))

        assert pool.user_fields == ("name", "email")
        assert all(user.name for user in pool.users)

    def test_empty_pool_sampling_fails(self, state):
        with pytest.raises(InternalGenerationError):
            PoolManager(state).sample_user()


class TestTransactionGenerator:
    """Tests for TransactionGenerator."""

    def test_references_pool(self, state, pool):
        generator = TransactionGenerator(state, pool)
        user_ids = {user.id for user in pool.users}
        products = {product.id: product for product in pool.products}

        for record in generator.stream(GenerationConfig(count=50)):
            assert record["user"]["id"] in user_ids
            product = products[record["product"]["id"]]
            quantity = round(record["amount"] / product.price)
            assert 1 <= quantity <= 5
            assert record["amount"] == round(product.price * quantity, 2)
            assert record["status"] in fields.TRANSACTION_STATUSES

    def test_dates_within_last_30_days(self, state, pool):
        generator = TransactionGenerator(state, pool)
        for record in generator.stream(GenerationConfig(count=20)):
            moment = datetime.strptime(record["date"], "%Y-%m-%dT%H:%M:%SZ")
            moment = moment.replace(tzinfo=timezone.utc)
            assert timedelta(0) <= state.reference_time - moment <= timedelta(days=30, seconds=1)


class TestDatasetGenerator:
    """Tests for DatasetGenerator."""

    def test_envelope_exposes_pools(self, state):
        pool = PoolManager(state)
        pool.build_users(4, ("name", "age"))
        pool.build_products(4)
        generator = DatasetGenerator(state, pool)

        envelope = generator.envelope(GenerationConfig(count=4))

        assert len(envelope["users"]) == 4
        assert list(envelope["users"][0]) == ["id", "name", "age"]
        assert len(envelope["products"]) == 4
        assert generator.records_key == "transactions"


class TestTimeSeriesGenerator:
    """Tests for TimeSeriesGenerator."""

    def test_hourly_from_start(self, state):
        config = GenerationConfig(
            count=3,
            interval=Interval.HOUR,
            start=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )

        points = list(TimeSeriesGenerator(state).stream(config))

        assert [p["timestamp"] for p in points] == [
            "2024-01-01T00:00:00Z",
            "2024-01-01T01:00:00Z",
            "2024-01-01T02:00:00Z",
        ]

    def test_last_point_at_end_of_calendar(self, state):
        config = GenerationConfig(
            count=2,
            interval=Interval.DAY,
            start=datetime(9999, 12, 30, tzinfo=timezone.utc),
        )

        points = list(TimeSeriesGenerator(state).stream(config))

        assert points[-1]["timestamp"] == "9999-12-31T00:00:00Z"

    def test_values_never_negative(self, state):
        points = list(TimeSeriesGenerator(state).stream(GenerationConfig(count=500)))
        assert all(point["value"] >= 0 for point in points)
        assert 50 <= points[0]["value"] <= 150

    def test_default_start_within_past_year(self, state):
        point = next(TimeSeriesGenerator(state).stream(GenerationConfig(count=1)))
        moment = datetime.strptime(point["timestamp"], "%Y-%m-%dT%H:%M:%SZ")
        moment = moment.replace(tzinfo=timezone.utc)
        assert 0 <= (state.reference_time - moment).days <= 365


class TestCustomGenerator:
    """Tests for CustomGenerator."""

    def test_schema_order_and_types(self, state):
        config = GenerationConfig(
            count=10,
            custom_schema={
                "name": CustomFieldType.NAME,
                "score": CustomFieldType.NUMBER,
                "contact": CustomFieldType.EMAIL,
                "home": CustomFieldType.ADDRESS,
            },
        )

        for record in CustomGenerator(state).stream(config):
            assert list(record) == ["name", "score", "contact", "home"]
            assert isinstance(record["name"], str)
            assert isinstance(record["score"], int)
            assert 1 <= record["score"] <= 100
            assert "@" in record["contact"]


class TestGeneratorRegistry:
    """Tests for GeneratorRegistry."""

    def test_defaults_registered(self):
        registry = GeneratorRegistry()
        assert set(registry.list_kinds()) == set(EntityKind)

    def test_get_by_string(self):
        registry = GeneratorRegistry()
        assert registry.get("users") is UserGenerator
        assert registry.get("unknown") is None
        assert "timeseries" in registry

    def test_create_with_pool(self, state, pool):
        generator = GeneratorRegistry().create(EntityKind.TRANSACTIONS, state, pool=pool)
        assert isinstance(generator, TransactionGenerator)
        assert generator.pool is pool
