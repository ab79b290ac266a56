"""Canonical generation configuration.

A GenerationConfig is what every endpoint reduces its raw query/body
parameters to before any record is generated. It carries no generation
logic of its own.
"""

from datetime import datetime, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


MIN_COUNT = 1
MAX_COUNT = 10000
DEFAULT_COUNT = 5

USER_FIELDS = ("name", "email", "age", "address", "phone", "job")
DEFAULT_USER_FIELDS = ("name", "email", "age", "address")

DEFAULT_AGE_RANGE = (18, 80)
DEFAULT_LOCALE = "en_US"

# Faker provider methods the field generators call; a locale must offer all of them
FAKER_PROVIDERS = (
    "name",
    "email",
    "phone_number",
    "street_address",
    "city",
    "country",
    "postcode",
    "job",
    "currency_code",
    "color_name",
    "company",
    "catch_phrase",
)


class EntityKind(str, Enum):
    """Kinds of records the service generates, one per endpoint."""

    USERS = "users"
    PRODUCTS = "products"
    COMPANIES = "companies"
    TRANSACTIONS = "transactions"
    DATASET = "dataset"
    TIMESERIES = "timeseries"
    CUSTOM = "custom"


class OutputFormat(str, Enum):
    """Supported response formats."""

    JSON = "json"
    CSV = "csv"


class Interval(str, Enum):
    """Step between consecutive time series points."""

    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"


INTERVAL_STEPS = {
    Interval.DAY: timedelta(days=1),
    Interval.HOUR: timedelta(hours=1),
    Interval.MINUTE: timedelta(minutes=1),
}


class CustomFieldType(str, Enum):
    """Type tags accepted in a custom schema."""

    NAME = "name"
    EMAIL = "email"
    NUMBER = "number"
    ADDRESS = "address"


class GenerationConfig(BaseModel):
    """Validated, normalized parameters driving one generation run."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(
        default=DEFAULT_COUNT,
        ge=MIN_COUNT,
        le=MAX_COUNT,
        description="Number of records to generate",
    )
    fields: tuple[str, ...] = Field(
        default=DEFAULT_USER_FIELDS,
        description="Requested user fields, in request order",
    )
    format: OutputFormat = Field(default=OutputFormat.JSON, description="Response format")
    age_range: tuple[int, int] = Field(
        default=DEFAULT_AGE_RANGE,
        description="Inclusive bounds for generated ages",
    )
    locale: str = Field(default=DEFAULT_LOCALE, description="Faker locale")
    seed: int | None = Field(default=None, description="Random seed for reproducibility")
    interval: Interval = Field(default=Interval.DAY, description="Time series step")
    start: datetime | None = Field(default=None, description="First time series timestamp")
    custom_schema: dict[str, CustomFieldType] = Field(
        default_factory=dict,
        description="Field name to type tag mapping for custom records",
    )

    @model_validator(mode="after")
    def _check_age_range(self) -> "GenerationConfig":
        low, high = self.age_range
        if low > high:
            raise ValueError("age_range minimum must not exceed maximum")
        return self
