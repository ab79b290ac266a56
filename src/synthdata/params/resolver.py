"""Request Parameter Resolver.

Turns raw string parameters (query string, CLI options, request body) into a
GenerationConfig, or raises InvalidParameter / MissingSchema. Nothing is
generated until resolution has succeeded.
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any
import re

from faker import Faker
from faker.config import AVAILABLE_LOCALES

from synthdata.errors import InvalidParameter, MissingSchema
from synthdata.logging_config import get_logger
from synthdata.params.base import (
    CustomFieldType,
    DEFAULT_AGE_RANGE,
    DEFAULT_COUNT,
    DEFAULT_LOCALE,
    DEFAULT_USER_FIELDS,
    EntityKind,
    FAKER_PROVIDERS,
    GenerationConfig,
    Interval,
    INTERVAL_STEPS,
    MAX_COUNT,
    MIN_COUNT,
    OutputFormat,
    USER_FIELDS,
)

logger = get_logger(__name__)

_AGE_RANGE_PATTERN = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")

# Kinds whose records embed user fields
_USER_KINDS = {EntityKind.USERS, EntityKind.DATASET}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@lru_cache(maxsize=None)
def locale_supported(locale: str) -> bool:
    """Whether Faker ships ``locale`` with every provider the generators use."""
    if locale not in AVAILABLE_LOCALES:
        return False
    faker = Faker(locale)
    return all(hasattr(faker, provider) for provider in FAKER_PROVIDERS)


class ParameterResolver:
    """Resolves raw parameters into a canonical GenerationConfig."""

    def __init__(self, default_locale: str = DEFAULT_LOCALE):
        self.default_locale = default_locale

    def resolve(
        self,
        kind: EntityKind | str,
        params: Mapping[str, Any],
        body: Any = None,
    ) -> GenerationConfig:
        """Resolve the parameters one endpoint uses.

        Args:
            kind: The entity kind being generated
            params: Raw parameters, usually the query string
            body: Parsed request body (custom generation only)

        Returns:
            The validated GenerationConfig
        """
        kind = EntityKind(kind)

        values: dict[str, Any] = {
            "count": self.resolve_count(params.get("count")),
            "format": self.resolve_format(params.get("format")),
            "seed": self.resolve_seed(params.get("seed")),
            "locale": self.resolve_locale(params.get("locale")),
        }

        if kind in _USER_KINDS:
            values["fields"] = self.resolve_fields(params.get("fields"))
            values["age_range"] = self.resolve_age_range(params.get("ageRange"))

        if kind == EntityKind.TIMESERIES:
            values["interval"] = self.resolve_interval(params.get("interval"))
            values["start"] = self.resolve_start(params.get("start"))
            self.check_series_range(values["start"], values["interval"], values["count"])

        if kind == EntityKind.CUSTOM:
            raw_schema = body.get("schema") if isinstance(body, Mapping) else None
            values["custom_schema"] = self.resolve_schema(raw_schema)

        return GenerationConfig(**values)

    def resolve_count(self, raw: Any) -> int:
        """Parse and clamp the record count into [1, 10000]."""
        if _is_blank(raw):
            return DEFAULT_COUNT

        text = str(raw).strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = int(float(text))
            except (ValueError, OverflowError):
                raise InvalidParameter("count", f"expected a number, got {text!r}") from None

        return max(MIN_COUNT, min(MAX_COUNT, value))

    def resolve_fields(self, raw: Any) -> tuple[str, ...]:
        """Filter a comma separated field list to the recognized user fields.

        Unrecognized names are dropped. Request order is kept and duplicates
        removed; when nothing usable remains the default set applies.
        """
        if _is_blank(raw):
            return DEFAULT_USER_FIELDS

        tokens = raw if isinstance(raw, (list, tuple)) else str(raw).split(",")
        fields: list[str] = []
        for token in tokens:
            name = str(token).strip()
            if name in USER_FIELDS and name not in fields:
                fields.append(name)

        return tuple(fields) or DEFAULT_USER_FIELDS

    def resolve_age_range(self, raw: Any) -> tuple[int, int]:
        """Parse a ``min-max`` age range."""
        if _is_blank(raw):
            return DEFAULT_AGE_RANGE

        match = _AGE_RANGE_PATTERN.match(str(raw))
        if match is None:
            raise InvalidParameter("ageRange", "expected 'min-max'")

        low, high = int(match.group(1)), int(match.group(2))
        if low > high:
            raise InvalidParameter("ageRange", "minimum exceeds maximum")
        return low, high

    def resolve_format(self, raw: Any) -> OutputFormat:
        if _is_blank(raw):
            return OutputFormat.JSON
        try:
            return OutputFormat(str(raw).strip().lower())
        except ValueError:
            return OutputFormat.JSON

    def resolve_seed(self, raw: Any) -> int | None:
        if _is_blank(raw):
            return None
        try:
            return int(str(raw).strip())
        except ValueError:
            raise InvalidParameter("seed", "expected an integer") from None

    def resolve_locale(self, raw: Any) -> str:
        """Normalize a locale, falling back to the default when Faker lacks it."""
        if _is_blank(raw):
            return self.default_locale

        locale = str(raw).strip().replace("-", "_")
        if not locale_supported(locale):
            logger.warning(
                "unsupported_locale",
                requested=locale,
                fallback=self.default_locale,
            )
            return self.default_locale
        return locale

    def resolve_interval(self, raw: Any) -> Interval:
        if _is_blank(raw):
            return Interval.DAY
        try:
            return Interval(str(raw).strip().lower())
        except ValueError:
            raise InvalidParameter("interval", "expected day, hour or minute") from None

    def resolve_start(self, raw: Any) -> datetime | None:
        """Parse an ISO-8601 date or datetime; naive values are taken as UTC."""
        if _is_blank(raw):
            return None

        if isinstance(raw, datetime):
            parsed = raw
        else:
            text = str(raw).strip()
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            try:
                parsed = datetime.fromisoformat(text)
            except ValueError:
                raise InvalidParameter("start", "expected an ISO-8601 date") from None

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        try:
            return parsed.astimezone(timezone.utc)
        except OverflowError:
            raise InvalidParameter("start", "outside the supported date range") from None

    def check_series_range(self, start: datetime | None, interval: Interval, count: int) -> None:
        """Reject a start whose last point falls outside the datetime range."""
        if start is None:
            return
        try:
            start + INTERVAL_STEPS[interval] * (count - 1)
        except OverflowError:
            raise InvalidParameter(
                "start",
                f"{count} points at one {interval.value} apart run past year 9999",
            ) from None

    def resolve_schema(self, raw: Any) -> dict[str, CustomFieldType]:
        """Validate a custom schema against the closed set of type tags."""
        if not isinstance(raw, Mapping) or not raw:
            raise MissingSchema()

        schema: dict[str, CustomFieldType] = {}
        for name, tag in raw.items():
            if not isinstance(name, str) or not name.strip():
                raise InvalidParameter("schema", "field names must be non-empty strings")
            try:
                schema[name] = CustomFieldType(str(tag).strip().lower())
            except ValueError:
                raise InvalidParameter(
                    f"schema.{name}",
                    f"unsupported type {tag!r}",
                ) from None
        return schema
